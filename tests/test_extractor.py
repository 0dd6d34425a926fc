"""Testy ekstrakcji wystąpień klas z arkuszy stylów i plików front-end."""

import pytest

from css_tracker.core.errors import MalformedExpression
from css_tracker.core.extractor import (
    AttributeDialect,
    extract_markup,
    extract_stylesheet,
)
from css_tracker.core.models import ClassOccurrence, ExpressionOccurrence


def test_stylesheet_class_definition_line():
    css = "body { margin: 0; }\n\n.foo { color: red; }\n"

    result = extract_stylesheet(css, "styles/app.css")

    assert result == [ClassOccurrence("foo", 3, "styles/app.css")]


def test_stylesheet_ignores_selector_inside_import():
    css = '@import url("theme.foo.css");\n@import "./base.bar";\nbody { margin: 0; }\n'

    assert extract_stylesheet(css, "app.css") == []


def test_stylesheet_import_line_does_not_hide_definition_elsewhere():
    css = '@import "x.css";\n.foo { color: red; }\n'

    result = extract_stylesheet(css, "app.css")

    assert [o.class_name for o in result] == ["foo"]
    assert result[0].line == 2


def test_stylesheet_every_line_containing_token():
    css = ".card { padding: 0; }\n.card:hover { opacity: 1; }\n.list .card { margin: 0; }\n"

    result = extract_stylesheet(css, "app.css")

    assert [(o.class_name, o.line) for o in result if o.class_name == "card"] == [
        ("card", 1),
        ("card", 2),
        ("card", 3),
    ]


def test_stylesheet_substring_match_over_attributes_known_limitation():
    """
    Znane ograniczenie: dopasowanie linii przez podciąg, nie granice słów.

    Token ``.btn`` jest przypisywany także linii, która definiuje tylko
    ``.btn-primary``. Zachowanie jest celowo zachowane, bo zmienia wyniki.
    """
    css = ".btn { color: red; }\n.btn-primary { color: blue; }\n"

    result = extract_stylesheet(css, "app.css")

    assert ClassOccurrence("btn", 1, "app.css") in result
    assert ClassOccurrence("btn", 2, "app.css") in result
    assert ClassOccurrence("btn-primary", 2, "app.css") in result


def test_stylesheet_ignores_numeric_fractions():
    css = ".icon { line-height: .5em; }\n"

    result = extract_stylesheet(css, "app.css")

    assert [o.class_name for o in result] == ["icon"]


def test_quoted_attribute_yields_tokens_in_source_order():
    html = '<div>\n  <span class="a b">x</span>\n</div>\n'

    result = extract_markup(html, "index.html", AttributeDialect.HTML)

    assert result == [
        ClassOccurrence("a", 2, "index.html"),
        ClassOccurrence("b", 2, "index.html"),
    ]


def test_single_quoted_attribute_and_leading_dot():
    html = "<p class='.lead  text'></p>"

    result = extract_markup(html, "a.html")

    assert [o.class_name for o in result] == ["lead", "text"]


def test_jsx_dialect_reads_class_name_only():
    tsx = '<div className="wrapper" data-class="nope" />'

    assert [o.class_name for o in extract_markup(tsx, "a.tsx", AttributeDialect.JSX)] == [
        "wrapper"
    ]
    assert extract_markup(tsx, "a.tsx", AttributeDialect.HTML) == []


def test_template_attribute_literals_and_interpolation():
    tsx = "<div className={`a ${x} b`} />"

    result = extract_markup(tsx, "a.tsx", AttributeDialect.JSX)

    assert [o.class_name for o in result if isinstance(o, ClassOccurrence)] == ["a", "b"]
    expressions = [o for o in result if isinstance(o, ExpressionOccurrence)]
    assert expressions == [ExpressionOccurrence("x", 1, "a.tsx")]


def test_template_interpolation_line_follows_embedded_newlines():
    tsx = "\n<div\n  className={`card\n    ${first}\n    card--x ${second}`}\n/>\n"

    result = extract_markup(tsx, "a.tsx", AttributeDialect.JSX)

    lines = {o.expression: o.line for o in result if isinstance(o, ExpressionOccurrence)}
    assert lines == {"first": 4, "second": 5}
    classes = {o.class_name: o.line for o in result if isinstance(o, ClassOccurrence)}
    assert classes == {"card": 3, "card--x": 5}


def test_template_conditional_interpolation():
    tsx = 'const el = <a className={`link ${active ? "link--on" : ""}`} />;'

    result = extract_markup(tsx, "a.tsx", AttributeDialect.JSX)

    assert [o.class_name for o in result] == ["link", "link--on"]


def test_brace_expression_attribute():
    html = '<div class={cond ? "a" : b}></div>'

    result = extract_markup(html, "a.html")

    assert result == [
        ClassOccurrence("a", 1, "a.html"),
        ExpressionOccurrence("b", 1, "a.html"),
    ]


def test_brace_expression_with_apostrophe_in_comment():
    tsx = '<div className={/* don\'t */ "a"} />\n<p className="b" />'

    result = extract_markup(tsx, "a.tsx", AttributeDialect.JSX)

    assert result == [ClassOccurrence("a", 1, "a.tsx"), ClassOccurrence("b", 2, "a.tsx")]


def test_brace_expression_with_nested_braces_and_strings():
    tsx = '<div className={clsx({ "is-open": open }, "menu")} />'

    result = extract_markup(tsx, "a.tsx", AttributeDialect.JSX)

    # Operand z cudzysłowem jest literałem - cudzysłowy usunięte, reszta zostaje
    assert [o.class_name for o in result] == ["clsx({", "is-open:", "open", "},", "menu)"]


def test_multiline_brace_expression_lines():
    tsx = "<div\n  className={\n    open\n      ? 'menu'\n      : closedClass\n  }\n/>"

    result = extract_markup(tsx, "a.tsx", AttributeDialect.JSX)

    assert ClassOccurrence("menu", 2, "a.tsx") in result
    assert ExpressionOccurrence("closedClass", 5, "a.tsx") in result


def test_value_shapes_do_not_double_count():
    tsx = (
        '<a className="plain" />\n'
        "<b className={`tpl ${x}`} />\n"
        '<c className={y ? "yes" : "no"} />\n'
    )

    result = extract_markup(tsx, "a.tsx", AttributeDialect.JSX)

    assert [(type(o).__name__, o.line) for o in result] == [
        ("ClassOccurrence", 1),
        ("ClassOccurrence", 2),
        ("ExpressionOccurrence", 2),
        ("ClassOccurrence", 3),
        ("ClassOccurrence", 3),
    ]


def test_unclosed_quote_in_brace_value_raises_with_line():
    html = "<main>\n  <div class={\"a}>x</div>\n</main>\n"

    with pytest.raises(MalformedExpression) as exc_info:
        extract_markup(html, "pages/index.html")

    assert exc_info.value.line == 2
    assert exc_info.value.path == "pages/index.html"


def test_unquoted_attribute_is_ignored():
    assert extract_markup("<div class=foo></div>", "a.html") == []


def test_text_without_attributes():
    assert extract_markup("const className = 1;", "a.jsx", AttributeDialect.JSX) == []
