import json

import pytest

from css_tracker.core.models import (
    ClassFinding,
    ExpressionFinding,
    FileLines,
    Findings,
    RelocationFinding,
)
from css_tracker.services.report_writer import render_json, render_text, write_report


@pytest.fixture
def findings() -> Findings:
    return Findings(
        unused_definitions=[
            ClassFinding(
                class_name="ghost",
                locations=[FileLines(path="styles/a.css", lines=[4, 7])],
            )
        ],
        relocation_suggestions=[
            RelocationFinding(
                class_name="btn",
                move_from="styles",
                move_to="components/button",
                occurrences=["components/button/Button.tsx", "components/button/Icon.tsx"],
            )
        ],
        missing_definitions=[],
        expressions=[
            ExpressionFinding(
                expression="styles.box", locations=[FileLines(path="src/A.tsx", lines=[2])]
            )
        ],
        duplicate_definitions=None,
    )


def test_render_text_sections(findings):
    text = render_text(findings)

    assert "## Unused class definitions (1)" in text
    assert "- ghost" in text
    assert "  styles/a.css: 4, 7" in text
    assert "- move 'btn' from 'styles' to 'components/button'" in text
    assert "## Classes used without a definition (0)\n(none)" in text
    assert "- styles.box" in text
    assert "Duplicate class definitions" not in text
    assert text.rstrip().endswith("Total: 3")


def test_render_json_uses_camel_case_keys(findings):
    data = json.loads(render_json(findings))

    assert data["unusedDefinitions"][0]["class"] == "ghost"
    assert data["relocationSuggestions"][0]["moveFrom"] == "styles"
    assert data["relocationSuggestions"][0]["moveTo"] == "components/button"
    assert data["missingDefinitions"] == []
    assert data["duplicateDefinitions"] is None


def test_write_report_creates_parent_directories(tmp_path, findings):
    destination = tmp_path / "logs" / "css" / "report.json"

    write_report(findings, destination, "json")

    assert json.loads(destination.read_text(encoding="utf-8"))["expressions"][0][
        "expression"
    ] == "styles.box"


def test_write_report_to_stdout(capsys, findings):
    write_report(findings, "-", "text")

    assert "CSS tracker report" in capsys.readouterr().out


def test_write_report_unknown_format(tmp_path, findings):
    with pytest.raises(ValueError):
        write_report(findings, tmp_path / "out.txt", "xml")


def test_render_text_shows_project_root_as_dot():
    findings = Findings(
        relocation_suggestions=[
            RelocationFinding(
                class_name="btn", move_from="styles", move_to="", occurrences=["App.tsx"]
            )
        ]
    )

    assert "- move 'btn' from 'styles' to '.'" in render_text(findings)
