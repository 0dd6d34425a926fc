"""
Moduł: extractor - wyszukiwanie wystąpień klas w arkuszach stylów i plikach front-end.

Arkusze stylów: zbiór selektorów klas pliku jest dopasowywany do każdej linii
przez zawieranie podciągu (nie granice słów), więc token ``.btn`` zostanie
przypisany także linii zawierającej tylko ``.btn-primary``.

Pliki front-end: wartości atrybutu klasy są czytane jednym przebiegiem w przód
w trzech postaciach:
1. literał w cudzysłowie - ``class="a b"``,
2. literał szablonowy w klamrach - ``className={`a ${x}`}``,
3. dowolne wyrażenie w klamrach - ``className={cond ? "a" : b}``.
Każdy fragment tekstu jest konsumowany raz, więc tokeny nie są liczone podwójnie.
"""

import re
from bisect import bisect_left
from enum import Enum
from typing import List

from css_tracker.core.errors import MalformedExpression
from css_tracker.core.expression import (
    UnclosedQuote,
    find_closing_bracket,
    find_closing_quote,
    interpret_expression,
    split_class_tokens,
)
from css_tracker.core.models import ClassOccurrence, Occurrence
from css_tracker.utils.logger import get_logger

logger = get_logger(__name__)

CLASS_SELECTOR_RE = re.compile(r"\.[a-zA-Z][a-zA-Z0-9_-]*")
IMPORT_MARKER = "@import"
TOKEN_RE = re.compile(r"\S+")


class AttributeDialect(str, Enum):
    """Nazwa atrybutu klasy zależna od odmiany pliku front-end."""

    JSX = "className"  # Nazwa odzwierciedlająca właściwość DOM (.tsx, .jsx)
    HTML = "class"

    @property
    def pattern(self) -> "re.Pattern[str]":
        return re.compile(rf"(?<![\w-]){self.value}\s*=\s*")


class _LineIndex:
    """Zamiana pozycji znaku na numer linii (od 1)."""

    def __init__(self, text: str):
        self._breaks = [match.start() for match in re.finditer("\n", text)]

    def line_of(self, index: int) -> int:
        return bisect_left(self._breaks, index) + 1


def extract_stylesheet(text: str, path: str) -> List[ClassOccurrence]:
    """
    Zwraca wystąpienia klas zdefiniowanych w arkuszu stylów.

    Selektory w liniach ``@import`` są pomijane przy budowie zbioru tokenów.
    Następnie dla każdej linii i każdego tokenu, który jest podciągiem linii,
    powstaje jedno wystąpienie.
    """
    tokens = {}
    for match in CLASS_SELECTOR_RE.finditer(text):
        line_start = text.rfind("\n", 0, match.start()) + 1
        if IMPORT_MARKER in text[line_start : match.start()]:
            continue
        tokens.setdefault(match.group(0), None)

    occurrences = []
    for number, line in enumerate(text.split("\n"), start=1):
        for token in tokens:
            if token in line:
                occurrences.append(ClassOccurrence(token[1:], number, path))

    logger.debug(
        f"{path}: {len(tokens)} selektorów, {len(occurrences)} wystąpień"
    )
    return occurrences


def _template_occurrences(
    template: str, line: int, path: str
) -> List[Occurrence]:
    """Wnętrze literału szablonowego: tokeny dosłowne i podwyrażenia ``${...}``."""
    occurrences: List[Occurrence] = []

    def add_literal(chunk: str, chunk_offset: int) -> None:
        for match in TOKEN_RE.finditer(chunk):
            token_line = line + template.count("\n", 0, chunk_offset + match.start())
            for token in split_class_tokens(match.group(0)):
                occurrences.append(ClassOccurrence(token, token_line, path))

    literal_start = 0
    i = 0
    while i < len(template):
        if template[i] == "\\":
            i += 2
            continue
        if template.startswith("${", i):
            end = find_closing_bracket(template, i + 1)
            add_literal(template[literal_start:i], literal_start)
            occurrences.extend(
                interpret_expression(
                    template[i + 2 : end], line + template.count("\n", 0, i), path
                )
            )
            i = end + 1
            literal_start = i
            continue
        i += 1
    add_literal(template[literal_start:], literal_start)
    return occurrences


def _skip_spaces(text: str, index: int) -> int:
    while index < len(text) and text[index].isspace():
        index += 1
    return index


def extract_markup(
    text: str, path: str, dialect: AttributeDialect = AttributeDialect.HTML
) -> List[Occurrence]:
    """
    Zwraca wystąpienia klas i wyrażeń z wartości atrybutu klasy.

    Args:
        text: Zawartość pliku
        path: Ścieżka względna pliku
        dialect: Odmiana nazwy atrybutu (wybierana na podstawie rozszerzenia)

    Raises:
        MalformedExpression: Jeśli wartość atrybutu zawiera niezamknięty cudzysłów
    """
    lines = _LineIndex(text)
    pattern = dialect.pattern
    occurrences: List[Occurrence] = []
    position = 0

    try:
        while True:
            match = pattern.search(text, position)
            if match is None:
                break
            line = lines.line_of(match.start())
            value_start = match.end()
            opener = text[value_start : value_start + 1]

            if opener in ("\"", "'"):
                value_end = text.find(opener, value_start + 1)
                if value_end == -1:
                    position = value_start + 1
                    continue
                for token in split_class_tokens(text[value_start + 1 : value_end]):
                    occurrences.append(ClassOccurrence(token, line, path))
                position = value_end + 1
                continue

            if opener != "{":
                position = value_start
                continue

            template_start = _skip_spaces(text, value_start + 1)
            if text.startswith("`", template_start):
                template_end = find_closing_quote(text, template_start)
                brace = _skip_spaces(text, template_end + 1)
                if text.startswith("}", brace):
                    occurrences.extend(
                        _template_occurrences(
                            text[template_start + 1 : template_end], line, path
                        )
                    )
                    position = brace + 1
                    continue

            value_end = find_closing_bracket(text, value_start)
            if value_end == -1:
                position = value_start + 1
                continue
            occurrences.extend(
                interpret_expression(text[value_start + 1 : value_end], line, path)
            )
            position = value_end + 1
    except UnclosedQuote as exc:
        raise MalformedExpression(
            "Unclosed quote in class attribute", lines.line_of(exc.index), path
        ) from None

    logger.debug(f"{path}: {len(occurrences)} wystąpień ({dialect.value})")
    return occurrences
