"""Moduł: report_writer - zapis wyników analizy jako tekst lub JSON."""

import sys
from pathlib import Path
from typing import Callable, Dict, List, Union

from css_tracker.config import SETTINGS
from css_tracker.core.models import (
    ClassFinding,
    ExpressionFinding,
    FileLines,
    FindingCategory,
    Findings,
    RelocationFinding,
)
from css_tracker.utils.logger import get_logger

logger = get_logger(__name__)

SECTION_TITLES: Dict[FindingCategory, str] = {
    FindingCategory.UNUSED_DEFINITIONS: "Unused class definitions",
    FindingCategory.RELOCATION_SUGGESTIONS: "Relocation suggestions",
    FindingCategory.MISSING_DEFINITIONS: "Classes used without a definition",
    FindingCategory.EXPRESSIONS: "Dynamic expressions to review",
    FindingCategory.DUPLICATE_DEFINITIONS: "Duplicate class definitions",
}

STDOUT = "-"


def _locations(locations: List[FileLines]) -> List[str]:
    return [
        f"  {item.path}: {', '.join(str(line) for line in item.lines)}"
        for item in locations
    ]


def _class_group(finding: ClassFinding) -> List[str]:
    return [f"- {finding.class_name}"] + _locations(finding.locations)


def _expression_group(finding: ExpressionFinding) -> List[str]:
    return [f"- {finding.expression}"] + _locations(finding.locations)


def _relocation_group(finding: RelocationFinding) -> List[str]:
    source = finding.move_from or "."
    target = finding.move_to or "."
    lines = [
        f"- move '{finding.class_name}' from '{source}' to '{target}'",
        "  used in:",
    ]
    lines.extend(f"  {path}" for path in finding.occurrences)
    return lines


def render_text(findings: Findings) -> str:
    """Raport czytelny dla człowieka, jedna sekcja na włączoną kategorię."""
    sections = [
        (FindingCategory.UNUSED_DEFINITIONS, findings.unused_definitions, _class_group),
        (
            FindingCategory.RELOCATION_SUGGESTIONS,
            findings.relocation_suggestions,
            _relocation_group,
        ),
        (FindingCategory.MISSING_DEFINITIONS, findings.missing_definitions, _class_group),
        (FindingCategory.EXPRESSIONS, findings.expressions, _expression_group),
        (
            FindingCategory.DUPLICATE_DEFINITIONS,
            findings.duplicate_definitions,
            _class_group,
        ),
    ]

    lines: List[str] = ["CSS tracker report", ""]
    for category, groups, render in sections:
        if groups is None:
            continue
        lines.append(f"## {SECTION_TITLES[category]} ({len(groups)})")
        if not groups:
            lines.append("(none)")
        for group in groups:
            lines.extend(render(group))
        lines.append("")
    lines.append(f"Total: {findings.total()}")
    return "\n".join(lines) + "\n"


def render_json(findings: Findings) -> str:
    """Wyniki jako JSON z kluczami camelCase; wyłączone kategorie mają wartość null."""
    return findings.model_dump_json(by_alias=True, indent=2) + "\n"


RENDERERS: Dict[str, Callable[[Findings], str]] = {
    "text": render_text,
    "json": render_json,
}


def write_report(
    findings: Findings, destination: Union[str, Path], fmt: str = "text"
) -> None:
    """
    Zapisuje raport do pliku (tworząc katalogi) lub na stdout dla ``-``.

    Raises:
        ValueError: Nieznany format raportu
    """
    if fmt not in RENDERERS:
        raise ValueError(f"Unknown report format: {fmt}")
    content = RENDERERS[fmt](findings)

    if str(destination) == STDOUT:
        sys.stdout.write(content)
        return

    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding=SETTINGS.FILE_ENCODING)
    logger.info(f"Zapisano raport: {path}")
