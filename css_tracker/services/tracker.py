"""
Moduł: tracker - jednorazowy przebieg analizy projektu.

Kolejność: wyszukanie plików -> ekstrakcja wystąpień per plik -> analiza
powiązań. Błąd na dowolnym etapie przerywa cały przebieg; wyniki częściowe
nie są zwracane.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

from css_tracker.config import SETTINGS
from css_tracker.core.analyzer import analyze
from css_tracker.core.errors import UnreadableSource
from css_tracker.core.extractor import extract_markup, extract_stylesheet
from css_tracker.core.models import ClassOccurrence, Findings, Occurrence
from css_tracker.services.config_loader import TrackerConfig
from css_tracker.services.file_scan import scan_files, select_dialect
from css_tracker.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class TrackerReport:
    """Wyniki przebiegu wraz z licznikami dla podsumowania."""

    findings: Findings
    css_files: int
    front_files: int
    css_occurrences: int
    front_occurrences: int


def _read(root: Path, relative_path: str) -> str:
    encoding = SETTINGS.FILE_ENCODING
    try:
        return (root / relative_path).read_text(encoding=encoding)
    except UnicodeDecodeError as exc:
        raise UnreadableSource(relative_path, encoding, exc.reason) from exc


def collect_css_occurrences(root: Path, paths: List[str]) -> List[ClassOccurrence]:
    occurrences: List[ClassOccurrence] = []
    for path in paths:
        occurrences.extend(extract_stylesheet(_read(root, path), path))
    return occurrences


def collect_front_occurrences(root: Path, paths: List[str]) -> List[Occurrence]:
    occurrences: List[Occurrence] = []
    for path in paths:
        occurrences.extend(extract_markup(_read(root, path), path, select_dialect(path)))
    return occurrences


def run_tracker(root: Union[str, Path], config: TrackerConfig) -> TrackerReport:
    """
    Analizuje projekt w katalogu ``root`` zgodnie z konfiguracją.

    Raises:
        MalformedExpression: Niezamknięty cudzysłów w atrybucie klasy
        OSError: Błąd odczytu pliku
        UnreadableSource: Plik nie jest poprawny w kodowaniu FILE_ENCODING
    """
    root_path = Path(root)
    css_paths = scan_files(root_path, config.css_files)
    front_paths = scan_files(root_path, config.front_files)
    logger.info(
        f"Skanowanie {root_path}: {len(css_paths)} arkuszy, "
        f"{len(front_paths)} plików front-end"
    )

    css_occurrences = collect_css_occurrences(root_path, css_paths)
    front_occurrences = collect_front_occurrences(root_path, front_paths)
    logger.info(
        f"Ekstrakcja: {len(css_occurrences)} definicji, "
        f"{len(front_occurrences)} wystąpień front-end"
    )

    findings = analyze(
        css_occurrences,
        front_occurrences,
        blacklist=config.blacklist.to_blacklist(root_path),
        options=config.analysis_options(),
        root=root_path,
    )
    return TrackerReport(
        findings=findings,
        css_files=len(css_paths),
        front_files=len(front_paths),
        css_occurrences=len(css_occurrences),
        front_occurrences=len(front_occurrences),
    )
