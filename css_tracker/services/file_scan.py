"""Moduł: file_scan - rekurencyjne wyszukiwanie plików projektu po rozszerzeniu."""

from pathlib import Path
from typing import Iterable, List, Optional, Union

from css_tracker.config import SETTINGS
from css_tracker.core.extractor import AttributeDialect
from css_tracker.utils.logger import get_logger

logger = get_logger(__name__)

JSX_EXTENSIONS = {".tsx", ".jsx"}


def scan_files(
    root: Union[str, Path],
    extensions: Iterable[str],
    ignored_dirs: Optional[Iterable[str]] = None,
) -> List[str]:
    """
    Zwraca posortowane ścieżki względne (rozdzielane '/') plików o podanych rozszerzeniach.

    Args:
        root: Katalog projektu
        extensions: Rozszerzenia z kropką, np. ``[".css", ".scss"]``
        ignored_dirs: Nazwy katalogów, do których skaner nie wchodzi
            (domyślnie z ustawień ``SCAN_IGNORED_DIRS``)
    """
    root_path = Path(root)
    wanted = {extension.lower() for extension in extensions}
    skipped = set(SETTINGS.ignored_dirs if ignored_dirs is None else ignored_dirs)

    found: List[str] = []

    def walk(directory: Path) -> None:
        for entry in sorted(directory.iterdir(), key=lambda item: item.name):
            if entry.is_dir():
                if entry.name not in skipped:
                    walk(entry)
            elif entry.suffix.lower() in wanted:
                found.append(entry.relative_to(root_path).as_posix())

    walk(root_path)
    logger.debug(f"Znaleziono {len(found)} plików {sorted(wanted)} w {root_path}")
    return found


def select_dialect(path: str) -> AttributeDialect:
    """Odmiana atrybutu klasy: ``className`` dla .tsx/.jsx, ``class`` dla pozostałych."""
    if Path(path).suffix.lower() in JSX_EXTENSIONS:
        return AttributeDialect.JSX
    return AttributeDialect.HTML
