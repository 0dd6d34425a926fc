"""
Moduł: blacklist - wykluczenia ścieżek i klas z analizy.

Każda kategoria wykluczeń jest niezależna: ścieżka wykluczona z jednej
kategorii nadal w pełni uczestniczy w pozostałych.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import FrozenSet, Iterable, Optional, Union

from css_tracker.utils.paths import to_project_path


class ExclusionCategory(str, Enum):
    """Kategorie wykluczeń ścieżek."""

    CSS = "css"
    MOVE = "move"
    FRONT = "front"
    DUPLICATE = "duplicate"


_CATEGORY_FIELDS = {
    ExclusionCategory.CSS: "css_paths",
    ExclusionCategory.MOVE: "move_paths",
    ExclusionCategory.FRONT: "front_paths",
    ExclusionCategory.DUPLICATE: "duplicate_paths",
}


def _normalize_prefixes(
    prefixes: Optional[Iterable[str]], root: Union[str, Path]
) -> FrozenSet[str]:
    return frozenset(to_project_path(prefix, root) for prefix in prefixes or ())


def _matches(path: str, prefixes: FrozenSet[str]) -> bool:
    return any(path.startswith(prefix) for prefix in prefixes)


@dataclass(frozen=True)
class Blacklist:
    """Znormalizowane prefiksy ścieżek (względem katalogu projektu) i wykluczone klasy."""

    css_paths: FrozenSet[str] = field(default_factory=frozenset)
    move_paths: FrozenSet[str] = field(default_factory=frozenset)
    front_paths: FrozenSet[str] = field(default_factory=frozenset)
    duplicate_paths: FrozenSet[str] = field(default_factory=frozenset)
    classes: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def build(
        cls,
        root: Union[str, Path],
        css_paths: Optional[Iterable[str]] = None,
        move_paths: Optional[Iterable[str]] = None,
        front_paths: Optional[Iterable[str]] = None,
        duplicate_paths: Optional[Iterable[str]] = None,
        classes: Optional[Iterable[str]] = None,
    ) -> "Blacklist":
        """Tworzy blacklistę, normalizując prefiksy względem ``root``."""
        return cls(
            css_paths=_normalize_prefixes(css_paths, root),
            move_paths=_normalize_prefixes(move_paths, root),
            front_paths=_normalize_prefixes(front_paths, root),
            duplicate_paths=_normalize_prefixes(duplicate_paths, root),
            classes=frozenset(name.lstrip(".") for name in classes or ()),
        )

    def excludes_class(self, class_name: Optional[str]) -> bool:
        return class_name in self.classes

    def excludes(self, category: ExclusionCategory, path: str) -> bool:
        """Sprawdza wykluczenie ścieżki w danej kategorii."""
        return _matches(path, getattr(self, _CATEGORY_FIELDS[category]))
