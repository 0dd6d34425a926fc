"""
Moduł: analyzer - łączenie definicji klas z ich użyciami i wyznaczanie wyników.

Etapy:
1. Łączenie: każda para (definicja, użycie) o tej samej nazwie klasy dodaje
   powiązanie w obu kierunkach. Powtórzenia są zachowywane, bo liczba użyć
   z tego samego pliku jest dowodem przy sugestiach przeniesienia.
2. Wyniki: nieużywane definicje, sugestie przeniesienia, brakujące definicje,
   lista wyrażeń, duplikaty definicji - każda kategoria włączana osobno.

Zestawienie par odbywa się w obrębie kubełków po nazwie klasy, co daje te same
wyniki co pełne porównanie każdej definicji z każdym użyciem.
"""

from collections import OrderedDict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from css_tracker.core.blacklist import Blacklist, ExclusionCategory
from css_tracker.core.models import (
    ClassFinding,
    ClassOccurrence,
    CssRecord,
    ExpressionFinding,
    FileLines,
    Findings,
    FrontRecord,
    Occurrence,
    RelocationFinding,
)
from css_tracker.utils.logger import get_logger
from css_tracker.utils.paths import common_path, parent_dir

logger = get_logger(__name__)


@dataclass(frozen=True)
class AnalysisOptions:
    """Przełączniki kategorii wyników."""

    unused_definitions: bool = True
    relocation_suggestions: bool = True
    missing_definitions: bool = True
    expressions: bool = True
    duplicate_definitions: bool = True


def _group_locations(entries: Iterable[Tuple[str, str, int]]) -> "OrderedDict":
    """Grupuje (klucz, ścieżka, linia) -> klucz -> ścieżka -> zbiór linii, w kolejności wystąpień."""
    groups: "OrderedDict[str, OrderedDict[str, set]]" = OrderedDict()
    for key, path, line in entries:
        groups.setdefault(key, OrderedDict()).setdefault(path, set()).add(line)
    return groups


def _to_file_lines(paths: "OrderedDict[str, set]") -> List[FileLines]:
    return [FileLines(path=path, lines=sorted(lines)) for path, lines in paths.items()]


class CrossReferenceAnalyzer:
    """Analiza powiązań dla jednego przebiegu; rekordy łączone są dokładnie raz."""

    def __init__(
        self,
        css_occurrences: Sequence[ClassOccurrence],
        front_occurrences: Sequence[Occurrence],
        blacklist: Optional[Blacklist] = None,
        root: Union[str, Path, None] = None,
    ):
        """
        Args:
            css_occurrences: Wystąpienia klas ze wszystkich arkuszy stylów
            front_occurrences: Wystąpienia klas i wyrażeń z plików front-end
            blacklist: Wykluczenia (domyślnie brak)
            root: Katalog projektu, używany przy sprawdzaniu wspólnej ścieżki
        """
        self.blacklist = blacklist or Blacklist()
        self.root = root
        self.css_records = [CssRecord(occurrence) for occurrence in css_occurrences]
        self.front_records = [FrontRecord(occurrence) for occurrence in front_occurrences]
        self._joined = False

    def join(self) -> None:
        """Łączy definicje z użyciami (z zachowaniem krotności dopasowań)."""
        if self._joined:
            return

        blacklist = self.blacklist
        front_by_class: Dict[str, List[FrontRecord]] = {}
        for front in self.front_records:
            if front.is_expression or blacklist.excludes(
                ExclusionCategory.FRONT, front.path
            ):
                continue
            front_by_class.setdefault(front.class_name, []).append(front)

        defined_by: Dict[int, List[str]] = {}
        for css in self.css_records:
            matches: List[str] = []
            if not blacklist.excludes_class(css.class_name):
                for front in front_by_class.get(css.class_name, ()):
                    matches.append(front.path)
                    defined_by.setdefault(id(front), []).append(css.path)
            css.link(matches)

        for front in self.front_records:
            front.link(defined_by.get(id(front), ()))

        self._joined = True
        linked = sum(1 for css in self.css_records if css.referenced_by)
        logger.info(
            f"Połączono {linked}/{len(self.css_records)} definicji "
            f"z {len(self.front_records)} wystąpieniami front-end"
        )

    def unused_definitions(self) -> List[ClassFinding]:
        """Definicje bez żadnego użycia."""
        blacklist = self.blacklist
        groups = _group_locations(
            (css.class_name, css.path, css.line)
            for css in self.css_records
            if not css.referenced_by
            and not blacklist.excludes(ExclusionCategory.CSS, css.path)
            and not blacklist.excludes(ExclusionCategory.MOVE, css.path)
            and not blacklist.excludes_class(css.class_name)
        )
        return [
            ClassFinding(class_name=name, locations=_to_file_lines(paths))
            for name, paths in groups.items()
        ]

    def relocation_suggestions(self) -> List[RelocationFinding]:
        """Definicje, których wszystkie użycia leżą w innym wspólnym katalogu."""
        blacklist = self.blacklist
        suggestions: List[RelocationFinding] = []
        seen = set()
        for css in self.css_records:
            if (
                not css.referenced_by
                or blacklist.excludes(ExclusionCategory.MOVE, css.path)
                or blacklist.excludes_class(css.class_name)
            ):
                continue
            target = common_path(css.referenced_by, self.root)
            source = parent_dir(css.path)
            if target is None or target == source:
                continue
            key = (css.class_name, source, target, css.referenced_by)
            if key in seen:
                continue
            seen.add(key)
            suggestions.append(
                RelocationFinding(
                    class_name=css.class_name,
                    move_from=source,
                    move_to=target,
                    occurrences=list(css.referenced_by),
                )
            )
        return suggestions

    def missing_definitions(self) -> List[ClassFinding]:
        """Klasy użyte w plikach front-end, których nie definiuje żaden arkusz."""
        blacklist = self.blacklist
        groups = _group_locations(
            (front.class_name, front.path, front.line)
            for front in self.front_records
            if not front.is_expression
            and front.class_name
            and not front.defined_by
            and not blacklist.excludes(ExclusionCategory.FRONT, front.path)
            and not blacklist.excludes_class(front.class_name)
        )
        return [
            ClassFinding(class_name=name, locations=_to_file_lines(paths))
            for name, paths in groups.items()
        ]

    def expressions(self) -> List[ExpressionFinding]:
        """Wyrażenia dynamiczne do ręcznego przeglądu."""
        groups = _group_locations(
            (front.expression, front.path, front.line)
            for front in self.front_records
            if front.is_expression
            and not self.blacklist.excludes(ExclusionCategory.FRONT, front.path)
        )
        return [
            ExpressionFinding(expression=expression, locations=_to_file_lines(paths))
            for expression, paths in groups.items()
        ]

    def duplicate_definitions(self) -> List[ClassFinding]:
        """Klasy zdefiniowane więcej niż raz (również w tym samym pliku)."""
        blacklist = self.blacklist
        candidates = [
            css
            for css in self.css_records
            if not blacklist.excludes(ExclusionCategory.CSS, css.path)
            and not blacklist.excludes(ExclusionCategory.DUPLICATE, css.path)
            and not blacklist.excludes_class(css.class_name)
        ]
        by_class: "OrderedDict[str, List[CssRecord]]" = OrderedDict()
        for css in candidates:
            by_class.setdefault(css.class_name, []).append(css)

        findings = []
        for name, records in by_class.items():
            if len(records) < 2:
                continue
            paths = _group_locations((name, css.path, css.line) for css in records)[name]
            findings.append(ClassFinding(class_name=name, locations=_to_file_lines(paths)))
        return findings

    def run(self, options: Optional[AnalysisOptions] = None) -> Findings:
        """Łączy rekordy i wyznacza włączone kategorie wyników."""
        options = options or AnalysisOptions()
        self.join()
        findings = Findings(
            unused_definitions=self.unused_definitions()
            if options.unused_definitions
            else None,
            relocation_suggestions=self.relocation_suggestions()
            if options.relocation_suggestions
            else None,
            missing_definitions=self.missing_definitions()
            if options.missing_definitions
            else None,
            expressions=self.expressions() if options.expressions else None,
            duplicate_definitions=self.duplicate_definitions()
            if options.duplicate_definitions
            else None,
        )
        logger.info(f"Analiza zakończona: {findings.total()} grup wyników")
        return findings


def analyze(
    css_occurrences: Sequence[ClassOccurrence],
    front_occurrences: Sequence[Occurrence],
    blacklist: Optional[Blacklist] = None,
    options: Optional[AnalysisOptions] = None,
    root: Union[str, Path, None] = None,
) -> Findings:
    """Skrót: jeden przebieg analizy dla gotowych list wystąpień."""
    analyzer = CrossReferenceAnalyzer(css_occurrences, front_occurrences, blacklist, root)
    return analyzer.run(options)
