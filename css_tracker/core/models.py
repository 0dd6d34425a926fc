"""Modele danych: wystąpienia klas, rekordy powiązań i wyniki analizy."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class ClassOccurrence:
    """Dosłowna nazwa klasy w konkretnym pliku i linii."""

    class_name: str
    line: int  # Numer linii od 1
    path: str  # Ścieżka względna projektu, rozdzielana '/'


@dataclass(frozen=True)
class ExpressionOccurrence:
    """Nierozwiązane wyrażenie do ręcznego przeglądu."""

    expression: str
    line: int
    path: str


Occurrence = Union[ClassOccurrence, ExpressionOccurrence]


class LinkError(RuntimeError):
    """Próba ponownego powiązania rekordu, który został już połączony."""

    pass


@dataclass
class CssRecord:
    """Definicja klasy z arkusza stylów wraz z listą plików, które jej używają."""

    occurrence: ClassOccurrence
    referenced_by: Tuple[str, ...] = ()
    _linked: bool = field(default=False, init=False, repr=False, compare=False)

    @property
    def class_name(self) -> str:
        return self.occurrence.class_name

    @property
    def line(self) -> int:
        return self.occurrence.line

    @property
    def path(self) -> str:
        return self.occurrence.path

    def link(self, front_paths: Sequence[str]) -> None:
        """Ustawia powiązania (z powtórzeniami); dozwolone tylko raz na przebieg."""
        if self._linked:
            raise LinkError(f"CssRecord already linked: {self.path}:{self.line}")
        self.referenced_by = tuple(front_paths)
        self._linked = True


@dataclass
class FrontRecord:
    """Użycie klasy (lub wyrażenie) w pliku front-end wraz z definicjami."""

    occurrence: Occurrence
    defined_by: Tuple[str, ...] = ()
    _linked: bool = field(default=False, init=False, repr=False, compare=False)

    @property
    def is_expression(self) -> bool:
        return isinstance(self.occurrence, ExpressionOccurrence)

    @property
    def class_name(self) -> Optional[str]:
        if isinstance(self.occurrence, ClassOccurrence):
            return self.occurrence.class_name
        return None

    @property
    def expression(self) -> Optional[str]:
        if isinstance(self.occurrence, ExpressionOccurrence):
            return self.occurrence.expression
        return None

    @property
    def line(self) -> int:
        return self.occurrence.line

    @property
    def path(self) -> str:
        return self.occurrence.path

    def link(self, css_paths: Sequence[str]) -> None:
        if self._linked:
            raise LinkError(f"FrontRecord already linked: {self.path}:{self.line}")
        self.defined_by = tuple(css_paths)
        self._linked = True


class FindingCategory(str, Enum):
    """Kategorie wyników analizy."""

    UNUSED_DEFINITIONS = "unusedDefinitions"
    RELOCATION_SUGGESTIONS = "relocationSuggestions"
    MISSING_DEFINITIONS = "missingDefinitions"
    EXPRESSIONS = "expressions"
    DUPLICATE_DEFINITIONS = "duplicateDefinitions"


class FileLines(BaseModel):
    """Plik i unikalne numery linii, w których wystąpił wpis."""

    path: str
    lines: List[int] = Field(default_factory=list)


class ClassFinding(BaseModel):
    """Wynik pogrupowany po nazwie klasy."""

    model_config = ConfigDict(populate_by_name=True)

    class_name: str = Field(alias="class")
    locations: List[FileLines] = Field(default_factory=list)


class ExpressionFinding(BaseModel):
    """Wynik pogrupowany po tekście wyrażenia."""

    expression: str
    locations: List[FileLines] = Field(default_factory=list)


class RelocationFinding(BaseModel):
    """Sugestia przeniesienia definicji klasy bliżej jej użyć."""

    model_config = ConfigDict(populate_by_name=True)

    class_name: str = Field(alias="class")
    move_from: str = Field(alias="moveFrom")
    move_to: str = Field(alias="moveTo")
    occurrences: List[str] = Field(
        default_factory=list, description="Pliki używające klasy, z powtórzeniami"
    )


class Findings(BaseModel):
    """Komplet wyników; wyłączona kategoria ma wartość None."""

    model_config = ConfigDict(populate_by_name=True)

    unused_definitions: Optional[List[ClassFinding]] = Field(
        default=None, alias="unusedDefinitions"
    )
    relocation_suggestions: Optional[List[RelocationFinding]] = Field(
        default=None, alias="relocationSuggestions"
    )
    missing_definitions: Optional[List[ClassFinding]] = Field(
        default=None, alias="missingDefinitions"
    )
    expressions: Optional[List[ExpressionFinding]] = Field(
        default=None, alias="expressions"
    )
    duplicate_definitions: Optional[List[ClassFinding]] = Field(
        default=None, alias="duplicateDefinitions"
    )

    def total(self) -> int:
        """Liczba grup we wszystkich włączonych kategoriach."""
        groups = [
            self.unused_definitions,
            self.relocation_suggestions,
            self.missing_definitions,
            self.expressions,
            self.duplicate_definitions,
        ]
        return sum(len(group) for group in groups if group)
