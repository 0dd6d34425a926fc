"""Wyjątki zgłaszane przez analizę css-tracker."""

from typing import Optional


class MalformedExpression(ValueError):
    """Wyrażenie w atrybucie klasy zawiera niezamknięty cudzysłów."""

    def __init__(self, message: str, line: int, path: Optional[str] = None):
        """
        Inicjalizacja wyjątku MalformedExpression.

        Args:
            message: Opis błędu
            line: Numer linii (od 1), w której otwarto cudzysłów
            path: Ścieżka pliku, w którym wystąpił błąd
        """
        location = f"{path}:{line}" if path else f"line {line}"
        super().__init__(f"{message} ({location})")
        self.line = line
        self.path = path


class ConfigurationError(ValueError):
    """Brakująca lub niepoprawna konfiguracja trackera."""

    pass


class UnreadableSource(ValueError):
    """Plik projektu nie daje się odczytać w skonfigurowanym kodowaniu."""

    def __init__(self, path: str, encoding: str, reason: str):
        super().__init__(f"Cannot decode {path} as {encoding}: {reason}")
        self.path = path
        self.encoding = encoding
