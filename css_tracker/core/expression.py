"""
Moduł: expression - interpretacja dynamicznych wartości atrybutu klasy.

Interpreter nie jest parserem języka: nie buduje AST, nie rozwiązuje
identyfikatorów i niczego nie ewaluuje. Rozdziela tekst wyrażenia na:
- dosłowne nazwy klas (z literałów w cudzysłowach),
- nieprzezroczyste podwyrażenia, zgłaszane do ręcznego przeglądu.

Obsługiwane konstrukcje:
- warunek ``cond ? A : B`` - warunek jest pomijany, gałęzie interpretowane,
- konkatenacja ``a + "b"`` - każdy operand osobno,
- literały szablonowe ``\\`a ${x}\\``` - tekst dosłowny i podwyrażenia ``${...}``.
"""

from typing import List, NamedTuple, Optional, Tuple

from css_tracker.core.errors import MalformedExpression
from css_tracker.core.models import ClassOccurrence, ExpressionOccurrence, Occurrence

QUOTES = "\"'`"
OPENERS = "([{"
CLOSERS = ")]}"

LITERAL = "literal"
OPAQUE = "opaque"


class UnclosedQuote(Exception):
    """Cudzysłów otwarty na pozycji ``index`` nie został zamknięty."""

    def __init__(self, index: int):
        super().__init__(f"Unclosed quote at index {index}")
        self.index = index


class _Piece(NamedTuple):
    kind: str
    text: str
    offset: int  # Pozycja w tekście wejściowym interpretera


def _comment_end(text: str, index: int) -> int:
    """Koniec komentarza zaczynającego się na ``index`` albo -1, jeśli to nie komentarz."""
    if text.startswith("//", index):
        end = text.find("\n", index)
        return len(text) if end == -1 else end
    if text.startswith("/*", index):
        end = text.find("*/", index + 2)
        return len(text) if end == -1 else end + 2
    return -1


def find_closing_quote(text: str, start: int) -> int:
    """
    Zwraca indeks cudzysłowu zamykającego literał otwarty na ``start``.

    Literały ``"`` i ``'`` nie mogą przechodzić przez koniec linii; literał
    szablonowy może, a jego podwyrażenia ``${...}`` są pomijane w całości.

    Raises:
        UnclosedQuote: Jeśli literał nie jest zamknięty
    """
    quote = text[start]
    length = len(text)
    i = start + 1
    while i < length:
        char = text[i]
        if char == "\\":
            i += 2
            continue
        if char == quote:
            return i
        if char == "\n" and quote != "`":
            break
        if quote == "`" and char == "$" and text.startswith("{", i + 1):
            end = find_closing_bracket(text, i + 1)
            if end == -1:
                break
            i = end + 1
            continue
        i += 1
    raise UnclosedQuote(start)


def find_closing_bracket(text: str, open_index: int) -> int:
    """
    Zwraca indeks nawiasu zamykającego nawias otwarty na ``open_index``.

    Literały w cudzysłowach i komentarze są pomijane. Zwraca -1, gdy tekst kończy się
    przed domknięciem nawiasu.

    Raises:
        UnclosedQuote: Jeśli po drodze trafi na niezamknięty literał
    """
    depth = 0
    length = len(text)
    i = open_index
    while i < length:
        char = text[i]
        if char in QUOTES:
            i = find_closing_quote(text, i) + 1
            continue
        comment_end = _comment_end(text, i)
        if comment_end != -1:
            i = comment_end
            continue
        if char in OPENERS:
            depth += 1
        elif char in CLOSERS:
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return -1


def _top_level_positions(text: str, wanted: str) -> List[int]:
    """Pozycje znaków z ``wanted`` leżące poza literałami, komentarzami i nawiasami."""
    positions = []
    depth = 0
    length = len(text)
    i = 0
    while i < length:
        char = text[i]
        if char in QUOTES:
            i = find_closing_quote(text, i) + 1
            continue
        comment_end = _comment_end(text, i)
        if comment_end != -1:
            i = comment_end
            continue
        if char in OPENERS:
            depth += 1
        elif char in CLOSERS:
            depth -= 1
        elif depth == 0 and char in wanted:
            # Operatory dwuznakowe: ?. ?? ++ +=
            following = text[i + 1 : i + 2]
            if char == "?" and following in (".", "?"):
                i += 2
                continue
            if char == "+" and following in ("+", "="):
                i += 2
                continue
            positions.append(i)
        i += 1
    return positions


def _blank_comments(text: str) -> str:
    """Zastępuje komentarze spacjami, zachowując długość tekstu i znaki nowej linii."""
    chars = list(text)
    i = 0
    while i < len(text):
        if text[i] in QUOTES:
            i = find_closing_quote(text, i) + 1
            continue
        comment_end = _comment_end(text, i)
        if comment_end == -1:
            i += 1
            continue
        for j in range(i, comment_end):
            if chars[j] != "\n":
                chars[j] = " "
        i = comment_end
    return "".join(chars)


def _find_conditional(text: str) -> Optional[Tuple[int, int]]:
    """Zwraca pozycje ``?`` i odpowiadającego mu ``:`` dla warunku na najwyższym poziomie."""
    markers = _top_level_positions(text, "?:")
    question = None
    pending = 0
    for index in markers:
        char = text[index]
        if char == "?":
            if question is None:
                question = index
            pending += 1
        elif question is not None:
            pending -= 1
            if pending == 0:
                return question, index
    return None


def _strip(text: str, offset: int) -> Tuple[str, int]:
    lead = len(text) - len(text.lstrip())
    return text.strip(), offset + lead


def _is_wrapped(body: str) -> bool:
    """Czy całe ``body`` to jeden nawias ``(...)``."""
    return body.startswith("(") and find_closing_bracket(body, 0) == len(body) - 1


def _is_quoted_literal(body: str) -> bool:
    return (
        len(body) >= 2
        and body[0] in QUOTES
        and find_closing_quote(body, 0) == len(body) - 1
    )


def _template_pieces(body: str, offset: int) -> List[_Piece]:
    """Rozbija literał szablonowy na tekst dosłowny i podwyrażenia ``${...}``."""
    inner = body[1:-1]
    inner_offset = offset + 1
    pieces = []
    literal_start = 0
    i = 0
    while i < len(inner):
        if inner[i] == "\\":
            i += 2
            continue
        if inner.startswith("${", i):
            end = find_closing_bracket(inner, i + 1)
            pieces.append(_Piece(LITERAL, inner[literal_start:i], inner_offset + literal_start))
            pieces.extend(_interpret(inner[i + 2 : end], inner_offset + i + 2))
            i = end + 1
            literal_start = i
            continue
        i += 1
    pieces.append(_Piece(LITERAL, inner[literal_start:], inner_offset + literal_start))
    return pieces


def _branch(text: str, offset: int) -> List[_Piece]:
    """Gałąź warunku: literał zostaje literałem, reszta jest nieprzezroczysta."""
    body, offset = _strip(text, offset)
    if not body:
        return []
    if _is_quoted_literal(body):
        if body[0] == "`":
            return _template_pieces(body, offset)
        return [_Piece(LITERAL, body[1:-1], offset + 1)]
    if _is_wrapped(body):
        return _interpret(body[1:-1], offset + 1)
    if _find_conditional(body) is not None:
        return _interpret(body, offset)
    return [_Piece(OPAQUE, body, offset)]


def _operand(text: str, offset: int) -> List[_Piece]:
    """Operand konkatenacji: z cudzysłowem jest literałem, bez - wyrażeniem."""
    body, offset = _strip(text, offset)
    if not body:
        return []
    if _is_wrapped(body):
        return _interpret(body[1:-1], offset + 1)
    if body[0] == "`" and _is_quoted_literal(body):
        return _template_pieces(body, offset)
    if any(quote in body for quote in QUOTES):
        literal = "".join(char for char in body if char not in QUOTES)
        return [_Piece(LITERAL, literal, offset)]
    return [_Piece(OPAQUE, body, offset)]


def _interpret(text: str, offset: int) -> List[_Piece]:
    body, offset = _strip(_blank_comments(text), offset)
    if not body:
        return []

    conditional = _find_conditional(body)
    if conditional is not None:
        question, colon = conditional
        return _branch(body[question + 1 : colon], offset + question + 1) + _branch(
            body[colon + 1 :], offset + colon + 1
        )

    pieces: List[_Piece] = []
    start = 0
    for position in _top_level_positions(body, "+") + [len(body)]:
        pieces.extend(_operand(body[start:position], offset + start))
        start = position + 1
    return pieces


def split_class_tokens(text: str) -> List[str]:
    """Dzieli tekst po białych znakach i usuwa pojedynczą wiodącą kropkę z tokenów."""
    tokens = []
    for token in text.split():
        if token.startswith("."):
            token = token[1:]
        if token:
            tokens.append(token)
    return tokens


def interpret_expression(expression: str, line: int, path: str) -> List[Occurrence]:
    """
    Interpretuje wyrażenie atrybutu klasy (bez otaczających klamer).

    Args:
        expression: Surowy tekst wyrażenia
        line: Linia (od 1), w której zaczyna się wyrażenie
        path: Ścieżka pliku źródłowego

    Returns:
        Wystąpienia w kolejności źródłowej: ClassOccurrence dla dosłownych
        klas (w linii ``line``) oraz ExpressionOccurrence dla podwyrażeń
        (w linii ``line`` + liczba znaków nowej linii przed podwyrażeniem)

    Raises:
        MalformedExpression: Jeśli wyrażenie zawiera niezamknięty cudzysłów
    """
    try:
        # Pełny przebieg po całym tekście, aby indeks błędu odnosił się do wejścia
        _blank_comments(expression)
        pieces = _interpret(expression, 0)
    except UnclosedQuote as exc:
        raise MalformedExpression(
            "Unclosed quote in class expression",
            line + expression.count("\n", 0, exc.index),
            path,
        ) from None

    occurrences: List[Occurrence] = []
    for piece in pieces:
        if piece.kind == LITERAL:
            for token in split_class_tokens(piece.text):
                occurrences.append(ClassOccurrence(token, line, path))
        else:
            occurrences.append(
                ExpressionOccurrence(
                    " ".join(piece.text.split()),
                    line + expression.count("\n", 0, piece.offset),
                    path,
                )
            )
    return occurrences
