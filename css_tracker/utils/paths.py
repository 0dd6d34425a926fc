"""Operacje na ścieżkach projektu: wspólny katalog i normalizacja względna."""

from __future__ import annotations

import posixpath
from pathlib import Path
from typing import Optional, Sequence, Union

PathLike = Union[str, Path]


def common_path(
    paths: Sequence[str], root: Optional[PathLike] = None
) -> Optional[str]:
    """
    Zwraca najdłuższy wspólny katalog dla podanych ścieżek.

    Ścieżki są dzielone na segmenty po '/', a segmenty porównywane pozycyjnie.
    Jeśli wspólny prefiks wskazuje na istniejący plik (sprawdzane względem
    ``root``), ostatni segment jest odcinany, więc wynik zawsze jest katalogiem.

    Args:
        paths: Ścieżki względne do katalogu projektu, rozdzielane '/'
        root: Katalog projektu używany do sprawdzenia, czy prefiks jest plikiem

    Returns:
        Wspólny katalog (pusty string dla katalogu projektu) lub None, jeśli
        lista jest pusta albo już pierwszy segment się różni
    """
    if not paths:
        return None

    split_paths = [path.split("/") for path in paths]
    shortest = min(len(segments) for segments in split_paths)

    common_segments = []
    for index in range(shortest):
        segment = split_paths[0][index]
        if all(segments[index] == segment for segments in split_paths):
            common_segments.append(segment)
        else:
            break

    if not common_segments:
        return None

    prefix = "/".join(common_segments)
    base = Path(root) if root is not None else Path(".")
    if (base / prefix).is_file():
        # Plik w katalogu głównym daje pusty prefiks, czyli sam katalog projektu
        prefix = "/".join(common_segments[:-1])

    return prefix


def parent_dir(path: str) -> str:
    """Katalog nadrzędny ścieżki rozdzielanej '/' (pusty string dla katalogu głównego)."""
    return posixpath.dirname(path)


def to_project_path(path: PathLike, root: PathLike) -> str:
    """
    Normalizuje ścieżkę do postaci względnej wobec katalogu projektu.

    Akceptuje ścieżki bezwzględne (muszą leżeć w ``root``), względne
    (``./src/app.css``, ``src\\app.css``) i zwraca postać ``src/app.css``.
    """
    raw = Path(path)
    if raw.is_absolute():
        root_path = Path(root).resolve()
        try:
            raw = raw.resolve().relative_to(root_path)
        except ValueError:
            return raw.as_posix()
    text = raw.as_posix().replace("\\", "/")
    normalized = posixpath.normpath(text)
    return "" if normalized == "." else normalized
