"""Getter resolution over a parsed bencode tree."""

from __future__ import annotations

from typing import Sequence, Union

from .model import BDict, BList, Empty, Value, _EmptyType

Accessor = Union[bytes, str, int]


def apply_getter(value: Value | _EmptyType, accessor: Accessor) -> Value | _EmptyType:
    """Resolve a single accessor on a value.

    - BDict: ``bytes`` key, or ``str``/``int`` key encoded as UTF-8
    - BList: integer index (negative counts from the end)
    - Empty / scalars / misses: returns Empty
    """
    if isinstance(value, BDict):
        # dotted paths turn numeric keys into ints
        if isinstance(accessor, int):
            accessor = str(accessor)
        if isinstance(accessor, str):
            accessor = accessor.encode("utf-8")
        if isinstance(accessor, (bytes, bytearray)):
            return value.entries.get(bytes(accessor), Empty)
        return Empty

    if isinstance(value, BList):
        if isinstance(accessor, int) and not isinstance(accessor, bool):
            if -len(value.items) <= accessor < len(value.items):
                return value.items[accessor]
        return Empty

    return Empty


def get_path(value: Value, path: str | Sequence[Accessor]) -> Value | _EmptyType:
    """Follow *path* from *value*.

    A string path is split on ``.``; integer segments index lists::

        get_path(meta, "info.files.0.length")
    """
    if isinstance(path, str):
        segments: list[Accessor] = [_segment(s) for s in path.split(".") if s]
    else:
        segments = list(path)

    current: Value | _EmptyType = value
    for segment in segments:
        current = apply_getter(current, segment)
        if current is Empty:
            break
    return current


def _segment(text: str) -> Accessor:
    """Integer segments index lists; anything else stays a key."""
    try:
        number = int(text)
    except ValueError:
        return text
    return number if str(number) == text else text
