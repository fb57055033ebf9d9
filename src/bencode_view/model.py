"""Parsed value tree.

Byte strings and dictionary keys wrap read-only ``memoryview`` slices of
the buffer handed to the reader; nothing here copies string content.  The views
keep that buffer alive, so a ``bytearray`` cannot be resized while any part
of the tree is still referenced.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


# ---------------------------------------------------------------------------
# Empty: singleton for missing lookups
# ---------------------------------------------------------------------------

class _EmptyType:
    """Sentinel returned when a path cannot be resolved."""

    _instance: _EmptyType | None = None

    def __new__(cls) -> _EmptyType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Empty"

    def __bool__(self) -> bool:
        return False


Empty = _EmptyType()


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class BInteger:
    value: int

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(slots=True, repr=False, eq=False)
class BByteString:
    view: memoryview  # borrowed

    def __eq__(self, other) -> bool:
        if isinstance(other, BByteString):
            return self.view == other.view
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self.view == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(bytes(self.view))

    def __len__(self) -> int:
        return len(self.view)

    def __bytes__(self) -> bytes:
        return bytes(self.view)

    def tobytes(self) -> bytes:
        return bytes(self.view)

    def decode(self, encoding: str = "utf-8", errors: str = "strict") -> str:
        return bytes(self.view).decode(encoding, errors)

    def __repr__(self) -> str:
        return f"BByteString({bytes(self.view)!r})"

    def __str__(self) -> str:
        return self.decode(errors="replace")


@dataclass(slots=True)
class BList:
    items: list[Value]

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        return "[" + ", ".join(str(v) for v in self.items) + "]"


@dataclass(slots=True, repr=False)
class BDict:
    # Keys iterate in ascending byte order; plain bytes work for lookups.
    entries: dict[BByteString, Value]

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key) -> bool:
        return key in self.entries

    def __getitem__(self, key) -> Value:
        return self.entries[key]

    def __repr__(self) -> str:
        body = ", ".join(f"{bytes(k)!r}: {v!r}" for k, v in self.entries.items())
        return f"BDict({{{body}}})"

    def __str__(self) -> str:
        body = ", ".join(
            f"{bytes(k).decode('utf-8', 'replace')}: {v}" for k, v in self.entries.items()
        )
        return "{" + body + "}"


Value = Union[BInteger, BByteString, BList, BDict]
