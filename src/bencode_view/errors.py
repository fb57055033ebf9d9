"""Error model for bencode parsing.

Every failure is a :class:`BencodeSchemaError`.  A failure starts at one
byte offset with one grammar rule, then collects a :class:`Frame` for each
combinator it unwinds through, so the final message reads as a trace from
the outermost rule down to the byte that did not match.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


# ---------------------------------------------------------------------------
# Kinds / rules
# ---------------------------------------------------------------------------

class ErrorKind(Enum):
    Grammar = auto()                       # generic grammar mismatch
    IntegerOverflow = auto()               # digit span outside the integer range
    DictNotInLexicographicOrder = auto()   # only with enforce_key_order
    NestingTooDeep = auto()
    TrailingData = auto()                  # decode() left bytes behind


class GrammarRule(Enum):
    Tag = auto()
    Digit = auto()
    Satisfy = auto()
    TakeWhile1 = auto()
    Eof = auto()
    Many = auto()
    Alt = auto()
    Length = auto()


_SNIPPET = 16


@dataclass(slots=True)
class Frame:
    rule: GrammarRule | None
    offset: int
    snippet: bytes

    def describe(self) -> str:
        name = self.rule.name if self.rule is not None else "-"
        return f"{name} at offset {self.offset}:\t{self.snippet!r}"


def _snippet(view: memoryview, pos: int) -> bytes:
    return bytes(view[pos:pos + _SNIPPET])


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class BencodeError(Exception):
    """Base class for errors raised by bencode_view."""


class BencodeSchemaError(BencodeError):
    """A structured parse failure.

    ``kind`` and ``rule`` describe where the failure started; ``frames``
    holds one entry per unwinding level, innermost first.
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.Grammar,
        rule: GrammarRule | None = None,
        offset: int = 0,
    ) -> None:
        super().__init__(message)
        self.reason = message
        self.kind = kind
        self.rule = rule
        self.offset = offset
        self.frames: list[Frame] = []

    @classmethod
    def from_rule(
        cls,
        view: memoryview,
        pos: int,
        rule: GrammarRule,
        reason: str,
        kind: ErrorKind = ErrorKind.Grammar,
    ) -> BencodeSchemaError:
        err = cls(reason, kind=kind, rule=rule, offset=pos)
        err.frames.append(Frame(rule, pos, _snippet(view, pos)))
        return err

    def append(self, view: memoryview, pos: int, rule: GrammarRule) -> BencodeSchemaError:
        """Record that the failure unwound through *rule* at *pos*."""
        self.frames.append(Frame(rule, pos, _snippet(view, pos)))
        return self

    @property
    def fatal(self) -> bool:
        """Fatal failures are never backtracked by ``alt`` or ``many``."""
        return self.kind is not ErrorKind.Grammar

    @property
    def message(self) -> str:
        lines = [f"{self.kind.name}: {self.reason}"]
        lines.extend(f.describe() for f in reversed(self.frames))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.message
