"""Grammar primitives and parser combinators.

A parser is any callable ``(view, pos) -> (output, new_pos)`` over a
read-only ``memoryview``.  Parsers never slice past the end of the view;
a mismatch raises :class:`BencodeSchemaError` carrying the failing rule.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from .errors import BencodeSchemaError, GrammarRule

T = TypeVar("T")
Parser = Callable[[memoryview, int], "tuple[Any, int]"]

_ZERO = 0x30
_ONE = 0x31
_NINE = 0x39

# Longest decimal run unsigned() converts (2**64 - 1 has 20 digits).
MAX_LENGTH_DIGITS = 20


# ---------------------------------------------------------------------------
# Byte predicates
# ---------------------------------------------------------------------------

def is_nonzero_digit(byte: int) -> bool:
    return _ONE <= byte <= _NINE


def is_digit(byte: int) -> bool:
    return _ZERO <= byte <= _NINE


def as_view(data) -> memoryview:
    """Return a flat read-only byte view of *data* without copying it."""
    view = memoryview(data)
    if view.ndim != 1 or view.format != "B":
        view = view.cast("B")
    return view.toreadonly()


# ---------------------------------------------------------------------------
# Primitive recognizers
# ---------------------------------------------------------------------------

def tag(literal: bytes) -> Parser:
    """Match *literal* exactly."""
    size = len(literal)

    def parse(view: memoryview, pos: int) -> tuple[memoryview, int]:
        end = pos + size
        if view[pos:end] != literal:
            raise BencodeSchemaError.from_rule(
                view, pos, GrammarRule.Tag, f"expected {literal!r}"
            )
        return view[pos:end], end

    return parse


def satisfy(predicate: Callable[[int], bool]) -> Parser:
    """Match one byte accepted by *predicate*."""

    def parse(view: memoryview, pos: int) -> tuple[int, int]:
        if pos >= len(view) or not predicate(view[pos]):
            raise BencodeSchemaError.from_rule(
                view, pos, GrammarRule.Satisfy, "unexpected byte"
            )
        return view[pos], pos + 1

    return parse


def take_exact(view: memoryview, pos: int, count: int) -> tuple[memoryview, int]:
    """Take exactly *count* bytes at *pos*; a short buffer fails, never truncates."""
    end = pos + count
    if end > len(view):
        raise BencodeSchemaError.from_rule(
            view, pos, GrammarRule.Eof,
            f"needed {count} bytes, {len(view) - pos} left",
        )
    return view[pos:end], end


def take(count: int) -> Parser:
    def parse(view: memoryview, pos: int) -> tuple[memoryview, int]:
        return take_exact(view, pos, count)

    return parse


def take_while(predicate: Callable[[int], bool]) -> Parser:
    def parse(view: memoryview, pos: int) -> tuple[memoryview, int]:
        end = pos
        size = len(view)
        while end < size and predicate(view[end]):
            end += 1
        return view[pos:end], end

    return parse


def take_while1(predicate: Callable[[int], bool], rule: GrammarRule = GrammarRule.TakeWhile1) -> Parser:
    inner = take_while(predicate)

    def parse(view: memoryview, pos: int) -> tuple[memoryview, int]:
        span, end = inner(view, pos)
        if end == pos:
            raise BencodeSchemaError.from_rule(view, pos, rule, "expected at least one byte")
        return span, end

    return parse


digit0 = take_while(is_digit)
digit1 = take_while1(is_digit, GrammarRule.Digit)


def unsigned(view: memoryview, pos: int) -> tuple[int, int]:
    """Decimal length prefix."""
    span, end = digit1(view, pos)
    if len(span) > MAX_LENGTH_DIGITS:
        raise BencodeSchemaError.from_rule(
            view, pos, GrammarRule.Length, "length prefix too long"
        )
    return int(bytes(span)), end


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------

def recognize(parser: Parser) -> Parser:
    """Run *parser* and return the span it consumed instead of its output."""

    def parse(view: memoryview, pos: int) -> tuple[memoryview, int]:
        _, end = parser(view, pos)
        return view[pos:end], end

    return parse


def pair(first: Parser, second: Parser) -> Parser:
    def parse(view: memoryview, pos: int) -> tuple[tuple[Any, Any], int]:
        a, pos = first(view, pos)
        b, pos = second(view, pos)
        return (a, b), pos

    return parse


def delimited(opening: Parser, inner: Parser, closing: Parser) -> Parser:
    def parse(view: memoryview, pos: int) -> tuple[Any, int]:
        _, pos = opening(view, pos)
        out, pos = inner(view, pos)
        _, pos = closing(view, pos)
        return out, pos

    return parse


def mapped(parser: Parser, fn: Callable[[Any], T]) -> Parser:
    def parse(view: memoryview, pos: int) -> tuple[T, int]:
        out, end = parser(view, pos)
        return fn(out), end

    return parse


def alt(*parsers: Parser) -> Parser:
    """First success wins.

    When every alternative fails, the failure that got furthest into the
    input is re-raised (the later one on a tie).  Fatal failures propagate
    immediately.
    """
    if not parsers:
        raise ValueError("alt() needs at least one parser")

    def parse(view: memoryview, pos: int) -> tuple[Any, int]:
        best: BencodeSchemaError | None = None
        for parser in parsers:
            try:
                return parser(view, pos)
            except BencodeSchemaError as exc:
                if exc.fatal:
                    raise
                if best is None or exc.offset >= best.offset:
                    best = exc
        raise best.append(view, pos, GrammarRule.Alt)

    return parse


def many(parser: Parser, minimum: int = 0) -> Parser:
    """Repeat *parser* until it fails; at least *minimum* successes."""

    def parse(view: memoryview, pos: int) -> tuple[list[Any], int]:
        out: list[Any] = []
        while True:
            try:
                item, end = parser(view, pos)
            except BencodeSchemaError as exc:
                if exc.fatal:
                    raise
                if len(out) < minimum:
                    raise exc.append(view, pos, GrammarRule.Many)
                return out, pos
            if end == pos:
                raise BencodeSchemaError.from_rule(
                    view, pos, GrammarRule.Many, "parser consumed no input"
                )
            out.append(item)
            pos = end

    return parse
