"""Reader layer: bencode grammar rules and the recursive value dispatcher."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from .config import DEFAULT_CONFIG, ReaderConfig
from .errors import BencodeSchemaError, ErrorKind, GrammarRule
from .grammar import (
    Parser,
    alt,
    as_view,
    delimited,
    digit0,
    is_nonzero_digit,
    many,
    mapped,
    pair,
    recognize,
    satisfy,
    tag,
    take_exact,
    unsigned,
)
from .model import BByteString, BDict, BInteger, BList, Value

logger = logging.getLogger(__name__)

_MINUS = 0x2D


def _key_bytes(item: tuple[BByteString, Value]) -> bytes:
    return bytes(item[0])


# ---------------------------------------------------------------------------
# Reader
# ---------------------------------------------------------------------------

class Reader:
    """Recursive-descent bencode reader bound to one :class:`ReaderConfig`.

    Every ``parse_*`` method takes ``(view, pos)`` and returns
    ``(output, new_pos)``.  ``parse_value`` is the only recursive entry;
    lists and dictionaries call back into it for each element.

    A Reader tracks nesting depth while a parse runs, so one instance must
    not be shared between threads.  The module-level functions build a
    fresh Reader per call.
    """

    def __init__(self, config: ReaderConfig | None = None) -> None:
        self.config = config if config is not None else DEFAULT_CONFIG
        self._depth = 0
        minimum = 0 if self.config.allow_empty_containers else 1

        # i<digits>e: positive without leading zero, negative of that, or 0
        positive = recognize(pair(satisfy(is_nonzero_digit), digit0))
        negative = recognize(pair(tag(b"-"), positive))
        zero = tag(b"0")
        self._colon = tag(b":")
        self._num: Parser = delimited(tag(b"i"), alt(positive, negative, zero), tag(b"e"))

        self._list: Parser = delimited(
            tag(b"l"), many(self.parse_value, minimum), tag(b"e")
        )
        self._pairs: Parser = delimited(
            tag(b"d"), many(pair(self.parse_string, self.parse_value), minimum), tag(b"e")
        )
        self._value: Parser = alt(
            self._parse_integer,
            mapped(self.parse_string, BByteString),
            mapped(self.parse_list, BList),
            mapped(self.parse_dict, BDict),
        )

    # -- Grammar rules ----------------------------------------------------

    def parse_num(self, view: memoryview, pos: int) -> tuple[memoryview, int]:
        """Digit span of an ``i…e`` integer, not yet converted."""
        return self._num(view, pos)

    def parse_string(self, view: memoryview, pos: int) -> tuple[memoryview, int]:
        """``<length>:<bytes>``; the bytes come back as a view, not a copy."""
        length, pos = unsigned(view, pos)
        _, pos = self._colon(view, pos)
        return take_exact(view, pos, length)

    def parse_list(self, view: memoryview, pos: int) -> tuple[list[Value], int]:
        with self._nested(view, pos, b"l"):
            return self._list(view, pos)

    def parse_dict(self, view: memoryview, pos: int) -> tuple[dict[BByteString, Value], int]:
        """Key/value pairs folded into a mapping ordered by key bytes.

        Later duplicates overwrite earlier ones.  Input order is only
        checked when ``enforce_key_order`` is set.
        """
        with self._nested(view, pos, b"d"):
            pairs, end = self._pairs(view, pos)

        if self.config.enforce_key_order:
            _check_key_order(pairs, view, pos)

        # keyed by content: views over a bytearray or mmap are unhashable
        folded: dict[BByteString, Value] = {}
        for key, value in pairs:
            folded[BByteString(key)] = value
        return dict(sorted(folded.items(), key=_key_bytes)), end

    def parse_value(self, view: memoryview, pos: int) -> tuple[Value, int]:
        """Try integer, byte string, list, dictionary in that order."""
        return self._value(view, pos)

    # -- Helpers ----------------------------------------------------------

    def _parse_integer(self, view: memoryview, pos: int) -> tuple[BInteger, int]:
        span, end = self.parse_num(view, pos)
        digits = len(span) - (1 if span[0] == _MINUS else 0)
        if digits > self.config.max_integer_digits:
            raise BencodeSchemaError.from_rule(
                view, pos + 1, GrammarRule.Digit,
                f"integer has {digits} digits", kind=ErrorKind.IntegerOverflow,
            )
        number = int(bytes(span))
        bounds = self.config.integer_range
        if bounds is not None and not bounds[0] <= number <= bounds[1]:
            raise BencodeSchemaError.from_rule(
                view, pos + 1, GrammarRule.Digit,
                f"integer does not fit in {self.config.integer_bits} bits",
                kind=ErrorKind.IntegerOverflow,
            )
        return BInteger(number), end

    @contextmanager
    def _nested(self, view: memoryview, pos: int, marker: bytes) -> Iterator[None]:
        if self._depth >= self.config.max_depth and view[pos:pos + 1] == marker:
            raise BencodeSchemaError.from_rule(
                view, pos, GrammarRule.Tag,
                f"nesting deeper than {self.config.max_depth}",
                kind=ErrorKind.NestingTooDeep,
            )
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    def run(self, parser: Parser, data, pos: int = 0) -> tuple[Any, memoryview]:
        """Apply *parser* at *pos* in *data*; return output and remainder."""
        view = as_view(data)
        try:
            out, end = parser(view, pos)
        except RecursionError:
            raise BencodeSchemaError(
                "nesting exceeds the interpreter recursion limit",
                kind=ErrorKind.NestingTooDeep,
            ) from None
        except BencodeSchemaError as exc:
            logger.debug("bencode parse failed:\n%s", exc)
            raise
        return out, view[end:]


def _check_key_order(pairs: list[tuple[memoryview, Value]], view: memoryview, pos: int) -> None:
    for (prev, _), (key, _) in zip(pairs, pairs[1:]):
        if bytes(prev) >= bytes(key):
            raise BencodeSchemaError.from_rule(
                view, pos, GrammarRule.Tag,
                f"key {bytes(key)!r} follows {bytes(prev)!r}",
                kind=ErrorKind.DictNotInLexicographicOrder,
            )


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def parse_bencode_num(data, config: ReaderConfig | None = None) -> tuple[memoryview, memoryview]:
    """Parse ``i…e`` and return ``(digit span, remaining)``.

    Leading zeros and negative zero are rejected.  The span is left as raw
    digits so callers can choose their own conversion.
    """
    reader = Reader(config)
    return reader.run(reader.parse_num, data)


def parse_bencode_string(data, config: ReaderConfig | None = None) -> tuple[memoryview, memoryview]:
    reader = Reader(config)
    return reader.run(reader.parse_string, data)


def parse_bencode_list(data, config: ReaderConfig | None = None) -> tuple[list[Value], memoryview]:
    reader = Reader(config)
    return reader.run(reader.parse_list, data)


def parse_bencode_dict(
    data, config: ReaderConfig | None = None
) -> tuple[dict[BByteString, Value], memoryview]:
    reader = Reader(config)
    return reader.run(reader.parse_dict, data)


def bencode_value(data, config: ReaderConfig | None = None) -> tuple[Value, memoryview]:
    """Parse one value from the start of *data*.

    Returns ``(value, remaining)``; whether trailing bytes are an error is
    up to the caller.
    """
    reader = Reader(config)
    return reader.run(reader.parse_value, data)
