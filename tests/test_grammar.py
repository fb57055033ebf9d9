"""Tests for bencode_view.grammar."""

import pytest

from bencode_view.errors import BencodeSchemaError, ErrorKind, GrammarRule
from bencode_view.grammar import (
    alt,
    as_view,
    delimited,
    digit0,
    digit1,
    is_digit,
    is_nonzero_digit,
    many,
    mapped,
    pair,
    recognize,
    satisfy,
    tag,
    take,
    take_exact,
    unsigned,
)


def run(parser, data):
    return parser(as_view(data), 0)


class TestPredicates:
    def test_nonzero_digits(self):
        assert all(is_nonzero_digit(b) for b in b"123456789")

    def test_zero_is_not_nonzero(self):
        assert not is_nonzero_digit(ord("0"))

    def test_non_digits(self):
        assert not any(is_nonzero_digit(b) for b in b"-:ie/a")
        assert not any(is_digit(b) for b in b"-:ie/a")

    def test_digits(self):
        assert all(is_digit(b) for b in b"0123456789")


class TestAsView:
    def test_bytes(self):
        view = as_view(b"abc")
        assert view.readonly
        assert view == b"abc"

    def test_bytearray_is_not_copied(self):
        buf = bytearray(b"abc")
        view = as_view(buf)
        assert view.readonly
        assert view.obj is buf

    def test_non_byte_format_is_cast(self):
        import array
        arr = array.array("H", [0x4142])
        assert len(as_view(arr)) == 2


class TestPrimitives:
    def test_tag_match(self):
        out, pos = run(tag(b"ab"), b"abc")
        assert out == b"ab"
        assert pos == 2

    def test_tag_mismatch(self):
        with pytest.raises(BencodeSchemaError) as exc_info:
            run(tag(b"ab"), b"ax")
        assert exc_info.value.rule is GrammarRule.Tag

    def test_tag_past_end(self):
        with pytest.raises(BencodeSchemaError):
            run(tag(b"ab"), b"a")

    def test_satisfy_at_end(self):
        with pytest.raises(BencodeSchemaError) as exc_info:
            run(satisfy(is_digit), b"")
        assert exc_info.value.rule is GrammarRule.Satisfy

    def test_take_exact(self):
        out, pos = run(take(3), b"abcd")
        assert out == b"abc"
        assert pos == 3

    def test_take_exact_function(self):
        assert take_exact(as_view(b"abcd"), 1, 2) == (memoryview(b"bc"), 3)
        with pytest.raises(BencodeSchemaError) as exc_info:
            take_exact(as_view(b"abcd"), 3, 2)
        assert exc_info.value.offset == 3

    def test_take_short(self):
        with pytest.raises(BencodeSchemaError) as exc_info:
            run(take(5), b"abcd")
        assert exc_info.value.rule is GrammarRule.Eof

    def test_digit0_accepts_nothing(self):
        out, pos = run(digit0, b"abc")
        assert out == b""
        assert pos == 0

    def test_digit1_requires_one(self):
        with pytest.raises(BencodeSchemaError) as exc_info:
            run(digit1, b"abc")
        assert exc_info.value.rule is GrammarRule.Digit

    def test_unsigned(self):
        assert run(unsigned, b"042:") == (42, 3)


class TestCombinators:
    def test_recognize_returns_consumed_span(self):
        parser = recognize(pair(tag(b"-"), digit1))
        out, pos = run(parser, b"-12x")
        assert out == b"-12"
        assert pos == 3

    def test_delimited(self):
        assert run(delimited(tag(b"("), digit1, tag(b")")), b"(42)") == (memoryview(b"42"), 4)

    def test_mapped(self):
        parser = mapped(digit1, lambda span: int(bytes(span)))
        assert run(parser, b"12") == (12, 2)

    def test_alt_first_success_wins(self):
        parser = alt(mapped(tag(b"a"), lambda _: 1), mapped(tag(b"a"), lambda _: 2))
        assert run(parser, b"a") == (1, 1)

    def test_alt_reports_furthest_failure(self):
        parser = alt(pair(tag(b"a"), tag(b"b")), tag(b"x"))
        with pytest.raises(BencodeSchemaError) as exc_info:
            run(parser, b"ac")
        err = exc_info.value
        assert err.offset == 1
        assert [f.rule for f in err.frames] == [GrammarRule.Tag, GrammarRule.Alt]

    def test_alt_needs_a_parser(self):
        with pytest.raises(ValueError):
            alt()

    def test_alt_does_not_backtrack_fatal(self):
        def fatal(view, pos):
            raise BencodeSchemaError("boom", kind=ErrorKind.IntegerOverflow)

        calls = []

        def spy(view, pos):
            calls.append(pos)
            return None, pos

        with pytest.raises(BencodeSchemaError):
            run(alt(fatal, spy), b"")
        assert calls == []

    def test_many_collects(self):
        out, pos = run(many(tag(b"a")), b"aaab")
        assert len(out) == 3
        assert pos == 3

    def test_many_minimum(self):
        with pytest.raises(BencodeSchemaError) as exc_info:
            run(many(tag(b"a"), 1), b"b")
        assert exc_info.value.frames[-1].rule is GrammarRule.Many

    def test_many_rejects_non_consuming_parser(self):
        with pytest.raises(BencodeSchemaError) as exc_info:
            run(many(digit0), b"abc")
        assert exc_info.value.rule is GrammarRule.Many
