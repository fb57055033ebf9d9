"""Tests for format_inline / format_inspect."""

from bencode_view import decode
from bencode_view.display import format_inline, format_inspect
from bencode_view.model import BByteString, BDict, BInteger, BList, Empty


def test_inline_integer():
    assert format_inline(BInteger(-3)) == "-3"

def test_inline_text():
    assert format_inline(BByteString(b"spam")) == '"spam"'

def test_inline_binary_as_hex():
    assert format_inline(BByteString(b"\xff\x00")) == "0xff00"

def test_inline_list_and_dict():
    value = decode(b"d3:bar4:spam3:fooli1ei2eee")
    assert format_inline(value) == '{"bar": "spam", "foo": [1, 2]}'

def test_inline_empty():
    assert format_inline(Empty) == "Empty"


def test_inspect_nested():
    value = decode(b"d3:bar4:spam3:fooli1ei2eee")
    assert format_inspect(value) == "\n".join([
        "BDict {",
        '  "bar": "spam"',
        "  \"foo\": BList [",
        "    0: 1",
        "    1: 2",
        "  ]",
        "}",
    ])

def test_inspect_empty_containers():
    assert format_inspect(BList([])) == "BList []"
    assert format_inspect(BDict({})) == "BDict {}"

def test_inspect_long_string_is_summarized():
    assert format_inspect(BByteString(b"x" * 100)) == "<100 bytes>"

def test_inspect_scalar():
    assert format_inspect(BInteger(5)) == "5"
