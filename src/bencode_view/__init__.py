"""bencode_view: zero-copy recursive-descent bencode reader."""

import logging

from .config import ReaderConfig
from .display import format_inline, format_inspect
from .document import Document, decode, read_all
from .errors import BencodeError, BencodeSchemaError, ErrorKind, Frame, GrammarRule
from .getter import apply_getter, get_path
from .model import (
    BByteString,
    BDict,
    BInteger,
    BList,
    Empty,
    Value,
)
from .reader import (
    Reader,
    bencode_value,
    parse_bencode_dict,
    parse_bencode_list,
    parse_bencode_num,
    parse_bencode_string,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "bencode_value",
    "parse_bencode_num",
    "parse_bencode_string",
    "parse_bencode_list",
    "parse_bencode_dict",
    "decode",
    "read_all",
    "Document",
    "Reader",
    "ReaderConfig",
    "BInteger",
    "BByteString",
    "BList",
    "BDict",
    "Empty",
    "Value",
    "BencodeError",
    "BencodeSchemaError",
    "ErrorKind",
    "GrammarRule",
    "Frame",
    "apply_getter",
    "get_path",
    "format_inline",
    "format_inspect",
]
