"""Document: every value read from one buffer."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .config import ReaderConfig
from .errors import BencodeSchemaError, ErrorKind, GrammarRule
from .grammar import as_view
from .model import Value
from .reader import Reader

logger = logging.getLogger(__name__)


@dataclass
class Document:
    """Holds the values parsed from a buffer of concatenated bencode."""

    buffer: memoryview
    values: list[Value] = field(default_factory=list)

    @property
    def root(self) -> Value | None:
        """The first value, which is the whole payload for a .torrent file."""
        return self.values[0] if self.values else None

    def __len__(self) -> int:
        return len(self.values)


def decode(data, config: ReaderConfig | None = None) -> Value:
    """Parse exactly one value; leftover bytes are a ``TrailingData`` error."""
    reader = Reader(config)
    view = as_view(data)
    value, remaining = reader.run(reader.parse_value, view)
    if remaining:
        raise BencodeSchemaError.from_rule(
            view, len(view) - len(remaining), GrammarRule.Eof,
            f"{len(remaining)} bytes after the value",
            kind=ErrorKind.TrailingData,
        )
    return value


def read_all(data, config: ReaderConfig | None = None) -> Document:
    """Parse concatenated values until *data* is exhausted."""
    reader = Reader(config)
    view = as_view(data)
    doc = Document(buffer=view)

    remaining = view
    while remaining:
        value, remaining = reader.run(reader.parse_value, view, len(view) - len(remaining))
        doc.values.append(value)

    logger.debug("read %d bencode values from %d bytes", len(doc.values), len(view))
    return doc
