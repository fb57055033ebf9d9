"""Human-readable rendering of parsed values for diagnostics."""

from __future__ import annotations

from .model import BByteString, BDict, BInteger, BList, Value, _EmptyType

_INDENT = "  "


def _fmt_bytes(data: bytes) -> str:
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return "0x" + data.hex()
    return f'"{text}"'


def format_inline(value: Value | _EmptyType) -> str:
    """Format a single value for compact one-line display."""
    if isinstance(value, BInteger):
        return str(value.value)
    if isinstance(value, BByteString):
        return _fmt_bytes(value.tobytes())
    if isinstance(value, BList):
        return "[" + ", ".join(format_inline(v) for v in value.items) + "]"
    if isinstance(value, BDict):
        body = ", ".join(
            f"{_fmt_bytes(bytes(k))}: {format_inline(v)}" for k, v in value.entries.items()
        )
        return "{" + body + "}"
    return repr(value)


def format_inspect(value: Value | _EmptyType, depth: int = 0) -> str:
    """Pretty-print a value as an indented tree."""
    pad = _INDENT * depth
    inner = _INDENT * (depth + 1)

    if isinstance(value, BList):
        if not value.items:
            return "BList []"
        lines = ["BList ["]
        for i, v in enumerate(value.items):
            lines.append(f"{inner}{i}: {format_inspect(v, depth + 1)}")
        lines.append(f"{pad}]")
        return "\n".join(lines)

    if isinstance(value, BDict):
        if not value.entries:
            return "BDict {}"
        lines = ["BDict {"]
        for k, v in value.entries.items():
            lines.append(f"{inner}{_fmt_bytes(bytes(k))}: {format_inspect(v, depth + 1)}")
        lines.append(f"{pad}}}")
        return "\n".join(lines)

    if isinstance(value, BByteString) and len(value) > 64:
        return f"<{len(value)} bytes>"

    return format_inline(value)
