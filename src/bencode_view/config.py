"""Reader configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ReaderConfig:
    """Policies applied by :class:`~bencode_view.reader.Reader`.

    - ``allow_empty_containers``: accept ``le`` and ``de``.  When False,
      lists and dictionaries need at least one element.
    - ``enforce_key_order``: reject dictionaries whose keys are not
      strictly ascending in the input.
    - ``integer_bits``: signed width integers must fit in; ``None`` means
      unbounded (still capped by ``max_integer_digits``).
    - ``max_depth``: deepest list/dictionary nesting accepted.
    """

    allow_empty_containers: bool = True
    enforce_key_order: bool = False
    integer_bits: int | None = 64
    max_integer_digits: int = 4300
    max_depth: int = 64

    def __post_init__(self) -> None:
        if self.integer_bits is not None and self.integer_bits < 2:
            raise ValueError(f"integer_bits must be >= 2, got {self.integer_bits}")
        if self.max_integer_digits < 1:
            raise ValueError("max_integer_digits must be positive")
        if self.max_depth < 1:
            raise ValueError("max_depth must be positive")

    @property
    def integer_range(self) -> tuple[int, int] | None:
        """Inclusive (min, max) for integers, or None when unbounded."""
        if self.integer_bits is None:
            return None
        bound = 1 << (self.integer_bits - 1)
        return -bound, bound - 1


DEFAULT_CONFIG = ReaderConfig()
