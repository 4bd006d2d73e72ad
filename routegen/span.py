"""
Source spans.

A span is a half-open range [lo, hi) of offsets into the source text that a
route template was taken from. Offsets are indexes into the Python string of
that source (code points, not UTF-8 bytes), so `text[span.lo:span.hi]` is
always the spanned fragment.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Span:
    """Half-open range of source offsets."""
    lo: int
    hi: int

    def __post_init__(self) -> None:
        if self.lo < 0 or self.hi < self.lo:
            raise ValueError(f"invalid span [{self.lo}, {self.hi})")

    @classmethod
    def covering(cls, text: str) -> Span:
        """Span of a whole text that starts at offset 0."""
        return cls(0, len(text))

    @property
    def len(self) -> int:
        return self.hi - self.lo

    def shift(self, delta: int) -> Span:
        """Moves both ends by `delta`."""
        return Span(self.lo + delta, self.hi + delta)

    def with_lo(self, lo: int) -> Span:
        return Span(lo, self.hi)

    def sub(self, start: int, end: int) -> Span:
        """
        Sub-range given relative to `lo`.

        Raises:
            ValueError: if the result would leave this span
        """
        if start < 0 or end < start or self.lo + end > self.hi:
            raise ValueError(
                f"sub-range [{start}, {end}) is outside of span [{self.lo}, {self.hi})"
            )
        return Span(self.lo + start, self.lo + end)

    def slice(self, text: str) -> str:
        """Fragment of `text` covered by this span."""
        return text[self.lo:self.hi]

    def __repr__(self) -> str:
        return f"Span({self.lo}..{self.hi})"


@dataclass(frozen=True)
class Spanned(Generic[T]):
    """A value paired with the source span it was read from."""
    node: T
    span: Span


def spanned(node: T, span: Span) -> Spanned[T]:
    return Spanned(node, span)


__all__ = ["Span", "Spanned", "spanned"]
