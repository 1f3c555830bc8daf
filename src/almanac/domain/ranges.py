"""Ranges and relocation rules — the leaves of the remapping pipeline.

A :class:`Range` is a half-open interval ``[start, end)`` of unsigned 64-bit
integers. A :class:`Rule` relocates everything inside its source window by a
constant offset. :meth:`Range.split_against` is the five-way case split that
every stage is built on.

INVARIANT: Ranges and rules are immutable. Splitting and shifting always
build new ranges; the pieces of a split never overlap and always
reconstruct the original range exactly.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import NamedTuple

from almanac.domain.errors import StructuralError

U64_MAX = 2**64 - 1

# Exclusive upper bound: a range may end one past the largest u64 value.
RANGE_LIMIT = U64_MAX + 1


@dataclass(frozen=True, order=True)
class Range:
    """Half-open interval ``[start, end)``; ``start == end`` is empty."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if not 0 <= self.start <= self.end <= RANGE_LIMIT:
            raise StructuralError(
                f"Invalid range [{self.start}, {self.end})",
                start=self.start,
                end=self.end,
            )

    @classmethod
    def point(cls, value: int) -> Range:
        """The singleton range ``[value, value + 1)``."""
        return cls(value, value + 1)

    @classmethod
    def from_length(cls, start: int, length: int) -> Range:
        """The range ``[start, start + length)``."""
        return cls(start, start + length)

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def contains(self, value: int) -> bool:
        return self.start <= value < self.end

    def shift(self, offset: int) -> Range:
        """Translate both endpoints by *offset* (which may be negative)."""
        return Range(self.start + offset, self.end + offset)

    def split_against(self, rule: Rule) -> Split:
        """Split this range by *rule*'s source window.

        Returns the relocated overlap (or None) and the zero, one, or two
        pieces left outside the window, in ascending order.
        """
        if self.is_empty:
            return Split(None, ())

        window_start = rule.source_start
        window_end = rule.source_end
        if self.end <= window_start or self.start >= window_end:
            return Split(None, (self,))

        offset = rule.offset
        left_overhang = self.start < window_start
        right_overhang = self.end > window_end

        if not left_overhang and not right_overhang:
            return Split(self.shift(offset), ())
        if left_overhang and not right_overhang:
            return Split(
                Range(window_start, self.end).shift(offset),
                (Range(self.start, window_start),),
            )
        if right_overhang and not left_overhang:
            return Split(
                Range(self.start, window_end).shift(offset),
                (Range(window_end, self.end),),
            )
        return Split(
            Range(window_start, window_end).shift(offset),
            (Range(self.start, window_start), Range(window_end, self.end)),
        )

    def __str__(self) -> str:
        return f"[{self.start}, {self.end})"


class Split(NamedTuple):
    """Result of splitting one range against one rule."""

    mapped: Range | None
    remainder: tuple[Range, ...]


@dataclass(frozen=True)
class Rule:
    """One affine relocation window inside a stage.

    Values in ``[source_start, source_start + length)`` move by
    ``destination_start - source_start``.
    """

    destination_start: int
    source_start: int
    length: int

    def __post_init__(self) -> None:
        if self.length <= 0:
            raise StructuralError(f"Rule length must be positive, got {self.length}")
        if self.source_start < 0 or self.destination_start < 0:
            raise StructuralError("Rule bounds must be non-negative")
        if self.source_end > RANGE_LIMIT or self.destination_start + self.length > RANGE_LIMIT:
            raise StructuralError(
                "Rule window exceeds the unsigned 64-bit range",
                source_start=self.source_start,
                destination_start=self.destination_start,
                length=self.length,
            )

    @property
    def source_end(self) -> int:
        return self.source_start + self.length

    @property
    def offset(self) -> int:
        return self.destination_start - self.source_start

    @property
    def window(self) -> Range:
        """The source window as a :class:`Range`."""
        return Range(self.source_start, self.source_end)

    def contains(self, value: int) -> bool:
        return self.source_start <= value < self.source_end

    def overlaps(self, other: Rule) -> bool:
        """True if the two source windows intersect."""
        return self.source_start < other.source_end and other.source_start < self.source_end


def total_length(ranges: Iterable[Range]) -> int:
    """Summed length of *ranges*, counting overlaps and duplicates each time."""
    return sum(r.length for r in ranges)
