"""Almanac text parsing and seed extraction.

Input shape::

    seeds: 79 14 55 13

    seed-to-soil map:
    50 98 2
    52 50 48

The first block is the seed line; every following block is a stage: a
header line ending in ``:`` and one or more rule lines of exactly three
integers ``destination source length``.

Pure functions, no I/O. Any malformed line aborts the whole parse.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from almanac.domain.errors import ParseError, StructuralError
from almanac.domain.pipeline import Pipeline
from almanac.domain.ranges import U64_MAX, Range, Rule
from almanac.domain.stages import Stage

SEED_HEADER = "seeds:"

_DIGITS = re.compile(r"[0-9]+")
_BLOCK_SEPARATOR = re.compile(r"\n[ \t]*\n")
# "seed-to-soil map:" -> "seed-to-soil"
_STAGE_HEADER = re.compile(r"^(?P<name>.*?)(?:\s+map)?:$")


class SeedMode(StrEnum):
    """How the seed line is turned into the initial range set."""

    POINTS = "points"
    RANGES = "ranges"


@dataclass(frozen=True)
class Almanac:
    """A parsed input: raw seed integers plus the stage pipeline."""

    seeds: tuple[int, ...]
    pipeline: Pipeline

    def seed_ranges(self, mode: SeedMode) -> list[Range]:
        return extract_seeds(self.seeds, mode)


def parse_u64(token: str) -> int:
    """Convert one decimal token to an unsigned 64-bit integer."""
    if not _DIGITS.fullmatch(token):
        raise ParseError(f"Invalid integer: {token!r}", token=token)
    value = int(token)
    if value > U64_MAX:
        raise ParseError(f"Integer out of 64-bit range: {token}", token=token)
    return value


def parse_rule(line: str) -> Rule:
    """Parse ``destination source length`` into a :class:`Rule`."""
    tokens = line.split()
    if len(tokens) != 3:
        raise StructuralError(
            f"Rule line must have exactly 3 integers, got {len(tokens)}: {line!r}",
            line=line,
        )
    destination, source, length = (parse_u64(t) for t in tokens)
    return Rule(destination_start=destination, source_start=source, length=length)


def parse_stage(block: str) -> Stage:
    """Parse a header line followed by rule lines."""
    lines = [line.strip() for line in block.strip().splitlines()]
    header = _STAGE_HEADER.match(lines[0]) if lines else None
    if header is None:
        raise StructuralError(f"Stage block is missing its header line: {block.strip()!r}")
    name = header.group("name").strip()
    rule_lines = lines[1:]
    if not rule_lines:
        raise StructuralError(f"Stage '{name}' has no rules", stage=name)
    return Stage(name=name, rules=tuple(parse_rule(line) for line in rule_lines))


def parse_seed_line(line: str) -> tuple[int, ...]:
    """Parse ``seeds: 1 2 3`` into its integers."""
    line = line.strip()
    if not line.startswith(SEED_HEADER):
        raise StructuralError(f"Missing seed header, expected line starting with {SEED_HEADER!r}")
    values = tuple(parse_u64(t) for t in line[len(SEED_HEADER) :].split())
    if not values:
        raise StructuralError("Seed line lists no seeds")
    return values


def extract_seeds(values: tuple[int, ...] | list[int], mode: SeedMode) -> list[Range]:
    """Build the initial range set from seed integers.

    Point mode makes a singleton range per value. Range mode reads
    consecutive ``(start, length)`` pairs; zero-length pairs are dropped.
    """
    if mode == SeedMode.POINTS:
        return [Range.point(v) for v in values]

    if len(values) % 2:
        raise StructuralError(
            f"Range mode needs (start, length) pairs, got {len(values)} integers",
            count=len(values),
        )
    ranges = [Range.from_length(values[i], values[i + 1]) for i in range(0, len(values), 2)]
    return [r for r in ranges if not r.is_empty]


def parse_almanac(text: str) -> Almanac:
    """Parse a full almanac: seed block then one or more stage blocks."""
    text = text.replace("\r\n", "\n").strip()
    blocks = [b for b in _BLOCK_SEPARATOR.split(text) if b.strip()]
    if not blocks:
        raise StructuralError("Input is empty")

    seed_lines = blocks[0].strip().splitlines()
    if len(seed_lines) != 1:
        raise StructuralError("Seed block must be a single line followed by a blank line")
    seeds = parse_seed_line(seed_lines[0])

    stage_blocks = blocks[1:]
    if not stage_blocks:
        raise StructuralError("Input has no stage blocks")
    stages = tuple(parse_stage(block) for block in stage_blocks)
    return Almanac(seeds=seeds, pipeline=Pipeline(stages=stages))
