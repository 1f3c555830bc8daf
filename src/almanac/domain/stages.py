"""Stages — one full remapping layer of ordered relocation rules.

Rules are applied strictly in listed order. Whatever a rule relocates is
final for the stage; only the unmapped remainder is offered to the next
rule, and anything still unmapped after the last rule passes through
unchanged. With overlapping source windows this makes the first listed
rule win for every value.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from concurrent.futures import Executor
from dataclasses import dataclass

from almanac.domain.ranges import Range, Rule

# Ranges handed to one worker task when a stage runs on an executor.
DEFAULT_CHUNK_SIZE = 256


def _split_chunk(rule: Rule, chunk: Sequence[Range]) -> tuple[list[Range], list[Range]]:
    """Split every range in *chunk* against *rule* into local buffers."""
    mapped: list[Range] = []
    unmapped: list[Range] = []
    for working_range in chunk:
        split = working_range.split_against(rule)
        if split.mapped is not None:
            mapped.append(split.mapped)
        unmapped.extend(split.remainder)
    return mapped, unmapped


@dataclass(frozen=True)
class Stage:
    """An ordered collection of rules, named after its header line."""

    name: str
    rules: tuple[Rule, ...]

    def apply(
        self,
        working: Iterable[Range],
        *,
        executor: Executor | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> list[Range]:
        """Remap a range set through this stage.

        When *executor* is given, the ranges split against each rule are
        fanned out in chunks of *chunk_size*. Every task returns its own
        buffers and they are merged in submission order before the next
        rule starts.
        """
        unmapped = [r for r in working if not r.is_empty]
        mapped: list[Range] = []

        for rule in self.rules:
            if not unmapped:
                break
            if executor is None or len(unmapped) <= chunk_size:
                rule_mapped, unmapped = _split_chunk(rule, unmapped)
                mapped.extend(rule_mapped)
                continue

            futures = [
                executor.submit(_split_chunk, rule, unmapped[i : i + chunk_size])
                for i in range(0, len(unmapped), chunk_size)
            ]
            unmapped = []
            for future in futures:
                rule_mapped, rule_unmapped = future.result()
                mapped.extend(rule_mapped)
                unmapped.extend(rule_unmapped)

        mapped.extend(unmapped)
        return mapped

    def apply_point(self, value: int) -> int:
        """Map a single value: first matching rule wins, otherwise identity."""
        for rule in self.rules:
            if rule.contains(value):
                return value + rule.offset
        return value

    def overlaps(self) -> list[tuple[int, int]]:
        """Index pairs of rules whose source windows intersect."""
        pairs: list[tuple[int, int]] = []
        for i, rule in enumerate(self.rules):
            for j in range(i + 1, len(self.rules)):
                if rule.overlaps(self.rules[j]):
                    pairs.append((i, j))
        return pairs
