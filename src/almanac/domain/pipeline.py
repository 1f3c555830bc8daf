"""Pipeline — the strictly sequential fold of a range set through stages.

Stage *i + 1* never starts before stage *i*'s full output is known. In
strict mode the pipeline refuses stages with overlapping source windows
up front and checks the coverage invariant after every stage, so a broken
input fails loudly instead of producing a wrong minimum.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from concurrent.futures import Executor
from dataclasses import dataclass

from almanac.domain.errors import CoverageError, EmptyResultError, OverlappingRulesError
from almanac.domain.ranges import Range, total_length
from almanac.domain.stages import DEFAULT_CHUNK_SIZE, Stage


@dataclass(frozen=True)
class Pipeline:
    """An ordered chain of stages."""

    stages: tuple[Stage, ...]

    def validate(self) -> None:
        """Raise :class:`OverlappingRulesError` for the first overlapping stage."""
        for stage in self.stages:
            pairs = stage.overlaps()
            if pairs:
                first, second = pairs[0]
                raise OverlappingRulesError(
                    f"Stage '{stage.name}' has overlapping rules {first} and {second}",
                    stage=stage.name,
                    pairs=pairs,
                )

    def steps(
        self,
        seeds: Iterable[Range],
        *,
        executor: Executor | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        strict: bool = True,
    ) -> Iterator[tuple[Stage, list[Range]]]:
        """Yield ``(stage, output)`` after each stage is applied."""
        if strict:
            self.validate()

        working = [r for r in seeds if not r.is_empty]
        for stage in self.stages:
            output = stage.apply(working, executor=executor, chunk_size=chunk_size)
            if strict:
                before = total_length(working)
                after = total_length(output)
                if before != after:
                    raise CoverageError(
                        f"Stage '{stage.name}' changed total coverage from {before} to {after}",
                        stage=stage.name,
                        before=before,
                        after=after,
                    )
            yield stage, output
            working = output

    def run(
        self,
        seeds: Iterable[Range],
        *,
        executor: Executor | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        strict: bool = True,
    ) -> list[Range]:
        """Fold *seeds* through every stage and return the final range set."""
        working = [r for r in seeds if not r.is_empty]
        for _stage, output in self.steps(
            working, executor=executor, chunk_size=chunk_size, strict=strict
        ):
            working = output
        return working

    def trace_point(self, value: int) -> list[int]:
        """The value after each stage, using point mapping."""
        values: list[int] = []
        for stage in self.stages:
            value = stage.apply_point(value)
            values.append(value)
        return values


def minimum(ranges: Iterable[Range]) -> int:
    """Smallest start among *ranges*; a range's start is its smallest value."""
    starts = [r.start for r in ranges if not r.is_empty]
    if not starts:
        raise EmptyResultError("No ranges left to take a minimum from")
    return min(starts)
