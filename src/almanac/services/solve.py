"""SolveService — run seeds through the stage pipeline.

``solve`` folds the seed range set through every stage and reduces the
final set to its minimum, once per requested seed mode. ``trace`` follows
individual values stage by stage with point mapping.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import Executor
from typing import Any

import structlog

from almanac.domain.errors import AlmanacError, ParseError
from almanac.domain.parsing import Almanac, SeedMode
from almanac.domain.pipeline import minimum
from almanac.domain.ranges import U64_MAX
from almanac.services.base import BaseService
from almanac.services.result import ServiceResult
from almanac.services.telemetry import trace_span, traced

log = structlog.get_logger(__name__)


def resolve_modes(mode: str) -> list[SeedMode]:
    """``"both"`` expands to points then ranges; anything else is one mode."""
    if mode == "both":
        return [SeedMode.POINTS, SeedMode.RANGES]
    return [SeedMode(mode)]


class SolveService(BaseService):
    """Computes minimum reachable values for an almanac."""

    @traced
    def solve(
        self,
        text: str,
        *,
        mode: str | None = None,
        workers: int | None = None,
        show_ranges: bool = False,
    ) -> ServiceResult:
        """Fold the seeds through every stage and report the minimum.

        Args:
            text: Full almanac input.
            mode: ``points``, ``ranges`` or ``both``; defaults to ``[solve] mode``.
            workers: Thread count for splitting within a stage; defaults to
                ``[pipeline] workers``.
            show_ranges: Include the final range set in each answer.
        """
        op = "solve"
        modes = resolve_modes(mode or self._settings.solve.mode)

        try:
            almanac = self._parse(text)
            with self._executor(workers) as executor:
                answers = [
                    self._solve_mode(almanac, seed_mode, executor, show_ranges=show_ranges)
                    for seed_mode in modes
                ]
        except AlmanacError as exc:
            return self._domain_failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "stage_count": len(almanac.pipeline.stages),
                "answers": answers,
            },
            warnings=self._overlap_warnings(almanac),
        )

    def _overlap_warnings(self, almanac: Almanac) -> list[str]:
        """Lenient runs only: one warning per stage that resolves overlaps by order."""
        if self._settings.pipeline.strict:
            return []
        return [
            f"Stage '{stage.name}' has overlapping rules; first listed rule wins"
            for stage in almanac.pipeline.stages
            if stage.overlaps()
        ]

    def _solve_mode(
        self,
        almanac: Almanac,
        mode: SeedMode,
        executor: Executor | None,
        *,
        show_ranges: bool,
    ) -> dict[str, Any]:
        config = self._settings.pipeline
        with trace_span(f"run.{mode}") as span:
            seeds = almanac.seed_ranges(mode)
            working = seeds
            for stage, output in almanac.pipeline.steps(
                seeds,
                executor=executor,
                chunk_size=config.chunk_size,
                strict=config.strict,
            ):
                log.debug(
                    "stage.applied",
                    mode=str(mode),
                    stage=stage.name,
                    ranges_in=len(working),
                    ranges_out=len(output),
                )
                working = output
            answer = minimum(working)
            if span is not None:
                span.annotate("seed_ranges", len(seeds))
                span.annotate("result_ranges", len(working))

        entry: dict[str, Any] = {
            "mode": str(mode),
            "minimum": answer,
            "seed_ranges": len(seeds),
            "result_ranges": len(working),
        }
        if show_ranges:
            entry["ranges"] = [[r.start, r.end] for r in sorted(working)]
        return entry

    @traced
    def trace(self, text: str, values: Sequence[int] | None = None) -> ServiceResult:
        """Follow values through every stage; defaults to every seed value."""
        op = "trace"
        try:
            almanac = self._parse(text)
            if self._settings.pipeline.strict:
                almanac.pipeline.validate()
            targets = list(values) if values else list(almanac.seeds)
            for value in targets:
                if not 0 <= value <= U64_MAX:
                    raise ParseError(f"Value out of 64-bit range: {value}", token=str(value))
        except AlmanacError as exc:
            return self._domain_failure(op, exc)

        stage_names = [stage.name for stage in almanac.pipeline.stages]
        items: list[dict[str, Any]] = []
        for value in targets:
            path = almanac.pipeline.trace_point(value)
            items.append(
                {
                    "value": value,
                    "result": path[-1] if path else value,
                    "steps": [
                        {"stage": name, "value": v}
                        for name, v in zip(stage_names, path, strict=True)
                    ],
                }
            )

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "count": len(items),
                "minimum": min(item["result"] for item in items),
                "items": items,
            },
            warnings=self._overlap_warnings(almanac),
        )
