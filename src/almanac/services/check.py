"""CheckService — input integrity checks and structure summaries.

``check`` reports problems that parse cleanly but would make a strict run
fail or a lenient run surprising: overlapping source windows (rejected in
strict mode, first listed rule wins otherwise) and seed lines that cannot
be read as pairs.
``inspect`` summarizes the stages without running anything.
"""

from __future__ import annotations

from typing import Any

from almanac.domain.errors import AlmanacError
from almanac.domain.parsing import Almanac
from almanac.services.base import BaseService
from almanac.services.result import ServiceResult
from almanac.services.telemetry import traced

SEVERITY_ORDER = {"warning": 0, "error": 1}


def _issue(category: str, severity: str, message: str, stage: str | None = None) -> dict[str, Any]:
    return {"category": category, "severity": severity, "stage": stage, "message": message}


class CheckService(BaseService):
    """Validates almanac inputs."""

    @traced
    def check(self, text: str, *, min_severity: str = "warning") -> ServiceResult:
        """Report integrity issues, hiding those below *min_severity*."""
        op = "check"
        try:
            almanac = self._parse(text)
        except AlmanacError as exc:
            return self._domain_failure(op, exc)

        issues = self._seed_issues(almanac) + self._overlap_issues(
            almanac, strict=self._settings.pipeline.strict
        )
        threshold = SEVERITY_ORDER[min_severity]
        issues = [i for i in issues if SEVERITY_ORDER[i["severity"]] >= threshold]

        error_count = sum(1 for i in issues if i["severity"] == "error")
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "count": len(issues),
                "error_count": error_count,
                "warning_count": len(issues) - error_count,
                "healthy": error_count == 0,
                "issues": issues,
            },
        )

    @staticmethod
    def _seed_issues(almanac: Almanac) -> list[dict[str, Any]]:
        seeds = almanac.seeds
        if len(seeds) % 2:
            return [
                _issue(
                    "seeds",
                    "warning",
                    f"{len(seeds)} seed values cannot be read as (start, length) pairs; "
                    "range mode will fail",
                )
            ]
        issues: list[dict[str, Any]] = []
        for index in range(0, len(seeds), 2):
            if seeds[index + 1] == 0:
                issues.append(
                    _issue(
                        "seeds",
                        "warning",
                        f"Seed pair {index // 2} starting at {seeds[index]} has zero length",
                    )
                )
        return issues

    @staticmethod
    def _overlap_issues(almanac: Almanac, *, strict: bool) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        for stage in almanac.pipeline.stages:
            for first, second in stage.overlaps():
                a = stage.rules[first].window
                b = stage.rules[second].window
                outcome = "strict runs reject this stage" if strict else f"rule {first} wins"
                issues.append(
                    _issue(
                        "overlap",
                        "error",
                        f"Rules {first} {a} and {second} {b} overlap; {outcome}",
                        stage=stage.name,
                    )
                )
        return issues

    @traced
    def inspect(self, text: str) -> ServiceResult:
        """Summarize seeds and stages without running the pipeline."""
        op = "inspect"
        try:
            almanac = self._parse(text)
        except AlmanacError as exc:
            return self._domain_failure(op, exc)

        stages: list[dict[str, Any]] = []
        for stage in almanac.pipeline.stages:
            stages.append(
                {
                    "name": stage.name,
                    "rule_count": len(stage.rules),
                    "windows": [
                        {
                            "source": [rule.source_start, rule.source_end],
                            "destination": [
                                rule.destination_start,
                                rule.destination_start + rule.length,
                            ],
                            "offset": rule.offset,
                        }
                        for rule in stage.rules
                    ],
                }
            )

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "seed_count": len(almanac.seeds),
                "stage_count": len(stages),
                "stages": stages,
            },
        )
