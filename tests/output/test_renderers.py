"""Tests for operation-specific Rich renderers."""

from almanac.output.renderers import render_quiet, render_result
from almanac.services.result import ServiceError, ServiceResult

# ── Helpers ───────────────────────────────────────────────────────────


def _ok(op: str, **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str, code: str, message: str, **detail: object) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=dict(detail)),
    )


def _trace_items() -> list[dict[str, object]]:
    return [
        {
            "value": 79,
            "result": 82,
            "steps": [{"stage": "seed-to-soil", "value": 81}, {"stage": "soil-to-x", "value": 82}],
        },
        {
            "value": 13,
            "result": 35,
            "steps": [{"stage": "seed-to-soil", "value": 13}, {"stage": "soil-to-x", "value": 35}],
        },
    ]


# ── Error rendering ──────────────────────────────────────────────────


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        output = render_result(_err("solve", "PARSE_ERROR", "Invalid integer: 'x'"))
        assert "ERROR" in output
        assert "solve" in output
        assert "Invalid integer: 'x'" in output
        assert "PARSE_ERROR" not in output

    def test_verbose_shows_code_and_detail(self) -> None:
        output = render_result(_err("solve", "PARSE_ERROR", "Bad", token="[x]"), verbose=True)
        assert "code: PARSE_ERROR" in output
        assert "token: [x]" in output

    def test_no_error_object(self) -> None:
        output = render_result(ServiceResult(ok=False, op="solve"))
        assert "Unknown error" in output


# ── Operation renderers ──────────────────────────────────────────────


class TestSolveRenderer:
    def test_table(self) -> None:
        result = _ok(
            "solve",
            stage_count=7,
            answers=[{"mode": "ranges", "minimum": 46, "seed_ranges": 2, "result_ranges": 9}],
        )
        output = render_result(result)
        assert output.startswith("OK")
        assert "solve" in output
        assert "stages:" in output
        assert "7" in output
        assert "ranges" in output
        assert "46" in output

    def test_ranges_listed(self) -> None:
        result = _ok(
            "solve",
            stage_count=1,
            answers=[
                {
                    "mode": "ranges",
                    "minimum": 46,
                    "seed_ranges": 2,
                    "result_ranges": 1,
                    "ranges": [[46, 57]],
                }
            ],
        )
        assert "[46, 57)" in render_result(result)

    def test_verbose_renders_telemetry(self) -> None:
        result = ServiceResult(
            ok=True,
            op="solve",
            data={"stage_count": 0, "answers": []},
            meta={
                "telemetry": {
                    "name": "SolveService.solve",
                    "duration_ms": 1.5,
                    "children": [
                        {"name": "parse", "duration_ms": 0.2, "annotations": {"stages": 7}}
                    ],
                }
            },
        )
        output = render_result(result, verbose=True)
        assert "SolveService.solve" in output
        assert "parse" in output
        assert "stages=7" in output


class TestTraceRenderer:
    def test_columns_per_stage(self) -> None:
        output = render_result(_ok("trace", count=2, minimum=35, items=_trace_items()))
        assert "seed-to-soil" in output
        assert "soil-to-x" in output
        assert "81" in output
        assert "minimum: 35" in output


class TestCheckRenderer:
    def test_no_issues(self) -> None:
        output = render_result(_ok("check", count=0, issues=[]))
        assert "No issues found" in output

    def test_grouped_issues(self) -> None:
        issues = [
            {
                "category": "overlap",
                "severity": "error",
                "stage": "a-to-b",
                "message": "Rules 0 [10, 30) and 1 [20, 40) overlap; rule 0 wins",
            },
            {"category": "seeds", "severity": "warning", "stage": None, "message": "odd"},
        ]
        output = render_result(
            _ok("check", count=2, error_count=1, warning_count=1, issues=issues)
        )
        assert "overlap" in output
        assert "[a-to-b]" in output
        assert "[10, 30)" in output
        assert "1 errors, 1 warnings" in output


class TestInspectRenderer:
    def _result(self) -> ServiceResult:
        return _ok(
            "inspect",
            seed_count=4,
            stage_count=1,
            stages=[
                {
                    "name": "seed-to-soil",
                    "rule_count": 2,
                    "windows": [
                        {"source": [98, 100], "destination": [50, 52], "offset": -48},
                        {"source": [50, 98], "destination": [52, 100], "offset": 2},
                    ],
                }
            ],
        )

    def test_summary(self) -> None:
        output = render_result(self._result())
        assert "seeds:" in output
        assert "seed-to-soil" in output
        assert "(2 rules)" in output
        assert "[98, 100)" not in output

    def test_verbose_windows(self) -> None:
        output = render_result(self._result(), verbose=True)
        assert "[98, 100)" in output
        assert "-48" in output
        assert "+2" in output


class TestGenericRenderer:
    def test_unknown_op(self) -> None:
        output = render_result(_ok("other", answer=46, nested={"a": 1}))
        assert "answer:" in output
        assert "46" in output
        assert '{"a":1}' in output


# ── Quiet mode ───────────────────────────────────────────────────────


class TestRenderQuiet:
    def test_solve_minima(self) -> None:
        result = _ok("solve", answers=[{"minimum": 35}, {"minimum": 46}])
        assert render_quiet(result) == "35\n46"

    def test_trace_results(self) -> None:
        assert render_quiet(_ok("trace", items=_trace_items())) == "82\n35"

    def test_check_count(self) -> None:
        assert render_quiet(_ok("check", count=3)) == "3"

    def test_other_op(self) -> None:
        assert render_quiet(_ok("inspect")) == "OK: inspect"

    def test_error(self) -> None:
        assert render_quiet(_err("solve", "X", "boom")) == "ERROR: solve — boom"


# ── Verbose telemetry ────────────────────────────────────────────────


_CHECK_TELEMETRY = {
    "telemetry": {
        "name": "CheckService.check",
        "duration_ms": 0.8,
        "children": [{"name": "parse", "duration_ms": 0.3}],
    }
}


class TestVerboseMeta:
    def test_check_without_issues(self) -> None:
        result = ServiceResult(
            ok=True, op="check", data={"count": 0, "issues": []}, meta=_CHECK_TELEMETRY
        )
        output = render_result(result, verbose=True)
        assert "No issues found" in output
        assert "CheckService.check" in output
        assert "parse" in output

    def test_check_with_issues(self) -> None:
        issue = {"category": "seeds", "severity": "warning", "stage": None, "message": "odd"}
        result = ServiceResult(
            ok=True,
            op="check",
            data={"count": 1, "error_count": 0, "warning_count": 1, "issues": [issue]},
            meta=_CHECK_TELEMETRY,
        )
        assert "CheckService.check" in render_result(result, verbose=True)
        assert "CheckService.check" not in render_result(result)

    def test_inspect(self) -> None:
        result = ServiceResult(
            ok=True,
            op="inspect",
            data={"seed_count": 0, "stage_count": 0, "stages": []},
            meta={"telemetry": {"name": "CheckService.inspect", "duration_ms": 0.5}},
        )
        assert "CheckService.inspect" in render_result(result, verbose=True)
