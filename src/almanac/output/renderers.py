"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from almanac.output.console import create_console, get_output, style_for_offset

if TYPE_CHECKING:
    from rich.console import Console

    from almanac.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Answers are printed as bare decimal integers, one per line.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "solve":
        return "\n".join(str(a["minimum"]) for a in result.data.get("answers", []))
    if result.op == "trace":
        return "\n".join(str(item["result"]) for item in result.data.get("items", []))
    if result.op == "check":
        return str(result.data.get("count", 0))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="almanac.ok")
    op = Text(f"  {result.op}", style="almanac.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="almanac.key")
    v = Text(str(value), style="almanac.answer" if key == "minimum" else "")
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"

    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _fmt_range(bounds: list[int]) -> str:
    return f"[{bounds[0]}, {bounds[1]})"


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="almanac.error")
    op = Text(f"  {result.op}", style="almanac.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if verbose and err:
        console.print(Text(f"  code: {err.code}", style="dim"))
        if err.detail:
            console.print(Text("  detail:", style="dim"))
            for k, v in err.detail.items():
                console.print(f"    {k}: {escape(str(v))}")


# ── Pipeline renderers ────────────────────────────────────────────────


def _render_solve(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render one answer row per seed mode."""
    _status_line(console, result)
    _field(console, "stages", result.data.get("stage_count", 0))

    answers = result.data.get("answers", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Mode")
    table.add_column("Minimum", style="almanac.answer", justify="right")
    table.add_column("Seed ranges", justify="right")
    table.add_column("Result ranges", justify="right")
    for answer in answers:
        table.add_row(
            str(answer.get("mode", "")),
            str(answer.get("minimum", "")),
            str(answer.get("seed_ranges", "")),
            str(answer.get("result_ranges", "")),
        )
    console.print(table)

    for answer in answers:
        ranges = answer.get("ranges")
        if ranges is None:
            continue
        console.print(f"\n[bold]{answer['mode']}[/bold] ranges")
        for bounds in ranges:
            console.print(f"  [almanac.range]{_fmt_range(bounds)}[/almanac.range]")

    if verbose:
        _render_meta(console, result)


def _render_trace(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render each traced value as a row of per-stage values."""
    items = result.data.get("items", [])
    stage_names = [step["stage"] for step in items[0]["steps"]] if items else []

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Value", justify="right")
    for name in stage_names:
        table.add_column(escape(name), justify="right")
    for item in items:
        table.add_row(str(item["value"]), *(str(step["value"]) for step in item["steps"]))
    console.print(table)
    console.print(f"\nminimum: [almanac.answer]{result.data.get('minimum')}[/almanac.answer]")

    if verbose:
        _render_meta(console, result)


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render check results with issues grouped by category."""
    issues = result.data.get("issues", [])
    count = result.data.get("count", len(issues))

    if count == 0:
        console.print("[almanac.ok]OK[/almanac.ok]  No issues found.")
        if verbose:
            _render_meta(console, result)
        return

    severity_styles = {"error": "almanac.error", "warning": "almanac.warning"}

    by_category: dict[str, list[dict[str, Any]]] = {}
    for issue in issues:
        by_category.setdefault(str(issue.get("category", "unknown")), []).append(issue)

    for cat, cat_issues in by_category.items():
        console.print(f"\n[bold]{cat}[/bold]")
        for issue in cat_issues:
            sev = str(issue.get("severity", "warning"))
            style = severity_styles.get(sev, "")
            prefix = f"[{style}]{sev}[/{style}]" if style else sev
            stage = " " + escape(f"[{issue['stage']}]") if issue.get("stage") else ""
            console.print(f"  {prefix}{stage}: {escape(str(issue.get('message', '')))}")

    errors = result.data.get("error_count", 0)
    warnings = result.data.get("warning_count", count - errors)
    console.print(f"\n{errors} errors, {warnings} warnings")

    if verbose:
        _render_meta(console, result)


def _render_inspect(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a rule table per stage (windows only with --verbose)."""
    _status_line(console, result)
    _field(console, "seeds", result.data.get("seed_count", 0))
    _field(console, "stages", result.data.get("stage_count", 0))

    for stage in result.data.get("stages", []):
        name = escape(stage["name"])
        console.print(
            f"\n[almanac.stage]{name}[/almanac.stage]  ({stage['rule_count']} rules)"
        )
        if not verbose:
            continue
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Source", style="almanac.range")
        table.add_column("Destination", style="almanac.range")
        table.add_column("Offset", justify="right")
        for window in stage.get("windows", []):
            offset = int(window["offset"])
            table.add_row(
                _fmt_range(window["source"]),
                _fmt_range(window["destination"]),
                Text(f"{offset:+d}", style=style_for_offset(offset)),
            )
        console.print(table)

    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "solve": _render_solve,
    "trace": _render_trace,
    "check": _render_check,
    "inspect": _render_inspect,
}
