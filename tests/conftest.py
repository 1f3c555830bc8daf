"""Shared pytest fixtures and test helpers for almanac tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from almanac.config.settings import AlmanacSettings
from almanac.services.telemetry import _current_span, disable_telemetry

SAMPLE_ALMANAC = """\
seeds: 79 14 55 13

seed-to-soil map:
50 98 2
52 50 48

soil-to-fertilizer map:
0 15 37
37 52 2
39 0 15

fertilizer-to-water map:
49 53 8
0 11 42
42 0 7
57 7 4

water-to-light map:
88 18 7
18 25 70

light-to-temperature map:
45 77 23
81 45 19
68 64 13

temperature-to-humidity map:
0 69 1
1 0 69

humidity-to-location map:
60 56 37
56 93 4
"""

OVERLAPPING_ALMANAC = """\
seeds: 0 100

a-to-b map:
1000 10 20
2000 20 20
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def sample_text() -> str:
    """The canonical seven-stage almanac (35 in point mode, 46 in range mode)."""
    return SAMPLE_ALMANAC


@pytest.fixture
def overlapping_text() -> str:
    """One stage whose two rules overlap on [20, 30)."""
    return OVERLAPPING_ALMANAC


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> AlmanacSettings:
    """Default settings with no TOML file and no ALMANAC_* env vars."""
    monkeypatch.delenv("ALMANAC_CONFIG", raising=False)
    return AlmanacSettings.from_cli(start=tmp_path)


@pytest.fixture
def input_file(tmp_path: Path) -> Path:
    """The sample almanac written to disk."""
    path = tmp_path / "input.txt"
    path.write_text(SAMPLE_ALMANAC, encoding="utf-8")
    return path


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from a temp directory so no stray almanac.toml is discovered.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")`` on command test
    classes.
    """
    monkeypatch.delenv("ALMANAC_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    """``-v`` enables telemetry for the process; keep tests independent."""
    yield
    disable_telemetry()
    _current_span.set(None)
