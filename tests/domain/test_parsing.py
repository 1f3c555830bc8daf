"""Tests for almanac text parsing and seed extraction."""

from __future__ import annotations

import pytest

from almanac.domain.errors import AlmanacError, ParseError, StructuralError
from almanac.domain.parsing import (
    SeedMode,
    extract_seeds,
    parse_almanac,
    parse_rule,
    parse_seed_line,
    parse_stage,
    parse_u64,
)
from almanac.domain.ranges import U64_MAX, Range, Rule


class TestParseU64:
    def test_plain_integer(self) -> None:
        assert parse_u64("4294967296") == 4294967296

    def test_max_value(self) -> None:
        assert parse_u64(str(U64_MAX)) == U64_MAX

    @pytest.mark.parametrize("token", ["-1", "+5", "1_000", "12a", "", "1.5", str(U64_MAX + 1)])
    def test_rejected_tokens(self, token: str) -> None:
        with pytest.raises(ParseError):
            parse_u64(token)


class TestParseRule:
    def test_destination_source_length_order(self) -> None:
        assert parse_rule("52 50 48") == Rule(destination_start=52, source_start=50, length=48)

    def test_extra_whitespace(self) -> None:
        assert parse_rule("  52\t50   48 ") == Rule(52, 50, 48)

    @pytest.mark.parametrize("line", ["52 50", "52 50 48 1", ""])
    def test_wrong_token_count(self, line: str) -> None:
        with pytest.raises(StructuralError):
            parse_rule(line)

    def test_bad_token(self) -> None:
        with pytest.raises(ParseError):
            parse_rule("52 fifty 48")

    def test_zero_length(self) -> None:
        with pytest.raises(StructuralError):
            parse_rule("52 50 0")


class TestParseStage:
    def test_name_and_rules(self) -> None:
        stage = parse_stage("seed-to-soil map:\n50 98 2\n52 50 48")
        assert stage.name == "seed-to-soil"
        assert stage.rules == (Rule(50, 98, 2), Rule(52, 50, 48))

    def test_header_without_map_suffix(self) -> None:
        assert parse_stage("custom:\n1 2 3").name == "custom"

    def test_missing_header(self) -> None:
        with pytest.raises(StructuralError, match="header"):
            parse_stage("50 98 2\n52 50 48")

    def test_header_without_rules(self) -> None:
        with pytest.raises(StructuralError, match="no rules"):
            parse_stage("seed-to-soil map:")


class TestSeeds:
    def test_parse_seed_line(self) -> None:
        assert parse_seed_line("seeds: 79 14 55 13") == (79, 14, 55, 13)

    def test_missing_header(self) -> None:
        with pytest.raises(StructuralError):
            parse_seed_line("79 14 55 13")

    def test_no_values(self) -> None:
        with pytest.raises(StructuralError):
            parse_seed_line("seeds:")

    def test_bad_value(self) -> None:
        with pytest.raises(ParseError):
            parse_seed_line("seeds: 79 x")

    def test_point_mode(self) -> None:
        assert extract_seeds((79, 14), SeedMode.POINTS) == [Range(79, 80), Range(14, 15)]

    def test_range_mode(self) -> None:
        assert extract_seeds((79, 14, 55, 13), SeedMode.RANGES) == [Range(79, 93), Range(55, 68)]

    def test_range_mode_drops_zero_length(self) -> None:
        assert extract_seeds((79, 0, 55, 13), SeedMode.RANGES) == [Range(55, 68)]

    def test_range_mode_odd_count(self) -> None:
        with pytest.raises(StructuralError):
            extract_seeds((79, 14, 55), SeedMode.RANGES)

    def test_odd_count_fine_in_point_mode(self) -> None:
        assert len(extract_seeds((79, 14, 55), SeedMode.POINTS)) == 3


class TestParseAlmanac:
    def test_sample(self, sample_text: str) -> None:
        almanac = parse_almanac(sample_text)
        assert almanac.seeds == (79, 14, 55, 13)
        assert len(almanac.pipeline.stages) == 7
        assert almanac.pipeline.stages[-1].name == "humidity-to-location"
        assert almanac.seed_ranges(SeedMode.RANGES) == [Range(79, 93), Range(55, 68)]

    def test_crlf_line_endings(self, sample_text: str) -> None:
        crlf = parse_almanac(sample_text.replace("\n", "\r\n"))
        assert crlf == parse_almanac(sample_text)

    def test_blank_lines_with_spaces(self) -> None:
        almanac = parse_almanac("seeds: 1 2\n   \nx-to-y map:\n0 1 1\n")
        assert almanac.pipeline.stages[0].rules == (Rule(0, 1, 1),)

    def test_empty_input(self) -> None:
        with pytest.raises(StructuralError):
            parse_almanac("\n\n")

    def test_no_stages(self) -> None:
        with pytest.raises(StructuralError, match="no stage"):
            parse_almanac("seeds: 1 2\n")

    def test_seed_block_must_be_one_line(self) -> None:
        with pytest.raises(StructuralError):
            parse_almanac("seeds: 1 2\nx-to-y map:\n0 1 1\n")

    def test_any_bad_rule_aborts_everything(self, sample_text: str) -> None:
        broken = sample_text.replace("56 93 4", "56 93")
        with pytest.raises(AlmanacError) as excinfo:
            parse_almanac(broken)
        assert excinfo.value.code == "STRUCTURAL_ERROR"
