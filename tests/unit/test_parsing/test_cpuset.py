"""
Unit tests for CPU-set field parsing.
"""

from unittest.mock import patch

import pytest

from jailcell.parsing.cpuset import CPU_FIELD_WIDTH, MAX_CPUS, format_cpu_set, parse_cpu_set
from jailcell.validation import ParseError


@pytest.mark.unit
class TestParseCpuSet:
    """Test cases for parse_cpu_set."""

    @pytest.mark.parametrize(
        "field, expected",
        [
            ("0-3,7", (0, 1, 2, 3, 7)),
            ("0", (0,)),
            ("1,2,4-7", (1, 2, 4, 5, 6, 7)),
            ("3-3", (3,)),
            ("12-14", (12, 13, 14)),
            ("0-1".ljust(CPU_FIELD_WIDTH), (0, 1)),
        ],
    )
    def test_valid_fields(self, field, expected):
        assert parse_cpu_set(field) == expected

    def test_group_order_is_preserved(self):
        """Groups keep the tool's left-to-right order; only ranges ascend."""
        assert parse_cpu_set("7,0-2,5") == (7, 0, 1, 2, 5)

    @pytest.mark.parametrize("field", ["", " ", " " * CPU_FIELD_WIDTH, "\n"])
    def test_blank_field_is_empty(self, field):
        assert parse_cpu_set(field) == ()

    def test_reversed_range_is_empty(self):
        assert parse_cpu_set("5-3") == ()
        assert parse_cpu_set("0,5-3,8") == (0, 8)

    @pytest.mark.parametrize(
        "field",
        [
            "0,",
            "0-3,7,",
            ",1",
            "1,,2",
            "a",
            "1-",
            "-1",
            "1-2-3",
            "0-1 junk",
            "0;1",
        ],
    )
    def test_malformed_fields_raise(self, field):
        with pytest.raises(ParseError):
            parse_cpu_set(field)

    def test_list_wider_than_column_raises(self):
        too_long = ",".join(str(n) for n in range(20))
        assert len(too_long) > CPU_FIELD_WIDTH
        with pytest.raises(ParseError) as exc_info:
            parse_cpu_set(too_long)
        assert "column width" in str(exc_info.value)

    def test_width_check_can_be_disabled(self):
        long_list = ",".join(str(n) for n in range(20))
        assert parse_cpu_set(long_list, width=None) == tuple(range(20))

    def test_error_carries_line_and_field(self):
        with pytest.raises(ParseError) as exc_info:
            parse_cpu_set("1,", line_number=3, field_name="failed CPUs")
        assert exc_info.value.line_number == 3
        assert exc_info.value.field_name == "failed CPUs"
        assert str(exc_info.value).startswith("line 3:")

    def test_huge_range_raises_parse_error(self):
        field = "0-999999999999"
        assert len(field) <= CPU_FIELD_WIDTH
        with pytest.raises(ParseError) as exc_info:
            parse_cpu_set(field, line_number=2, field_name="assigned CPUs")
        assert exc_info.value.line_number == 2
        assert exc_info.value.field_name == "assigned CPUs"

    def test_ranges_adding_up_past_limit_raise(self):
        half = MAX_CPUS // 2
        with pytest.raises(ParseError):
            parse_cpu_set(f"0-{half - 1},{half}-{MAX_CPUS}", width=None)

    def test_range_at_limit_is_accepted(self):
        assert len(parse_cpu_set(f"0-{MAX_CPUS - 1}")) == MAX_CPUS

    def test_allocation_failure_becomes_parse_error(self):
        with patch("jailcell.parsing.cpuset.range", side_effect=MemoryError, create=True):
            with pytest.raises(ParseError) as exc_info:
                parse_cpu_set("0-3")
        assert "allocate" in str(exc_info.value)


@pytest.mark.unit
class TestFormatCpuSet:
    """Test cases for format_cpu_set."""

    def test_compacts_runs(self):
        assert format_cpu_set([0, 1, 2, 3, 7]) == "0-3,7"

    def test_empty(self):
        assert format_cpu_set([]) == ""

    def test_keeps_order(self):
        assert format_cpu_set([7, 0, 1, 2, 5]) == "7,0-2,5"

    @pytest.mark.parametrize("field", ["0-3,7", "1", "4-5,0-1", "9,3"])
    def test_output_parses_back(self, field):
        cpus = parse_cpu_set(field)
        assert parse_cpu_set(format_cpu_set(cpus)) == cpus
