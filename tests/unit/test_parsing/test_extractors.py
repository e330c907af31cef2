"""
Unit tests for the fixed-column and header-search extraction strategies.
"""

import logging

import pytest

from conftest import make_free_output, make_sar_output
from reswatch.parsing import FixedColumnExtractor, HeaderSearchExtractor


def _idle_report(header_padding: int, value: str) -> str:
    """A two-line report whose %idle header starts after ``header_padding`` columns."""
    header = " " * header_padding + "CPU  %idle\n"
    marker_offset = header.index("%idle")
    data = " " * (marker_offset + 2) + value + "\n"
    return header + data


@pytest.mark.unit
class TestFixedColumnExtractor:
    """Test cases for the fixed-column strategy."""

    @pytest.fixture
    def extractor(self):
        return FixedColumnExtractor("free -L")

    @pytest.mark.parametrize(
        "block,expected",
        [(0, 512), (1, 1180612), (2, 2197296), (3, 12875328)],
    )
    def test_extracts_each_block(self, extractor, block, expected):
        buffer = make_free_output(swap=512, cache=1180612, used=2197296, free=12875328)

        assert extractor.extract(buffer, block) == expected

    def test_value_filling_whole_field(self, extractor):
        buffer = make_free_output(cache=1234567890)

        assert extractor.extract(buffer, 1) == 1234567890

    def test_zero_values(self, extractor):
        buffer = make_free_output()

        assert [extractor.extract(buffer, i) for i in range(4)] == [0, 0, 0, 0]

    def test_non_numeric_block_yields_zero_and_logs(self, extractor, caplog):
        buffer = make_free_output(used=30, free=70).replace("        30", "    thirty")

        with caplog.at_level(logging.WARNING):
            assert extractor.extract(buffer, 2) == 0

        assert "Failed to parse number 'thirty'" in caplog.text
        assert buffer in caplog.text

    def test_blank_block_yields_zero(self, extractor, caplog):
        buffer = "".join(f"{header:<9}{'':>10} " for header in ("A", "B", "C", "D")) + "\n"

        with caplog.at_level(logging.WARNING):
            assert extractor.extract(buffer, 3) == 0

        assert "Failed to parse number ''" in caplog.text

    def test_empty_buffer_yields_zero(self, extractor):
        assert extractor.extract("", 2) == 0

    def test_short_garbage_does_not_raise(self, extractor):
        assert extractor.extract("free: invalid option -- 'L'\n", 3) == 0

    def test_block_index_out_of_range(self, extractor):
        with pytest.raises(ValueError):
            extractor.extract(make_free_output(), 4)


@pytest.mark.unit
class TestHeaderSearchExtractor:
    """Test cases for the header-search strategy."""

    @pytest.fixture
    def extractor(self):
        return HeaderSearchExtractor("sar", "%idle")

    @pytest.mark.parametrize("padding", [0, 3, 17, 60])
    def test_marker_at_varying_offsets(self, extractor, padding):
        assert extractor.extract(_idle_report(padding, " 42")) == 42

    def test_sar_report(self, extractor):
        assert extractor.extract(make_sar_output(idle=" 35")) == 35

    def test_three_digit_value(self, extractor):
        assert extractor.extract(make_sar_output(idle="100")) == 100

    def test_reads_requested_data_line(self, extractor):
        report = _idle_report(4, " 10") + " " * 11 + " 20\n"

        assert extractor.extract(report, 1) == 10
        assert extractor.extract(report, 2) == 20

    def test_missing_marker_yields_zero_and_logs(self, extractor, caplog):
        report = "12:00:01  CPU  %user  %nice\n12:00:02  all      3      0\n"

        with caplog.at_level(logging.WARNING):
            assert extractor.extract(report) == 0

        assert "Could not find '%idle'" in caplog.text

    def test_marker_only_searched_in_first_line(self, extractor):
        report = "header without marker\n" + _idle_report(0, " 50")

        assert extractor.extract(report) == 0

    def test_missing_data_line_yields_zero(self, extractor, caplog):
        with caplog.at_level(logging.WARNING):
            assert extractor.extract("CPU  %idle\n") == 0

        assert "Failed to parse number ''" in caplog.text

    def test_non_numeric_value_yields_zero(self, extractor, caplog):
        with caplog.at_level(logging.WARNING):
            assert extractor.extract(_idle_report(2, "n/a")) == 0

        assert "Failed to parse number 'n/a'" in caplog.text

    def test_empty_buffer_yields_zero(self, extractor):
        assert extractor.extract("") == 0

    def test_try_extract_distinguishes_failure_from_zero(self, extractor):
        assert extractor.try_extract(_idle_report(0, "  0")) == 0
        assert extractor.try_extract(_idle_report(0, "n/a")) is None
        assert extractor.try_extract("no marker here\n") is None
