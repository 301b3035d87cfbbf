"""Tests for compact duration rendering."""

from __future__ import annotations

import pytest
from agent_service_libs.measure import format_duration
from agent_service_libs.measure.duration import HOUR, MICROSECOND, MILLISECOND, MINUTE, SECOND


class TestFormatDuration:
    """Tests for format_duration."""

    @pytest.mark.parametrize(
        "nanoseconds, expected",
        [
            (0, "0s"),
            (1, "1ns"),
            (500, "500ns"),
            (999, "999ns"),
            (MICROSECOND, "1µs"),
            (1_500, "1.5µs"),
            (1_230_000, "1.23ms"),
            (10 * MILLISECOND, "10ms"),
            (15 * MILLISECOND, "15ms"),
            (60 * MILLISECOND, "60ms"),
            (999_999_999, "999.999999ms"),
            (SECOND, "1s"),
            (2_500_000_000, "2.5s"),
            (MINUTE, "1m0s"),
            (90 * SECOND, "1m30s"),
            (61 * SECOND + 500 * MILLISECOND, "1m1.5s"),
            (HOUR, "1h0m0s"),
            (HOUR + 2 * MINUTE + 3 * SECOND, "1h2m3s"),
            (26 * HOUR, "26h0m0s"),
        ],
    )
    def test_renders_compact_form(self, nanoseconds: int, expected: str) -> None:
        assert format_duration(nanoseconds) == expected

    @pytest.mark.parametrize(
        "nanoseconds, expected",
        [(-500, "-500ns"), (-1_500_000, "-1.5ms"), (-90 * SECOND, "-1m30s")],
    )
    def test_negative_values_get_sign(self, nanoseconds: int, expected: str) -> None:
        assert format_duration(nanoseconds) == expected
