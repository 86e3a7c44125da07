"""
Tests for heating degree day accumulation and K-Factor.
"""

from datetime import date, datetime

import pytest

from conftest import make_weather
from oil_tracker.services.degree_days import (
    calculate_daily_hdd,
    calculate_hdd,
    calculate_k_factor,
    has_weather_between,
)
from oil_tracker.services.snapshots import (
    WeatherDay,
    DEFAULT_HDD_BASE_F,
    CELSIUS_HDD_BASE_F,
    hdd_base_for_unit,
)


class TestDailyHdd:
    """HDD = max(0, base - avg)."""

    @pytest.mark.parametrize("high,low,expected", [
        (40, 20, 35.0),    # avg 30
        (70, 50, 5.0),     # avg 60
        (80, 50, 0.0),     # avg exactly 65
        (90, 70, 0.0),     # avg 80: warm day
        (-10, -30, 85.0),  # avg -20
    ])
    def test_default_base(self, high, low, expected):
        day = WeatherDay(date=date(2024, 1, 1), high_temp=high, low_temp=low)
        assert calculate_daily_hdd(day) == pytest.approx(expected)

    def test_never_negative(self):
        for high in range(0, 120, 7):
            for low in range(-20, high + 1, 9):
                day = WeatherDay(date=date(2024, 1, 1), high_temp=high, low_temp=low)
                hdd = calculate_daily_hdd(day)
                assert hdd >= 0
                assert (hdd == 0) == (day.avg_temp >= DEFAULT_HDD_BASE_F)

    def test_custom_base(self):
        day = WeatherDay(date=date(2024, 1, 1), high_temp=50, low_temp=40)
        assert calculate_daily_hdd(day, CELSIUS_HDD_BASE_F) == pytest.approx(19.4)

    def test_avg_temp_celsius(self):
        day = WeatherDay(date=date(2024, 1, 1), high_temp=50, low_temp=14)
        assert day.avg_temp_c == pytest.approx(0.0)

    @pytest.mark.parametrize("unit,expected", [
        ("F", 65.0),
        ("C", 64.4),
        ("", 65.0),
    ])
    def test_hdd_base_for_unit(self, unit, expected):
        assert hdd_base_for_unit(unit) == expected


class TestRangeHdd:
    """Summed HDD over an inclusive date range."""

    def test_inclusive_on_both_ends(self):
        weather = make_weather(date(2024, 1, 1), 10, 10)
        assert calculate_hdd(weather, date(2024, 1, 3), date(2024, 1, 5)) == pytest.approx(30.0)

    def test_empty_series_is_zero(self):
        assert calculate_hdd([], date(2024, 1, 1), date(2024, 12, 31)) == 0.0

    def test_no_matching_days_is_zero(self):
        weather = make_weather(date(2024, 1, 1), 10, 10)
        assert calculate_hdd(weather, date(2024, 6, 1), date(2024, 6, 30)) == 0.0

    def test_missing_days_are_skipped(self):
        weather = make_weather(date(2024, 1, 1), 5, 10) + make_weather(date(2024, 1, 20), 5, 10)
        assert calculate_hdd(weather, date(2024, 1, 1), date(2024, 1, 31)) == pytest.approx(100.0)

    def test_additive_over_adjacent_ranges(self):
        weather = make_weather(date(2024, 1, 1), 31, 12.5)
        whole = calculate_hdd(weather, date(2024, 1, 1), date(2024, 1, 31))
        first = calculate_hdd(weather, date(2024, 1, 1), date(2024, 1, 15))
        second = calculate_hdd(weather, date(2024, 1, 16), date(2024, 1, 31))
        assert whole == pytest.approx(first + second)

    def test_datetimes_are_truncated_to_dates(self):
        weather = make_weather(date(2024, 1, 1), 10, 10)
        total = calculate_hdd(weather, datetime(2024, 1, 3, 18, 30), datetime(2024, 1, 5, 1, 0))
        assert total == pytest.approx(30.0)

    def test_custom_base_applied_per_day(self):
        weather = make_weather(date(2024, 1, 1), 3, 10)  # avg 55
        assert calculate_hdd(weather, date(2024, 1, 1), date(2024, 1, 3), 60.0) == pytest.approx(15.0)

    def test_has_weather_between(self):
        weather = make_weather(date(2024, 1, 10), 1, 10)
        assert has_weather_between(weather, date(2024, 1, 1), date(2024, 1, 10))
        assert not has_weather_between(weather, date(2024, 1, 11), date(2024, 1, 31))


class TestKFactor:
    """K-Factor = HDD per gallon."""

    @pytest.mark.parametrize("gallons,hdd,expected", [
        (150, 600, 4.0),
        (100, 250, 2.5),
        (0, 600, 0.0),
        (-5, 600, 0.0),
        (100, 0, 0.0),
    ])
    def test_values(self, gallons, hdd, expected):
        assert calculate_k_factor(gallons, hdd) == pytest.approx(expected)
