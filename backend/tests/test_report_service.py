"""
Tests for yearly summaries and seasonal breakdowns.
"""

from datetime import date

import pytest

from conftest import FakeDataService, make_delivery, make_weather
from oil_tracker.services.report_service import ReportService, YearlySummary, co2_factor


def deliveries():
    return [
        make_delivery(date(2024, 1, 15), 100, price=3.50),
        make_delivery(date(2024, 6, 1), 50, price=3.00),
        make_delivery(date(2024, 11, 10), 150, price=4.00),
        make_delivery(date(2023, 12, 1), 80, price=3.00),
    ]


class TestYearlySummary:

    def test_totals_without_weather(self):
        summary = ReportService(FakeDataService(deliveries())).get_yearly_summary(2024)
        assert summary.total_gallons == pytest.approx(300)
        assert summary.total_cost == pytest.approx(1100)
        assert summary.delivery_count == 3
        assert summary.avg_price_per_gallon == pytest.approx(1100 / 300)
        assert summary.total_hdd is None
        assert summary.cost_per_hdd is None
        assert summary.avg_k_factor is None

    def test_hdd_metrics_with_weather(self):
        weather = make_weather(date(2024, 1, 1), 10, 10)
        summary = ReportService(FakeDataService(deliveries(), weather)).get_yearly_summary(2024)
        assert summary.total_hdd == pytest.approx(100)
        assert summary.cost_per_hdd == pytest.approx(11.0)
        assert summary.avg_k_factor == pytest.approx(3.0)

    def test_zero_hdd_gives_no_ratios(self):
        weather = make_weather(date(2024, 7, 1), 10, 0)
        summary = ReportService(FakeDataService(deliveries(), weather)).get_yearly_summary(2024)
        assert summary.total_hdd == 0
        assert summary.cost_per_hdd is None
        assert summary.co2_lbs_per_hdd is None

    def test_empty_year(self):
        summary = ReportService(FakeDataService(deliveries())).get_yearly_summary(2020)
        assert summary.delivery_count == 0
        assert summary.avg_price_per_gallon == 0

    def test_carbon_figures(self):
        summary = YearlySummary(year=2024, total_gallons=1000, total_cost=3500, delivery_count=4)
        assert summary.total_co2_lbs == pytest.approx(22380)
        assert summary.total_co2_kg == pytest.approx(22380 * 0.453592)
        assert summary.total_co2_metric_tons == pytest.approx(22380 * 0.453592 / 1000)
        assert summary.offset_cost_low == pytest.approx(summary.total_co2_metric_tons * 15)
        assert summary.offset_cost_high == pytest.approx(summary.total_co2_metric_tons * 50)

    def test_fuel_type_changes_co2_factor(self):
        summary = ReportService(FakeDataService(deliveries()), fuel_type="PROPANE").get_yearly_summary(2024)
        assert summary.total_co2_lbs == pytest.approx(300 * 12.43)

    @pytest.mark.parametrize("fuel,expected", [
        ("OIL", 22.38),
        ("KEROSENE", 21.54),
        ("PROPANE", 12.43),
        ("UNKNOWN", 22.38),
    ])
    def test_co2_factor(self, fuel, expected):
        assert co2_factor(fuel) == expected

    def test_available_years_newest_first(self):
        assert ReportService(FakeDataService(deliveries())).get_available_years() == [2024, 2023]

    def test_all_summaries(self):
        summaries = ReportService(FakeDataService(deliveries())).get_all_yearly_summaries()
        assert [s.year for s in summaries] == [2024, 2023]
        assert summaries[1].total_gallons == pytest.approx(80)


class TestSeasonalBreakdown:

    def test_split_by_season(self):
        breakdown = ReportService(FakeDataService(deliveries())).get_seasonal_breakdown(2024)
        assert breakdown.heating_season_gallons == pytest.approx(250)
        assert breakdown.heating_season_cost == pytest.approx(950)
        assert breakdown.heating_season_deliveries == 2
        assert breakdown.off_season_gallons == pytest.approx(50)
        assert breakdown.off_season_cost == pytest.approx(150)
        assert breakdown.off_season_deliveries == 1
        assert breakdown.total_cost == pytest.approx(1100)
        assert breakdown.heating_season_cost_percent == pytest.approx(950 / 1100 * 100)
        assert breakdown.off_season_cost_percent == pytest.approx(150 / 1100 * 100)
        assert breakdown.heating_season_hdd is None
        assert breakdown.heating_season_co2_percent == pytest.approx(250 / 300 * 100)
        assert breakdown.off_season_co2_percent == pytest.approx(50 / 300 * 100)

    def test_season_hdd(self):
        weather = (
            make_weather(date(2024, 1, 1), 10, 10)
            + make_weather(date(2024, 5, 1), 5, 2)
            + make_weather(date(2024, 12, 1), 3, 20)
        )
        breakdown = ReportService(FakeDataService(deliveries(), weather)).get_seasonal_breakdown(2024)
        assert breakdown.heating_season_hdd == pytest.approx(160)
        assert breakdown.off_season_hdd == pytest.approx(10)

    def test_empty_year_percentages(self):
        breakdown = ReportService(FakeDataService(deliveries())).get_seasonal_breakdown(2020)
        assert breakdown.heating_season_cost_percent == 0
        assert breakdown.off_season_cost_percent == 0
        assert breakdown.heating_season_co2_percent == 0
        assert breakdown.off_season_co2_percent == 0
