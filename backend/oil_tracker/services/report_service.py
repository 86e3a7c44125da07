from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from oil_tracker.services.degree_days import calculate_hdd
from oil_tracker.services.snapshots import DEFAULT_HDD_BASE_F

# lbs CO2 per gallon burned (U.S. EIA)
CO2_LBS_PER_GALLON = {
    "OIL": 22.38,
    "KEROSENE": 21.54,
    "PROPANE": 12.43,
}
KG_PER_LB = 0.453592
OFFSET_PRICE_LOW_PER_TON = 15.0
OFFSET_PRICE_HIGH_PER_TON = 50.0

HEATING_SEASON_MONTHS = {10, 11, 12, 1, 2, 3}


def co2_factor(fuel_type: str) -> float:
    return CO2_LBS_PER_GALLON.get(fuel_type, CO2_LBS_PER_GALLON["OIL"])


@dataclass(frozen=True)
class YearlySummary:
    year: int
    total_gallons: float
    total_cost: float
    delivery_count: int
    total_hdd: Optional[float] = None
    co2_lbs_per_gallon: float = CO2_LBS_PER_GALLON["OIL"]

    @property
    def avg_price_per_gallon(self) -> float:
        return self.total_cost / self.total_gallons if self.total_gallons > 0 else 0.0

    @property
    def cost_per_hdd(self) -> Optional[float]:
        if self.total_hdd:
            return self.total_cost / self.total_hdd
        return None

    @property
    def avg_k_factor(self) -> Optional[float]:
        # gallons per HDD over the calendar year
        if self.total_hdd:
            return self.total_gallons / self.total_hdd
        return None

    @property
    def total_co2_lbs(self) -> float:
        return self.total_gallons * self.co2_lbs_per_gallon

    @property
    def total_co2_kg(self) -> float:
        return self.total_co2_lbs * KG_PER_LB

    @property
    def total_co2_metric_tons(self) -> float:
        return self.total_co2_kg / 1000.0

    @property
    def co2_lbs_per_hdd(self) -> Optional[float]:
        if self.total_hdd:
            return self.total_co2_lbs / self.total_hdd
        return None

    @property
    def offset_cost_low(self) -> float:
        return self.total_co2_metric_tons * OFFSET_PRICE_LOW_PER_TON

    @property
    def offset_cost_high(self) -> float:
        return self.total_co2_metric_tons * OFFSET_PRICE_HIGH_PER_TON


@dataclass(frozen=True)
class SeasonalBreakdown:
    """Heating season (Oct-Mar) vs off season (Apr-Sep) within one calendar year."""
    year: int
    heating_season_gallons: float
    heating_season_cost: float
    heating_season_deliveries: int
    off_season_gallons: float
    off_season_cost: float
    off_season_deliveries: int
    heating_season_hdd: Optional[float] = None
    off_season_hdd: Optional[float] = None
    co2_lbs_per_gallon: float = CO2_LBS_PER_GALLON["OIL"]

    @property
    def total_cost(self) -> float:
        return self.heating_season_cost + self.off_season_cost

    @property
    def total_gallons(self) -> float:
        return self.heating_season_gallons + self.off_season_gallons

    @property
    def heating_season_cost_percent(self) -> float:
        return self.heating_season_cost / self.total_cost * 100 if self.total_cost > 0 else 0.0

    @property
    def off_season_cost_percent(self) -> float:
        return self.off_season_cost / self.total_cost * 100 if self.total_cost > 0 else 0.0

    @property
    def heating_season_co2_lbs(self) -> float:
        return self.heating_season_gallons * self.co2_lbs_per_gallon

    @property
    def off_season_co2_lbs(self) -> float:
        return self.off_season_gallons * self.co2_lbs_per_gallon

    @property
    def total_co2_lbs(self) -> float:
        return self.total_gallons * self.co2_lbs_per_gallon

    @property
    def heating_season_co2_percent(self) -> float:
        return self.heating_season_co2_lbs / self.total_co2_lbs * 100 if self.total_co2_lbs > 0 else 0.0

    @property
    def off_season_co2_percent(self) -> float:
        return self.off_season_co2_lbs / self.total_co2_lbs * 100 if self.total_co2_lbs > 0 else 0.0


class ReportService:
    """Calendar-period totals over the store's deliveries and weather."""

    def __init__(self, data_service, fuel_type: str = "OIL", base_temp: float = DEFAULT_HDD_BASE_F):
        self.data_service = data_service
        self.co2_lbs_per_gallon = co2_factor(fuel_type)
        self.base_temp = base_temp

    def get_available_years(self) -> List[int]:
        years = {d.date.year for d in self.data_service.get_deliveries()}
        return sorted(years, reverse=True)

    def get_yearly_summary(self, year: int) -> YearlySummary:
        deliveries = [d for d in self.data_service.get_deliveries() if d.date.year == year]
        weather = self.data_service.get_weather_history()

        total_hdd = None
        if weather:
            total_hdd = calculate_hdd(weather, date(year, 1, 1), date(year, 12, 31), self.base_temp)

        return YearlySummary(
            year=year,
            total_gallons=sum(d.gallons for d in deliveries),
            total_cost=sum(d.total_cost for d in deliveries),
            delivery_count=len(deliveries),
            total_hdd=total_hdd,
            co2_lbs_per_gallon=self.co2_lbs_per_gallon,
        )

    def get_all_yearly_summaries(self) -> List[YearlySummary]:
        return [self.get_yearly_summary(year) for year in self.get_available_years()]

    def get_seasonal_breakdown(self, year: int) -> SeasonalBreakdown:
        deliveries = [d for d in self.data_service.get_deliveries() if d.date.year == year]
        weather = self.data_service.get_weather_history()

        heating = [d for d in deliveries if d.date.month in HEATING_SEASON_MONTHS]
        off_season = [d for d in deliveries if d.date.month not in HEATING_SEASON_MONTHS]

        heating_hdd = off_hdd = None
        if weather:
            heating_hdd = (
                calculate_hdd(weather, date(year, 1, 1), date(year, 3, 31), self.base_temp)
                + calculate_hdd(weather, date(year, 10, 1), date(year, 12, 31), self.base_temp)
            )
            off_hdd = calculate_hdd(weather, date(year, 4, 1), date(year, 9, 30), self.base_temp)

        return SeasonalBreakdown(
            year=year,
            heating_season_gallons=sum(d.gallons for d in heating),
            heating_season_cost=sum(d.total_cost for d in heating),
            heating_season_deliveries=len(heating),
            off_season_gallons=sum(d.gallons for d in off_season),
            off_season_cost=sum(d.total_cost for d in off_season),
            off_season_deliveries=len(off_season),
            heating_season_hdd=heating_hdd,
            off_season_hdd=off_hdd,
            co2_lbs_per_gallon=self.co2_lbs_per_gallon,
        )
