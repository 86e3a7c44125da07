from datetime import date, datetime
from typing import Iterable, Union

from oil_tracker.services.snapshots import WeatherDay, DEFAULT_HDD_BASE_F

DateLike = Union[date, datetime]


def _as_date(value: DateLike) -> date:
    # datetime is a date subclass, so check it first
    if isinstance(value, datetime):
        return value.date()
    return value


def calculate_daily_hdd(day: WeatherDay, base_temp: float = DEFAULT_HDD_BASE_F) -> float:
    """Calculate Heating Degree Days for a single day.
    HDD = max(0, base_temp - avg_temp)
    Higher HDD = more heating needed = more oil usage.
    """
    return day.hdd(base_temp)


def weather_in_range(weather: Iterable[WeatherDay], start_date: DateLike, end_date: DateLike) -> list:
    """Records whose date falls in [start_date, end_date], both ends inclusive."""
    start, end = _as_date(start_date), _as_date(end_date)
    return [w for w in weather if start <= w.date <= end]


def has_weather_between(weather: Iterable[WeatherDay], start_date: DateLike, end_date: DateLike) -> bool:
    start, end = _as_date(start_date), _as_date(end_date)
    return any(start <= w.date <= end for w in weather)


def calculate_hdd(
    weather: Iterable[WeatherDay],
    start_date: DateLike,
    end_date: DateLike,
    base_temp: float = DEFAULT_HDD_BASE_F,
) -> float:
    """
    Total HDD between two dates (inclusive) using stored weather.

    Days missing from the series contribute nothing, so a sparse series
    understates demand rather than failing.
    """
    return sum(
        (calculate_daily_hdd(w, base_temp) for w in weather_in_range(weather, start_date, end_date)),
        0.0,
    )


def calculate_k_factor(gallons: float, hdd: float) -> float:
    """K-Factor: HDD accumulated per gallon burned. Higher means more efficient."""
    if gallons <= 0:
        return 0.0
    return hdd / gallons
