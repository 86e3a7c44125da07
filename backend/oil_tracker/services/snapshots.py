"""
Read-only snapshots handed to the estimation engine.

The engine never touches the database; DataService converts ORM rows into
these frozen records once per call so every estimation works on a stable copy.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional

DEFAULT_HDD_BASE_F = 65.0
CELSIUS_HDD_BASE_F = 64.4  # 18°C expressed in Fahrenheit


def hdd_base_for_unit(temperature_unit: str) -> float:
    """HDD base (°F) for the user's preferred temperature unit."""
    return CELSIUS_HDD_BASE_F if temperature_unit == "C" else DEFAULT_HDD_BASE_F


@dataclass(frozen=True)
class WeatherDay:
    """One calendar day of observed temperatures in °F."""
    date: date
    high_temp: float
    low_temp: float

    @property
    def avg_temp(self) -> float:
        return (self.high_temp + self.low_temp) / 2

    @property
    def avg_temp_c(self) -> float:
        return (self.avg_temp - 32.0) * 5.0 / 9.0

    def hdd(self, base_temp: float = DEFAULT_HDD_BASE_F) -> float:
        """HDD = max(0, base - avg)."""
        return max(0.0, base_temp - self.avg_temp)

    @classmethod
    def from_orm(cls, temp) -> "WeatherDay":
        return cls(date=temp.date, high_temp=float(temp.high_temp), low_temp=float(temp.low_temp))


@dataclass(frozen=True)
class Delivery:
    """One fuel delivery."""
    id: Optional[int]
    date: date
    gallons: float
    price_per_gallon: float
    notes: str = ""
    filled_to_capacity: bool = True

    @property
    def total_cost(self) -> float:
        return self.gallons * self.price_per_gallon

    @classmethod
    def from_orm(cls, delivery) -> "Delivery":
        return cls(
            id=delivery.id,
            date=delivery.date,
            gallons=float(delivery.gallons),
            price_per_gallon=float(delivery.price_per_gallon),
            notes=delivery.notes or "",
            filled_to_capacity=bool(delivery.filled_to_capacity),
        )
