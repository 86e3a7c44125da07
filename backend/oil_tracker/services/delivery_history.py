from dataclasses import dataclass
from datetime import timedelta
from typing import Dict, Optional, Sequence

from oil_tracker.services.degree_days import calculate_hdd, calculate_k_factor
from oil_tracker.services.snapshots import Delivery, WeatherDay, DEFAULT_HDD_BASE_F
from oil_tracker.services.tank_estimator import sort_deliveries


@dataclass(frozen=True)
class DeliveryInterval:
    """Figures for the span between a delivery and the one before it."""
    days_since_last_fill: Optional[int] = None
    gallons_per_day: Optional[float] = None
    interval_hdd: Optional[float] = None
    k_factor: Optional[float] = None


def delivery_intervals(
    deliveries: Sequence[Delivery],
    weather: Sequence[WeatherDay],
    base_temp: float = DEFAULT_HDD_BASE_F,
) -> Dict[int, DeliveryInterval]:
    """
    Interval figures keyed by delivery id, computed over the date-sorted history.

    The first delivery and same-day repeats have no day count. HDD is summed from
    the day after the previous delivery through this one and left unset when no
    weather covers the interval.
    """
    intervals = {}
    previous = None
    for delivery in sort_deliveries(deliveries):
        if previous is None:
            intervals[delivery.id] = DeliveryInterval()
            previous = delivery
            continue

        days = (delivery.date - previous.date).days
        days_since = gallons_per_day = None
        if days > 0:
            days_since = days
            gallons_per_day = round(delivery.gallons / days, 1)

        hdd = k_factor = None
        if weather:
            hdd = calculate_hdd(weather, previous.date + timedelta(days=1), delivery.date, base_temp) or None
        if hdd:
            k_factor = calculate_k_factor(delivery.gallons, hdd)

        intervals[delivery.id] = DeliveryInterval(
            days_since_last_fill=days_since,
            gallons_per_day=gallons_per_day,
            interval_hdd=round(hdd, 1) if hdd else None,
            k_factor=round(k_factor, 3) if k_factor else None,
        )
        previous = delivery

    return intervals
