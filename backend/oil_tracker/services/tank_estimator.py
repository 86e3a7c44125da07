from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional, Sequence
import logging
import math
import numpy as np

from oil_tracker.services.snapshots import Delivery, WeatherDay, DEFAULT_HDD_BASE_F
from oil_tracker.services.degree_days import calculate_hdd, calculate_k_factor, has_weather_between

logger = logging.getLogger(__name__)

# Most recent interval first
BURN_RATE_WEIGHTS = (1.0, 0.8, 0.6, 0.4, 0.2)

# Intervals with less accumulated HDD give numerically unstable K-Factors
K_FACTOR_MIN_HDD = 200.0

MODEL_K_FACTOR = "k_factor"
MODEL_BURN_RATE = "burn_rate"


def sort_deliveries(deliveries: Sequence[Delivery]) -> List[Delivery]:
    # sorted() is stable: same-day deliveries keep their input order
    return sorted(deliveries, key=lambda d: d.date)


def calculate_burn_rate(deliveries: Sequence[Delivery]) -> float:
    """
    Recency-weighted average gallons/day from delivery spacing.

    The gallons delivered at each delivery are taken as what was burned since
    the previous one. Partial fills are not filtered out.
    """
    if len(deliveries) < 2:
        return 0.0

    ordered = sort_deliveries(deliveries)

    rates = []  # (date, gal/day)
    for prev, curr in zip(ordered, ordered[1:]):
        days_between = (curr.date - prev.date).days
        if days_between > 0:
            rates.append((curr.date, curr.gallons / days_between))

    if not rates:
        return 0.0

    recent = sorted(rates, key=lambda r: r[0], reverse=True)[:len(BURN_RATE_WEIGHTS)]
    weights = BURN_RATE_WEIGHTS[:len(recent)]
    return float(np.average([rate for _, rate in recent], weights=weights))


def calculate_average_k_factor(
    deliveries: Sequence[Delivery],
    weather: Sequence[WeatherDay],
    base_temp: float = DEFAULT_HDD_BASE_F,
    min_hdd: float = K_FACTOR_MIN_HDD,
) -> Optional[float]:
    """Mean K-Factor over delivery intervals with enough heating demand, or None."""
    if len(deliveries) < 2 or not weather:
        return None

    ordered = sort_deliveries(deliveries)

    k_factors = []
    for prev, curr in zip(ordered, ordered[1:]):
        # The delivery day itself is assumed measured at day's end
        hdd = calculate_hdd(weather, prev.date + timedelta(days=1), curr.date, base_temp)
        if hdd < min_hdd:
            continue
        k_factor = calculate_k_factor(curr.gallons, hdd)
        if k_factor > 0:
            k_factors.append(k_factor)

    if not k_factors:
        return None
    return float(np.mean(k_factors))


@dataclass(frozen=True)
class EstimationContext:
    """Consumption models derived once per estimation and reused through the replay."""
    tank_capacity: float
    burn_rate: float
    average_k_factor: Optional[float]
    weather: Sequence[WeatherDay]
    base_temp: float = DEFAULT_HDD_BASE_F

    @classmethod
    def build(
        cls,
        deliveries: Sequence[Delivery],
        weather: Sequence[WeatherDay],
        tank_capacity: float,
        base_temp: float = DEFAULT_HDD_BASE_F,
        min_hdd: float = K_FACTOR_MIN_HDD,
    ) -> "EstimationContext":
        return cls(
            tank_capacity=tank_capacity,
            burn_rate=calculate_burn_rate(deliveries),
            average_k_factor=calculate_average_k_factor(deliveries, weather, base_temp, min_hdd),
            weather=tuple(weather),
            base_temp=base_temp,
        )

    def model_for(self, after: date, target: date) -> str:
        if self.average_k_factor is not None and has_weather_between(
            self.weather, after + timedelta(days=1), target
        ):
            return MODEL_K_FACTOR
        return MODEL_BURN_RATE

    def usage_between(self, after: date, target: date) -> float:
        """Gallons burned from the end of `after` through `target`."""
        if target <= after:
            return 0.0
        if self.model_for(after, target) == MODEL_K_FACTOR:
            hdd = calculate_hdd(self.weather, after + timedelta(days=1), target, self.base_temp)
            return hdd / self.average_k_factor
        return self.burn_rate * (target - after).days

    def apply_delivery(self, level_before: float, delivery: Delivery) -> float:
        if delivery.filled_to_capacity:
            return self.tank_capacity
        return min(self.tank_capacity, level_before + delivery.gallons)


def replay_level(ordered: Sequence[Delivery], target: date, ctx: EstimationContext) -> float:
    """
    Walk deliveries (already in ascending date order) and return the level at `target`.

    Level starts at 0 when there is no history.
    """
    level = 0.0
    last_known = None

    for delivery in ordered:
        if last_known is not None:
            level = max(0.0, level - ctx.usage_between(last_known, delivery.date))
        level = ctx.apply_delivery(level, delivery)
        last_known = delivery.date

    if last_known is not None:
        level = max(0.0, level - ctx.usage_between(last_known, target))

    return min(ctx.tank_capacity, level)


@dataclass(frozen=True)
class TankStatus:
    """Estimated state of the tank on a given day. Never persisted."""
    estimated_gallons: float
    tank_capacity: float
    last_delivery_date: Optional[date] = None
    days_since_last_delivery: int = 0
    estimated_burn_rate: float = 0.0
    estimated_days_remaining: Optional[int] = None
    average_k_factor: Optional[float] = None
    consumption_model: Optional[str] = None

    @property
    def percent_full(self) -> float:
        if self.tank_capacity <= 0:
            return 0.0
        return self.estimated_gallons / self.tank_capacity * 100


def estimate_status(
    deliveries: Sequence[Delivery],
    weather: Sequence[WeatherDay],
    tank_capacity: float,
    today: date,
    base_temp: float = DEFAULT_HDD_BASE_F,
    min_hdd: float = K_FACTOR_MIN_HDD,
) -> TankStatus:
    """Reconstruct the level after the latest delivery and project it to `today`."""
    if not deliveries:
        return TankStatus(estimated_gallons=0.0, tank_capacity=tank_capacity)

    ordered = sort_deliveries(deliveries)
    ctx = EstimationContext.build(ordered, weather, tank_capacity, base_temp, min_hdd)

    last = ordered[-1]
    if last.filled_to_capacity:
        level_after_last = tank_capacity
    else:
        level_before_last = replay_level(ordered[:-1], last.date, ctx)
        level_after_last = min(tank_capacity, level_before_last + last.gallons)

    usage = ctx.usage_between(last.date, today)
    estimated = max(0.0, level_after_last - usage)

    days_remaining = None
    if ctx.burn_rate > 0:
        # Future weather is unknown, so the forecast always uses burn rate
        days_remaining = math.floor(estimated / ctx.burn_rate)

    return TankStatus(
        estimated_gallons=estimated,
        tank_capacity=tank_capacity,
        last_delivery_date=last.date,
        days_since_last_delivery=(today - last.date).days,
        estimated_burn_rate=ctx.burn_rate,
        estimated_days_remaining=days_remaining,
        average_k_factor=ctx.average_k_factor,
        consumption_model=ctx.model_for(last.date, today),
    )


def predict_refill_date(status: TankStatus, today: date) -> Optional[date]:
    """Day the tank is projected to run out, from the burn-rate days remaining."""
    if status.estimated_days_remaining is None or status.estimated_burn_rate <= 0:
        return None
    return today + timedelta(days=status.estimated_days_remaining)


class TankEstimatorService:
    """
    Tank-level estimation over the data store's current snapshot.

    Every call re-reads deliveries, weather and capacity and re-derives the
    consumption models; nothing is cached between calls.
    """

    def __init__(
        self,
        data_service,
        today: Optional[date] = None,
        base_temp: float = DEFAULT_HDD_BASE_F,
        min_hdd: float = K_FACTOR_MIN_HDD,
    ):
        self.data_service = data_service
        self._today = today
        self.base_temp = base_temp
        self.min_hdd = min_hdd

    @property
    def today(self) -> date:
        return self._today or date.today()

    def get_current_status(self) -> TankStatus:
        deliveries = self.data_service.get_deliveries()
        weather = self.data_service.get_weather_history()
        capacity = self.data_service.get_tank_capacity()

        if not deliveries:
            logger.warning("No deliveries recorded; reporting an empty tank")
        elif not weather:
            logger.info("No weather history; falling back to burn rate")

        status = estimate_status(deliveries, weather, capacity, self.today, self.base_temp, self.min_hdd)
        logger.info(
            f"Estimated {status.estimated_gallons:.1f}/{capacity:.0f} gal "
            f"(model={status.consumption_model}, burn_rate={status.estimated_burn_rate:.2f})"
        )
        return status

    def predict_refill_date(self, threshold_gallons: float) -> Optional[date]:
        """
        Projected refill date.

        `threshold_gallons` is accepted for callers' convenience; the date is
        derived from the burn-rate days remaining only.
        """
        return predict_refill_date(self.get_current_status(), self.today)

    def get_average_burn_rate(self) -> float:
        return calculate_burn_rate(self.data_service.get_deliveries())

    def get_average_k_factor(self) -> Optional[float]:
        return calculate_average_k_factor(
            self.data_service.get_deliveries(),
            self.data_service.get_weather_history(),
            self.base_temp,
            self.min_hdd,
        )

    def estimate_level_at(self, target_date: date) -> float:
        """Replay every delivery dated on or before `target_date` and return the level then."""
        deliveries = self.data_service.get_deliveries()
        weather = self.data_service.get_weather_history()
        capacity = self.data_service.get_tank_capacity()

        ordered = sort_deliveries(deliveries)
        ctx = EstimationContext.build(ordered, weather, capacity, self.base_temp, self.min_hdd)
        return replay_level([d for d in ordered if d.date <= target_date], target_date, ctx)
