from dataclasses import dataclass
from typing import Optional

from oil_tracker.services.tank_estimator import TankStatus

ALERT_LOW_LEVEL = "low_level"
ALERT_LOW_DAYS = "low_days"


@dataclass(frozen=True)
class ReminderAlert:
    kind: str
    message: str


def evaluate_reminder(
    status: TankStatus,
    threshold_gallons: float,
    threshold_days: Optional[int] = None,
    enabled: bool = True,
) -> Optional[ReminderAlert]:
    """Low-level alert wins over low-days; None when nothing needs attention."""
    if not enabled:
        return None

    if status.estimated_gallons <= threshold_gallons:
        return ReminderAlert(
            kind=ALERT_LOW_LEVEL,
            message=(
                f"Tank level is low! Estimated {status.estimated_gallons:.0f} gallons remaining "
                f"(threshold: {threshold_gallons:.0f} gallons)"
            ),
        )

    days = status.estimated_days_remaining
    if threshold_days is not None and days is not None and days <= threshold_days:
        return ReminderAlert(
            kind=ALERT_LOW_DAYS,
            message=f"About {days} days of oil remaining (threshold: {threshold_days} days)",
        )

    return None
