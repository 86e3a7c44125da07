"""
Tests for reminder evaluation on top of the tank status.
"""

from oil_tracker.services.reminders import ALERT_LOW_DAYS, ALERT_LOW_LEVEL, evaluate_reminder
from oil_tracker.services.tank_estimator import TankStatus


def status(gallons, days_remaining=None):
    return TankStatus(
        estimated_gallons=gallons,
        tank_capacity=275,
        estimated_burn_rate=3.0 if days_remaining is not None else 0.0,
        estimated_days_remaining=days_remaining,
    )


class TestEvaluateReminder:

    def test_disabled(self):
        assert evaluate_reminder(status(10), threshold_gallons=50, enabled=False) is None

    def test_low_level(self):
        alert = evaluate_reminder(status(40), threshold_gallons=50)
        assert alert.kind == ALERT_LOW_LEVEL
        assert "40 gallons" in alert.message

    def test_at_threshold_is_low(self):
        assert evaluate_reminder(status(50), threshold_gallons=50).kind == ALERT_LOW_LEVEL

    def test_low_days(self):
        alert = evaluate_reminder(status(120, days_remaining=10), threshold_gallons=50, threshold_days=14)
        assert alert.kind == ALERT_LOW_DAYS
        assert "10 days" in alert.message

    def test_low_level_wins(self):
        alert = evaluate_reminder(status(30, days_remaining=10), threshold_gallons=50, threshold_days=14)
        assert alert.kind == ALERT_LOW_LEVEL

    def test_no_days_threshold(self):
        assert evaluate_reminder(status(120, days_remaining=10), threshold_gallons=50) is None

    def test_unknown_days_remaining(self):
        assert evaluate_reminder(status(120), threshold_gallons=50, threshold_days=14) is None

    def test_plenty_left(self):
        assert evaluate_reminder(status(200, days_remaining=60), threshold_gallons=50, threshold_days=14) is None
