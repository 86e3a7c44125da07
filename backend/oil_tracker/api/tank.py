from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional

from oil_tracker.config import settings
from oil_tracker.database import get_db
from oil_tracker.schemas import TankStatusResponse, RefillPredictionResponse, ReminderResponse
from oil_tracker.services.data_service import DataService
from oil_tracker.services.reminders import evaluate_reminder
from oil_tracker.services.tank_estimator import TankEstimatorService

router = APIRouter()


def get_estimator(db: Session = Depends(get_db)) -> TankEstimatorService:
    data = DataService(db)
    return TankEstimatorService(data, base_temp=data.get_hdd_base(), min_hdd=settings.k_factor_min_hdd)


@router.get("/status", response_model=TankStatusResponse)
async def get_status(estimator: TankEstimatorService = Depends(get_estimator)):
    """Estimated current tank level from delivery history and weather."""
    return TankStatusResponse.model_validate(estimator.get_current_status())


@router.get("/refill-prediction", response_model=RefillPredictionResponse)
async def get_refill_prediction(
    threshold_gallons: Optional[float] = Query(None, description="Defaults to the reminder threshold"),
    estimator: TankEstimatorService = Depends(get_estimator)
):
    """Projected refill date; null when no burn rate is established yet."""
    if threshold_gallons is None:
        threshold_gallons = estimator.data_service.get_settings().reminder_threshold_gallons
    return {
        "threshold_gallons": threshold_gallons,
        "predicted_date": estimator.predict_refill_date(threshold_gallons),
    }


@router.get("/burn-rate")
async def get_burn_rate(estimator: TankEstimatorService = Depends(get_estimator)):
    """Recency-weighted average gallons per day."""
    return {"burn_rate": round(estimator.get_average_burn_rate(), 3)}


@router.get("/k-factor")
async def get_k_factor(estimator: TankEstimatorService = Depends(get_estimator)):
    """Average HDD per gallon over cold-season delivery intervals."""
    k_factor = estimator.get_average_k_factor()
    return {"k_factor": round(k_factor, 3) if k_factor is not None else None}


@router.get("/level")
async def get_level_at(
    target_date: date = Query(..., description="Date to reconstruct the level for"),
    estimator: TankEstimatorService = Depends(get_estimator)
):
    """Reconstruct the tank level on any date by replaying deliveries."""
    gallons = estimator.estimate_level_at(target_date)
    return {"date": target_date, "estimated_gallons": round(gallons, 1)}


@router.get("/reminder", response_model=ReminderResponse)
async def get_reminder(estimator: TankEstimatorService = Depends(get_estimator)):
    """Whether the tank needs attention under the configured reminder thresholds."""
    tank_settings = estimator.data_service.get_settings()
    alert = evaluate_reminder(
        estimator.get_current_status(),
        threshold_gallons=tank_settings.reminder_threshold_gallons,
        threshold_days=tank_settings.reminder_threshold_days,
        enabled=tank_settings.reminder_enabled,
    )
    if alert is None:
        return {"alert": False}
    return {"alert": True, "kind": alert.kind, "message": alert.message}
