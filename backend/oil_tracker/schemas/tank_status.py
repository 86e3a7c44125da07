from pydantic import BaseModel
from datetime import date
from typing import Optional


class TankStatusResponse(BaseModel):
    estimated_gallons: float
    tank_capacity: float
    percent_full: float
    last_delivery_date: Optional[date] = None
    days_since_last_delivery: int
    estimated_burn_rate: float
    estimated_days_remaining: Optional[int] = None
    average_k_factor: Optional[float] = None
    consumption_model: Optional[str] = None

    class Config:
        from_attributes = True


class RefillPredictionResponse(BaseModel):
    threshold_gallons: float
    predicted_date: Optional[date] = None


class ReminderResponse(BaseModel):
    alert: bool
    kind: Optional[str] = None
    message: Optional[str] = None
