from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Literal, Optional


class TankSettingsBase(BaseModel):
    tank_capacity: float = 275.0
    display_name: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    temperature_unit: Literal["F", "C"] = "F"
    fuel_type: Literal["OIL", "KEROSENE", "PROPANE"] = "OIL"
    reminder_enabled: bool = True
    reminder_threshold_gallons: float = 50.0
    reminder_threshold_days: Optional[int] = None


class TankSettingsUpdate(BaseModel):
    tank_capacity: Optional[float] = None
    display_name: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    temperature_unit: Optional[Literal["F", "C"]] = None
    fuel_type: Optional[Literal["OIL", "KEROSENE", "PROPANE"]] = None
    reminder_enabled: Optional[bool] = None
    reminder_threshold_gallons: Optional[float] = None
    reminder_threshold_days: Optional[int] = None

    @field_validator('tank_capacity', 'temperature_unit', 'fuel_type', 'reminder_enabled', 'reminder_threshold_gallons')
    @classmethod
    def not_null(cls, v, info):
        # display_name, location and reminder_threshold_days may be cleared; these may not
        if v is None:
            raise ValueError(f'{info.field_name} cannot be null')
        return v

    @field_validator('tank_capacity')
    @classmethod
    def capacity_positive(cls, v):
        if v is not None and v <= 0:
            raise ValueError('Tank capacity must be positive')
        return v


class TankSettingsResponse(TankSettingsBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
