from pydantic import BaseModel, model_validator
from datetime import date
from typing import Optional, List
from decimal import Decimal


class TemperatureBase(BaseModel):
    date: date
    low_temp: Decimal
    high_temp: Decimal

    @model_validator(mode='after')
    def low_not_above_high(self):
        if self.low_temp > self.high_temp:
            raise ValueError('low_temp must not exceed high_temp')
        return self


class TemperatureCreate(TemperatureBase):
    pass


class TemperatureResponse(TemperatureBase):
    id: int
    avg_temp: Optional[float] = None
    avg_temp_c: Optional[float] = None
    hdd: Optional[float] = None

    class Config:
        from_attributes = True


class TemperatureBulkUpload(BaseModel):
    temperatures: List[TemperatureCreate]


class HddResponse(BaseModel):
    start_date: date
    end_date: date
    base_temp: float
    hdd: float
    days_with_data: int
