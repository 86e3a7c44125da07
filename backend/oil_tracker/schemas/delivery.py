from pydantic import BaseModel, field_validator
from datetime import date, datetime
import datetime as dt
from typing import List, Optional
from decimal import Decimal


class DeliveryBase(BaseModel):
    date: date
    gallons: Decimal
    price_per_gallon: Decimal
    notes: str = ""
    filled_to_capacity: bool = True

    @field_validator('gallons', 'price_per_gallon')
    @classmethod
    def must_be_positive(cls, v):
        if v <= 0:
            raise ValueError('Value must be positive')
        return v


class DeliveryCreate(DeliveryBase):
    pass


class DeliveryUpdate(BaseModel):
    # Omit a field to leave it unchanged; none of them may be cleared
    date: Optional[dt.date] = None
    gallons: Optional[Decimal] = None
    price_per_gallon: Optional[Decimal] = None
    notes: Optional[str] = None
    filled_to_capacity: Optional[bool] = None

    @field_validator('date', 'gallons', 'price_per_gallon', 'notes', 'filled_to_capacity')
    @classmethod
    def not_null(cls, v, info):
        if v is None:
            raise ValueError(f'{info.field_name} cannot be null')
        return v

    @field_validator('gallons', 'price_per_gallon')
    @classmethod
    def must_be_positive(cls, v):
        if v <= 0:
            raise ValueError('Value must be positive')
        return v


class DeliveryResponse(DeliveryBase):
    id: int
    total_cost: Optional[float] = None
    days_since_last_fill: Optional[int] = None
    gallons_per_day: Optional[float] = None
    interval_hdd: Optional[float] = None
    k_factor: Optional[float] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CsvImportResponse(BaseModel):
    success: bool
    total_rows: int
    imported_count: int
    skipped_count: int
    errors: List[str]
