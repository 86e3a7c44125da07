from pydantic import BaseModel
from typing import Optional


class YearlySummaryResponse(BaseModel):
    year: int
    total_gallons: float
    total_cost: float
    delivery_count: int
    avg_price_per_gallon: float
    total_hdd: Optional[float] = None
    cost_per_hdd: Optional[float] = None
    avg_k_factor: Optional[float] = None
    total_co2_lbs: float
    total_co2_kg: float
    total_co2_metric_tons: float
    co2_lbs_per_hdd: Optional[float] = None
    offset_cost_low: float
    offset_cost_high: float

    class Config:
        from_attributes = True


class SeasonalBreakdownResponse(BaseModel):
    year: int
    heating_season_gallons: float
    heating_season_cost: float
    heating_season_deliveries: int
    heating_season_hdd: Optional[float] = None
    off_season_gallons: float
    off_season_cost: float
    off_season_deliveries: int
    off_season_hdd: Optional[float] = None
    heating_season_cost_percent: float
    off_season_cost_percent: float
    total_cost: float
    total_gallons: float
    heating_season_co2_lbs: float
    off_season_co2_lbs: float
    heating_season_co2_percent: float
    off_season_co2_percent: float
    total_co2_lbs: float

    class Config:
        from_attributes = True
