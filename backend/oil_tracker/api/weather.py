from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from sqlalchemy import desc
from typing import List
from datetime import date

from oil_tracker.database import get_db
from oil_tracker.models import Temperature
from oil_tracker.schemas import TemperatureCreate, TemperatureResponse, TemperatureBulkUpload, HddResponse
from oil_tracker.scrapers.weather import WeatherScraper
from oil_tracker.services.data_service import DataService
from oil_tracker.services.degree_days import calculate_hdd, weather_in_range
from oil_tracker.services.snapshots import WeatherDay

router = APIRouter()


def _to_response(temp: Temperature, base_temp: float) -> dict:
    day = WeatherDay.from_orm(temp)
    return {
        "id": temp.id,
        "date": temp.date,
        "low_temp": temp.low_temp,
        "high_temp": temp.high_temp,
        "avg_temp": day.avg_temp,
        "avg_temp_c": round(day.avg_temp_c, 1),
        "hdd": day.hdd(base_temp),
    }


def _upsert(db: Session, record: TemperatureCreate) -> Temperature:
    existing = db.query(Temperature).filter(Temperature.date == record.date).first()
    if existing:
        existing.low_temp = record.low_temp
        existing.high_temp = record.high_temp
        return existing
    temp = Temperature(date=record.date, low_temp=record.low_temp, high_temp=record.high_temp)
    db.add(temp)
    return temp


@router.get("", response_model=List[TemperatureResponse])
async def list_temperatures(
    skip: int = 0,
    limit: int = 365,
    date_from: date = None,
    date_to: date = None,
    db: Session = Depends(get_db)
):
    """List daily weather with optional date filtering, newest first."""
    query = db.query(Temperature)

    if date_from:
        query = query.filter(Temperature.date >= date_from)

    if date_to:
        query = query.filter(Temperature.date <= date_to)

    base_temp = DataService(db).get_hdd_base()
    temps = query.order_by(desc(Temperature.date)).offset(skip).limit(limit).all()
    return [_to_response(t, base_temp) for t in temps]


@router.post("", response_model=TemperatureResponse)
async def create_temperature(record: TemperatureCreate, db: Session = Depends(get_db)):
    """Create or replace the record for a single day."""
    temp = _upsert(db, record)
    db.commit()
    db.refresh(temp)
    return _to_response(temp, DataService(db).get_hdd_base())


@router.post("/bulk")
async def bulk_upload_temperatures(upload: TemperatureBulkUpload, db: Session = Depends(get_db)):
    """Create or replace many days at once."""
    for record in upload.temperatures:
        _upsert(db, record)
    db.commit()
    return {"message": "Upload complete", "records": len(upload.temperatures)}


@router.get("/hdd", response_model=HddResponse)
async def get_hdd(
    start_date: date = Query(...),
    end_date: date = Query(...),
    base_temp: float = Query(None, description="HDD base in °F (defaults to the configured unit's base)"),
    db: Session = Depends(get_db)
):
    """Total heating degree days between two dates (inclusive)."""
    data = DataService(db)
    base = base_temp if base_temp is not None else data.get_hdd_base()
    weather = data.get_weather_history()
    return {
        "start_date": start_date,
        "end_date": end_date,
        "base_temp": base,
        "hdd": round(calculate_hdd(weather, start_date, end_date, base), 2),
        "days_with_data": len(weather_in_range(weather, start_date, end_date)),
    }


@router.post("/refresh")
async def refresh_weather(db: Session = Depends(get_db)):
    """Fetch any missing days up to yesterday from Open-Meteo."""
    records = await WeatherScraper().scrape(db)
    return {"message": "Weather refresh complete", "records": len(records)}
