from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Response
from sqlalchemy.orm import Session
from sqlalchemy import desc
from datetime import date
from typing import Dict, List
import logging

from oil_tracker.database import get_db
from oil_tracker.models import OilDelivery
from oil_tracker.schemas import DeliveryCreate, DeliveryUpdate, DeliveryResponse, CsvImportResponse
from oil_tracker.services.csv_import import export_deliveries_csv, import_deliveries_csv
from oil_tracker.services.data_service import DataService
from oil_tracker.services.delivery_history import DeliveryInterval, delivery_intervals

router = APIRouter()
logger = logging.getLogger(__name__)


def _get_delivery_or_404(db: Session, delivery_id: int) -> OilDelivery:
    delivery = db.query(OilDelivery).filter(OilDelivery.id == delivery_id).first()
    if not delivery:
        raise HTTPException(status_code=404, detail="Delivery not found")
    return delivery


def _intervals(db: Session) -> Dict[int, DeliveryInterval]:
    data = DataService(db)
    return delivery_intervals(data.get_deliveries(), data.get_weather_history(), data.get_hdd_base())


def _to_response(delivery: OilDelivery, interval: DeliveryInterval) -> dict:
    return {
        "id": delivery.id,
        "date": delivery.date,
        "gallons": delivery.gallons,
        "price_per_gallon": delivery.price_per_gallon,
        "notes": delivery.notes,
        "filled_to_capacity": delivery.filled_to_capacity,
        "total_cost": delivery.total_cost,
        "days_since_last_fill": interval.days_since_last_fill,
        "gallons_per_day": interval.gallons_per_day,
        "interval_hdd": interval.interval_hdd,
        "k_factor": interval.k_factor,
        "created_at": delivery.created_at,
        "updated_at": delivery.updated_at,
    }


@router.get("", response_model=List[DeliveryResponse])
async def list_deliveries(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db)
):
    """List deliveries, newest first, with figures for the interval since the previous delivery."""
    intervals = _intervals(db)
    deliveries = db.query(OilDelivery).order_by(desc(OilDelivery.date)).offset(skip).limit(limit).all()
    return [_to_response(d, intervals.get(d.id, DeliveryInterval())) for d in deliveries]


@router.post("", response_model=DeliveryResponse)
async def create_delivery(delivery: DeliveryCreate, db: Session = Depends(get_db)):
    """Record a new delivery. Deliveries may be entered in any date order."""
    db_delivery = OilDelivery(**delivery.model_dump())
    db.add(db_delivery)
    db.commit()
    db.refresh(db_delivery)
    return db_delivery


@router.post("/import", response_model=CsvImportResponse)
async def import_deliveries(
    file: UploadFile = File(...),
    db: Session = Depends(get_db)
):
    """
    Import deliveries from a CSV export.
    Expected columns: Date, Gallons, Price Per Gallon, optional Notes and Filled.
    Rows on a date that already has a delivery are skipped.
    """
    content = await file.read()
    try:
        text = content.decode('utf-8-sig')
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="CSV file must be UTF-8 encoded")

    existing_dates = {d for (d,) in db.query(OilDelivery.date).all()}
    result = import_deliveries_csv(text, existing_dates)

    for delivery in result.imported_deliveries:
        db.add(OilDelivery(
            date=delivery.date,
            gallons=delivery.gallons,
            price_per_gallon=delivery.price_per_gallon,
            notes=delivery.notes,
            filled_to_capacity=delivery.filled_to_capacity,
        ))
    db.commit()

    return {
        "success": result.success,
        "total_rows": result.total_rows,
        "imported_count": result.imported_count,
        "skipped_count": result.skipped_count,
        "errors": result.errors,
    }


@router.get("/export")
async def export_deliveries(db: Session = Depends(get_db)):
    """Download every delivery as CSV, in the same columns the importer reads."""
    content = export_deliveries_csv(DataService(db).get_deliveries())
    filename = f"oil_deliveries_{date.today():%Y%m%d}.csv"
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{delivery_id}", response_model=DeliveryResponse)
async def get_delivery(delivery_id: int, db: Session = Depends(get_db)):
    """Get a specific delivery."""
    delivery = _get_delivery_or_404(db, delivery_id)
    return _to_response(delivery, _intervals(db).get(delivery.id, DeliveryInterval()))


@router.put("/{delivery_id}", response_model=DeliveryResponse)
async def update_delivery(
    delivery_id: int,
    delivery_update: DeliveryUpdate,
    db: Session = Depends(get_db)
):
    """Update a delivery."""
    delivery = _get_delivery_or_404(db, delivery_id)

    update_data = delivery_update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(delivery, field, value)

    db.commit()
    db.refresh(delivery)
    return delivery


@router.delete("/{delivery_id}")
async def delete_delivery(delivery_id: int, db: Session = Depends(get_db)):
    """Delete a delivery."""
    delivery = _get_delivery_or_404(db, delivery_id)
    db.delete(delivery)
    db.commit()
    logger.info(f"Deleted delivery {delivery_id}")
    return {"message": "Delivery deleted"}
