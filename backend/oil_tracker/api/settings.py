from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from oil_tracker.database import get_db
from oil_tracker.schemas import TankSettingsUpdate, TankSettingsResponse
from oil_tracker.services.data_service import get_or_create_settings

router = APIRouter()


@router.get("", response_model=TankSettingsResponse)
async def get_settings(db: Session = Depends(get_db)):
    """Get tank, location and reminder settings."""
    return get_or_create_settings(db)


@router.put("", response_model=TankSettingsResponse)
async def update_settings(
    settings_update: TankSettingsUpdate,
    db: Session = Depends(get_db)
):
    """Update tank, location and reminder settings."""
    tank_settings = get_or_create_settings(db)

    update_data = settings_update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(tank_settings, field, value)

    db.commit()
    db.refresh(tank_settings)
    return tank_settings
