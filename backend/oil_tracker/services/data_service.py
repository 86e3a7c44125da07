from typing import List
import logging
from sqlalchemy.orm import Session

from oil_tracker.config import settings
from oil_tracker.models import OilDelivery, Temperature, TankSettings
from oil_tracker.services.snapshots import Delivery, WeatherDay, hdd_base_for_unit

logger = logging.getLogger(__name__)


def get_or_create_settings(db: Session) -> TankSettings:
    """Return the single settings row, creating it with defaults on first use."""
    tank_settings = db.query(TankSettings).order_by(TankSettings.id).first()
    if tank_settings:
        return tank_settings

    logger.info("No tank settings found, creating defaults")
    tank_settings = TankSettings(tank_capacity=settings.default_tank_capacity)
    db.add(tank_settings)
    db.commit()
    db.refresh(tank_settings)
    return tank_settings


class DataService:
    """Reads the store and hands immutable snapshots to the estimation engine."""

    def __init__(self, db: Session):
        self.db = db

    def get_deliveries(self) -> List[Delivery]:
        rows = self.db.query(OilDelivery).order_by(OilDelivery.date, OilDelivery.id).all()
        return [Delivery.from_orm(r) for r in rows]

    def get_weather_history(self) -> List[WeatherDay]:
        rows = self.db.query(Temperature).order_by(Temperature.date).all()
        return [WeatherDay.from_orm(r) for r in rows]

    def get_tank_capacity(self) -> float:
        return float(get_or_create_settings(self.db).tank_capacity)

    def get_settings(self) -> TankSettings:
        return get_or_create_settings(self.db)

    def get_hdd_base(self) -> float:
        """HDD base from the user's unit preference, or the configured default for °F."""
        tank_settings = get_or_create_settings(self.db)
        if tank_settings.temperature_unit == "C":
            return hdd_base_for_unit("C")
        return settings.hdd_base_temp
