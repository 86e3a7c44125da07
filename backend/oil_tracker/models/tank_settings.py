from sqlalchemy import Column, Integer, String, DateTime, Float, Boolean
from datetime import datetime
from oil_tracker.database import Base


class TankSettings(Base):
    """Single-row household configuration: tank, location and reminders."""
    __tablename__ = "tank_settings"

    id = Column(Integer, primary_key=True, index=True)
    tank_capacity = Column(Float, nullable=False, default=275.0)  # Default 275 gallon tank
    display_name = Column(String(255), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    temperature_unit = Column(String(1), nullable=False, default="F")
    fuel_type = Column(String(20), nullable=False, default="OIL")

    # Reminders
    reminder_enabled = Column(Boolean, nullable=False, default=True)
    reminder_threshold_gallons = Column(Float, nullable=False, default=50.0)
    reminder_threshold_days = Column(Integer, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def __repr__(self):
        return f"<TankSettings(id={self.id}, tank_capacity={self.tank_capacity})>"
