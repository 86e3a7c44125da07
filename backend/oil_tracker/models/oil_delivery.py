from sqlalchemy import Column, Integer, Numeric, Date, DateTime, String, Boolean, CheckConstraint
from sqlalchemy.ext.hybrid import hybrid_property
from datetime import datetime
from oil_tracker.database import Base


class OilDelivery(Base):
    __tablename__ = "oil_deliveries"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False, index=True)
    gallons = Column(Numeric(10, 2), nullable=False)
    price_per_gallon = Column(Numeric(10, 4), nullable=False)
    notes = Column(String(500), nullable=False, default="")
    # True: level after delivery is the tank capacity.
    # False: level after delivery is the previous estimate plus gallons, capped at capacity.
    filled_to_capacity = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Constraints
    __table_args__ = (
        CheckConstraint('gallons > 0', name='check_gallons_positive'),
        CheckConstraint('price_per_gallon > 0', name='check_price_positive'),
    )

    @hybrid_property
    def total_cost(self):
        """Calculate total cost of the delivery."""
        return float(self.gallons) * float(self.price_per_gallon)

    def __repr__(self):
        return f"<OilDelivery(id={self.id}, date={self.date}, gallons={self.gallons})>"
