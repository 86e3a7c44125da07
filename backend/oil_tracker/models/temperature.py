from sqlalchemy import Column, Integer, Numeric, Date
from oil_tracker.database import Base


class Temperature(Base):
    """Observed daily temperatures in °F, one row per calendar day."""
    __tablename__ = "temperatures"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False, unique=True, index=True)
    low_temp = Column(Numeric(5, 2), nullable=False)
    high_temp = Column(Numeric(5, 2), nullable=False)

    def __repr__(self):
        return f"<Temperature(id={self.id}, date={self.date}, low={self.low_temp}, high={self.high_temp})>"
