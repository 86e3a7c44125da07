"""
Shared fixtures: an in-memory database, an API client bound to it,
and a snapshot-only data service for the estimation engine.
"""

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import oil_tracker.models  # noqa: F401  (registers tables on Base.metadata)
from oil_tracker.database import Base, get_db
from oil_tracker.services.snapshots import Delivery, WeatherDay


class FakeDataService:
    """Stands in for DataService with fixed snapshots."""

    def __init__(self, deliveries=None, weather=None, capacity=275.0):
        self.deliveries = list(deliveries or [])
        self.weather = list(weather or [])
        self.capacity = capacity

    def get_deliveries(self):
        return list(self.deliveries)

    def get_weather_history(self):
        return list(self.weather)

    def get_tank_capacity(self):
        return self.capacity


def make_delivery(day, gallons, filled=True, price=3.50, delivery_id=None):
    return Delivery(
        id=delivery_id,
        date=day,
        gallons=gallons,
        price_per_gallon=price,
        filled_to_capacity=filled,
    )


def make_weather(start, days, hdd_per_day, base=65.0):
    """Consecutive days whose average sits `hdd_per_day` below the base."""
    temp = base - hdd_per_day
    return [WeatherDay(date=start + timedelta(days=i), high_temp=temp, low_temp=temp) for i in range(days)]


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db_session):
    from oil_tracker.main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        # No context manager: the lifespan (scheduler) is not started
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def today():
    return date.today()
