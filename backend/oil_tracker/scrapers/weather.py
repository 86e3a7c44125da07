from datetime import date, timedelta
from typing import List, Optional
import httpx
from sqlalchemy import func
from sqlalchemy.orm import Session
from oil_tracker.config import settings
from oil_tracker.models import Temperature
from oil_tracker.services.data_service import get_or_create_settings
from oil_tracker.services.snapshots import WeatherDay, DEFAULT_HDD_BASE_F
import logging

logger = logging.getLogger(__name__)


class WeatherScraper:
    """
    Pulls daily high/low temperatures from the Open-Meteo archive API
    for the configured home location.
    """

    def __init__(self, url: Optional[str] = None, client: Optional[httpx.AsyncClient] = None):
        self.url = url or settings.weather_api_url
        self.client = client

    async def fetch(self, latitude: float, longitude: float, start_date: date, end_date: date) -> List[WeatherDay]:
        """Fetch daily weather in °F. A day with no readings at all is recorded as 65°F (zero HDD)."""
        params = {
            "latitude": f"{latitude:.4f}",
            "longitude": f"{longitude:.4f}",
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
            "daily": "temperature_2m_max,temperature_2m_min",
            "temperature_unit": "fahrenheit",
            "timezone": "auto"
        }

        try:
            if self.client is not None:
                response = await self.client.get(self.url, params=params, timeout=settings.weather_timeout)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(self.url, params=params, timeout=settings.weather_timeout)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Weather API error for {start_date}..{end_date}: {e}")
            return []

        daily = response.json().get("daily", {})
        dates = daily.get("time", [])
        highs = daily.get("temperature_2m_max", [])
        lows = daily.get("temperature_2m_min", [])

        results = []
        for i, d in enumerate(dates):
            try:
                high = highs[i] if i < len(highs) else None
                low = lows[i] if i < len(lows) else None
                # One missing reading takes the other's value; both missing means zero HDD
                if high is None and low is None:
                    high = low = DEFAULT_HDD_BASE_F
                elif high is None:
                    high = low
                elif low is None:
                    low = high
                results.append(WeatherDay(date=date.fromisoformat(d), high_temp=float(high), low_temp=float(low)))
            except ValueError as parse_err:
                logger.error(f"Error parsing weather day {d}: {parse_err}")
                continue

        return results

    async def scrape(self, db: Session, today: Optional[date] = None) -> list:
        """
        Fill the gap between the latest stored day (or the backfill window)
        and yesterday. Existing days are updated in place.
        """
        tank_settings = get_or_create_settings(db)
        if not tank_settings.has_location:
            logger.warning("No location configured, skipping weather refresh")
            return []

        end_date = (today or date.today()) - timedelta(days=1)
        latest = db.query(func.max(Temperature.date)).scalar()
        if latest:
            start_date = latest + timedelta(days=1)
        else:
            start_date = end_date - timedelta(days=settings.weather_backfill_days)

        if start_date > end_date:
            logger.info("Weather history already up to date")
            return []

        days = await self.fetch(tank_settings.latitude, tank_settings.longitude, start_date, end_date)

        total_records = []
        for day in days:
            # Update or Create
            existing = db.query(Temperature).filter(Temperature.date == day.date).first()
            if existing:
                existing.low_temp = day.low_temp
                existing.high_temp = day.high_temp
            else:
                db.add(Temperature(date=day.date, low_temp=day.low_temp, high_temp=day.high_temp))
            total_records.append(day)

        db.commit()
        logger.info(f"Updated/Added {len(total_records)} weather records for {tank_settings.display_name or 'home'}")
        return total_records
