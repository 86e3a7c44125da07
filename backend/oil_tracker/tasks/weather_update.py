import logging
from oil_tracker.database import SessionLocal
from oil_tracker.scrapers.weather import WeatherScraper

logger = logging.getLogger(__name__)


async def update_weather_job():
    """
    Scheduled job to pull any missing daily weather up to yesterday
    for the configured home location.
    """
    logger.info("Starting scheduled weather update")
    session = SessionLocal()
    try:
        records = await WeatherScraper().scrape(session)
        logger.info(f"Weather update stored {len(records)} days")
    except Exception as e:
        logger.error(f"Weather update job failed: {e}")
        session.rollback()
    finally:
        session.close()
    logger.info("Scheduled weather update completed")
