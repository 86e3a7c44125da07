from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from apscheduler.schedulers.asyncio import AsyncIOScheduler
import logging

from oil_tracker.config import settings
from oil_tracker.database import engine, Base
from oil_tracker.api import deliveries, weather, tank, reports
from oil_tracker.api import settings as settings_api
from oil_tracker.tasks.weather_update import update_weather_job


# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create scheduler
scheduler = AsyncIOScheduler()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting application...")
    Base.metadata.create_all(bind=engine)
    scheduler.start()

    # Schedule recurring tasks
    scheduler.add_job(
        update_weather_job,
        'cron',
        hour=settings.weather_refresh_hour,
        minute=0,
        id='daily_weather_update',
        replace_existing=True
    )
    logger.info(f"Scheduled daily weather update job for {settings.weather_refresh_hour:02d}:00")

    yield
    # Shutdown
    logger.info("Shutting down application...")
    scheduler.shutdown()


app = FastAPI(
    title="Heating Oil Tracker",
    description="Track oil deliveries, estimate tank level, and correlate usage with heating degree days",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(deliveries.router, prefix="/api/deliveries", tags=["Deliveries"])
app.include_router(weather.router, prefix="/api/weather", tags=["Weather"])
app.include_router(settings_api.router, prefix="/api/settings", tags=["Settings"])
app.include_router(tank.router, prefix="/api/tank", tags=["Tank"])
app.include_router(reports.router, prefix="/api/reports", tags=["Reports"])


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


@app.get("/")
async def root():
    return {"message": "Heating Oil Tracker API", "docs": "/docs"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("oil_tracker.main:app", host=settings.api_host, port=settings.api_port)
