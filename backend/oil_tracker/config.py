from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite:///./oil_tracker.db"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8028
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:8080", "http://localhost:3000"]

    # Tank / estimation
    default_tank_capacity: float = 275.0
    hdd_base_temp: float = 65.0
    k_factor_min_hdd: float = 200.0  # Shoulder-season intervals below this are ignored

    # Weather (Open-Meteo archive)
    weather_api_url: str = "https://archive-api.open-meteo.com/v1/archive"
    weather_timeout: float = 30.0
    weather_backfill_days: int = 365
    weather_refresh_hour: int = 3

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
