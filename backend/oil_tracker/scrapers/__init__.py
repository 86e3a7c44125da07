from oil_tracker.scrapers.weather import WeatherScraper

__all__ = ["WeatherScraper"]
