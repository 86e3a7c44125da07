from oil_tracker.schemas.delivery import DeliveryCreate, DeliveryUpdate, DeliveryResponse, CsvImportResponse
from oil_tracker.schemas.temperature import TemperatureCreate, TemperatureResponse, TemperatureBulkUpload, HddResponse
from oil_tracker.schemas.tank_settings import TankSettingsUpdate, TankSettingsResponse
from oil_tracker.schemas.tank_status import TankStatusResponse, RefillPredictionResponse, ReminderResponse
from oil_tracker.schemas.report import YearlySummaryResponse, SeasonalBreakdownResponse

__all__ = [
    "DeliveryCreate", "DeliveryUpdate", "DeliveryResponse", "CsvImportResponse",
    "TemperatureCreate", "TemperatureResponse", "TemperatureBulkUpload", "HddResponse",
    "TankSettingsUpdate", "TankSettingsResponse",
    "TankStatusResponse", "RefillPredictionResponse", "ReminderResponse",
    "YearlySummaryResponse", "SeasonalBreakdownResponse",
]
