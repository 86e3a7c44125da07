from oil_tracker.models.oil_delivery import OilDelivery
from oil_tracker.models.temperature import Temperature
from oil_tracker.models.tank_settings import TankSettings

__all__ = [
    "OilDelivery",
    "Temperature",
    "TankSettings",
]
