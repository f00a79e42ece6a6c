#Drivers domain package.
#Re-exports the driver model and the availability filter used by batching.

from .models import Driver, DriverStatus
from .selection import filter_available_drivers

__all__ = [
    "Driver",
    "DriverStatus",
    "filter_available_drivers",
]
