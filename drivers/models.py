"""
Purpose: Core data models for the drivers domain.
What it does:
Defines the structure of a Driver and their status without relying on any ORM.
The batching engine only reads drivers; it never changes their state.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from orders.models import GeoPoint


class DriverStatus(str, Enum):
    """
    Single discriminant for "can this driver take new work right now".
    """
    AVAILABLE = "available"
    BUSY = "busy"
    OFFLINE = "offline"


@dataclass(frozen=True)
class Driver:
    """
    A purely stateless representation of a Driver at a specific point in time.
    """
    id: str
    name: str
    location: Optional[GeoPoint]
    status: DriverStatus = DriverStatus.AVAILABLE

    last_ping_at: Optional[datetime] = None

    @property
    def start_point(self) -> Optional[GeoPoint]:
        if self.location is None or not self.location.is_valid():
            return None
        return self.location

    @property
    def is_busy(self) -> bool:
        return self.status != DriverStatus.AVAILABLE

    @property
    def is_available(self) -> bool:
        # a driver we cannot place on the map cannot be routed
        return not self.is_busy and self.start_point is not None

    @classmethod
    def new(
        cls,
        driver_id: str,
        lat: Optional[float],
        lon: Optional[float],
        status: str | DriverStatus = DriverStatus.AVAILABLE,
        name: Optional[str] = None,
        last_ping_at: Optional[datetime] = None,
    ) -> Driver:
        if isinstance(status, str):
            status = DriverStatus(status.strip().lower())

        location = GeoPoint(lat, lon) if lat is not None and lon is not None else None

        return cls(
            id=driver_id,
            name=name or f"Driver-{driver_id}",
            location=location,
            status=status,
            last_ping_at=last_ping_at or datetime.now(),
        )
