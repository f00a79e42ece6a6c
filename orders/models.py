"""
Purpose: Domain models for the Orders capability.
What it does:
- Defines core data structures:
- GeoPoint (lat, lon value type)
- Order (id, pickup / business / dropoff locations, driver assignment, status)
- RouteNode (type PICKUP/DROPOFF, order_id, location, leg distance)
- Batch (driver, ordered orders, route, total distance, status)

Defines enums/constants:
- OrderStatus = PENDING | READY | ASSIGNED | DELIVERED | CANCELLED
- StopType = PICKUP | DROPOFF
- BatchStatus = ASSIGNED | DELIVERING | COMPLETED | CANCELLED

Rule: No distance math, no batching logic. Models only.
"""
from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

LatLon = Tuple[float, float]


class OrderStatus(str, Enum):
    PENDING = "pending"
    READY = "ready"
    ASSIGNED = "assigned"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class StopType(str, Enum):
    PICKUP = "pickup"
    DROPOFF = "dropoff"


class BatchStatus(str, Enum):
    """
    Batches are always created as ASSIGNED. Every later transition is owned by
    the order-fulfillment side, not by the batching engine.
    """
    ASSIGNED = "assigned"
    DELIVERING = "delivering"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class GeoPoint:
    """
    A WGS84 coordinate in decimal degrees.
    """
    lat: float
    lon: float

    def is_valid(self) -> bool:
        try:
            lat = float(self.lat)
            lon = float(self.lon)
        except (TypeError, ValueError):
            return False
        if not (math.isfinite(lat) and math.isfinite(lon)):
            return False
        return -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0

    def as_tuple(self) -> LatLon:
        return (self.lat, self.lon)


def _usable(point: Optional[GeoPoint]) -> Optional[GeoPoint]:
    if point is None or not point.is_valid():
        return None
    return point


@dataclass(frozen=True)
class RouteNode:
    """
    A single stop in a route. For precedence constraints:
    each order has one PICKUP node that must occur before its DROPOFF node.
    """
    location: GeoPoint
    stop_type: StopType
    order_id: str
    distance_from_previous_km: Optional[float] = None

    def __repr__(self) -> str:
        return f"RouteNode({self.stop_type.value}:{self.order_id})"


@dataclass(frozen=True)
class Order:
    """
    A pickup/dropoff errand.

    The pickup is the explicit pickup location when present, otherwise the
    business (store) location the order is fetched from.
    """
    id: str
    dropoff: Optional[GeoPoint] = None
    pickup: Optional[GeoPoint] = None
    business_location: Optional[GeoPoint] = None

    driver_id: Optional[str] = None
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def pickup_point(self) -> Optional[GeoPoint]:
        return _usable(self.pickup) or _usable(self.business_location)

    @property
    def dropoff_point(self) -> Optional[GeoPoint]:
        return _usable(self.dropoff)

    @property
    def is_batchable(self) -> bool:
        return self.pickup_point is not None and self.dropoff_point is not None

    def pickup_node(self) -> RouteNode:
        return RouteNode(location=self.pickup_point, stop_type=StopType.PICKUP, order_id=self.id)

    def dropoff_node(self) -> RouteNode:
        return RouteNode(location=self.dropoff_point, stop_type=StopType.DROPOFF, order_id=self.id)


@dataclass
class Batch:
    """
    Output of batching: orders handed to one driver with a concrete stop sequence.
    """
    id: str
    driver_id: str
    driver_name: str
    orders: List[Order]
    route: List[RouteNode]
    total_distance_km: float

    status: BatchStatus = BatchStatus.ASSIGNED
    assigned_at: datetime = field(default_factory=datetime.now)

    @staticmethod
    def new(
        driver_id: str,
        driver_name: str,
        orders: List[Order],
        route: List[RouteNode],
        total_distance_km: float,
    ) -> Batch:
        return Batch(
            id=f"BATCH-{uuid.uuid4()}",
            driver_id=driver_id,
            driver_name=driver_name,
            orders=list(orders),
            route=list(route),
            total_distance_km=total_distance_km,
        )

    @property
    def order_ids(self) -> List[str]:
        return [order.id for order in self.orders]

    @property
    def size(self) -> int:
        return len(self.orders)

    def waypoints(self) -> List[LatLon]:
        """
        Ordered (lat, lon) stops, ready to feed a directions / navigation service.
        """
        return [node.location.as_tuple() for node in self.route]

    def stop_index(self, order_id: str, stop_type: StopType) -> int:
        for index, node in enumerate(self.route):
            if node.order_id == order_id and node.stop_type == stop_type:
                return index
        return -1

    def __repr__(self) -> str:
        return f"Batch({self.driver_id}, orders={self.order_ids}, dist={self.total_distance_km:.2f}km)"
