"""
Purpose: Find the cheapest place to splice one more order into a route.
What it does:

For a candidate order, tries every (pickup position, dropoff position) pair with
the dropoff strictly after the pickup, and keeps the sequence that adds the
least great-circle distance ("detour").

This is the only way an order joins a non-empty batch route, and precedence
holds by construction: the search space never contains dropoff <= pickup.

Complexity: O(L^2) position pairs x O(L) to price each sequence.
Batches are capped (BatchingPolicy.max_orders_per_batch), which bounds L.
"""

# orders/batching/insertion.py

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from routing.distance import path_distance_km

from ..models import GeoPoint, RouteNode, StopType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InsertionResult:
    """
    Best splice found for one candidate order.
    """
    route: List[RouteNode]
    detour_km: float

    # Diagnostics
    explored: int = 0


def route_distance_km(route: Sequence[RouteNode], driver_start: Optional[GeoPoint]) -> float:
    """
    Total distance driver_start -> node_1 -> ... -> node_n.
    Without a driver start the distance begins at the first node.
    """
    return path_distance_km([node.location for node in route], start=driver_start)


def best_insertion(
    route: Sequence[RouteNode],
    pickup: GeoPoint,
    dropoff: GeoPoint,
    driver_start: Optional[GeoPoint],
    order_id: str,
) -> Optional[InsertionResult]:
    """
    Evaluate inserting a pickup+dropoff pair into `route` at every valid
    position pair and return the minimum-detour result.

    Positions are indices in the new sequence: pickup p in [0, L],
    dropoff d in [p+1, L+1]. The first minimal candidate in scan order wins ties.
    Returns None only when no candidate prices to a finite distance.
    """
    existing = list(route)
    n = len(existing)
    current_km = route_distance_km(existing, driver_start)

    new_pickup = RouteNode(location=pickup, stop_type=StopType.PICKUP, order_id=order_id)
    new_dropoff = RouteNode(location=dropoff, stop_type=StopType.DROPOFF, order_id=order_id)

    best_detour = float("inf")
    best_route: Optional[List[RouteNode]] = None
    explored = 0

    for p in range(n + 1):
        with_pickup = existing[:p] + [new_pickup] + existing[p:]
        for d in range(p + 1, n + 2):
            explored += 1
            seq = with_pickup[:d] + [new_dropoff] + with_pickup[d:]

            detour = route_distance_km(seq, driver_start) - current_km
            if not math.isfinite(detour):
                continue
            if detour < best_detour:
                best_detour = detour
                best_route = seq

    if best_route is None:
        logger.debug("No finite insertion for order %s (%d sequences explored)", order_id, explored)
        return None

    return InsertionResult(route=best_route, detour_km=best_detour, explored=explored)
