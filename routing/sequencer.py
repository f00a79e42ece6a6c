#Purpose: Standalone stop ordering for an already fixed set of orders.
#Greedy nearest-neighbor over all pickups first, then over all dropoffs.
#Every pickup therefore precedes every dropoff, which is coarser than the
#per-order precedence the insertion planner keeps, but cheap (O(n^2)).
#Batches built by orders.batching already carry their own route; this module
#is for contexts with no detour constraint (e.g. re-ordering one fixed batch).

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from orders.models import GeoPoint, Order, RouteNode
from .distance import haversine_km

logger = logging.getLogger(__name__)


def _take_nearest(current: GeoPoint, pool: List[RouteNode]) -> RouteNode:
    """
    Remove and return the node closest to `current`, annotated with the leg
    distance. Ties go to the earliest node in the pool.
    """
    nearest_index = 0
    nearest_distance = float("inf")
    for index, node in enumerate(pool):
        distance = haversine_km(current, node.location)
        if distance < nearest_distance:
            nearest_distance = distance
            nearest_index = index

    node = pool.pop(nearest_index)
    return RouteNode(
        location=node.location,
        stop_type=node.stop_type,
        order_id=node.order_id,
        distance_from_previous_km=nearest_distance,
    )


def sequence_route(
    orders: Sequence[Order],
    driver_start: Optional[GeoPoint],
    explicit_start: Optional[GeoPoint] = None,
) -> List[RouteNode]:
    """
    Order the pickups and dropoffs of `orders` into a travel sequence.

    Seeding:
      - explicit_start given: used as the current position (not emitted as a stop)
      - otherwise the first pickup is emitted first; its leg is measured from
        the driver start, or 0 km when the driver location is unknown

    Orders without a resolvable pickup or dropoff are skipped.
    """
    pickups: List[RouteNode] = []
    dropoffs: List[RouteNode] = []

    for order in orders:
        if not order.is_batchable:
            logger.debug("Skipping order %s in sequencing: unresolvable geometry", order.id)
            continue
        pickups.append(order.pickup_node())
        dropoffs.append(order.dropoff_node())

    if not pickups:
        return []

    route: List[RouteNode] = []

    if explicit_start is not None and explicit_start.is_valid():
        current = explicit_start
    else:
        first = pickups.pop(0)
        leg = 0.0
        if driver_start is not None and driver_start.is_valid():
            leg = haversine_km(driver_start, first.location)
        route.append(RouteNode(first.location, first.stop_type, first.order_id, leg))
        current = first.location

    for pool in (pickups, dropoffs):
        while pool:
            node = _take_nearest(current, pool)
            route.append(node)
            current = node.location

    return route
