#Purpose: Straight-line travel-cost model.
#Great-circle (haversine) distance is the proxy for travel cost everywhere in
#batching; there is no road network lookup here.
#Pure functions only: no state, no I/O, never raises for valid GeoPoints.

from __future__ import annotations

import math
from typing import Optional, Sequence

from orders.models import GeoPoint

EARTH_RADIUS_KM = 6371.0


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    """
    Great-circle distance between two points in kilometers.
    Symmetric, and zero for identical points.
    """
    lat1, lon1, lat2, lon2 = map(math.radians, (a.lat, a.lon, b.lat, b.lon))

    dlat = lat2 - lat1
    dlon = lon2 - lon1
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # rounding can push h a hair above 1 for antipodal points
    if h > 1.0:
        h = 1.0
    c = 2 * math.asin(math.sqrt(h))
    return EARTH_RADIUS_KM * c


def path_distance_km(points: Sequence[GeoPoint], start: Optional[GeoPoint] = None) -> float:
    """
    Sum of consecutive legs along `points`, beginning with start -> points[0]
    when a start location is given.
    """
    if not points:
        return 0.0

    total = 0.0
    previous = start
    for point in points:
        if previous is not None:
            total += haversine_km(previous, point)
        previous = point
    return total
