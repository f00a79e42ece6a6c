#Marks routing as a package.
#Re-exports the distance model and the nearest-neighbor sequencer so other
#modules import from routing without knowing internal file names.
#No business logic.

from .distance import EARTH_RADIUS_KM, haversine_km, path_distance_km
from .sequencer import sequence_route

__all__ = [
    "EARTH_RADIUS_KM",
    "haversine_km",
    "path_distance_km",
    "sequence_route",
]
