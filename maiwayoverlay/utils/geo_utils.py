import math
from typing import Iterable, List, Optional, Sequence

import numpy as np

from ..models.route_segments import Coordinate

EARTH_RADIUS_M = 6371000.0  # Earth's radius in meters
COORD_KEY_PRECISION = 6  # ~0.11 m


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate haversine distance between two points in meters"""
    lat1_rad = math.radians(lat1)
    lon1_rad = math.radians(lon1)
    lat2_rad = math.radians(lat2)
    lon2_rad = math.radians(lon2)
    dlat = lat2_rad - lat1_rad
    dlon = lon2_rad - lon1_rad
    a = (math.sin(dlat/2)**2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon/2)**2)
    c = 2 * math.asin(math.sqrt(min(1.0, a)))
    return EARTH_RADIUS_M * c


def is_valid_coordinate(c) -> bool:
    """Finite, in range, and not the (0, 0) "unset" sentinel"""
    if c is None:
        return False
    lat = getattr(c, 'latitude', None)
    lon = getattr(c, 'longitude', None)
    for value in (lat, lon):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        if not math.isfinite(value):
            return False
    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        return False
    return not (lat == 0 and lon == 0)


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    return haversine_distance(a.latitude, a.longitude, b.latitude, b.longitude)


def polyline_length_meters(coords: Sequence[Coordinate]) -> float:
    total = 0.0
    for i in range(1, len(coords)):
        total += distance_meters(coords[i - 1], coords[i])
    return total


def coord_key(c: Coordinate, precision: int = COORD_KEY_PRECISION) -> str:
    return f"{c.latitude:.{precision}f},{c.longitude:.{precision}f}"


def offset(c: Coordinate, d_lon: float, d_lat: float) -> Coordinate:
    """Shift a coordinate by a few degrees; used to pull apart coincident markers"""
    latitude = max(-90.0, min(90.0, c.latitude + d_lat))
    longitude = c.longitude + d_lon
    if not -180 <= longitude <= 180:
        # Wrap across the antimeridian
        longitude = (longitude + 180) % 360 - 180
    return Coordinate(latitude=latitude, longitude=longitude)


def valid_points(coords: Optional[Iterable[Coordinate]]) -> List[Coordinate]:
    if not coords:
        return []
    return [c for c in coords if is_valid_coordinate(c)]


def first_valid_point(coords: Optional[Iterable[Coordinate]]) -> Optional[Coordinate]:
    for c in coords or ():
        if is_valid_coordinate(c):
            return c
    return None


def last_valid_point(coords: Optional[Sequence[Coordinate]]) -> Optional[Coordinate]:
    for c in reversed(coords or ()):
        if is_valid_coordinate(c):
            return c
    return None


def haversine_distances(points: Sequence[Coordinate], target: Coordinate) -> np.ndarray:
    """Vectorised haversine distance (meters) from every point to target"""
    lats = np.radians(np.array([p.latitude for p in points], dtype=float))
    lons = np.radians(np.array([p.longitude for p in points], dtype=float))
    t_lat = math.radians(target.latitude)
    t_lon = math.radians(target.longitude)
    a = (np.sin((t_lat - lats) / 2) ** 2 +
         np.cos(lats) * math.cos(t_lat) * np.sin((t_lon - lons) / 2) ** 2)
    return 2 * EARTH_RADIUS_M * np.arcsin(np.sqrt(np.minimum(a, 1.0)))


def nearest_index(points: Sequence[Coordinate], target: Coordinate,
                  from_end: bool = False, limit: Optional[int] = None) -> int:
    """
    Index of the point closest to target.

    Ties go to the first occurrence, or to the last one when from_end is set.
    limit restricts the search to indices < limit. Returns -1 when there is
    nothing to search.
    """
    if limit is not None:
        points = points[:max(0, limit)]
    if len(points) == 0:
        return -1
    dists = haversine_distances(points, target)
    if from_end:
        return len(points) - 1 - int(np.argmin(dists[::-1]))
    return int(np.argmin(dists))
