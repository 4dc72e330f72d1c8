"""
SegmentPathResolver: reduce raw segment geometry to a renderable path
anchored on the segment's own origin and destination.
"""

import logging
from typing import List, Sequence

from .models.route_segments import Coordinate, RouteSegment
from .utils.geo_utils import (
    distance_meters,
    is_valid_coordinate,
    nearest_index,
    valid_points,
)

logger = logging.getLogger(__name__)


class SegmentPathResolver:

    """
    Turns a segment's raw polyline into the path drawn on the map.
    The provider geometry may overshoot or undershoot the stops it is meant to
    connect (shared road segments, stop snapping), so it is sliced between the
    points nearest the origin and destination and then anchored to them.
    """

    def __init__(self, anchor_tolerance_m: float = 30.0):
        self.anchor_tolerance_m = anchor_tolerance_m

    def resolve(self, segment: RouteSegment) -> List[Coordinate]:
        """
        Resolve the displayable path for one segment

        Args:
            segment: Route segment with optional raw geometry

        Returns:
            List of coordinates; the raw endpoints when the geometry is unusable
        """
        origin = segment.origin.coordinates
        destination = segment.destination.coordinates
        safe_geom = valid_points(segment.geometry)
        fallback = valid_points([origin, destination])

        path = safe_geom
        if len(safe_geom) >= 2 and is_valid_coordinate(origin) and is_valid_coordinate(destination):
            path = self._slice_between(safe_geom, origin, destination)
            path = self._anchor(path, origin, destination)

        if len(path) >= 2:
            return path
        logger.debug(f"Segment {segment.id}: using endpoint fallback ({len(safe_geom)} usable geometry points)")
        return fallback

    def resolve_all(self, segments: Sequence[RouteSegment]) -> List[List[Coordinate]]:
        return [self.resolve(segment) for segment in segments]

    def _slice_between(self, geometry: List[Coordinate], origin: Coordinate,
                       destination: Coordinate) -> List[Coordinate]:
        """Slice geometry between the points closest to origin and destination"""
        start_idx = nearest_index(geometry, origin)
        end_idx = nearest_index(geometry, destination, from_end=True)

        if start_idx <= end_idx:
            return geometry[start_idx:end_idx + 1]

        # Polyline stored back-to-front
        return list(reversed(geometry[end_idx:start_idx + 1]))

    def _anchor(self, path: List[Coordinate], origin: Coordinate,
                destination: Coordinate) -> List[Coordinate]:
        if not path:
            return path
        anchored = list(path)
        if distance_meters(anchored[0], origin) > self.anchor_tolerance_m:
            anchored.insert(0, origin)
        if distance_meters(anchored[-1], destination) > self.anchor_tolerance_m:
            anchored.append(destination)
        return anchored
