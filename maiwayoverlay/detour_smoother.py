"""
Detour trimming between adjacent transit legs.

Stops are often placed off the routed road centerline (across an intersection,
behind a terminal). Without trimming, a leg's line visibly runs past the next
boarding point and loops back. The thresholds are tight so that ordinary road
curvature is left alone.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from .models.route_segments import Coordinate, RouteSegment
from .utils.geo_utils import (
    distance_meters,
    first_valid_point,
    is_valid_coordinate,
    nearest_index,
    polyline_length_meters,
)

logger = logging.getLogger(__name__)


def find_detour_trim(path: Sequence[Coordinate], target: Coordinate,
                     min_path_points: int = 6,
                     max_approach_m: float = 120.0,
                     max_direct_m: float = 220.0,
                     min_tail_m: float = 120.0,
                     tail_factor: float = 2.0) -> Optional[int]:
    """
    Find where a path should be cut because its tail detours around target

    Args:
        path: Resolved path of the leg being trimmed
        target: Point the leg should end near (next boarding point or a pin)
        min_path_points: Paths shorter than this are never trimmed
        max_approach_m: Closest approach must be within this distance
        max_direct_m: Straight hop from the cut point must be within this distance
        min_tail_m: Tail must be longer than this ...
        tail_factor: ... and longer than tail_factor times the straight hop

    Returns:
        Index of the last point to keep, or None when the path is left alone
    """
    if len(path) < min_path_points or not is_valid_coordinate(target):
        return None

    # The last two points are never candidates
    best_idx = nearest_index(path, target, limit=len(path) - 2)
    if best_idx < 0:
        return None
    best_m = distance_meters(path[best_idx], target)
    if best_m > max_approach_m:
        return None

    tail_m = polyline_length_meters(path[best_idx:])
    direct_m = distance_meters(path[best_idx], target)

    if direct_m <= max_direct_m and tail_m > max(min_tail_m, direct_m * tail_factor):
        logger.debug(f"Detour detected: tail={tail_m:.1f}m direct={direct_m:.1f}m at index {best_idx}")
        return best_idx
    return None


class DetourSmoother:

    """Trims leg tails that overshoot the next leg's boarding point"""

    def __init__(self, min_path_points: int = 6, max_approach_m: float = 120.0,
                 max_direct_m: float = 220.0, min_tail_m: float = 120.0,
                 tail_factor: float = 2.0):
        self.min_path_points = min_path_points
        self.max_approach_m = max_approach_m
        self.max_direct_m = max_direct_m
        self.min_tail_m = min_tail_m
        self.tail_factor = tail_factor

    def smooth(self, segments: Sequence[RouteSegment],
               segment_paths: List[List[Coordinate]]) -> List[Tuple[Coordinate, Coordinate]]:
        """
        Trim detouring tails in place

        Args:
            segments: Segments, index-aligned with segment_paths
            segment_paths: Resolved paths; trimmed entries are replaced

        Returns:
            Two-point connectors bridging each trimmed tail to the next leg
        """
        connectors = []
        for i in range(len(segments) - 1):
            current, following = segments[i], segments[i + 1]
            if current.is_walk or following.is_walk:
                continue

            target = self.boarding_target(following)
            if target is None:
                continue

            a_path = segment_paths[i]
            best_idx = find_detour_trim(
                a_path, target,
                min_path_points=self.min_path_points,
                max_approach_m=self.max_approach_m,
                max_direct_m=self.max_direct_m,
                min_tail_m=self.min_tail_m,
                tail_factor=self.tail_factor,
            )
            if best_idx is None:
                continue

            logger.debug(f"Trimming segment {current.id} at point {best_idx} of {len(a_path)}")
            segment_paths[i] = list(a_path[:best_idx + 1])
            connectors.append((a_path[best_idx], target))
        return connectors

    @staticmethod
    def boarding_target(segment: RouteSegment) -> Optional[Coordinate]:
        if is_valid_coordinate(segment.origin.coordinates):
            return segment.origin.coordinates
        return first_valid_point(segment.geometry)
