"""
Per-segment start/end badges and the dashed connectors that tie user pins to
the first and last legs.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from .detour_smoother import find_detour_trim
from .models.render_model import EndpointMarker
from .models.route_segments import Coordinate, Location, RouteSegment
from .transfer_markers import alight_coordinate, board_coordinate
from .utils.geo_utils import coord_key, distance_meters, is_valid_coordinate
from .utils.transport_utils import get_transport_style

logger = logging.getLogger(__name__)


class EndpointMarkerBuilder:

    """Start/end badges per segment, collapsed to one badge when board and alight coincide"""

    def build(self, segments: Sequence[RouteSegment]) -> List[EndpointMarker]:
        markers = []
        for index, segment in enumerate(segments):
            board = board_coordinate(segment)
            alight = alight_coordinate(segment)
            if not is_valid_coordinate(board) or not is_valid_coordinate(alight):
                continue
            markers.append(self._badge(segment, index, 'start', board, segment.origin.name))
            if coord_key(board) != coord_key(alight):
                markers.append(self._badge(segment, index, 'end', alight, segment.destination.name))
        return markers

    @staticmethod
    def _badge(segment: RouteSegment, index: int, kind: str,
               coordinate: Coordinate, location_name: str) -> EndpointMarker:
        style = get_transport_style(segment.transport_type)
        return EndpointMarker(
            coordinate=coordinate,
            kind=kind,
            segment_id=segment.id,
            segment_index=index,
            mode=segment.mode_key,
            transport_type=segment.transport_type.value,
            color=style.color,
            icon=style.icon,
            label=style.label,
            location_name=location_name or '',
        )


class AnchorConnectorBuilder:

    """
    Connects user-pinned origin/destination to the route when the boundary
    leg is a ride rather than a walk and the gap is noticeable but not absurd.
    """

    def __init__(self, gap_min_m: float = 25.0, gap_max_m: float = 1200.0,
                 min_path_points: int = 6, max_approach_m: float = 80.0,
                 max_direct_m: float = 160.0, min_tail_m: float = 220.0,
                 tail_factor: float = 3.0):
        self.gap_min_m = gap_min_m
        self.gap_max_m = gap_max_m
        self.min_path_points = min_path_points
        self.max_approach_m = max_approach_m
        self.max_direct_m = max_direct_m
        self.min_tail_m = min_tail_m
        self.tail_factor = tail_factor

    def build(self, segments: Sequence[RouteSegment],
              segment_paths: List[List[Coordinate]],
              origin_pin: Optional[Location] = None,
              destination_pin: Optional[Location] = None) -> List[Tuple[Coordinate, Coordinate]]:
        """
        Build pin connectors; may shorten the last path in place

        Args:
            segments: Segments, index-aligned with segment_paths
            segment_paths: Resolved (and detour-smoothed) paths
            origin_pin: Optional user origin
            destination_pin: Optional user destination

        Returns:
            Two-point connectors
        """
        connectors = []
        if not segments:
            return connectors

        origin_connector = self._origin_connector(segments[0], segment_paths[0], origin_pin)
        if origin_connector is not None:
            connectors.append(origin_connector)

        last = len(segments) - 1
        destination_connector = self._destination_connector(segments[last], segment_paths, last, destination_pin)
        if destination_connector is not None:
            connectors.append(destination_connector)
        return connectors

    def _gap_in_range(self, gap_m: float) -> bool:
        return self.gap_min_m < gap_m <= self.gap_max_m

    def _origin_connector(self, segment: RouteSegment, path: List[Coordinate],
                          pin: Optional[Location]):
        if pin is None or segment.is_walk or not path:
            return None
        pin_point = pin.coordinates
        if not is_valid_coordinate(pin_point):
            return None
        path_start = path[0]
        if self._gap_in_range(distance_meters(pin_point, path_start)):
            return (pin_point, path_start)
        return None

    def _destination_connector(self, segment: RouteSegment, segment_paths: List[List[Coordinate]],
                               index: int, pin: Optional[Location]):
        path = segment_paths[index]
        if pin is None or segment.is_walk or not path:
            return None
        pin_point = pin.coordinates
        if not is_valid_coordinate(pin_point):
            return None
        path_end = path[-1]
        if not self._gap_in_range(distance_meters(path_end, pin_point)):
            return None

        best_idx = find_detour_trim(
            path, pin_point,
            min_path_points=self.min_path_points,
            max_approach_m=self.max_approach_m,
            max_direct_m=self.max_direct_m,
            min_tail_m=self.min_tail_m,
            tail_factor=self.tail_factor,
        )
        if best_idx is not None:
            logger.debug(f"Segment {segment.id}: trimming tail past destination pin at point {best_idx}")
            segment_paths[index] = list(path[:best_idx + 1])
            return (path[best_idx], pin_point)
        return (path_end, pin_point)
