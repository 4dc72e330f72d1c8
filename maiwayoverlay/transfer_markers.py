"""
Transfer marker detection: numbered alight/board annotations wherever the
traveller changes vehicle, including re-boarding the same mode after a walk.
"""

import logging
from functools import reduce
from typing import List, NamedTuple, Optional, Sequence, Tuple

from .models.render_model import TransferMarker
from .models.route_segments import Coordinate, Location, RouteSegment
from .utils.geo_utils import (
    coord_key,
    first_valid_point,
    is_valid_coordinate,
    last_valid_point,
    offset,
)
from .utils.transport_utils import get_transport_label

logger = logging.getLogger(__name__)

WALK_MODE = 'walk'


class _ScanState(NamedTuple):
    last_non_walk_index: Optional[int] = None
    last_non_walk_mode: Optional[str] = None
    saw_walk_since_last_non_walk: bool = False
    boundaries: Tuple[int, ...] = ()


def _scan_step(state: _ScanState, item: Tuple[int, RouteSegment]) -> _ScanState:
    index, segment = item
    if segment.is_walk:
        if state.last_non_walk_index is not None:
            return state._replace(saw_walk_since_last_non_walk=True)
        return state

    mode = segment.mode_key
    boundaries = state.boundaries
    if state.last_non_walk_index is not None:
        if mode != state.last_non_walk_mode or state.saw_walk_since_last_non_walk:
            boundaries = boundaries + (index,)
    return _ScanState(index, mode, False, boundaries)


def find_transfer_boundaries(segments: Sequence[RouteSegment]) -> Tuple[int, ...]:
    """
    Indices of non-walk segments that start a transfer.

    Raw normalized mode strings are compared, so an LRT -> MRT change counts
    as a transfer while two consecutive "train" legs do not.
    """
    return reduce(_scan_step, enumerate(segments), _ScanState()).boundaries


def board_coordinate(segment: RouteSegment) -> Coordinate:
    point = first_valid_point(segment.geometry)
    return point if point is not None else segment.origin.coordinates


def alight_coordinate(segment: RouteSegment) -> Coordinate:
    point = last_valid_point(segment.geometry)
    return point if point is not None else segment.destination.coordinates


def _mode_label(segment: RouteSegment) -> str:
    return get_transport_label(segment.transport_type)


class TransferMarkerDetector:

    """Builds the start marker, the first boarding marker and one alight/board pair per transfer"""

    def __init__(self, offset_deg: float = 0.00012):
        self.offset_deg = offset_deg

    def detect(self, segments: Sequence[RouteSegment],
               origin_pin: Optional[Location] = None) -> List[TransferMarker]:
        """
        Build transfer markers for a route

        Args:
            segments: Route segments in travel order (no None entries)
            origin_pin: Optional user origin; yields the "start" marker

        Returns:
            Markers in segment order
        """
        markers: List[TransferMarker] = []
        if not segments:
            return markers

        first_idx = next((i for i, s in enumerate(segments) if not s.is_walk), None)
        first = segments[first_idx] if first_idx is not None else None

        start = self._start_marker(origin_pin, first)
        if start is not None:
            markers.append(start)

        if first is None:
            return markers

        transfer_number = 0
        first_board = board_coordinate(first)
        if is_valid_coordinate(first_board):
            transfer_number = 1
            markers.append(TransferMarker(
                coordinate=first_board,
                number=transfer_number,
                kind='board',
                from_mode=WALK_MODE,
                to_mode=first.mode_key,
                location_name=first.origin.name,
                next_location_name=first.destination.name,
                note=f"Board {_mode_label(first)} here.",
                label=f"{transfer_number}B",
            ))
        else:
            logger.debug(f"Segment {first.id}: no valid boarding point, skipping first board marker")

        seen = set()
        for i in find_transfer_boundaries(segments):
            j = self._previous_non_walk(segments, i)
            if j is None:
                continue
            previous, current = segments[j], segments[i]
            alight = alight_coordinate(previous)
            board = board_coordinate(current)
            if not is_valid_coordinate(alight) or not is_valid_coordinate(board):
                logger.debug(f"Transfer {previous.id} -> {current.id} has no valid point, skipped")
                continue

            number = transfer_number + 1
            alight_key, board_key = coord_key(alight), coord_key(board)
            if alight_key == board_key:
                # Same station: pull the two markers apart east-west
                alight = offset(alight, -self.offset_deg, 0)
                board = offset(board, self.offset_deg, 0)
                dedupe_key = (alight_key, board_key, number)
            else:
                dedupe_key = (alight_key, board_key)

            if dedupe_key in seen:
                continue
            seen.add(dedupe_key)
            transfer_number = number

            markers.append(TransferMarker(
                coordinate=alight,
                number=transfer_number,
                kind='alight',
                from_mode=previous.mode_key,
                to_mode=current.mode_key,
                location_name=previous.destination.name,
                next_location_name=current.origin.name,
                note=f"Alight from {_mode_label(previous)} here.",
                label=f"{transfer_number}A",
            ))
            markers.append(TransferMarker(
                coordinate=board,
                number=transfer_number,
                kind='board',
                from_mode=previous.mode_key,
                to_mode=current.mode_key,
                location_name=current.origin.name,
                next_location_name=current.destination.name,
                note=f"Board {_mode_label(current)} here.",
                label=f"{transfer_number}B",
            ))
        return markers

    def _start_marker(self, origin_pin: Optional[Location],
                      first: Optional[RouteSegment]) -> Optional[TransferMarker]:
        if origin_pin is None or not is_valid_coordinate(origin_pin.coordinates):
            return None
        if first is not None:
            to_mode = first.mode_key
            next_name = first.origin.name
            note = f"Walk to {next_name} and board {_mode_label(first)}."
        else:
            to_mode = WALK_MODE
            next_name = None
            note = "Walk to your destination."
        return TransferMarker(
            coordinate=origin_pin.coordinates,
            number=0,
            kind='start',
            from_mode=WALK_MODE,
            to_mode=to_mode,
            location_name=origin_pin.name or 'Origin',
            next_location_name=next_name,
            note=note,
            label='S',
        )

    @staticmethod
    def _previous_non_walk(segments: Sequence[RouteSegment], index: int) -> Optional[int]:
        for j in range(index - 1, -1, -1):
            if not segments[j].is_walk:
                return j
        return None
