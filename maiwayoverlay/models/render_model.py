from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .route_segments import Coordinate


@dataclass(frozen=True)
class TransferMarker:
    """Numbered alight/board annotation (number 0 is the trip start)"""
    coordinate: Coordinate
    number: int
    kind: str  # "start", "alight" or "board"
    from_mode: str
    to_mode: str
    location_name: str
    note: str
    next_location_name: Optional[str] = None
    label: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {
            'coordinate': self.coordinate.to_dict(),
            'number': self.number,
            'kind': self.kind,
            'from_mode': self.from_mode,
            'to_mode': self.to_mode,
            'location_name': self.location_name,
            'next_location_name': self.next_location_name,
            'note': self.note,
            'label': self.label,
        }


@dataclass(frozen=True)
class EndpointMarker:
    """Per-segment start/end mode badge"""
    coordinate: Coordinate
    kind: str  # "start" or "end"
    segment_id: str
    segment_index: int
    mode: str
    transport_type: str
    color: str
    icon: str
    label: str
    location_name: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {
            'coordinate': self.coordinate.to_dict(),
            'kind': self.kind,
            'segment_id': self.segment_id,
            'segment_index': self.segment_index,
            'mode': self.mode,
            'transport_type': self.transport_type,
            'color': self.color,
            'icon': self.icon,
            'label': self.label,
            'location_name': self.location_name,
        }


@dataclass(frozen=True)
class Viewport:
    """Camera region: center plus full latitude/longitude spans in degrees"""
    center: Coordinate
    lat_span: float
    lon_span: float

    def to_region(self) -> Dict[str, float]:
        """Region dict in the shape native map views expect"""
        return {
            'latitude': self.center.latitude,
            'longitude': self.center.longitude,
            'latitudeDelta': self.lat_span,
            'longitudeDelta': self.lon_span,
        }

    def to_bounds(self) -> Tuple[float, float, float, float]:
        """(south, west, north, east) for fitBounds-style web map APIs"""
        half_lat = self.lat_span / 2
        half_lon = self.lon_span / 2
        return (
            self.center.latitude - half_lat,
            self.center.longitude - half_lon,
            self.center.latitude + half_lat,
            self.center.longitude + half_lon,
        )

    def contains(self, coordinate: Coordinate, tolerance: float = 1e-9) -> bool:
        south, west, north, east = self.to_bounds()
        return (south - tolerance <= coordinate.latitude <= north + tolerance
                and west - tolerance <= coordinate.longitude <= east + tolerance)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'center': self.center.to_dict(),
            'lat_span': self.lat_span,
            'lon_span': self.lon_span,
        }


@dataclass(frozen=True)
class RenderModel:
    """Everything a map renderer needs for one route"""
    segment_paths: Tuple[Tuple[Coordinate, ...], ...]
    connectors: Tuple[Tuple[Coordinate, ...], ...]
    transfer_markers: Tuple[TransferMarker, ...]
    endpoint_markers: Tuple[EndpointMarker, ...]
    viewport: Viewport
    segment_ids: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'segment_paths': [_coords_to_list(path) for path in self.segment_paths],
            'connectors': [_coords_to_list(line) for line in self.connectors],
            'transfer_markers': [marker.to_dict() for marker in self.transfer_markers],
            'endpoint_markers': [marker.to_dict() for marker in self.endpoint_markers],
            'viewport': self.viewport.to_dict(),
            'segment_ids': list(self.segment_ids),
        }


def _coords_to_list(coords) -> List[Dict[str, float]]:
    return [c.to_dict() for c in coords]
