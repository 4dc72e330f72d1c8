from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 point; (0, 0) is treated as unset"""
    latitude: float
    longitude: float

    def to_dict(self) -> dict:
        return {'lat': self.latitude, 'lon': self.longitude}


@dataclass(frozen=True)
class Location:
    """Named point supplied by the route provider or a map pin"""
    name: str
    coordinates: Coordinate
    address: Optional[str] = None


class TransportType(str, Enum):
    """Transport modes the map knows how to style"""
    WALK = 'walk'
    JEEPNEY = 'jeepney'
    BUS = 'bus'
    UV_EXPRESS = 'uv_express'
    TRAIN = 'train'
    OTHER = 'other'

    @classmethod
    def from_raw(cls, value: Optional[str]) -> 'TransportType':
        """Map a provider mode string ('lrt', 'Jeep', 'walking', ...) to a transport type"""
        from ..utils.transport_utils import canonical_mode
        canonical = canonical_mode(value)
        for member in cls:
            if member.value == canonical:
                return member
        return cls.OTHER


@dataclass(frozen=True)
class RouteSegment:
    """One leg of a multi-modal route"""
    id: str
    transport_type: TransportType
    origin: Location
    destination: Location
    geometry: Optional[Tuple[Coordinate, ...]] = None
    mode: Optional[str] = None  # raw provider mode, e.g. "lrt"
    route_name: Optional[str] = None
    fare: float = 0.0
    estimated_time: float = 0.0  # minutes
    distance: float = 0.0  # kilometers

    def __post_init__(self):
        if self.geometry is not None and not isinstance(self.geometry, tuple):
            object.__setattr__(self, 'geometry', tuple(self.geometry))

    @property
    def is_walk(self) -> bool:
        return self.transport_type is TransportType.WALK

    @property
    def mode_key(self) -> str:
        """Normalized raw mode used for transfer detection"""
        from ..utils.transport_utils import normalize_mode
        raw = self.mode if self.mode else self.transport_type.value
        return normalize_mode(raw)


@dataclass(frozen=True)
class Route:
    """Complete route with all segments, in travel order"""
    id: str
    segments: Tuple[Optional[RouteSegment], ...] = field(default_factory=tuple)
    total_fare: float = 0.0
    total_time: float = 0.0
    total_distance: float = 0.0
    total_transfers: int = 0

    def __post_init__(self):
        if not isinstance(self.segments, tuple):
            object.__setattr__(self, 'segments', tuple(self.segments))
