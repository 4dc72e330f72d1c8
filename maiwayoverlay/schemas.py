"""
Pydantic payload models for provider routes and render requests.

Coordinates are parsed, not range-checked: out-of-range, non-finite and (0, 0)
points are filtered later by the engine.
"""

from typing import Any, List, Literal, Optional, Union

import polyline
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, model_validator

from .config import config
from .exceptions import PayloadError
from .models.route_segments import Coordinate, Location, Route, RouteSegment, TransportType


class CoordinatePayload(BaseModel):
    latitude: float = Field(validation_alias=AliasChoices('latitude', 'lat'))
    longitude: float = Field(validation_alias=AliasChoices('longitude', 'lon', 'lng'))

    @model_validator(mode='before')
    @classmethod
    def accept_pairs(cls, data: Any):
        # [lat, lon] pairs are accepted alongside objects
        if isinstance(data, (list, tuple)) and len(data) == 2:
            return {'latitude': data[0], 'longitude': data[1]}
        return data

    def to_domain(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)


class LocationPayload(BaseModel):
    name: str = ''
    coordinates: CoordinatePayload
    address: Optional[str] = None

    @model_validator(mode='before')
    @classmethod
    def accept_flat_stop(cls, data: Any):
        # Backend stops look like {"name": ..., "lat": ..., "lon": ...}
        if isinstance(data, dict) and 'coordinates' not in data:
            data = dict(data)
            data['coordinates'] = {key: data.pop(key) for key in
                                   ('lat', 'lon', 'lng', 'latitude', 'longitude') if key in data}
        return data

    def to_domain(self) -> Location:
        return Location(name=self.name, coordinates=self.coordinates.to_domain(), address=self.address)


class SegmentPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    transport_type: Optional[str] = Field(
        default=None, validation_alias=AliasChoices('transportType', 'transport_type'))
    mode: Optional[str] = None
    route_name: Optional[str] = Field(
        default=None, validation_alias=AliasChoices('routeName', 'route_name', 'route_id'))
    origin: LocationPayload = Field(validation_alias=AliasChoices('origin', 'from_stop'))
    destination: LocationPayload = Field(validation_alias=AliasChoices('destination', 'to_stop'))
    geometry: Optional[Union[str, List[CoordinatePayload]]] = Field(
        default=None, validation_alias=AliasChoices('geometry', 'polyline'))
    geometry_precision: int = Field(
        default_factory=lambda: config.polyline_precision,
        validation_alias=AliasChoices('geometryPrecision', 'geometry_precision'))
    fare: float = 0.0
    estimated_time: float = Field(default=0.0, validation_alias=AliasChoices('estimatedTime', 'estimated_time'))
    distance: float = 0.0

    def decoded_geometry(self) -> Optional[List[Coordinate]]:
        if self.geometry is None:
            return None
        if isinstance(self.geometry, str):
            # Google encoded polyline, decodes to (lat, lon)
            return [Coordinate(latitude=lat, longitude=lon)
                    for lat, lon in polyline.decode(self.geometry, self.geometry_precision)]
        return [point.to_domain() for point in self.geometry]

    def to_domain(self, index: int) -> RouteSegment:
        raw_mode = self.mode or self.transport_type
        transport_type = TransportType.from_raw(self.transport_type or self.mode)
        geometry = self.decoded_geometry()
        return RouteSegment(
            id=self.id or f"s{index + 1}",
            transport_type=transport_type,
            origin=self.origin.to_domain(),
            destination=self.destination.to_domain(),
            geometry=tuple(geometry) if geometry is not None else None,
            mode=raw_mode,
            route_name=self.route_name or raw_mode,
            fare=self.fare,
            estimated_time=self.estimated_time,
            distance=self.distance,
        )


class RoutePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    segments: List[Optional[SegmentPayload]] = Field(default_factory=list)
    total_fare: float = Field(default=0.0, validation_alias=AliasChoices('totalFare', 'total_fare'))
    total_time: float = Field(default=0.0, validation_alias=AliasChoices('totalTime', 'total_time'))
    total_distance: float = Field(default=0.0, validation_alias=AliasChoices('totalDistance', 'total_distance'))
    total_transfers: int = Field(default=0, validation_alias=AliasChoices('totalTransfers', 'total_transfers'))

    def to_domain(self) -> Route:
        segments = []
        for index, segment in enumerate(self.segments):
            segments.append(segment.to_domain(index) if segment is not None else None)
        return Route(
            id=self.id or 'route',
            segments=tuple(segments),
            total_fare=self.total_fare,
            total_time=self.total_time,
            total_distance=self.total_distance,
            total_transfers=self.total_transfers,
        )


class RenderRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    route: RoutePayload
    origin: Optional[LocationPayload] = None
    destination: Optional[LocationPayload] = None
    custom_path: Optional[List[CoordinatePayload]] = Field(
        default=None, validation_alias=AliasChoices('customPath', 'custom_path'))
    format: Literal['json', 'geojson', 'polyline'] = 'json'

    def origin_location(self) -> Optional[Location]:
        return self.origin.to_domain() if self.origin is not None else None

    def destination_location(self) -> Optional[Location]:
        return self.destination.to_domain() if self.destination is not None else None

    def custom_coordinates(self) -> Optional[List[Coordinate]]:
        if self.custom_path is None:
            return None
        return [point.to_domain() for point in self.custom_path]


def parse_render_request(data: Any) -> RenderRequest:
    """Validate a raw JSON body, raising PayloadError with pydantic's error list"""
    if not isinstance(data, dict):
        raise PayloadError("Request body must be a JSON object")
    try:
        return RenderRequest.model_validate(data)
    except ValidationError as e:
        raise PayloadError(f"Invalid render request: {e.error_count()} error(s)",
                           errors=e.errors(include_url=False, include_context=False)) from e


def parse_route(data: Any) -> Route:
    """Validate a provider route dict and convert it to the domain Route"""
    try:
        return RoutePayload.model_validate(data).to_domain()
    except ValidationError as e:
        raise PayloadError(f"Invalid route: {e.error_count()} error(s)",
                           errors=e.errors(include_url=False, include_context=False)) from e
