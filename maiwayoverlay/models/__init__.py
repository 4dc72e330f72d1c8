from .route_segments import Coordinate, Location, TransportType, RouteSegment, Route
from .render_model import TransferMarker, EndpointMarker, Viewport, RenderModel

__all__ = [
    'Coordinate', 'Location', 'TransportType', 'RouteSegment', 'Route',
    'TransferMarker', 'EndpointMarker', 'Viewport', 'RenderModel',
]
