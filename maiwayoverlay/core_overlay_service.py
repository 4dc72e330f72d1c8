"""
Route overlay service: turns a provider route plus optional user pins into the
RenderModel consumed by every map renderer.
"""

import logging
from functools import lru_cache
from typing import Iterable, Optional, Sequence, Tuple, Union

from .config import Config, config
from .core_path_resolver import SegmentPathResolver
from .detour_smoother import DetourSmoother
from .endpoint_markers import AnchorConnectorBuilder, EndpointMarkerBuilder
from .exceptions import InvalidRouteError
from .models.render_model import RenderModel
from .models.route_segments import Coordinate, Location, Route, RouteSegment
from .transfer_markers import TransferMarkerDetector
from .viewport import ViewportCalculator

Pin = Union[Location, Coordinate, None]


class RouteOverlayEngine:
    """
    Deterministic geometry post-processing for one route:
    1. Resolve each segment's displayable path
    2. Trim detours between adjacent transit legs
    3. Connect user pins to the first/last legs
    4. Detect transfers and build numbered markers
    5. Build per-segment start/end badges
    6. Fit the viewport around the resolved paths
    """

    def __init__(self, cfg: Optional[Config] = None, memo_size: int = 0):
        cfg = cfg or config
        self.logger = logging.getLogger(__name__)
        self.path_resolver = SegmentPathResolver(**cfg.get_path_config())
        self.detour_smoother = DetourSmoother(**cfg.get_detour_config())
        self.anchor_builder = AnchorConnectorBuilder(**cfg.get_anchor_config())
        self.transfer_detector = TransferMarkerDetector(**cfg.get_transfer_config())
        self.endpoint_builder = EndpointMarkerBuilder()
        self.viewport_calculator = ViewportCalculator(**cfg.get_viewport_config())

        self._build_cached = lru_cache(maxsize=memo_size)(self._build) if memo_size > 0 else None

    def build_render_model(self, route: Route, origin_pin: Pin = None,
                           destination_pin: Pin = None,
                           custom_path: Optional[Iterable[Coordinate]] = None) -> RenderModel:
        """
        Build the render model for a route

        Args:
            route: Route from the provider; None entries in segments are ignored
            origin_pin: Optional user-pinned origin (Location or Coordinate)
            destination_pin: Optional user-pinned destination
            custom_path: Polyline the caller is showing instead of a route;
                only framed by the viewport when the route has no segments

        Returns:
            RenderModel whose index-aligned fields follow the non-None segments

        Raises:
            InvalidRouteError: route is not a Route or holds a non-segment entry
        """
        if not isinstance(route, Route):
            raise InvalidRouteError(f"Expected Route, got {type(route).__name__}")
        for segment in route.segments:
            if segment is not None and not isinstance(segment, RouteSegment):
                raise InvalidRouteError(
                    f"Route {route.id} holds {type(segment).__name__} where a RouteSegment was expected")

        origin = _as_location(origin_pin, 'Origin')
        destination = _as_location(destination_pin, 'Destination')
        extra_path = tuple(custom_path) if custom_path is not None else ()

        if self._build_cached is not None:
            return self._build_cached(route, origin, destination, extra_path)
        return self._build(route, origin, destination, extra_path)

    def _build(self, route: Route, origin: Optional[Location],
               destination: Optional[Location],
               custom_path: Tuple[Coordinate, ...]) -> RenderModel:
        segments = [s for s in route.segments if s is not None]

        segment_paths = self.path_resolver.resolve_all(segments)
        connectors = self.detour_smoother.smooth(segments, segment_paths)
        connectors.extend(self.anchor_builder.build(segments, segment_paths, origin, destination))

        transfer_markers = self.transfer_detector.detect(segments, origin)
        endpoint_markers = self.endpoint_builder.build(segments)

        visible: Sequence[Sequence[Coordinate]] = segment_paths if segments else [custom_path]
        viewport = self.viewport_calculator.fit(visible, origin)

        self.logger.debug(
            f"Route {route.id}: {len(segments)} segments, {len(connectors)} connectors, "
            f"{len(transfer_markers)} transfer markers, {len(endpoint_markers)} endpoint markers")

        return RenderModel(
            segment_paths=tuple(tuple(path) for path in segment_paths),
            connectors=tuple(tuple(line) for line in connectors),
            transfer_markers=tuple(transfer_markers),
            endpoint_markers=tuple(endpoint_markers),
            viewport=viewport,
            segment_ids=tuple(s.id for s in segments),
        )

    def cache_info(self):
        return self._build_cached.cache_info() if self._build_cached is not None else None


def _as_location(pin: Pin, default_name: str) -> Optional[Location]:
    if pin is None or isinstance(pin, Location):
        return pin
    if isinstance(pin, Coordinate):
        return Location(name=default_name, coordinates=pin)
    raise InvalidRouteError(f"Expected Location or Coordinate pin, got {type(pin).__name__}")


_default_engine: Optional[RouteOverlayEngine] = None


def build_render_model(route: Route, origin_pin: Pin = None, destination_pin: Pin = None,
                       custom_path: Optional[Iterable[Coordinate]] = None) -> RenderModel:
    """Build a render model with the globally configured engine"""
    global _default_engine
    if _default_engine is None:
        _default_engine = RouteOverlayEngine()
    return _default_engine.build_render_model(route, origin_pin, destination_pin, custom_path)

