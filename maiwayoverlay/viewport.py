"""
Viewport fit: bounding box of everything drawn, padded, with a floor on the
span so a single point does not zoom the map to street level.
"""

from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from .models.render_model import Viewport
from .models.route_segments import Coordinate, Location
from .utils.geo_utils import is_valid_coordinate


class ViewportCalculator:

    def __init__(self, padding: float = 1.3, min_span: float = 0.01,
                 pin_span: float = 0.05, default_span: float = 0.1,
                 default_center: Tuple[float, float] = (14.5995, 120.9842)):
        self.padding = padding
        self.min_span = min_span
        self.pin_span = pin_span
        self.default_span = default_span
        self.default_center = Coordinate(latitude=default_center[0], longitude=default_center[1])

    def fit(self, paths: Iterable[Sequence[Coordinate]],
            origin_pin: Optional[Location] = None) -> Viewport:
        """
        Fit a viewport around every valid coordinate of every path

        Args:
            paths: Polylines meant to be visible
            origin_pin: Used when there is nothing to fit

        Returns:
            Viewport with padded, clamped spans
        """
        points = [c for path in paths for c in path if is_valid_coordinate(c)]
        if not points:
            return self._fallback(origin_pin)

        lats = np.array([c.latitude for c in points], dtype=float)
        lons = np.array([c.longitude for c in points], dtype=float)
        min_lat, max_lat = float(lats.min()), float(lats.max())
        min_lon, max_lon = float(lons.min()), float(lons.max())

        center = Coordinate(latitude=(min_lat + max_lat) / 2, longitude=(min_lon + max_lon) / 2)
        lat_span = max((max_lat - min_lat) * self.padding, self.min_span)
        lon_span = max((max_lon - min_lon) * self.padding, self.min_span)
        return Viewport(center=center, lat_span=lat_span, lon_span=lon_span)

    def _fallback(self, origin_pin: Optional[Location]) -> Viewport:
        if origin_pin is not None and is_valid_coordinate(origin_pin.coordinates):
            return Viewport(center=origin_pin.coordinates, lat_span=self.pin_span, lon_span=self.pin_span)
        return Viewport(center=self.default_center, lat_span=self.default_span, lon_span=self.default_span)
