"""
Encoded polyline adapter for the WebView bridge, where payload size matters.
"""

from typing import Any, Dict, Optional, Sequence

import polyline

from ..config import config
from ..models.render_model import RenderModel
from ..models.route_segments import Coordinate, Route
from ..utils.transport_utils import CONNECTOR_COLOR, get_transport_color


class EncodedPolylineRenderer:

    def __init__(self, precision: Optional[int] = None):
        self.precision = precision if precision is not None else config.polyline_precision

    def _encode(self, coords: Sequence[Coordinate]) -> str:
        return polyline.encode([(c.latitude, c.longitude) for c in coords], self.precision)

    def render(self, model: RenderModel, route: Route) -> Dict[str, Any]:
        segments = [s for s in route.segments if s is not None]
        paths = []
        for index, path in enumerate(model.segment_paths):
            segment = segments[index]
            paths.append({
                'segment_id': segment.id,
                'mode': segment.mode_key,
                'color': get_transport_color(segment.transport_type),
                'dashed': segment.is_walk,
                'polyline': self._encode(path),
            })

        return {
            'precision': self.precision,
            'paths': paths,
            'connectors': [
                {'color': CONNECTOR_COLOR, 'dashed': True, 'polyline': self._encode(line)}
                for line in model.connectors
            ],
            'transfer_markers': [marker.to_dict() for marker in model.transfer_markers],
            'endpoint_markers': [marker.to_dict() for marker in model.endpoint_markers],
            'region': model.viewport.to_region(),
        }
