"""
GeoJSON adapter for web maps (Leaflet / the WebView-hosted map).

Coordinates are emitted GeoJSON-style as [lon, lat].
"""

from typing import Any, Dict, List, Sequence

from ..models.render_model import EndpointMarker, RenderModel, TransferMarker
from ..models.route_segments import Coordinate, Route
from ..utils.transport_utils import CONNECTOR_COLOR, get_transport_color


def _line_coords(coords: Sequence[Coordinate]) -> List[List[float]]:
    return [[c.longitude, c.latitude] for c in coords]


def _point(c: Coordinate) -> Dict[str, Any]:
    return {"type": "Point", "coordinates": [c.longitude, c.latitude]}


class GeoJSONRenderer:

    def render(self, model: RenderModel, route: Route) -> Dict[str, Any]:
        segments = [s for s in route.segments if s is not None]
        features = []

        for index, path in enumerate(model.segment_paths):
            if len(path) < 2:
                continue
            segment = segments[index]
            features.append({
                "type": "Feature",
                "geometry": {"type": "LineString", "coordinates": _line_coords(path)},
                "properties": {
                    "kind": "segment",
                    "segment_id": segment.id,
                    "segment_index": index,
                    "mode": segment.mode_key,
                    "transport_type": segment.transport_type.value,
                    "route_name": segment.route_name,
                    "color": get_transport_color(segment.transport_type),
                    "dashed": segment.is_walk,
                },
            })

        for line in model.connectors:
            features.append({
                "type": "Feature",
                "geometry": {"type": "LineString", "coordinates": _line_coords(line)},
                "properties": {"kind": "connector", "color": CONNECTOR_COLOR, "dashed": True},
            })

        for marker in model.transfer_markers:
            features.append(self._transfer_feature(marker))
        for marker in model.endpoint_markers:
            features.append(self._endpoint_feature(marker))

        south, west, north, east = model.viewport.to_bounds()
        return {
            "type": "FeatureCollection",
            "bbox": [west, south, east, north],
            "features": features,
            "viewport": model.viewport.to_region(),
        }

    @staticmethod
    def _transfer_feature(marker: TransferMarker) -> Dict[str, Any]:
        return {
            "type": "Feature",
            "geometry": _point(marker.coordinate),
            "properties": {
                "kind": "transfer",
                "marker_kind": marker.kind,
                "number": marker.number,
                "label": marker.label,
                "from_mode": marker.from_mode,
                "to_mode": marker.to_mode,
                "location_name": marker.location_name,
                "next_location_name": marker.next_location_name,
                "note": marker.note,
            },
        }

    @staticmethod
    def _endpoint_feature(marker: EndpointMarker) -> Dict[str, Any]:
        return {
            "type": "Feature",
            "geometry": _point(marker.coordinate),
            "properties": {
                "kind": "endpoint",
                "marker_kind": marker.kind,
                "segment_id": marker.segment_id,
                "segment_index": marker.segment_index,
                "mode": marker.mode,
                "color": marker.color,
                "icon": marker.icon,
                "label": marker.label,
                "location_name": marker.location_name,
            },
        }
