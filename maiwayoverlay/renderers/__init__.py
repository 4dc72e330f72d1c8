from .base import MapRenderer
from .geojson_renderer import GeoJSONRenderer
from .polyline_renderer import EncodedPolylineRenderer

RENDERERS = {
    'geojson': GeoJSONRenderer,
    'polyline': EncodedPolylineRenderer,
}

__all__ = ['MapRenderer', 'GeoJSONRenderer', 'EncodedPolylineRenderer', 'RENDERERS']
