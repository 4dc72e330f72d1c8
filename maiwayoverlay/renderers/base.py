"""Rendering port - the contract map adapters implement.

The engine never draws; native map views, web Leaflet maps and the WebView
bridge each translate a RenderModel into their own primitives.
"""

from typing import Any, Dict, Protocol

from ..models.render_model import RenderModel
from ..models.route_segments import Route


class MapRenderer(Protocol):
    """Port for map rendering."""

    def render(self, model: RenderModel, route: Route) -> Dict[str, Any]:
        """Translate a render model into a renderer-specific payload.

        Args:
            model: Output of the overlay engine for route.
            route: The route the model was built from (for per-segment styling).

        Returns:
            JSON-serialisable payload for the target map.
        """
        ...
