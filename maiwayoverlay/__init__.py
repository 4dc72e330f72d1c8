__title__ = 'maiwayoverlay'
__version__ = '1.0.0'
__author__ = 'MaiWay Team'
__contact__ = 'maiway@example.com'
__license__ = 'MIT'
__copyright__ = 'Copyright 2024 MaiWay Team'

__all__ = ['core_overlay_service', 'RouteOverlayEngine', 'build_render_model', 'config', 'logger', 'exceptions']

# Set default logging handler to avoid "No handler found" warnings.
import logging
from logging import NullHandler

logging.getLogger(__name__).addHandler(NullHandler())

from .core_overlay_service import RouteOverlayEngine, build_render_model  # noqa: E402
