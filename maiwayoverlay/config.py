"""
Configuration management for MaiWay overlay engine
"""

import os
from typing import Optional

from .exceptions import ConfigurationError


class Config:
    """Configuration class for MaiWay overlay engine"""

    def __init__(self):
        # Path anchoring
        self.anchor_tolerance_m: float = float(os.getenv('ANCHOR_TOLERANCE_M', '30'))

        # Detour trimming between adjacent transit legs
        self.detour_min_path_points: int = int(os.getenv('DETOUR_MIN_PATH_POINTS', '6'))
        self.detour_max_approach_m: float = float(os.getenv('DETOUR_MAX_APPROACH_M', '120'))
        self.detour_max_direct_m: float = float(os.getenv('DETOUR_MAX_DIRECT_M', '220'))
        self.detour_min_tail_m: float = float(os.getenv('DETOUR_MIN_TAIL_M', '120'))
        self.detour_tail_factor: float = float(os.getenv('DETOUR_TAIL_FACTOR', '2.0'))

        # Origin / destination pin connectors
        self.pin_gap_min_m: float = float(os.getenv('PIN_GAP_MIN_M', '25'))
        self.pin_gap_max_m: float = float(os.getenv('PIN_GAP_MAX_M', '1200'))
        self.pin_max_approach_m: float = float(os.getenv('PIN_MAX_APPROACH_M', '80'))
        self.pin_max_direct_m: float = float(os.getenv('PIN_MAX_DIRECT_M', '160'))
        self.pin_min_tail_m: float = float(os.getenv('PIN_MIN_TAIL_M', '220'))
        self.pin_tail_factor: float = float(os.getenv('PIN_TAIL_FACTOR', '3.0'))

        # Transfer markers
        self.transfer_offset_deg: float = float(os.getenv('TRANSFER_OFFSET_DEG', '0.00012'))

        # Viewport
        self.viewport_padding: float = float(os.getenv('VIEWPORT_PADDING', '1.3'))
        self.viewport_min_span: float = float(os.getenv('VIEWPORT_MIN_SPAN', '0.01'))
        self.viewport_pin_span: float = float(os.getenv('VIEWPORT_PIN_SPAN', '0.05'))
        self.viewport_default_span: float = float(os.getenv('VIEWPORT_DEFAULT_SPAN', '0.1'))
        self.default_center_lat: float = float(os.getenv('DEFAULT_CENTER_LAT', '14.5995'))  # Manila
        self.default_center_lon: float = float(os.getenv('DEFAULT_CENTER_LON', '120.9842'))

        # Renderers
        self.polyline_precision: int = int(os.getenv('POLYLINE_PRECISION', '5'))
        self.render_cache_size: int = int(os.getenv('RENDER_CACHE_SIZE', '0'))

        # API configuration
        self.host: str = os.getenv('HOST', '0.0.0.0')
        self.port: int = int(os.getenv('PORT', '5000'))
        self.debug: bool = os.getenv('DEBUG', 'False').lower() == 'true'

        # Logging
        self.log_level: str = os.getenv('LOG_LEVEL', 'INFO')
        self.log_file: Optional[str] = os.getenv('LOG_FILE')

    def validate(self):
        """Validate configuration"""
        positive = {
            'ANCHOR_TOLERANCE_M': self.anchor_tolerance_m,
            'DETOUR_MAX_APPROACH_M': self.detour_max_approach_m,
            'DETOUR_MAX_DIRECT_M': self.detour_max_direct_m,
            'DETOUR_TAIL_FACTOR': self.detour_tail_factor,
            'PIN_GAP_MAX_M': self.pin_gap_max_m,
            'PIN_MAX_APPROACH_M': self.pin_max_approach_m,
            'PIN_MAX_DIRECT_M': self.pin_max_direct_m,
            'PIN_TAIL_FACTOR': self.pin_tail_factor,
            'TRANSFER_OFFSET_DEG': self.transfer_offset_deg,
            'VIEWPORT_PADDING': self.viewport_padding,
            'VIEWPORT_MIN_SPAN': self.viewport_min_span,
        }
        for name, value in positive.items():
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")

        if self.detour_min_path_points < 3:
            raise ConfigurationError("DETOUR_MIN_PATH_POINTS must be at least 3")

        if self.pin_gap_min_m < 0 or self.pin_gap_min_m >= self.pin_gap_max_m:
            raise ConfigurationError(
                f"Pin gap range is inverted: ({self.pin_gap_min_m}, {self.pin_gap_max_m}]")

        if not (-90 <= self.default_center_lat <= 90 and -180 <= self.default_center_lon <= 180):
            raise ConfigurationError("Default center is out of range")

    def get_path_config(self) -> dict:
        """Get configuration for SegmentPathResolver"""
        return {
            'anchor_tolerance_m': self.anchor_tolerance_m
        }

    def get_detour_config(self) -> dict:
        """Get configuration for DetourSmoother"""
        return {
            'min_path_points': self.detour_min_path_points,
            'max_approach_m': self.detour_max_approach_m,
            'max_direct_m': self.detour_max_direct_m,
            'min_tail_m': self.detour_min_tail_m,
            'tail_factor': self.detour_tail_factor
        }

    def get_anchor_config(self) -> dict:
        """Get configuration for AnchorConnectorBuilder"""
        return {
            'gap_min_m': self.pin_gap_min_m,
            'gap_max_m': self.pin_gap_max_m,
            'min_path_points': self.detour_min_path_points,
            'max_approach_m': self.pin_max_approach_m,
            'max_direct_m': self.pin_max_direct_m,
            'min_tail_m': self.pin_min_tail_m,
            'tail_factor': self.pin_tail_factor
        }

    def get_transfer_config(self) -> dict:
        """Get configuration for TransferMarkerDetector"""
        return {
            'offset_deg': self.transfer_offset_deg
        }

    def get_viewport_config(self) -> dict:
        """Get configuration for ViewportCalculator"""
        return {
            'padding': self.viewport_padding,
            'min_span': self.viewport_min_span,
            'pin_span': self.viewport_pin_span,
            'default_span': self.viewport_default_span,
            'default_center': (self.default_center_lat, self.default_center_lon)
        }

    def get_api_config(self) -> dict:
        """Get configuration for Flask API"""
        return {
            'host': self.host,
            'port': self.port,
            'debug': self.debug
        }


# Global configuration instance
config = Config()
