"""
Custom exceptions for MaiWay overlay engine
"""

class OverlayError(Exception):
    """Base exception for MaiWay overlay engine"""
    pass


class InvalidRouteError(OverlayError, TypeError):
    """Raised when the caller passes something that is not a Route (or a non-segment entry)"""
    pass


class InvalidCoordinatesError(OverlayError, ValueError):
    """Raised when coordinate text supplied by a caller cannot be parsed"""
    pass


class PayloadError(OverlayError, ValueError):
    """Raised when a provider payload does not match the expected shape"""

    def __init__(self, message: str, errors=None):
        super().__init__(message)
        self.errors = errors or []


class ConfigurationError(OverlayError, ValueError):
    """Raised when a tuning value is out of range"""
    pass
