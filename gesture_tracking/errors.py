"""
Gesture Tracking Errors
Common exception hierarchy for configuration, matching and persistence
"""


class GestureTrackingError(Exception):
    """Base exception for gesture tracking errors"""
    pass


class ConfigurationError(GestureTrackingError):
    """Raised when the configuration is missing, malformed or incomplete"""
    pass


class DuplicateTransitionError(ConfigurationError):
    """Raised when the same (state, event) transition is registered twice"""
    pass


class InvalidArgumentError(GestureTrackingError, ValueError):
    """Raised when None or empty data is passed to matching or persistence calls"""
    pass


class NoTransitionError(GestureTrackingError):
    """Raised when the current state has no transition for the requested event"""
    pass


class TemplateDecodeError(GestureTrackingError):
    """Raised when a persisted gesture template cannot be decoded"""
    pass
