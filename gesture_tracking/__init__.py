"""
Gesture Tracking
Skeletal gesture recognition with DTW template matching and a gesture state machine
"""

from .configuration import Configuration
from .errors import (
    ConfigurationError,
    DuplicateTransitionError,
    GestureTrackingError,
    InvalidArgumentError,
    NoTransitionError,
    TemplateDecodeError
)
from .session import GestureSession

__version__ = "0.1.0"

__all__ = [
    'Configuration',
    'GestureSession',
    'GestureTrackingError',
    'ConfigurationError',
    'DuplicateTransitionError',
    'InvalidArgumentError',
    'NoTransitionError',
    'TemplateDecodeError'
]
