#!/usr/bin/env python3
"""
Tracking Package
Feature extraction, tracking context and DTW matching
"""

from .constants import RecognitionConstants
from .context import TrackingContext, TrackingMode
from .gesture import Gesture, UNKNOWN_GESTURE
from .skeleton_tracking_data import SkeletonTrackingData
from .dtw_recognizer import DTWRecognizer, ThresholdSettings

__all__ = [
    'RecognitionConstants',
    'TrackingContext',
    'TrackingMode',
    'Gesture',
    'UNKNOWN_GESTURE',
    'SkeletonTrackingData',
    'DTWRecognizer',
    'ThresholdSettings'
]
