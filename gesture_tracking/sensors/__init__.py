#!/usr/bin/env python3
"""
Skeleton Sensors Package

The MediaPipe adapter is imported from gesture_tracking.sensors.mediapipe
so the data shapes stay usable without the model runtime.
"""

from .skeleton import (
    Frame,
    Joint,
    JointId,
    Skeleton,
    SkeletonData,
    SkeletonFrame,
    SkeletonTrackingState,
    Vector
)
from .base_skeleton_source import BaseSkeletonSource

__all__ = [
    'Frame',
    'Joint',
    'JointId',
    'Skeleton',
    'SkeletonData',
    'SkeletonFrame',
    'SkeletonTrackingState',
    'Vector',
    'BaseSkeletonSource'
]
