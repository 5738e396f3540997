"""
Skeleton Tracking Data
Turns the joints of one skeleton into a position and scale invariant observation vector.

Normalization:
1. Origin: midpoint between the two shoulders
2. Unit: Euclidean distance between the shoulders
3. Every joint accepted by the filter becomes (position - origin) / unit
"""

from typing import Callable, Dict, Optional

import numpy as np

from gesture_tracking.sensors.skeleton import Joint, JointId, SkeletonData
from gesture_tracking.tracking.context import TrackingContext


class SkeletonTrackingData:
    """Lazily normalized joint data of a single skeleton for a single frame"""

    def __init__(self, skeleton: SkeletonData, joint_filter: Callable[[Joint], bool],
                 context: TrackingContext):
        """
        Args:
            skeleton: The skeleton data (shoulders must be present)
            joint_filter: Predicate selecting the joints to track
            context: The shared tracking context
        """
        self.skeleton = skeleton
        self.joint_filter = joint_filter
        self.context = context
        self._points: Optional[Dict[JointId, np.ndarray]] = None

    def __getitem__(self, joint_id: JointId) -> Optional[np.ndarray]:
        self._check_and_initialize()
        return self._points.get(joint_id)

    def _check_and_initialize(self):
        if self._points is not None:
            return

        shoulder_left = self.skeleton.joint_at(JointId.SHOULDER_LEFT).position.to_array()
        shoulder_right = self.skeleton.joint_at(JointId.SHOULDER_RIGHT).position.to_array()

        center = (shoulder_left + shoulder_right) / 2
        shoulder_dist = np.linalg.norm(shoulder_left - shoulder_right)

        points = {}
        for joint in self.skeleton.joints:
            if self.joint_filter(joint):
                points[joint.id] = (joint.position.to_array() - center) / shoulder_dist

        self._points = points

    @property
    def dtw_data(self) -> np.ndarray:
        """Flat observation vector, (x, y) or (x, y, z) per tracked joint"""
        self._check_and_initialize()

        axes = int(self.context.tracking_mode)
        data = np.zeros(self.context.tracking_dimensionality, dtype=np.float64)

        for i, point in enumerate(self._points.values()):
            if axes * (i + 1) > len(data):
                break
            data[axes * i:axes * (i + 1)] = point[:axes]

        return data
