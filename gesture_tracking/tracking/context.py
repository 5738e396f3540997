"""
Tracking Context
Mutable record shared by all states of one gesture FSM
"""

from enum import IntEnum
from typing import Optional

from gesture_tracking.sensors.skeleton import Joint, JointId
from gesture_tracking.tracking.constants import RecognitionConstants


class TrackingMode(IntEnum):
    """Geometrical dimensionality of the tracking, value is the number of axes"""
    MODE_2D = 2
    MODE_3D = 3


# Joints followed for each cue limb
CUE_JOINTS = {
    JointId.HAND_LEFT: (JointId.HAND_LEFT, JointId.WRIST_LEFT, JointId.ELBOW_LEFT),
    JointId.HAND_RIGHT: (JointId.HAND_RIGHT, JointId.WRIST_RIGHT, JointId.ELBOW_RIGHT),
}


class TrackingContext:
    """Shared tracking state: active body, cue joint and tracking parameters"""

    def __init__(self,
                 tracking_mode: TrackingMode = TrackingMode.MODE_2D,
                 min_frames: int = RecognitionConstants.GESTURE_MIN_FRAMES_COUNT,
                 max_frames: int = RecognitionConstants.GESTURE_MAX_FRAMES_COUNT,
                 skip_frames: int = RecognitionConstants.SKELETON_SKIP_FRAME_COUNT,
                 max_idle_seconds: float = RecognitionConstants.MAX_IDLE_SECONDS,
                 pre_recording_idle_seconds: float = RecognitionConstants.PRE_RECORDING_IDLE_TIME,
                 max_recording_frames: int = RecognitionConstants.GESTURE_MAX_FRAMES_COUNT):
        self._active_skeleton_id = RecognitionConstants.INVALID_SKELETON_IDX
        self.current_cue: Optional[JointId] = None
        self.tracking_mode = TrackingMode(tracking_mode)
        self.min_frames = min_frames
        self.max_frames = max_frames
        self.skip_frames = skip_frames
        self.max_idle_seconds = max_idle_seconds
        self.pre_recording_idle_seconds = pre_recording_idle_seconds
        self.max_recording_frames = max_recording_frames

    @property
    def active_skeleton(self) -> int:
        """Tracking id of the body being followed"""
        if self._active_skeleton_id == RecognitionConstants.INVALID_SKELETON_IDX:
            raise RuntimeError("active skeleton read before it was set")
        return self._active_skeleton_id

    @active_skeleton.setter
    def active_skeleton(self, value: int):
        if value == RecognitionConstants.INVALID_SKELETON_IDX:
            raise ValueError("can't set invalid skeleton idx")
        self._active_skeleton_id = value

    @property
    def has_active_skeleton(self) -> bool:
        return self._active_skeleton_id != RecognitionConstants.INVALID_SKELETON_IDX

    def is_joint_tracked(self, joint: Joint) -> bool:
        """
        Determine if a joint is tracked for recognition with respect to the current cue

        Args:
            joint: The joint to check

        Returns:
            True only for the hand, wrist and elbow of the cue limb
        """
        if self.current_cue is None:
            return False
        return joint.id in CUE_JOINTS.get(self.current_cue, ())

    @property
    def tracking_dimensionality(self) -> int:
        """Observation vector length: tracked joints x axes, 0 without a cue"""
        if self.current_cue is None:
            return 0
        return len(CUE_JOINTS.get(self.current_cue, ())) * int(self.tracking_mode)

    def __repr__(self):
        return (f"TrackingContext(cue={self.current_cue}, mode={self.tracking_mode.name}, "
                f"frames={self.min_frames}..{self.max_frames}, skip={self.skip_frames})")
