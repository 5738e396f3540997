"""
Tracking Base State
Shared buffer and frame-skip handling for states that follow the active skeleton
"""

from typing import Callable, Iterable, List

import numpy as np

from gesture_tracking.sensors.skeleton import SkeletonData, SkeletonTrackingState
from gesture_tracking.states.base_state import StateBase
from gesture_tracking.states.ids import FSMStateId
from gesture_tracking.tracking.context import TrackingContext
from gesture_tracking.tracking.skeleton_tracking_data import SkeletonTrackingData


class StateTrackingBase(StateBase):
    """Follows only the active skeleton and keeps a frame buffer"""

    def __init__(self, state_id: FSMStateId, clock: Callable[[], float] = None):
        super().__init__(state_id, clock)
        self.frame_buffer: List[np.ndarray] = []
        self.frame_counter = 0

    @property
    def can_handle_frame(self) -> bool:
        """True for every skip_frames-th frame"""
        skip = max(1, self.context.skip_frames)
        self.frame_counter = (self.frame_counter + 1) % skip
        return self.frame_counter == 0

    def state_entered(self, context: TrackingContext):
        super().state_entered(context)
        self.reset_state()

    def observable_skeletons(self, skeletons: Iterable[SkeletonData]) -> Iterable[SkeletonData]:
        """Yield the active skeleton, if it is tracked in this frame"""
        active_id = self.context.active_skeleton

        for skeleton in skeletons:
            if skeleton.tracking_state != SkeletonTrackingState.NOT_TRACKED and skeleton.tracking_id == active_id:
                yield skeleton
                break

    def reset_state(self):
        self.frame_counter = 0
        self.frame_buffer = []

    def observation(self, skeleton: SkeletonData) -> np.ndarray:
        """Observation vector of the cue limb joints of a skeleton"""
        return SkeletonTrackingData(skeleton, self.context.is_joint_tracked, self.context).dtw_data
