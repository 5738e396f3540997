"""
Idle State
Watches every tracked skeleton for a hand raised to head height or above
"""

import logging
from typing import Iterable, Optional

from gesture_tracking.sensors.skeleton import Joint, JointId, SkeletonData, SkeletonTrackingState
from gesture_tracking.states.base_state import StateBase
from gesture_tracking.states.ids import FSMEventId, FSMStateId
from gesture_tracking.tracking.context import TrackingContext
from gesture_tracking.utils import max_by

logger = logging.getLogger(__name__)

CUE_JOINT_IDS = (JointId.HAND_LEFT, JointId.HAND_RIGHT)


class StateIdle(StateBase):

    def __init__(self, clock=None):
        super().__init__(FSMStateId.IDLE, clock)

    def state_entered(self, context: TrackingContext):
        super().state_entered(context)
        context.current_cue = None

    def observable_skeletons(self, skeletons: Iterable[SkeletonData]) -> Iterable[SkeletonData]:
        for skeleton in skeletons:
            if skeleton.tracking_state != SkeletonTrackingState.NOT_TRACKED:
                yield skeleton

    def process_skeleton(self, skeleton: SkeletonData) -> bool:
        cue_joint = self.skeleton_needs_attention(skeleton)
        if cue_joint is None:
            return True

        self.context.active_skeleton = skeleton.tracking_id
        self.context.current_cue = cue_joint.id
        logger.info(f"✋ Skeleton {skeleton.tracking_id} raised {cue_joint.id.name}")
        self.controller.perform_transition(FSMEventId.WAIT_FOR_COMMAND)

        # only one skeleton may take control per frame
        return False

    @staticmethod
    def skeleton_needs_attention(skeleton: SkeletonData) -> Optional[Joint]:
        """
        Find the cue joint of a skeleton trying to get attention

        The highest raised hand counts when it is at the head's height or above.

        Returns:
            The cue joint, or None
        """
        head = skeleton.joint_at(JointId.HEAD)
        if head is None:
            return None

        candidates = [joint for joint in skeleton.joints if joint.id in CUE_JOINT_IDS]
        cue_joint = max_by(candidates, lambda joint: joint.position.y)

        if cue_joint is not None and head.position.y <= cue_joint.position.y:
            return cue_joint
        return None
