import unittest
from unittest.mock import Mock

from gesture_tracking.sensors.skeleton import JointId, Skeleton, SkeletonTrackingState, Vector
from gesture_tracking.states.idle import StateIdle
from gesture_tracking.states.ids import FSMEventId
from gesture_tracking.test.helpers import (
    BASE_POSITIONS, frame_of, make_skeleton, raised_left_hand, raised_right_hand
)
from gesture_tracking.tracking.context import TrackingContext


class TestStateIdle(unittest.TestCase):

    def setUp(self):
        self.context = TrackingContext()
        self.controller = Mock()
        self.state = StateIdle()
        self.state.controller = self.controller
        self.state.state_entered(self.context)

    def test_raised_hand_takes_attention(self):
        self.state.process_skeletons(frame_of(make_skeleton(1), raised_right_hand(7)))

        self.assertEqual(self.context.active_skeleton, 7)
        self.assertEqual(self.context.current_cue, JointId.HAND_RIGHT)
        self.controller.perform_transition.assert_called_once_with(FSMEventId.WAIT_FOR_COMMAND)

    def test_lowered_hands_are_ignored(self):
        self.state.process_skeletons(frame_of(make_skeleton(1), make_skeleton(2)))

        self.assertFalse(self.context.has_active_skeleton)
        self.assertIsNone(self.context.current_cue)
        self.controller.perform_transition.assert_not_called()

    def test_hand_at_head_height_counts(self):
        skeleton = make_skeleton(1, HAND_LEFT=Vector(-0.3, 0.6, 2.0))

        self.state.process_skeletons(frame_of(skeleton))

        self.assertEqual(self.context.current_cue, JointId.HAND_LEFT)

    def test_first_skeleton_wins(self):
        self.state.process_skeletons(frame_of(raised_left_hand(3), raised_right_hand(4)))

        self.assertEqual(self.context.active_skeleton, 3)
        self.assertEqual(self.context.current_cue, JointId.HAND_LEFT)
        self.controller.perform_transition.assert_called_once_with(FSMEventId.WAIT_FOR_COMMAND)

    def test_untracked_skeleton_is_ignored(self):
        skeleton = make_skeleton(1, SkeletonTrackingState.NOT_TRACKED, HAND_RIGHT=Vector(0.3, 0.9, 2.0))

        self.state.process_skeletons(frame_of(skeleton))

        self.controller.perform_transition.assert_not_called()

    def test_entering_clears_cue(self):
        self.context.current_cue = JointId.HAND_RIGHT

        self.state.state_entered(self.context)

        self.assertIsNone(self.context.current_cue)

    def test_highest_hand_is_the_cue(self):
        skeleton = make_skeleton(1, HAND_LEFT=Vector(-0.3, 0.9, 2.0), HAND_RIGHT=Vector(0.3, 0.7, 2.0))

        cue = StateIdle.skeleton_needs_attention(skeleton)

        self.assertEqual(cue.id, JointId.HAND_LEFT)

    def test_skeleton_without_head(self):
        positions = {joint_id: p for joint_id, p in BASE_POSITIONS.items() if joint_id != JointId.HEAD}
        positions[JointId.HAND_RIGHT] = Vector(0.3, 0.9, 2.0)

        self.assertIsNone(StateIdle.skeleton_needs_attention(Skeleton(1, positions)))


if __name__ == '__main__':
    unittest.main()
