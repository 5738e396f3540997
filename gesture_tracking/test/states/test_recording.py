import unittest
from unittest.mock import Mock

from gesture_tracking.sensors.skeleton import JointId
from gesture_tracking.states.ids import FSMEventId
from gesture_tracking.states.recording import StateRecording
from gesture_tracking.test.helpers import FakeClock, frame_of, raised_right_hand
from gesture_tracking.tracking.context import TrackingContext

HOOKS = ('recording_starting', 'recording_started', 'frame_recorded', 'recording_stopping', 'recording_stopped')


class TestStateRecording(unittest.TestCase):

    def setUp(self):
        self.clock = FakeClock(100.0)
        self.context = TrackingContext(skip_frames=1, pre_recording_idle_seconds=5, max_recording_frames=3)
        self.context.active_skeleton = 1
        self.context.current_cue = JointId.HAND_RIGHT

        self.controller = Mock()
        self.state = StateRecording(clock=self.clock)
        self.state.controller = self.controller
        self.state.recording_id = "Wave"

        self.events = []
        for name in HOOKS:
            getattr(self.state, name).subscribe(
                lambda sender, args, name=name: self.events.append((name, args.id, len(args.frames))))

    def feed(self, count=1):
        for _ in range(count):
            self.state.process_skeletons(frame_of(raised_right_hand()))

    def test_frames_before_settle_delay_are_dropped(self):
        self.state.state_entered(self.context)

        self.feed()
        self.clock.advance(5)
        self.feed()

        self.assertEqual(self.state.frame_buffer, [])
        self.assertEqual(self.events, [('recording_starting', "Wave", 0)])

    def test_each_frame_after_delay_is_recorded(self):
        self.state.state_entered(self.context)
        self.clock.advance(5.5)

        self.feed(2)

        self.assertEqual(len(self.state.frame_buffer), 2)
        self.assertEqual(len(self.state.frame_buffer[0]), 6)
        self.assertEqual(self.events, [
            ('recording_starting', "Wave", 0),
            ('recording_started', "Wave", 0),
            ('frame_recorded', "Wave", 1),
            ('frame_recorded', "Wave", 2),
        ])

    def test_full_buffer_goes_idle(self):
        self.state.state_entered(self.context)
        self.clock.advance(6)

        self.feed(4)

        self.assertEqual(len(self.state.frame_buffer), 3)
        self.controller.perform_transition.assert_called_once_with(FSMEventId.GO_IDLE)

    def test_exit_reports_recorded_frames(self):
        self.state.state_entered(self.context)
        self.clock.advance(6)
        self.feed(2)
        self.events.clear()

        self.state.state_exited()

        self.assertEqual(self.events, [
            ('recording_stopping', "Wave", 2),
            ('recording_stopped', "Wave", 2),
        ])

    def test_reentering_restarts_delay(self):
        self.state.state_entered(self.context)
        self.clock.advance(6)
        self.feed(2)
        self.state.state_exited()

        self.state.state_entered(self.context)
        self.feed()

        self.assertEqual(self.state.frame_buffer, [])


if __name__ == '__main__':
    unittest.main()
