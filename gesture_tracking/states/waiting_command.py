"""
Waiting For Command State
Continuously matches the active skeleton's recent movement against the gesture templates
"""

import logging

from gesture_tracking.events import GestureRecognizedEventArgs
from gesture_tracking.sensors.skeleton import SkeletonData
from gesture_tracking.states.ids import FSMEventId, FSMStateId
from gesture_tracking.states.tracking_base import StateTrackingBase
from gesture_tracking.tracking.context import TrackingContext
from gesture_tracking.tracking.dtw_recognizer import DTWRecognizer

logger = logging.getLogger(__name__)


class StateWaitingCommand(StateTrackingBase):
    """
    Recognizes gestures of the active skeleton.

    The configuration supplies the templates (gestures), their thresholds
    (gesture_settings) and the (state, gesture) -> event mapping
    (gesture_transitions). Only gestures mapped from this state are matched.
    """

    def __init__(self, configuration, clock=None):
        super().__init__(FSMStateId.WAITING_FOR_COMMAND, clock)
        self.configuration = configuration
        self.recognizer = DTWRecognizer()
        self.last_recognition_time = self.clock()

    @property
    def initialized(self) -> bool:
        return self.recognizer is not None and super().initialized

    def state_entered(self, context: TrackingContext):
        super().state_entered(context)

        self.recognizer.clear()
        self.recognizer.sequence_dimension_size = context.tracking_dimensionality
        self.load_gestures_to_match()

    def process_skeleton(self, skeleton: SkeletonData) -> bool:
        if self.can_handle_frame:
            frame_buffer = self.frame_buffer

            if len(frame_buffer) > self.context.min_frames:
                gesture = self.recognizer.recognize(frame_buffer)

                if gesture.is_known:
                    event_id = self.configuration.gesture_transitions[(self.id, gesture.id)]
                    logger.info(f"🎯 Gesture recognized: {gesture.id} (distance {gesture.min_distance:.3f})")
                    self.controller.raise_gesture_recognized_event(GestureRecognizedEventArgs(gesture, event_id))
                    self.reset_state()

                self.exit_state_on_idle()

            # new buffer object after a reset
            frame_buffer = self.frame_buffer
            while len(frame_buffer) >= self.context.max_frames:
                frame_buffer.pop(0)

            frame_buffer.append(self.observation(skeleton))

        # only the active skeleton is handled
        return False

    def reset_state(self):
        super().reset_state()
        self.last_recognition_time = self.clock()

    def exit_state_on_idle(self):
        """Go back to idle when nothing was recognized for too long"""
        if self.clock() - self.last_recognition_time > self.context.max_idle_seconds:
            logger.info(f"💤 No gesture for {self.context.max_idle_seconds}s, going idle")
            self.controller.perform_transition(FSMEventId.GO_IDLE)

    def load_gestures_to_match(self):
        """Load every template that has a gesture transition from this state"""
        cfg = self.configuration

        for (from_state, gesture_id) in cfg.gesture_transitions:
            if from_state == self.id:
                self.recognizer.add_patterns(gesture_id, cfg.gestures[gesture_id], cfg.gesture_settings[gesture_id])

        logger.debug(f"Loaded {len(self.recognizer)} gesture templates for {self.id.name}")
