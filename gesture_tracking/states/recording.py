"""
Recording State
Captures the active skeleton's movement as a new gesture template
"""

import logging

from gesture_tracking.events import EventHook, GestureRecordingEventArgs
from gesture_tracking.sensors.skeleton import SkeletonData
from gesture_tracking.states.ids import FSMEventId, FSMStateId
from gesture_tracking.states.tracking_base import StateTrackingBase
from gesture_tracking.tracking.context import TrackingContext

logger = logging.getLogger(__name__)


class StateRecording(StateTrackingBase):
    """
    Records frames after a settle delay.

    Lifecycle events, all carrying GestureRecordingEventArgs(recording_id, frames):
    recording_starting -> recording_started -> frame_recorded* -> recording_stopping -> recording_stopped
    """

    def __init__(self, clock=None):
        super().__init__(FSMStateId.RECORDING, clock)
        self.recording_id = None
        self.start_time = 0.0
        self._can_record = False

        self.recording_starting = EventHook()
        self.recording_started = EventHook()
        self.recording_stopping = EventHook()
        self.recording_stopped = EventHook()
        self.frame_recorded = EventHook()

    @property
    def can_handle_frame(self) -> bool:
        return super().can_handle_frame and self.can_record

    @property
    def can_record(self) -> bool:
        """True once the pre-recording delay has elapsed"""
        if not self._can_record:
            self._can_record = (self.clock() - self.start_time) > self.context.pre_recording_idle_seconds

            if self._can_record:
                logger.info(f"🔴 Recording gesture {self.recording_id}")
                self.raise_event(self.recording_started)

        return self._can_record

    def state_entered(self, context: TrackingContext):
        super().state_entered(context)

        self.raise_event(self.recording_starting)
        self.start_time = self.clock()
        self._can_record = False

    def state_exited(self):
        self.raise_event(self.recording_stopping)
        super().state_exited()
        logger.info(f"⏹️ Recording of {self.recording_id} stopped with {len(self.frame_buffer)} frames")
        self.raise_event(self.recording_stopped)

    def process_skeleton(self, skeleton: SkeletonData) -> bool:
        if self.can_handle_frame:
            if len(self.frame_buffer) >= self.context.max_recording_frames:
                self.controller.perform_transition(FSMEventId.GO_IDLE)
            else:
                self.frame_buffer.append(self.observation(skeleton))
                self.raise_event(self.frame_recorded)

        # only the active skeleton is handled
        return False

    def raise_event(self, hook: EventHook, args: GestureRecordingEventArgs = None):
        if args is None:
            args = GestureRecordingEventArgs(id=self.recording_id, frames=self.frame_buffer)
        hook.fire(self, args)
