"""
Gesture Session
Builds the tracking context and the FSM from a configuration and routes frames into it
"""

import logging
from typing import Optional

from gesture_tracking.configuration import Configuration
from gesture_tracking.errors import ConfigurationError
from gesture_tracking.sensors.skeleton import SkeletonFrame
from gesture_tracking.states.fsm import GesturesFSM
from gesture_tracking.states.ids import FSMEventId, FSMStateId

logger = logging.getLogger(__name__)


class GestureSession:
    """One gesture recognition session: shared context + FSM wired from configuration"""

    def __init__(self, configuration: Configuration):
        """
        One session per configuration: the configured states are bound to this session's FSM

        Raises:
            ConfigurationError: If the configuration already drives another session
        """
        bound = [state for state in configuration.states.values() if state.controller is not None]
        if bound:
            raise ConfigurationError(f"States {bound} already belong to another session")

        self.configuration = configuration
        self.context = configuration.create_context()
        self.fsm = GesturesFSM(self.context)
        self.fsm.initialize_from_configuration(configuration)

        logger.info(f"🚀 Session started in state {self.current_state_id.name}")

    @property
    def current_state_id(self) -> FSMStateId:
        return self.fsm.current_state_id

    @property
    def recording_state(self):
        return self.configuration.states.get(FSMStateId.RECORDING)

    def process_skeletons(self, frame: Optional[SkeletonFrame]):
        """Feed one skeleton frame into the active state"""
        self.fsm.process_skeletons(frame)

    def start_recording(self, label: str):
        """
        Request the RECORD transition for a new gesture template

        Raises:
            ConfigurationError: If no recording state is configured
            NoTransitionError: If the current state cannot start recording
        """
        recording = self.recording_state
        if recording is None:
            raise ConfigurationError("No recording state is configured")

        recording.recording_id = label
        self.fsm.perform_transition(FSMEventId.RECORD)
