"""
Configuration
Loads states, gesture templates, transitions and thresholds from a YAML document.

Load order matters: states and gestures must be declared before the
transitions and threshold settings that refer to them.
"""

import logging
import os
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import numpy as np
import yaml
from pydantic import BaseModel, ValidationError, field_validator, model_validator

from gesture_tracking.errors import ConfigurationError, DuplicateTransitionError
from gesture_tracking.events import GestureRecordingEventArgs
from gesture_tracking.persistence.gesture_store import GestureStore
from gesture_tracking.sensors.skeleton import JointId
from gesture_tracking.states.ids import FSMEventId, FSMStateId, parse_id
from gesture_tracking.states.idle import StateIdle
from gesture_tracking.states.recording import StateRecording
from gesture_tracking.states.waiting_command import StateWaitingCommand
from gesture_tracking.tracking.constants import RecognitionConstants
from gesture_tracking.tracking.context import CUE_JOINTS, TrackingContext, TrackingMode
from gesture_tracking.tracking.dtw_recognizer import ThresholdSettings
from gesture_tracking.tracking.gesture import UNKNOWN_GESTURE

logger = logging.getLogger(__name__)

CONFIG_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "config", "config_v1.yaml")

Identifier = Union[str, int]


# --------- Document schema ---------

class TrackingSection(BaseModel):
    mode: str = "2d"
    min_frames: int = RecognitionConstants.GESTURE_MIN_FRAMES_COUNT
    max_frames: int = RecognitionConstants.GESTURE_MAX_FRAMES_COUNT
    skip_frames: int = RecognitionConstants.SKELETON_SKIP_FRAME_COUNT
    max_idle_seconds: float = RecognitionConstants.MAX_IDLE_SECONDS
    pre_recording_idle_seconds: float = RecognitionConstants.PRE_RECORDING_IDLE_TIME
    max_recording_frames: int = RecognitionConstants.GESTURE_MAX_FRAMES_COUNT

    @field_validator('mode')
    @classmethod
    def check_mode(cls, value: str) -> str:
        value = str(value).lower()
        if value not in ('2d', '3d'):
            raise ValueError(f"tracking mode must be 2d or 3d, got {value}")
        return value

    @field_validator('min_frames', 'max_frames', 'skip_frames', 'max_recording_frames')
    @classmethod
    def check_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("frame counts must be positive")
        return value

    @model_validator(mode='after')
    def check_buffer_sizes(self) -> 'TrackingSection':
        # recognition needs more than min_frames buffered, the buffer holds max_frames
        if self.min_frames >= self.max_frames:
            raise ValueError(f"min_frames ({self.min_frames}) must be less than max_frames ({self.max_frames})")
        return self

    @property
    def tracking_mode(self) -> TrackingMode:
        return TrackingMode.MODE_3D if self.mode == '3d' else TrackingMode.MODE_2D

    @property
    def observation_size(self) -> int:
        """Observation vector length implied by the mode: cue joints x axes"""
        return len(CUE_JOINTS[JointId.HAND_RIGHT]) * int(self.tracking_mode)


class StateEntry(BaseModel):
    id: Identifier
    type: str


class GestureEntry(BaseModel):
    id: str
    filename: str


class GestureTransitionEntry(BaseModel):
    from_state: Identifier
    on_gesture: str
    raise_event: Identifier


class StateTransitionEntry(BaseModel):
    from_state: Identifier
    on_event: Identifier
    to_state: Identifier


class ThresholdEntry(BaseModel):
    first_threshold: Optional[float] = None
    match_threshold: Optional[float] = None
    max_slope: Optional[float] = None


class GestureThresholdEntry(ThresholdEntry):
    gesture: str


class GestureSettingsSection(BaseModel):
    general: Optional[ThresholdEntry] = None
    gestures: List[GestureThresholdEntry] = []


class ConfigDocument(BaseModel):
    gestures_folder: str = "gestures"
    tracking: Optional[TrackingSection] = None
    states: List[StateEntry] = []
    gestures: List[GestureEntry] = []
    gesture_transitions: List[GestureTransitionEntry] = []
    state_transitions: List[StateTransitionEntry] = []
    gesture_settings: GestureSettingsSection = GestureSettingsSection()


# State factories by configured type name
STATE_TYPES: Dict[str, Callable[['Configuration'], Any]] = {
    'idle': lambda cfg: StateIdle(clock=cfg.clock),
    'waiting_for_command': lambda cfg: StateWaitingCommand(cfg, clock=cfg.clock),
    'recording': lambda cfg: StateRecording(clock=cfg.clock),
}


def _parse(enum_type, value: Identifier, what: str):
    try:
        return parse_id(enum_type, value)
    except ValueError as e:
        raise ConfigurationError(f"Invalid {what}: {e}") from e


class Configuration:
    """Explicitly constructed configuration shared by the FSM and its states"""

    def __init__(self, gestures_folder: str = "gestures", clock: Callable[[], float] = None):
        self.gestures_folder = gestures_folder
        self.clock = clock
        self.store = GestureStore(gestures_folder)
        self.tracking: Optional[TrackingSection] = None
        self.states: Dict[FSMStateId, Any] = {}
        self.gestures: Dict[str, List[np.ndarray]] = {}
        self.gesture_transitions: Dict[Tuple[FSMStateId, str], FSMEventId] = {}
        self.state_transitions: Dict[Tuple[FSMStateId, FSMEventId], FSMStateId] = {}
        self.gesture_settings: Dict[str, ThresholdSettings] = {}

    @classmethod
    def from_file(cls, config_path: str = CONFIG_PATH, clock: Callable[[], float] = None) -> 'Configuration':
        cfg = cls(clock=clock)
        cfg.initialize_from(config_path)
        return cfg

    # --------- Loading ---------

    def initialize_from(self, config_path: str):
        """
        Initialize from a YAML configuration file

        Raises:
            ConfigurationError: If the file is missing or its content is invalid
        """
        if not os.path.exists(config_path):
            raise ConfigurationError(f"File {config_path} does not exist")

        try:
            with open(config_path, 'r') as file:
                raw = yaml.safe_load(file) or {}
        except yaml.YAMLError as e:
            logger.error(f"❌ Error parsing config {config_path}: {e}")
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        self.load_document(raw, base_dir=os.path.dirname(os.path.abspath(config_path)))
        logger.info(f"✅ Configuration loaded from {config_path}")

    def load_document(self, raw: Dict[str, Any], base_dir: str = "."):
        """Initialize from an already parsed configuration mapping"""
        try:
            document = ConfigDocument.model_validate(raw)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        folder = document.gestures_folder
        self.gestures_folder = folder if os.path.isabs(folder) else os.path.join(base_dir, folder)
        self.store = GestureStore(self.gestures_folder)
        self.tracking = document.tracking

        self.load_states(document.states)
        self.load_gestures(document.gestures)
        self.load_gesture_transitions(document.gesture_transitions)
        self.load_state_transitions(document.state_transitions)
        self.load_thresholds(document.gesture_settings)
        self.check_template_sizes()

    def load_states(self, entries: List[StateEntry]):
        """Create the state objects"""
        for entry in entries:
            factory = STATE_TYPES.get(entry.type.lower())
            if factory is None:
                raise ConfigurationError(f"Unknown state type '{entry.type}'")

            state = factory(self)
            declared_id = _parse(FSMStateId, entry.id, "state id")
            if state.id != declared_id:
                raise ConfigurationError(
                    f"Configuration error. State {entry.type} is specified with id "
                    f"{declared_id.name} where actual id is {state.id.name}")
            if state.id in self.states:
                raise ConfigurationError(f"State {state.id.name} is declared twice")

            self.states[state.id] = state

    def load_gestures(self, entries: List[GestureEntry]):
        """Load the gesture template files"""
        for entry in entries:
            if entry.id == UNKNOWN_GESTURE:
                raise ConfigurationError(f"'{UNKNOWN_GESTURE}' cannot be used as a gesture id")
            if entry.id in self.gestures:
                raise ConfigurationError(f"Gesture {entry.id} is declared twice")
            self.gestures[entry.id] = self.store.load_gesture(entry.filename)

    def load_gesture_transitions(self, entries: List[GestureTransitionEntry]):
        for entry in entries:
            from_state = _parse(FSMStateId, entry.from_state, "state id")
            event_id = _parse(FSMEventId, entry.raise_event, "event id")

            if entry.on_gesture not in self.gestures:
                raise ConfigurationError(
                    f"Gesture {entry.on_gesture} is not specified in the gestures section of the config file")
            if from_state not in self.states:
                raise ConfigurationError(
                    f"State {from_state.name} is not specified in the states section of the config file")

            key = (from_state, entry.on_gesture)
            if key in self.gesture_transitions:
                raise DuplicateTransitionError(
                    f"Gesture transition from {from_state.name} on {entry.on_gesture} is declared twice")

            self.gesture_transitions[key] = event_id

    def load_state_transitions(self, entries: List[StateTransitionEntry]):
        for entry in entries:
            from_state = _parse(FSMStateId, entry.from_state, "state id")
            to_state = _parse(FSMStateId, entry.to_state, "state id")
            event_id = _parse(FSMEventId, entry.on_event, "event id")

            if from_state not in self.states and from_state != FSMStateId.UNKNOWN:
                raise ConfigurationError(
                    f"State {from_state.name} is not specified in the states section of the config file")
            if to_state not in self.states:
                raise ConfigurationError(
                    f"State {to_state.name} is not specified in the states section of the config file")

            key = (from_state, event_id)
            if key in self.state_transitions:
                raise DuplicateTransitionError(
                    f"State transition from {from_state.name} on {event_id.name} is declared twice")

            self.state_transitions[key] = to_state

    def load_thresholds(self, section: GestureSettingsSection):
        """Load per gesture thresholds, falling back to the general settings"""
        general = None
        if section.general is not None:
            general = ThresholdSettings.from_dict(section.general.model_dump(), throw_on_missing=False)

        for entry in section.gestures:
            if entry.gesture not in self.gestures:
                raise ConfigurationError(
                    f"Gesture {entry.gesture} is not specified in the gestures section of the config file")
            if entry.gesture in self.gesture_settings:
                raise ConfigurationError(f"Settings for gesture {entry.gesture} are declared twice")
            self.gesture_settings[entry.gesture] = ThresholdSettings.from_dict(entry.model_dump())

        # every gesture needs settings
        for gesture_id in self.gestures:
            if gesture_id not in self.gesture_settings:
                if general is None:
                    raise ConfigurationError(
                        f"Gesture {gesture_id} has no own settings and no general settings exist!")
                self.gesture_settings[gesture_id] = general

    def check_template_sizes(self):
        """Every template row must match the observation size of the tracking mode"""
        if self.tracking is None:
            return

        expected = self.tracking.observation_size
        for gesture_id, frames in self.gestures.items():
            widths = {len(frame) for frame in frames}
            if widths != {expected}:
                raise ConfigurationError(
                    f"Gesture {gesture_id} has observations of size {sorted(widths)}, "
                    f"{self.tracking.mode} tracking needs {expected}")

    # --------- Context and persistence ---------

    def create_context(self) -> TrackingContext:
        """
        Build the tracking context for a session

        Raises:
            ConfigurationError: If the tracking section is missing
        """
        if self.tracking is None:
            raise ConfigurationError("Tracking parameters are missing from the configuration")

        t = self.tracking
        return TrackingContext(
            tracking_mode=t.tracking_mode,
            min_frames=t.min_frames,
            max_frames=t.max_frames,
            skip_frames=t.skip_frames,
            max_idle_seconds=t.max_idle_seconds,
            pre_recording_idle_seconds=t.pre_recording_idle_seconds,
            max_recording_frames=t.max_recording_frames
        )

    def save_gesture(self, args: GestureRecordingEventArgs) -> str:
        return self.store.save_gesture(args)

    def load_gesture(self, file_name: str) -> List[np.ndarray]:
        return self.store.load_gesture(file_name)
