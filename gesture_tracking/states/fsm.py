"""
Gestures FSM
Event driven state machine switching between the gesture tracking states
"""

import logging
from typing import Dict, Tuple

from gesture_tracking.errors import ConfigurationError, DuplicateTransitionError, NoTransitionError
from gesture_tracking.events import EventHook, GestureRecognizedEventArgs, StateChangedEventArgs
from gesture_tracking.states.ids import FSMEventId, FSMStateId

logger = logging.getLogger(__name__)


class GesturesFSM:
    """
    Gesture identification finite state machine

    States are registered per (from state, event) edge. Each state receives
    the FSM as its controller so it can request transitions itself.
    """

    def __init__(self, context):
        if context is None:
            raise ValueError("context cannot be None")

        self.transitions: Dict[Tuple[FSMStateId, FSMEventId], object] = {}
        self.current_state = None
        self.shared_context = context

        self.state_changed = EventHook()
        self.gesture_recognized = EventHook()

    @property
    def current(self):
        return self.current_state

    @property
    def current_state_id(self) -> FSMStateId:
        return self.current_state.id if self.current_state is not None else FSMStateId.UNKNOWN

    def add_transition(self, from_state: FSMStateId, event_id: FSMEventId, state):
        """
        Register a transition edge

        Raises:
            DuplicateTransitionError: If (from_state, event_id) is already registered
        """
        key = (from_state, event_id)
        if key in self.transitions:
            raise DuplicateTransitionError(
                f"Transition from {from_state.name} on {event_id.name} is already registered")

        if state is not None:
            state.controller = self
        self.transitions[key] = state

    def _find_transition(self, state_id: FSMStateId, event_id: FSMEventId):
        key = (state_id, event_id)
        if key in self.transitions:
            return key

        # UNKNOWN as source acts as a from-any-state edge
        wildcard = (FSMStateId.UNKNOWN, event_id)
        if wildcard in self.transitions:
            return wildcard

        return None

    def initialize(self):
        """Start the FSM with an initial GO_IDLE transition"""
        if not self.transitions:
            raise ConfigurationError("No transitions added to the FSM")

        self.perform_transition(FSMEventId.GO_IDLE)

    def initialize_from_configuration(self, config):
        """
        Register all state transitions from a configuration, then initialize

        Args:
            config: Object exposing state_transitions {(from, event): to} and states {id: state}
        """
        for (from_state, event_id), to_state in config.state_transitions.items():
            if to_state not in config.states:
                raise ConfigurationError(f"State {to_state.name} is not declared")
            self.add_transition(from_state, event_id, config.states[to_state])

        self.initialize()

    def raise_gesture_recognized_event(self, args: GestureRecognizedEventArgs):
        """Transition for the gesture's event, then notify subscribers"""
        self.perform_transition(args.event)
        self.gesture_recognized.fire(self, args)

    def perform_transition(self, event_id: FSMEventId):
        """
        Perform the transition registered for the current state and event

        Raises:
            NoTransitionError: If no transition is registered or its target is None
        """
        old_state = self.current_state
        old_state_id = self.current_state_id
        key = self._find_transition(old_state_id, event_id)

        if key is None:
            raise NoTransitionError(f"No transition for event {FSMEventId(event_id).name} found")

        new_state = self.transitions[key]
        if new_state is None:
            raise NoTransitionError(f"Invalid state for event {FSMEventId(event_id).name}")

        self.current_state = new_state

        # re-entering the same state keeps its buffers untouched
        if new_state.id == old_state_id:
            return

        if old_state is not None:
            old_state.state_exited()

        new_state.state_entered(self.shared_context)

        logger.info(f"🔀 State changed: {old_state_id.name} -> {new_state.id.name}")
        self.state_changed.fire(self, StateChangedEventArgs(old_state=old_state_id, new_state=new_state.id))

    def process_skeletons(self, frame):
        """Forward a skeleton frame to the current state"""
        if self.current_state is not None:
            self.current_state.process_skeletons(frame)
