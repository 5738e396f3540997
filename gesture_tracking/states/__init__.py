#!/usr/bin/env python3
"""
Gesture FSM States Package
"""

from .ids import FSMStateId, FSMEventId, parse_id
from .base_state import StateBase
from .tracking_base import StateTrackingBase
from .idle import StateIdle
from .waiting_command import StateWaitingCommand
from .recording import StateRecording
from .fsm import GesturesFSM

__all__ = [
    'FSMStateId',
    'FSMEventId',
    'parse_id',
    'StateBase',
    'StateTrackingBase',
    'StateIdle',
    'StateWaitingCommand',
    'StateRecording',
    'GesturesFSM'
]
