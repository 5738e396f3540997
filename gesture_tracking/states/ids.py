"""
State and event identifiers of the gesture FSM
"""

from enum import IntEnum
from typing import Union


class FSMStateId(IntEnum):
    UNKNOWN = 0
    IDLE = 1
    WAITING_FOR_COMMAND = 2
    RECORDING = 3


class FSMEventId(IntEnum):
    UNKNOWN = 0
    GO_IDLE = 1
    WAIT_FOR_COMMAND = 2
    RECORD = 3


def _normalize(name: str) -> str:
    return name.replace('_', '').replace('-', '').replace(' ', '').lower()


def parse_id(enum_type, value: Union[str, int]):
    """
    Parse an identifier given by name or value

    Accepts 'WaitingForCommand', 'WAITING_FOR_COMMAND', 'waiting_for_command' or 2.

    Raises:
        ValueError: If the value does not name a member
    """
    if isinstance(value, enum_type):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return enum_type(value)
    if isinstance(value, str):
        if value.strip().isdigit():
            return enum_type(int(value))
        wanted = _normalize(value)
        for member in enum_type:
            if _normalize(member.name) == wanted:
                return member
    raise ValueError(f"'{value}' is not a valid {enum_type.__name__}")
