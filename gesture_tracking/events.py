"""
Event notifications
Synchronous, in-order callback delivery for state, gesture and recording events
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List

import numpy as np

Handler = Callable[[Any, Any], None]


class EventHook:
    """Ordered list of handlers called with (sender, args)"""

    def __init__(self):
        self.handlers: List[Handler] = []

    def subscribe(self, handler: Handler):
        self.handlers.append(handler)
        return handler

    def unsubscribe(self, handler: Handler):
        self.handlers.remove(handler)

    def fire(self, sender: Any, args: Any = None):
        """Deliver the event to every handler on the calling thread"""
        for handler in list(self.handlers):
            handler(sender, args)

    def __len__(self):
        return len(self.handlers)


@dataclass
class StateChangedEventArgs:
    old_state: Any
    new_state: Any


@dataclass
class GestureRecognizedEventArgs:
    gesture: Any
    event: Any


@dataclass
class GestureRecordingEventArgs:
    """Recording notification payload: gesture label and the frames captured so far"""
    id: str = None
    frames: List[np.ndarray] = field(default_factory=list)
