"""
Base State
Common frame processing for all gesture FSM states
"""

import time
from abc import ABC, abstractmethod
from typing import Callable, Iterable, Optional

from gesture_tracking.sensors.skeleton import SkeletonData, SkeletonFrame
from gesture_tracking.states.ids import FSMStateId
from gesture_tracking.tracking.context import TrackingContext


class StateBase(ABC):
    """
    Base class for all states.

    Subclasses customize two hooks:
    - observable_skeletons: which bodies of a frame the state looks at
    - process_skeleton: per-body processing, returns False to stop iterating
    """

    def __init__(self, state_id: FSMStateId, clock: Callable[[], float] = None):
        self.id = state_id
        self.controller = None
        self.context: Optional[TrackingContext] = None
        self.clock = clock or time.monotonic

    @property
    def initialized(self) -> bool:
        """True once the state has been entered with a context"""
        return self.context is not None and self.id != FSMStateId.UNKNOWN

    def process_skeletons(self, frame: Optional[SkeletonFrame]):
        """
        Process one skeleton frame

        Args:
            frame: The sensor frame, may be None when the sensor reports nothing
        """
        if frame is None or not self.initialized:
            return

        for skeleton in self.observable_skeletons(frame.skeletons):
            if not self.process_skeleton(skeleton):
                break

    @abstractmethod
    def observable_skeletons(self, skeletons: Iterable[SkeletonData]) -> Iterable[SkeletonData]:
        """Select the skeletons this state cares about"""
        pass

    def process_skeleton(self, skeleton: SkeletonData) -> bool:
        """
        Process an individual skeleton

        Returns:
            True if processing should continue with the next skeleton
        """
        return False

    def state_entered(self, context: TrackingContext):
        self.context = context

    def state_exited(self):
        pass

    def __repr__(self):
        return f"{self.__class__.__name__}(id={self.id.name})"
