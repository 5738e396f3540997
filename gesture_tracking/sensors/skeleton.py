"""
Skeleton Data Shapes
Narrow read-only interfaces for skeleton frames, bodies and joints.

The tracking core only depends on these shapes. Sensor SDKs are adapted
into them (see mediapipe.py) so states can be fed with real or synthetic data.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Iterable, List, Optional

import numpy as np


class JointId(IntEnum):
    """Skeleton joint identifiers (20 joint body model)"""
    HIP_CENTER = 0
    SPINE = 1
    SHOULDER_CENTER = 2
    HEAD = 3
    SHOULDER_LEFT = 4
    ELBOW_LEFT = 5
    WRIST_LEFT = 6
    HAND_LEFT = 7
    SHOULDER_RIGHT = 8
    ELBOW_RIGHT = 9
    WRIST_RIGHT = 10
    HAND_RIGHT = 11
    HIP_LEFT = 12
    KNEE_LEFT = 13
    ANKLE_LEFT = 14
    FOOT_LEFT = 15
    HIP_RIGHT = 16
    KNEE_RIGHT = 17
    ANKLE_RIGHT = 18
    FOOT_RIGHT = 19


class SkeletonTrackingState(IntEnum):
    """Tracking state reported by the sensor for a skeleton"""
    NOT_TRACKED = 0
    POSITION_ONLY = 1
    TRACKED = 2


@dataclass(frozen=True)
class Vector:
    """3D position in sensor space (y points up)"""
    x: float
    y: float
    z: float

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def distance_to(self, other: 'Vector') -> float:
        return float(np.linalg.norm(self.to_array() - other.to_array()))


@dataclass(frozen=True)
class Joint:
    """A single skeleton joint"""
    id: JointId
    position: Vector


class SkeletonData(ABC):
    """Read-only view of one tracked body"""

    @property
    @abstractmethod
    def joints(self) -> Iterable[Joint]:
        """All joints of the skeleton, in joint id order"""
        pass

    @property
    @abstractmethod
    def tracking_id(self) -> int:
        """Stable tracking identifier"""
        pass

    @property
    @abstractmethod
    def tracking_state(self) -> SkeletonTrackingState:
        pass

    @property
    def position(self) -> Optional[Vector]:
        """Overall position of the body, if the sensor reports one"""
        return None

    @abstractmethod
    def joint_at(self, joint_id: JointId) -> Optional[Joint]:
        """
        Obtain a specific joint

        Args:
            joint_id: The joint identifier

        Returns:
            The joint or None if the sensor did not report it
        """
        pass


class SkeletonFrame(ABC):
    """Read-only view of one sensor frame"""

    @property
    @abstractmethod
    def skeletons(self) -> Iterable[SkeletonData]:
        pass

    @property
    def frame_number(self) -> int:
        return 0

    @property
    def timestamp(self) -> float:
        return 0.0


class Skeleton(SkeletonData):
    """Plain in-memory skeleton built from a joint position mapping"""

    def __init__(self, tracking_id: int, positions: Dict[JointId, Vector],
                 tracking_state: SkeletonTrackingState = SkeletonTrackingState.TRACKED):
        self._tracking_id = tracking_id
        self._tracking_state = tracking_state
        self._joints = {
            joint_id: Joint(joint_id, positions[joint_id])
            for joint_id in sorted(positions)
        }

    @property
    def joints(self) -> List[Joint]:
        return list(self._joints.values())

    @property
    def tracking_id(self) -> int:
        return self._tracking_id

    @property
    def tracking_state(self) -> SkeletonTrackingState:
        return self._tracking_state

    @property
    def position(self) -> Optional[Vector]:
        hip = self._joints.get(JointId.HIP_CENTER)
        return hip.position if hip else None

    def joint_at(self, joint_id: JointId) -> Optional[Joint]:
        return self._joints.get(joint_id)

    def __repr__(self):
        return f"Skeleton(tracking_id={self._tracking_id}, joints={len(self._joints)})"


@dataclass
class Frame(SkeletonFrame):
    """Plain in-memory skeleton frame"""
    bodies: List[SkeletonData] = field(default_factory=list)
    number: int = 0
    time: float = 0.0

    @property
    def skeletons(self) -> List[SkeletonData]:
        return self.bodies

    @property
    def frame_number(self) -> int:
        return self.number

    @property
    def timestamp(self) -> float:
        return self.time
