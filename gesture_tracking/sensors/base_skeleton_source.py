from abc import ABC, abstractmethod
import numpy as np
from typing import Optional, Dict, Any

from .skeleton import SkeletonFrame


class BaseSkeletonSource(ABC):
    """Abstract base class for sensors delivering skeleton frames"""

    def __init__(self, confidence: float = 0.5):
        self.confidence = confidence
        self.source_type = "skeleton"
        self.frame_number = 0

    @abstractmethod
    def detect(self, frame: np.ndarray) -> Optional[Any]:
        """
        Run body detection on one camera image

        Args:
            frame: BGR image as read by OpenCV

        Returns:
            Sensor specific results, None when no body is visible
        """
        pass

    @abstractmethod
    def to_skeleton_frame(self, results: Any) -> Optional[SkeletonFrame]:
        """Build a SkeletonFrame with one skeleton per detected body"""
        pass

    @abstractmethod
    def get_source_info(self) -> Dict[str, Any]:
        """Metadata: name, type, confidence threshold, joint counts"""
        pass

    @abstractmethod
    def cleanup(self):
        pass

    def read_skeleton_frame(self, frame: np.ndarray) -> Optional[SkeletonFrame]:
        """Detect and convert in one step, counting every image read"""
        self.frame_number += 1
        results = self.detect(frame)
        if results is None:
            return None
        return self.to_skeleton_frame(results)
