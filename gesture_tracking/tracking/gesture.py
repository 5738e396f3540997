"""
Gesture result types
"""

from dataclasses import dataclass

# Label returned when no template matched
UNKNOWN_GESTURE = "Unknown"


@dataclass
class Gesture:
    """Outcome of a recognition attempt"""
    id: str = UNKNOWN_GESTURE
    min_distance: float = float("inf")

    @property
    def is_known(self) -> bool:
        return self.id != UNKNOWN_GESTURE
