"""
DTW Recognizer
Matches a live buffer of observation vectors against labeled gesture templates
using Dynamic Time Warping.

Matching is anchored at the end of both sequences: a gesture is expected to
finish on the last observation, so the live buffer may start with any number
of unrelated frames. Two thresholds apply per template:
- first_threshold: maximum distance between the last observations (pre-filter)
- match_threshold: maximum DTW cost normalized by the template length
and max_slope limits consecutive steps along one sequence only.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from gesture_tracking.errors import ConfigurationError, InvalidArgumentError
from gesture_tracking.tracking.gesture import Gesture, UNKNOWN_GESTURE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ThresholdSettings:
    """Recognition thresholds of one gesture"""
    first_threshold: float
    match_threshold: float
    max_slope: float

    ATTRIBUTES = ('first_threshold', 'match_threshold', 'max_slope')

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]],
                  throw_on_missing: bool = True) -> Optional['ThresholdSettings']:
        """
        Create settings from a configuration mapping

        Args:
            data: Mapping holding the three threshold attributes
            throw_on_missing: Raise instead of returning None when attributes are missing

        Returns:
            A new settings object, or None if attributes are missing and throw_on_missing is False
        """
        if data and all(data.get(name) is not None for name in cls.ATTRIBUTES):
            return cls(
                first_threshold=float(data['first_threshold']),
                match_threshold=float(data['match_threshold']),
                max_slope=float(data['max_slope'])
            )

        if throw_on_missing:
            raise ConfigurationError(f"Threshold settings need {', '.join(cls.ATTRIBUTES)}: {data}")
        return None


class DTWRecognizer:
    """Library of labeled template sequences matched with end-anchored DTW"""

    def __init__(self, dim: int = 0):
        self.sequence_dimension_size = dim
        self.sequences: List[List[np.ndarray]] = []
        self.sequence_ids: List[str] = []
        self.recognition_settings: List[ThresholdSettings] = []

    def add_patterns(self, gesture_id: str, seq: Sequence[np.ndarray], settings: ThresholdSettings):
        """
        Add a labeled sequence to the known templates.
        The gesture must start on the first observation and end on the last one.
        """
        if seq is None or len(seq) == 0:
            raise InvalidArgumentError(f"Empty sequence for gesture {gesture_id}")
        if settings is None:
            raise InvalidArgumentError(f"Missing threshold settings for gesture {gesture_id}")

        self.sequences.append([np.asarray(obs, dtype=np.float64) for obs in seq])
        self.sequence_ids.append(gesture_id)
        self.recognition_settings.append(settings)

    def clear(self):
        """Forget all templates"""
        self.sequences.clear()
        self.sequence_ids.clear()
        self.recognition_settings.clear()

    def __len__(self):
        return len(self.sequences)

    def recognize(self, seq: Sequence[np.ndarray]) -> Gesture:
        """
        Recognize the gesture ending on the last observation of seq

        Args:
            seq: Live buffer of observation vectors

        Returns:
            Gesture with the best label (or UNKNOWN_GESTURE) and the minimal normalized distance
        """
        if seq is None or len(seq) == 0:
            raise InvalidArgumentError("Cannot recognize an empty sequence")

        min_dist = float("inf")
        gesture_id = UNKNOWN_GESTURE
        min_settings = None

        for example, label, settings in zip(self.sequences, self.sequence_ids, self.recognition_settings):
            if self.distance(seq[-1], example[-1]) < settings.first_threshold:
                d = self.dtw(seq, example, settings) / len(example)
                if d < min_dist:
                    min_dist = d
                    gesture_id = label
                    min_settings = settings

        if min_settings is None or min_dist >= min_settings.match_threshold:
            gesture_id = UNKNOWN_GESTURE

        logger.debug(f"Recognition result: {gesture_id} (distance {min_dist:.4f})")
        return Gesture(id=gesture_id, min_distance=min_dist)

    def distance(self, a: np.ndarray, b: np.ndarray) -> float:
        """Euclidean distance over the first sequence_dimension_size coordinates"""
        dim = self.sequence_dimension_size
        return float(np.linalg.norm(np.asarray(a[:dim]) - np.asarray(b[:dim])))

    def dtw(self, seq1: Sequence[np.ndarray], seq2: Sequence[np.ndarray],
            settings: ThresholdSettings) -> float:
        """
        Minimal DTW cost between seq2 and every ending of seq1

        Both sequences are reversed so the table aligns their last observations
        first; the answer is the best cell that consumed all of seq2.

        Each slope counter counts only its own consecutive steps. Scoring tables
        that fed the horizontal counter from the vertical one produce slightly
        different costs, so thresholds tuned against them may need retuning.

        Args:
            seq1: The longer (live) sequence
            seq2: The template sequence
            settings: Threshold settings providing max_slope

        Returns:
            Accumulated (unnormalized) DTW cost
        """
        seq1r = list(reversed(seq1))
        seq2r = list(reversed(seq2))
        n, m = len(seq1r), len(seq2r)

        tab = np.full((n + 1, m + 1), np.inf)
        slope_i = np.zeros((n + 1, m + 1), dtype=int)
        slope_j = np.zeros((n + 1, m + 1), dtype=int)
        tab[0, 0] = 0.0

        for i in range(1, n + 1):
            for j in range(1, m + 1):
                cost = self.distance(seq1r[i - 1], seq2r[j - 1])
                left, up, diag = tab[i, j - 1], tab[i - 1, j], tab[i - 1, j - 1]

                if left < diag and left < up and slope_i[i, j - 1] < settings.max_slope:
                    # step along seq2 only
                    tab[i, j] = cost + left
                    slope_i[i, j] = slope_i[i, j - 1] + 1
                    slope_j[i, j] = 0
                elif up < diag and up < left and slope_j[i - 1, j] < settings.max_slope:
                    # step along seq1 only
                    tab[i, j] = cost + up
                    slope_i[i, j] = 0
                    slope_j[i, j] = slope_j[i - 1, j] + 1
                else:
                    tab[i, j] = cost + diag
                    slope_i[i, j] = 0
                    slope_j[i, j] = 0

        return float(np.min(tab[1:, m]))
