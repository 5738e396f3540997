import math
import unittest

import numpy as np

from gesture_tracking.errors import ConfigurationError, InvalidArgumentError
from gesture_tracking.tracking.dtw_recognizer import DTWRecognizer, ThresholdSettings
from gesture_tracking.tracking.gesture import UNKNOWN_GESTURE


def seq(*points):
    return [np.array(p, dtype=np.float64) for p in points]


SWIPE = seq([0.0, 0.0], [0.5, 0.0], [1.0, 0.0])
SWIPE_SETTINGS = ThresholdSettings(first_threshold=0.5, match_threshold=0.5, max_slope=3)


class TestThresholdSettings(unittest.TestCase):

    def test_from_dict(self):
        settings = ThresholdSettings.from_dict({'first_threshold': 0.5, 'match_threshold': 0.4, 'max_slope': 2})
        self.assertEqual(settings, ThresholdSettings(0.5, 0.4, 2.0))

    def test_missing_attribute_raises(self):
        with self.assertRaises(ConfigurationError):
            ThresholdSettings.from_dict({'first_threshold': 0.5, 'match_threshold': 0.4})

    def test_missing_attribute_returns_none(self):
        self.assertIsNone(ThresholdSettings.from_dict({'first_threshold': 0.5}, throw_on_missing=False))
        self.assertIsNone(ThresholdSettings.from_dict(None, throw_on_missing=False))


class TestDTWRecognizer(unittest.TestCase):

    def setUp(self):
        self.recognizer = DTWRecognizer(dim=2)

    def test_identical_sequence_is_recognized(self):
        self.recognizer.add_patterns("Swipe", SWIPE, SWIPE_SETTINGS)

        gesture = self.recognizer.recognize(list(SWIPE))

        self.assertEqual(gesture.id, "Swipe")
        self.assertEqual(gesture.min_distance, 0.0)
        self.assertTrue(gesture.is_known)

    def test_far_last_frame_is_unknown(self):
        self.recognizer.add_patterns("Swipe", SWIPE, SWIPE_SETTINGS)

        # everything but the last frame matches perfectly
        gesture = self.recognizer.recognize(seq([0.0, 0.0], [0.5, 0.0], [1.0, 2.0]))

        self.assertEqual(gesture.id, UNKNOWN_GESTURE)
        self.assertTrue(math.isinf(gesture.min_distance))
        self.assertFalse(gesture.is_known)

    def test_no_templates_is_unknown(self):
        gesture = self.recognizer.recognize(SWIPE)

        self.assertEqual(gesture.id, UNKNOWN_GESTURE)
        self.assertTrue(math.isinf(gesture.min_distance))

    def test_distance_over_match_threshold_is_unknown(self):
        self.recognizer.add_patterns("Swipe", SWIPE, SWIPE_SETTINGS)

        # last frame passes the pre-filter, the path before it is far away
        gesture = self.recognizer.recognize(seq([0.0, 5.0], [0.5, 5.0], [1.0, 0.4]))

        self.assertEqual(gesture.id, UNKNOWN_GESTURE)
        self.assertFalse(math.isinf(gesture.min_distance))
        self.assertGreaterEqual(gesture.min_distance, SWIPE_SETTINGS.match_threshold)

    def test_best_template_wins(self):
        self.recognizer.add_patterns("Swipe", SWIPE, SWIPE_SETTINGS)
        self.recognizer.add_patterns("Lift", seq([1.0, -1.0], [1.0, -0.5], [1.0, 0.0]), SWIPE_SETTINGS)

        gesture = self.recognizer.recognize(seq([1.0, -1.0], [1.0, -0.5], [1.0, 0.0]))

        self.assertEqual(gesture.id, "Lift")
        self.assertEqual(gesture.min_distance, 0.0)

    def test_leading_unrelated_frames_are_ignored(self):
        self.recognizer.add_patterns("Swipe", SWIPE, SWIPE_SETTINGS)
        live = seq([3.0, 3.0], [-2.0, 1.0], [4.0, 0.0]) + list(SWIPE)

        gesture = self.recognizer.recognize(live)

        self.assertEqual(gesture.id, "Swipe")
        self.assertEqual(gesture.min_distance, 0.0)

    def test_reversal_is_not_observable(self):
        a = seq([0.0, 0.1], [0.4, 0.2], [0.9, -0.1], [1.1, 0.0])
        b = SWIPE
        twice_reversed = list(reversed(list(reversed(a))))

        self.assertEqual(self.recognizer.dtw(a, b, SWIPE_SETTINGS),
                         self.recognizer.dtw(twice_reversed, b, SWIPE_SETTINGS))

    def test_slope_limits_consecutive_template_steps(self):
        recognizer = DTWRecognizer(dim=1)
        live = seq([0.0])
        template = seq([0.0], [0.0], [0.0])

        self.assertEqual(recognizer.dtw(live, template, ThresholdSettings(1.0, 1.0, 3)), 0.0)
        self.assertTrue(math.isinf(recognizer.dtw(live, template, ThresholdSettings(1.0, 1.0, 1))))

    def test_distance_uses_sequence_dimension(self):
        recognizer = DTWRecognizer(dim=2)

        self.assertEqual(recognizer.distance(np.array([0.0, 0.0, 9.0]), np.array([3.0, 4.0, -9.0])), 5.0)

    def test_empty_input_raises(self):
        with self.assertRaises(InvalidArgumentError):
            self.recognizer.recognize([])

    def test_invalid_patterns_raise(self):
        with self.assertRaises(InvalidArgumentError):
            self.recognizer.add_patterns("Swipe", [], SWIPE_SETTINGS)
        with self.assertRaises(InvalidArgumentError):
            self.recognizer.add_patterns("Swipe", SWIPE, None)

    def test_clear(self):
        self.recognizer.add_patterns("Swipe", SWIPE, SWIPE_SETTINGS)
        self.assertEqual(len(self.recognizer), 1)

        self.recognizer.clear()

        self.assertEqual(len(self.recognizer), 0)
        self.assertEqual(self.recognizer.recognize(SWIPE).id, UNKNOWN_GESTURE)


if __name__ == '__main__':
    unittest.main()
