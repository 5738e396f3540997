import unittest

from gesture_tracking.utils import max_by


class TestMaxBy(unittest.TestCase):

    def test_greatest_selected_value(self):
        self.assertEqual(max_by(["a", "ccc", "bb"], len), "ccc")

    def test_first_wins_on_ties(self):
        items = [(1, 'first'), (1, 'second'), (0, 'third')]
        self.assertEqual(max_by(items, lambda item: item[0]), (1, 'first'))

    def test_empty(self):
        self.assertIsNone(max_by([], len))

    def test_none_selector_raises(self):
        with self.assertRaises(ValueError):
            max_by([1, 2], None)


if __name__ == '__main__':
    unittest.main()
