import os
import shutil
import tempfile
import unittest

import numpy as np

from gesture_tracking.errors import InvalidArgumentError, TemplateDecodeError
from gesture_tracking.events import GestureRecordingEventArgs
from gesture_tracking.persistence import GestureStore
from gesture_tracking.tracking.gesture import UNKNOWN_GESTURE


class TestGestureStore(unittest.TestCase):

    def setUp(self):
        self.root = tempfile.mkdtemp()
        self.store = GestureStore(os.path.join(self.root, 'gestures'))

    def tearDown(self):
        shutil.rmtree(self.root)

    def test_save_and_load(self):
        frames = [np.array([0.1, 0.2, 0.3]), np.array([0.4, 0.5, 0.6])]

        path = self.store.save_gesture(GestureRecordingEventArgs(id='Wave', frames=frames))

        self.assertEqual(path, os.path.join(self.root, 'gestures', 'gesture_Wave.npy'))
        self.assertTrue(os.path.exists(path))
        loaded = self.store.load_gesture('gesture_Wave.npy')
        self.assertEqual(len(loaded), 2)
        np.testing.assert_allclose(loaded[1], frames[1])

    def test_load_absolute_path(self):
        path = self.store.save_gesture(GestureRecordingEventArgs(id='Wave', frames=[np.zeros(6)]))

        self.assertEqual(len(self.store.load_gesture(path)), 1)

    def test_save_rejects_missing_data(self):
        invalid = [
            None,
            GestureRecordingEventArgs(id=None, frames=[np.zeros(6)]),
            GestureRecordingEventArgs(id='', frames=[np.zeros(6)]),
            GestureRecordingEventArgs(id=UNKNOWN_GESTURE, frames=[np.zeros(6)]),
            GestureRecordingEventArgs(id='Wave', frames=None),
            GestureRecordingEventArgs(id='Wave', frames=[]),
        ]
        for args in invalid:
            with self.subTest(args=args):
                with self.assertRaises(InvalidArgumentError):
                    self.store.save_gesture(args)

        self.assertFalse(os.path.exists(self.store.folder))

    def test_load_missing_file(self):
        with self.assertRaises(InvalidArgumentError):
            self.store.load_gesture('gesture_Missing.npy')

    def test_load_corrupt_file(self):
        os.makedirs(self.store.folder)
        with open(self.store.file_name_for('Broken'), 'wb') as file:
            file.write(b'\x00\x01garbage')

        with self.assertRaises(TemplateDecodeError):
            self.store.load_gesture('gesture_Broken.npy')

    def test_load_wrong_shape(self):
        os.makedirs(self.store.folder)
        np.save(self.store.file_name_for('Flat'), np.zeros(6))

        with self.assertRaises(TemplateDecodeError):
            self.store.load_gesture('gesture_Flat.npy')


if __name__ == '__main__':
    unittest.main()
