"""
Gesture Store
Saves and loads recorded gesture templates as .npy files (one row per frame)
"""

import logging
import os
from typing import List

import numpy as np

from gesture_tracking.errors import InvalidArgumentError, TemplateDecodeError
from gesture_tracking.events import GestureRecordingEventArgs
from gesture_tracking.tracking.gesture import UNKNOWN_GESTURE

logger = logging.getLogger(__name__)


class GestureStore:
    """File-based gesture template repository"""

    FILE_TEMPLATE = "gesture_{}.npy"

    def __init__(self, folder: str = "gestures"):
        self.folder = folder

    def file_name_for(self, gesture_id: str) -> str:
        return os.path.join(self.folder, self.FILE_TEMPLATE.format(gesture_id))

    def save_gesture(self, args: GestureRecordingEventArgs) -> str:
        """
        Persist a recorded gesture

        Args:
            args: Recording event arguments holding the gesture id and frames

        Returns:
            Path of the written file

        Raises:
            InvalidArgumentError: If args, id or frames are missing
        """
        if args is None:
            raise InvalidArgumentError("Recording arguments cannot be None")
        if not args.id or args.id == UNKNOWN_GESTURE:
            raise InvalidArgumentError(f"Invalid gesture id: {args.id!r}")
        if args.frames is None or len(args.frames) == 0:
            raise InvalidArgumentError(f"Gesture {args.id} has no frames to save")

        frames = np.vstack([np.asarray(frame, dtype=np.float64) for frame in args.frames])

        os.makedirs(self.folder, exist_ok=True)
        file_name = self.file_name_for(args.id)
        np.save(file_name, frames, allow_pickle=False)

        logger.info(f"💾 Saved gesture {args.id} ({len(frames)} frames) to {file_name}")
        return file_name

    def load_gesture(self, file_name: str) -> List[np.ndarray]:
        """
        Load a gesture template

        Args:
            file_name: File name, relative to the store folder or absolute

        Returns:
            List of observation vectors

        Raises:
            InvalidArgumentError: If the file does not exist
            TemplateDecodeError: If the file is not a valid 2-D template
        """
        full_name = file_name if os.path.isabs(file_name) else os.path.join(self.folder, file_name)

        if not os.path.exists(full_name):
            raise InvalidArgumentError(f"File {full_name} does not exist")

        try:
            data = np.load(full_name, allow_pickle=False)
        except (ValueError, OSError, EOFError) as e:
            logger.error(f"❌ Could not decode gesture file {full_name}: {e}")
            raise TemplateDecodeError(f"Could not decode gesture file {full_name}: {e}") from e

        if not isinstance(data, np.ndarray) or data.ndim != 2 or len(data) == 0:
            raise TemplateDecodeError(f"Gesture file {full_name} does not hold a 2-D frame array")

        return [row.astype(np.float64) for row in data]
