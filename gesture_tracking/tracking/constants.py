"""
Recognition Constants
Default values used when the configuration does not override them
"""


class RecognitionConstants:
    """Default tracking and recognition parameters"""

    # Invalid skeleton tracking id
    INVALID_SKELETON_IDX = -1

    # Maximum frames kept in a gesture buffer
    GESTURE_MAX_FRAMES_COUNT = 20

    # Minimum frames needed before recognition is attempted
    GESTURE_MIN_FRAMES_COUNT = 5

    # Seconds without a recognized gesture before going back to idle
    MAX_IDLE_SECONDS = 5

    # Only every Nth skeleton frame is handled while tracking
    SKELETON_SKIP_FRAME_COUNT = 3

    # Seconds to wait after entering the recording state before capturing frames
    PRE_RECORDING_IDLE_TIME = 5
