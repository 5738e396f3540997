"""
Shared fixtures for the test suite
"""

from gesture_tracking.sensors.skeleton import Frame, JointId, Skeleton, SkeletonTrackingState, Vector

# Shoulders 0.4 apart, centred on (0, 0.4, 2)
BASE_POSITIONS = {
    JointId.HIP_CENTER: Vector(0.0, -0.2, 2.0),
    JointId.SPINE: Vector(0.0, 0.1, 2.0),
    JointId.SHOULDER_CENTER: Vector(0.0, 0.4, 2.0),
    JointId.HEAD: Vector(0.0, 0.6, 2.0),
    JointId.SHOULDER_LEFT: Vector(-0.2, 0.4, 2.0),
    JointId.ELBOW_LEFT: Vector(-0.3, 0.2, 2.0),
    JointId.WRIST_LEFT: Vector(-0.3, 0.0, 2.0),
    JointId.HAND_LEFT: Vector(-0.3, -0.1, 2.0),
    JointId.SHOULDER_RIGHT: Vector(0.2, 0.4, 2.0),
    JointId.ELBOW_RIGHT: Vector(0.3, 0.2, 2.0),
    JointId.WRIST_RIGHT: Vector(0.3, 0.0, 2.0),
    JointId.HAND_RIGHT: Vector(0.3, -0.1, 2.0),
}


def make_skeleton(tracking_id=1, tracking_state=SkeletonTrackingState.TRACKED, **overrides):
    """
    Build a standing skeleton, joints can be moved with keyword overrides,
    e.g. make_skeleton(HAND_RIGHT=Vector(0.3, 0.8, 2.0))
    """
    positions = dict(BASE_POSITIONS)
    for name, vector in overrides.items():
        positions[JointId[name]] = vector
    return Skeleton(tracking_id, positions, tracking_state)


def raised_right_hand(tracking_id=1):
    return make_skeleton(
        tracking_id,
        ELBOW_RIGHT=Vector(0.3, 0.5, 2.0),
        WRIST_RIGHT=Vector(0.3, 0.7, 2.0),
        HAND_RIGHT=Vector(0.3, 0.8, 2.0)
    )


def raised_left_hand(tracking_id=1):
    return make_skeleton(
        tracking_id,
        ELBOW_LEFT=Vector(-0.3, 0.5, 2.0),
        WRIST_LEFT=Vector(-0.3, 0.7, 2.0),
        HAND_LEFT=Vector(-0.3, 0.8, 2.0)
    )


def frame_of(*skeletons):
    return Frame(bodies=list(skeletons))


class FakeClock:
    """Manually advanced clock"""

    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds
