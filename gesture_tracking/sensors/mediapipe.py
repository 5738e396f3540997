import mediapipe as mp
from mediapipe.tasks import python
from mediapipe.tasks.python import vision
import cv2
import numpy as np
import os
import logging
from typing import Optional, List, Dict, Any

from .base_skeleton_source import BaseSkeletonSource
from .skeleton import Frame, JointId, Skeleton, SkeletonTrackingState, Vector

logger = logging.getLogger(__name__)

# MediaPipe pose landmark index for each joint reported directly
LANDMARK_JOINTS = {
    JointId.HEAD: 0,             # nose
    JointId.SHOULDER_LEFT: 11,
    JointId.SHOULDER_RIGHT: 12,
    JointId.ELBOW_LEFT: 13,
    JointId.ELBOW_RIGHT: 14,
    JointId.WRIST_LEFT: 15,
    JointId.WRIST_RIGHT: 16,
    JointId.HAND_LEFT: 19,       # index finger
    JointId.HAND_RIGHT: 20,
    JointId.HIP_LEFT: 23,
    JointId.HIP_RIGHT: 24,
    JointId.KNEE_LEFT: 25,
    JointId.KNEE_RIGHT: 26,
    JointId.ANKLE_LEFT: 27,
    JointId.ANKLE_RIGHT: 28,
    JointId.FOOT_LEFT: 31,       # foot index
    JointId.FOOT_RIGHT: 32,
}

NUM_LANDMARKS = 33


class MediaPipeSkeletonSource(BaseSkeletonSource):
    """
    MediaPipe Pose (tasks API) adapted to skeleton frames.

    World landmarks are used so positions are metric and centred on the hips.
    MediaPipe has no persistent body identity: people are sorted left to right
    and numbered 1..n in every frame.
    """

    def __init__(self, min_detection_confidence: float = 0.5, min_tracking_confidence: float = 0.5,
                 num_poses: int = 2, model_path: str = None):
        """
        Initialize MediaPipe Pose landmarker

        Args:
            min_detection_confidence: Minimum confidence for detection
            min_tracking_confidence: Minimum confidence for tracking
            num_poses: Maximum number of people to detect
            model_path: Path to .task model file (default: checkpoints/pose_landmarker_heavy.task)
        """
        super().__init__(confidence=min_detection_confidence)
        self.min_detection_confidence = min_detection_confidence
        self.min_tracking_confidence = min_tracking_confidence
        self.num_poses = num_poses

        if model_path is None:
            project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
            model_path = os.path.join(project_root, "checkpoints", "pose_landmarker_heavy.task")

            # Fallback to lite model if heavy not found
            if not os.path.exists(model_path):
                model_path = os.path.join(project_root, "checkpoints", "pose_landmarker.task")

        self.model_path = model_path

        base_options = python.BaseOptions(model_asset_path=model_path)
        options = vision.PoseLandmarkerOptions(
            base_options=base_options,
            running_mode=vision.RunningMode.IMAGE,
            num_poses=num_poses,
            min_pose_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence
        )
        self.model = vision.PoseLandmarker.create_from_options(options)
        logger.info(f"✅ MediaPipe Pose loaded: {num_poses} people, model: {os.path.basename(model_path)}")

    def detect(self, frame: np.ndarray) -> Optional[Any]:
        """
        Detect poses in a BGR frame

        Returns:
            MediaPipe pose landmarker results or None if no pose was found
        """
        if frame is None:
            return None

        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb_frame)
        results = self.model.detect(mp_image)

        if not results or not results.pose_world_landmarks:
            return None
        return results

    def to_skeleton_frame(self, results: Any) -> Optional[Frame]:
        """
        Convert landmarker results to a skeleton frame

        Args:
            results: Object with pose_world_landmarks (and optionally pose_landmarks)

        Returns:
            Frame with one skeleton per person, sorted left to right
        """
        if not results or not results.pose_world_landmarks:
            return None

        order = self.left_to_right_order(results)
        skeletons = []

        for tracking_id, person_idx in enumerate(order, start=1):
            person_landmarks = results.pose_world_landmarks[person_idx]
            if len(person_landmarks) < NUM_LANDMARKS:
                continue

            positions = self.landmarks_to_positions(person_landmarks)
            skeletons.append(Skeleton(tracking_id, positions, self.tracking_state_of(person_landmarks)))

        return Frame(bodies=skeletons, number=self.frame_number)

    @staticmethod
    def left_to_right_order(results: Any) -> List[int]:
        """Person indices sorted by horizontal image position of the nose"""
        count = len(results.pose_world_landmarks)
        image_landmarks = getattr(results, 'pose_landmarks', None)

        if not image_landmarks or len(image_landmarks) != count:
            return list(range(count))

        return sorted(range(count), key=lambda idx: image_landmarks[idx][0].x)

    @staticmethod
    def landmarks_to_positions(person_landmarks) -> Dict[JointId, Vector]:
        """
        Map MediaPipe landmarks to joint positions

        MediaPipe world y points down, it is flipped so raised limbs have larger y.
        Centre joints are midpoints: shoulders, hips, and spine between both.
        """
        def to_vector(landmark) -> Vector:
            return Vector(float(landmark.x), -float(landmark.y), float(landmark.z))

        def midpoint(a: Vector, b: Vector) -> Vector:
            return Vector((a.x + b.x) / 2, (a.y + b.y) / 2, (a.z + b.z) / 2)

        positions = {joint_id: to_vector(person_landmarks[idx]) for joint_id, idx in LANDMARK_JOINTS.items()}

        positions[JointId.SHOULDER_CENTER] = midpoint(positions[JointId.SHOULDER_LEFT], positions[JointId.SHOULDER_RIGHT])
        positions[JointId.HIP_CENTER] = midpoint(positions[JointId.HIP_LEFT], positions[JointId.HIP_RIGHT])
        positions[JointId.SPINE] = midpoint(positions[JointId.SHOULDER_CENTER], positions[JointId.HIP_CENTER])

        return positions

    def tracking_state_of(self, person_landmarks) -> SkeletonTrackingState:
        """TRACKED when both shoulders are visible enough, POSITION_ONLY otherwise"""
        visibilities = [
            float(getattr(person_landmarks[LANDMARK_JOINTS[joint_id]], 'visibility', 1.0))
            for joint_id in (JointId.SHOULDER_LEFT, JointId.SHOULDER_RIGHT)
        ]
        if min(visibilities) >= self.confidence:
            return SkeletonTrackingState.TRACKED
        return SkeletonTrackingState.POSITION_ONLY

    def get_source_info(self) -> Dict[str, Any]:
        """Get source information"""
        return {
            "name": "MediaPipe Pose (tasks API)",
            "type": self.source_type,
            "confidence_threshold": self.min_detection_confidence,
            "tracking_confidence": self.min_tracking_confidence,
            "num_landmarks": NUM_LANDMARKS,
            "num_joints": len(JointId),
            "num_poses": self.num_poses,
            "model_path": self.model_path
        }

    def cleanup(self):
        """Cleanup resources"""
        if self.model:
            self.model.close()
