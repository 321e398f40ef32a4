"""
Camera-based pupil tracker using MediaPipe Face Mesh.
"""

import logging

import cv2
import mediapipe as mp

from landmarks import get_pupil_positions

logger = logging.getLogger(__name__)


class PupilTracker:
    """
    Estimates normalized pupil positions from camera frames.

    Frames without a detectable face yield None; the dialer then simply
    keeps averaging the samples it already has.
    """

    def __init__(self, config):
        self.mp_face_mesh = mp.solutions.face_mesh
        self.face_mesh = self.mp_face_mesh.FaceMesh(
            max_num_faces=1,
            refine_landmarks=True,  # Required for iris landmarks
            min_detection_confidence=0.5,
            min_tracking_confidence=0.5
        )

        self.cap = cv2.VideoCapture(config.camera_index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, config.camera_width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, config.camera_height)

        self.face_visible = False

    def is_opened(self):
        return self.cap.isOpened()

    def read(self):
        """
        Grab a frame and measure the pupils.

        Returns:
            tuple: (ok, positions) where ok is False when the camera failed
            and positions is (left_x, left_y, right_x, right_y) or None
        """
        ret, frame = self.cap.read()
        if not ret:
            return False, None

        # Mirror so that looking left moves the signal left
        frame = cv2.flip(frame, 1)
        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        results = self.face_mesh.process(rgb_frame)

        positions = None
        if results.multi_face_landmarks:
            positions = get_pupil_positions(results.multi_face_landmarks[0].landmark)

        face_visible = positions is not None
        if face_visible != self.face_visible:
            if face_visible:
                logger.info("Face detected")
            else:
                logger.warning("Face lost - please center yourself")
            self.face_visible = face_visible

        return True, positions

    def close(self):
        self.cap.release()
        self.face_mesh.close()
