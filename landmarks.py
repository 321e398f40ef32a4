"""
Pupil position from MediaPipe Face Mesh landmarks.

MediaPipe Face Mesh with refine_landmarks=True provides 478 landmarks including:
- 468-472: Left iris landmarks (center + 4 points on iris edge)
- 473-477: Right iris landmarks (center + 4 points on iris edge)

The pupil position of each eye is the iris center expressed relative to the
eye corners (horizontal) and eyelids (vertical), so 0.5 means looking
straight ahead regardless of where the face is in the frame.
"""

import numpy as np


# =============================================================================
# MEDIAPIPE FACE MESH LANDMARKS
# =============================================================================

# Each iris has 5 landmarks: center + 4 edge points
LEFT_IRIS = [468, 469, 470, 471, 472]
RIGHT_IRIS = [473, 474, 475, 476, 477]

# Eyelid and corner landmarks of each eye
LEFT_EYE_LANDMARKS = {
    'top': [159, 158],
    'bottom': [145, 153],
    'left': 33,
    'right': 133
}

RIGHT_EYE_LANDMARKS = {
    'top': [386, 385],
    'bottom': [374, 380],
    'left': 362,
    'right': 263
}


def _iris_center(landmarks, iris_indices):
    """Average of all iris landmarks, steadier than the center point alone."""
    x = sum(landmarks[idx].x for idx in iris_indices) / len(iris_indices)
    y = sum(landmarks[idx].y for idx in iris_indices) / len(iris_indices)
    return x, y


def pupil_ratio(landmarks, iris_indices, eye_landmarks):
    """
    Position of the pupil inside one eye.

    Horizontal: projection of the iris center onto the corner-to-corner axis,
    0.0 at the left corner and 1.0 at the right corner.
    Vertical: 0.0 at the upper eyelid, 1.0 at the lower eyelid.

    Returns:
        tuple: (x, y) ratios, or None if the eye is degenerate
    """
    try:
        left_corner = np.array([landmarks[eye_landmarks['left']].x,
                                landmarks[eye_landmarks['left']].y])
        right_corner = np.array([landmarks[eye_landmarks['right']].x,
                                 landmarks[eye_landmarks['right']].y])
        iris_x, iris_y = _iris_center(landmarks, iris_indices)

        eye_vec = right_corner - left_corner
        eye_width = np.linalg.norm(eye_vec)
        if eye_width < 0.001:
            return None

        iris_vec = np.array([iris_x, iris_y]) - left_corner
        horizontal = float(np.dot(iris_vec, eye_vec) / (eye_width ** 2))

        top_y = sum(landmarks[idx].y for idx in eye_landmarks['top']) / 2
        bottom_y = sum(landmarks[idx].y for idx in eye_landmarks['bottom']) / 2
        eye_height = bottom_y - top_y
        if abs(eye_height) < 0.001:
            vertical = 0.5
        else:
            vertical = (iris_y - top_y) / eye_height

        return horizontal, vertical

    except (IndexError, KeyError, AttributeError):
        return None


def get_pupil_positions(landmarks):
    """
    Pupil positions of both eyes.

    Returns:
        tuple: (left_x, left_y, right_x, right_y), or None if either eye
        could not be measured
    """
    left = pupil_ratio(landmarks, LEFT_IRIS, LEFT_EYE_LANDMARKS)
    right = pupil_ratio(landmarks, RIGHT_IRIS, RIGHT_EYE_LANDMARKS)
    if left is None or right is None:
        return None
    return left[0], left[1], right[0], right[1]
