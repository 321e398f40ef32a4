"""
Signal utilities: smoothing of the pupil position and movement detection.
"""

from collections import deque
from enum import Enum


class Movement(Enum):
    """Discrete eye movement derived from the smoothed pupil position."""
    CENTER = 0
    LEFT = 1
    RIGHT = 2


class SignalSmoother:
    """
    Moving average over the most recent horizontal pupil samples.

    The window is a bounded FIFO: pushing past ``size`` samples evicts the
    oldest one. An empty window averages to 0.5 (looking straight ahead) so
    the classifier never sees a spurious LEFT/RIGHT before any data arrives.
    """

    NEUTRAL = 0.5

    def __init__(self, size=3):
        self.size = size
        self.buffer = deque(maxlen=size)

    def push(self, sample):
        """Append a sample, evicting the oldest once the window is full."""
        self.buffer.append(sample)

    def average(self):
        if not self.buffer:
            return self.NEUTRAL
        return sum(self.buffer) / len(self.buffer)

    def clear(self):
        self.buffer.clear()

    def __len__(self):
        return len(self.buffer)


class MovementClassifier:
    """
    Thresholds the smoothed signal into CENTER/LEFT/RIGHT.

    Two states:
        ARMED:        the next call classifies the signal
        COOLING_DOWN: calls return CENTER until ``cooldown`` calls elapse

    Any LEFT/RIGHT result switches to COOLING_DOWN, so a single glance fires
    exactly one movement.
    """

    def __init__(self, threshold=0.06, cooldown=8):
        self.threshold = threshold
        self.cooldown = cooldown
        self.cooldown_remaining = 0
        # Direction of the last accepted movement, kept while cooling down
        self.pending = Movement.CENTER

    @property
    def is_armed(self):
        return self.cooldown_remaining == 0

    def classify(self, average):
        """
        Classify a smoothed pupil position.

        Args:
            average: Moving average of the horizontal position (0.5 = center)

        Returns:
            Movement: CENTER while cooling down, otherwise the thresholded
            direction
        """
        if self.cooldown_remaining > 0:
            self.cooldown_remaining -= 1
            return Movement.CENTER

        diff = average - 0.5
        movement = Movement.CENTER
        if diff < -self.threshold:
            movement = Movement.LEFT
        elif diff > self.threshold:
            movement = Movement.RIGHT

        self.pending = movement
        if movement != Movement.CENTER:
            self.cooldown_remaining = self.cooldown
        return movement

    def progress(self):
        """Fraction of the cooldown still to run (1.0 right after a movement)."""
        if not self.cooldown:
            return 0.0
        return self.cooldown_remaining / self.cooldown

    def indicator(self, average):
        """
        Map the smoothed position onto the detection range.

        0.0 sits on the LEFT threshold, 1.0 on the RIGHT threshold and 0.5
        in the middle. Values outside [0, 1] mean a movement is detected.
        """
        diff = average - 0.5
        return (diff + self.threshold) / (2 * self.threshold)

    def reset(self):
        self.cooldown_remaining = 0
        self.pending = Movement.CENTER
