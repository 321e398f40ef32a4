"""
OpenCV display for the dialer.

Draws a ``RenderIntent`` onto a fixed-size canvas and shows it in a window.
"""

import logging

import cv2
import numpy as np

from states import StateTag

logger = logging.getLogger(__name__)


FONT = cv2.FONT_HERSHEY_SIMPLEX
THICKNESS = 2


class OpenCVDisplay:
    """Window showing the dialer screens."""

    def __init__(self, config, avatar=None):
        """
        Args:
            config: Dialer configuration
            avatar: Optional BGR image for the call screen; loaded from
                ``config.avatar_path`` when not given
        """
        self.config = config
        self.width = config.window_width
        self.height = config.window_height
        self.canvas = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        self.avatar = avatar if avatar is not None else self._load_avatar(config.avatar_path)

    def _load_avatar(self, path):
        avatar = cv2.imread(path, cv2.IMREAD_COLOR)
        if avatar is None:
            logger.warning(f"Avatar image not found: {path}")
            return None

        # Shrink to fit the window
        height, width = avatar.shape[:2]
        scale = min(1.0, self.width / width, self.height / height)
        if scale < 1.0:
            avatar = cv2.resize(avatar, (int(width * scale), int(height * scale)))
        return avatar

    def open(self):
        cv2.namedWindow(self.config.window_name, cv2.WINDOW_NORMAL)
        cv2.resizeWindow(self.config.window_name, self.width, self.height)
        cv2.moveWindow(self.config.window_name, 0, 0)

    def close(self):
        cv2.destroyWindow(self.config.window_name)

    def draw(self, intent):
        """Render the intent and show it."""
        self.render(intent)
        cv2.imshow(self.config.window_name, self.canvas)

    def render(self, intent):
        """
        Render the intent onto the canvas without showing it.

        Returns:
            np.ndarray: The canvas
        """
        self.canvas[:] = self.config.color_background
        center_x, center_y = self.width // 2, self.height // 2

        if intent.state is StateTag.WAIT:
            self._draw_text_centered(intent.prompt, center_x, center_y,
                                     self.config.color_prompt, 1.0)
        elif intent.state is StateTag.INPUT:
            self._draw_text(intent.input, 100, 100, self.config.color_choice)
        elif intent.state is StateTag.CONFIRM:
            self._draw_text_centered(intent.prompt, center_x, center_y + 100,
                                     self.config.color_confirm, 1.0)
        elif intent.state is StateTag.CALL:
            self._draw_call(intent)

        if intent.carousel is not None:
            self._draw_choices(intent.carousel)
        if intent.countdown is not None:
            self._draw_text_centered(str(intent.countdown), center_x, self.height // 4,
                                     self.config.color_countdown, 1.5)

        self._draw_indicator(intent.indicator)
        return self.canvas

    def _draw_text(self, text, x, y, color, scale=1.0):
        cv2.putText(self.canvas, text, (int(x), int(y)), FONT, scale, color, THICKNESS)

    def _draw_text_centered(self, text, x, y, color, scale=1.0):
        (width, height), _ = cv2.getTextSize(text, FONT, scale, THICKNESS)
        self._draw_text(text, x - width / 2, y - height / 2, color, scale)

    def _draw_choices(self, snapshot):
        """Current choice in the middle, neighbours on both sides."""
        center_x, center_y = self.width // 2, self.height // 2
        gap = self.config.choices_gap
        color = self.config.color_choice

        is_moving = snapshot.offset != 0
        shift = snapshot.offset * gap

        self._draw_text_centered(snapshot.current, center_x + shift, center_y,
                                 color, 1.5 if is_moving else 2.5)

        for i, choice in enumerate(snapshot.previous, start=1):
            self._draw_text_centered(choice, center_x - i * gap + shift, center_y, color, 1.5)
        for i, choice in enumerate(snapshot.following, start=1):
            self._draw_text_centered(choice, center_x + i * gap + shift, center_y, color, 1.5)

    def _draw_call(self, intent):
        # Avatar in the middle, number below it
        bottom = self.height // 2
        if intent.show_avatar and self.avatar is not None:
            avatar_height, avatar_width = self.avatar.shape[:2]
            left = self.width // 2 - avatar_width // 2
            top = self.height // 2 - avatar_height // 2
            self.canvas[top:top + avatar_height, left:left + avatar_width] = self.avatar
            bottom = top + avatar_height

        self._draw_text_centered(intent.input, self.width // 2, bottom + 50,
                                 self.config.color_prompt, 1.0)

    def _draw_indicator(self, position):
        """Diagnostic tick at the top edge showing the smoothed eye position."""
        x = int(self.width * position)
        cv2.line(self.canvas, (x, 0), (x, 10), self.config.color_indicator, 5)
