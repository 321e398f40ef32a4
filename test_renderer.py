import os
import tempfile
import unittest

import cv2
import numpy as np

from carousel import ChoiceCarousel
from config import Config
from renderer import OpenCVDisplay
from states import INPUT_CHOICES, RenderIntent, StateTag


class TestOpenCVDisplay(unittest.TestCase):
    def setUp(self):
        self.config = Config()
        self.avatar = np.full((60, 40, 3), 200, dtype=np.uint8)
        self.display = OpenCVDisplay(self.config, avatar=self.avatar)

    def assertBackground(self, canvas, y, x):
        self.assertEqual(tuple(canvas[y, x]), self.config.color_background)

    def test_canvas_size(self):
        canvas = self.display.render(RenderIntent(state=StateTag.WAIT, prompt="hello"))
        self.assertEqual(canvas.shape, (600, 800, 3))
        self.assertBackground(canvas, 599, 0)

    def test_prompt_is_drawn(self):
        canvas = self.display.render(RenderIntent(state=StateTag.WAIT, prompt="Look here"))
        middle = canvas[250:320, :]
        self.assertTrue((middle != np.array(self.config.color_background, dtype=np.uint8)).any())

    def test_indicator(self):
        canvas = self.display.render(RenderIntent(state=StateTag.WAIT, indicator=0.25))
        self.assertEqual(tuple(canvas[5, 200]), self.config.color_indicator)
        self.assertBackground(canvas, 5, 600)

    def test_indicator_off_screen(self):
        canvas = self.display.render(RenderIntent(state=StateTag.WAIT, indicator=3.0))
        self.assertEqual(canvas.shape, (600, 800, 3))

    def test_choices_and_countdown(self):
        snapshot = ChoiceCarousel(INPUT_CHOICES).snapshot(3, offset=0.5)
        intent = RenderIntent(state=StateTag.INPUT, input="123",
                              carousel=snapshot, countdown=3)
        canvas = self.display.render(intent)

        choice_color = np.array(self.config.color_choice, dtype=np.uint8)
        countdown_color = np.array(self.config.color_countdown, dtype=np.uint8)
        self.assertTrue((canvas[250:320, :] == choice_color).all(axis=2).any())
        self.assertTrue((canvas[120:160, :] == countdown_color).all(axis=2).any())

    def test_call_shows_avatar(self):
        intent = RenderIntent(state=StateTag.CALL, input="555", show_avatar=True)
        canvas = self.display.render(intent)

        self.assertEqual(tuple(canvas[300, 400]), (200, 200, 200))
        self.assertBackground(canvas, 300, 300)

    def test_missing_avatar(self):
        config = Config(avatar_path="/nonexistent/avatar.png")
        with self.assertLogs('renderer', level='WARNING'):
            display = OpenCVDisplay(config)
        self.assertIsNone(display.avatar)

        canvas = display.render(RenderIntent(state=StateTag.CALL, input="555", show_avatar=True))
        self.assertEqual(canvas.shape, (600, 800, 3))

    def test_large_avatar_is_shrunk(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "avatar.png")
            cv2.imwrite(path, np.zeros((1200, 400, 3), dtype=np.uint8))
            display = OpenCVDisplay(Config(avatar_path=path))

        self.assertEqual(display.avatar.shape, (600, 200, 3))


if __name__ == '__main__':
    unittest.main()
