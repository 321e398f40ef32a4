"""
Configuration settings for the eye-controlled dialer.

All timing constants are expressed in ticks and assume the host calls
``DialerController.tick()`` at ``ticks_per_second``. Changing the tick rate
means rescaling every tick-based value below.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Tuple


ASSETS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'assets')


@dataclass(frozen=True)
class Config:
    """Configuration parameters for the dialer, built once at startup."""

    # Tick rate of the host loop
    ticks_per_second: int = 25

    # Moving average window over horizontal pupil samples
    moving_average_size: int = 3

    # Ticks to ignore the signal after an accepted LEFT/RIGHT
    debounce_ticks: int = 8

    # Auto-commit countdown (~3s)
    countdown_ticks: int = 74

    # Dead zone around the center (0.5) of the normalized pupil position
    movement_threshold: float = 0.06

    # Wake-up gesture: reward per alternation and score needed, in seconds
    wait_reward_seconds: float = 1.5
    wait_threshold_seconds: float = 5.0

    # Length of the simulated phone call
    call_seconds: int = 10

    # Display
    window_name: str = "dialer"
    window_width: int = 800
    window_height: int = 600
    choices_gap: int = 150      # Pixels between neighbouring choices
    choices_radius: int = 3     # Choices drawn on each side of the current one

    # Colors (BGR format)
    color_background: Tuple[int, int, int] = (40, 23, 2)
    color_choice: Tuple[int, int, int] = (0, 0, 255)
    color_countdown: Tuple[int, int, int] = (0, 255, 0)
    color_prompt: Tuple[int, int, int] = (255, 255, 255)
    color_confirm: Tuple[int, int, int] = (0, 255, 255)
    color_indicator: Tuple[int, int, int] = (255, 255, 255)

    # Camera settings
    camera_index: int = 0
    camera_width: int = 640
    camera_height: int = 480

    # Assets
    sound_dir: str = ASSETS_DIR
    avatar_path: str = os.path.join(ASSETS_DIR, 'avatar.png')
    cue_files: Dict[str, str] = field(default_factory=lambda: {
        'select': 'select.ogg',
        'change': 'change.ogg',
        'phone-ringing': 'phone-call.ogg',
    })

    @property
    def wait_reward(self) -> float:
        """Score added for each left/right alternation while waiting."""
        return self.wait_reward_seconds * self.ticks_per_second

    @property
    def wait_threshold(self) -> float:
        """Score at which the wake-up gesture is accepted."""
        return self.wait_threshold_seconds * self.ticks_per_second

    @property
    def call_ticks(self) -> int:
        return self.call_seconds * self.ticks_per_second

    @property
    def tick_interval_ms(self) -> int:
        return 1000 // self.ticks_per_second

    def cue_path(self, cue: str) -> str:
        return os.path.join(self.sound_dir, self.cue_files[cue])
