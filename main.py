"""
Eye-Controlled Dialer
=====================
Main entry point: dial a phone number by looking left and right.

Controls:
    - Look left and right quickly (5 times) to wake the dialer up
    - Look left/right to move through the choices
    - Keep looking ahead for 3 seconds to select the highlighted choice
    - Press 'H' / 'L' to move through the choices with the keyboard
    - Press 'Q' or ESC to quit

Usage:
    python main.py [--camera N] [--sounds DIR] [--avatar FILE] [--verbose]
"""

import argparse
import logging

import cv2

from config import Config
from dialer import DialerController
from renderer import OpenCVDisplay
from sound import CuePlayer
from tracker import PupilTracker

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    defaults = Config()
    parser = argparse.ArgumentParser(description='Eye-controlled phone dialer')
    parser.add_argument('--camera', type=int, default=defaults.camera_index,
                        help='camera index (default: %(default)s)')
    parser.add_argument('--sounds', default=defaults.sound_dir,
                        help='directory holding select.ogg, change.ogg and phone-call.ogg')
    parser.add_argument('--avatar', default=defaults.avatar_path,
                        help='image shown during a call')
    parser.add_argument('--verbose', action='store_true',
                        help='log every cue and commit')
    return parser.parse_args(argv)


def run(config):
    """Drive the dialer from the camera until the user quits."""
    tracker = PupilTracker(config)
    if not tracker.is_opened():
        logger.error(f"Could not open camera {config.camera_index}")
        tracker.close()
        return 1

    sound = CuePlayer(config)
    display = OpenCVDisplay(config)

    try:
        with DialerController(config, display=display, sound=sound) as dialer:
            while True:
                ok, positions = tracker.read()
                if not ok:
                    logger.error("Failed to read from camera")
                    return 1

                if positions is not None:
                    dialer.update_pupil_position(*positions)
                dialer.tick()

                key = cv2.waitKey(config.tick_interval_ms) & 0xFF
                if key == ord('q') or key == ord('Q') or key == 27:
                    print("\n[Info] Quitting...")
                    break
                elif key != 0xFF:
                    dialer.on_key(key)
    finally:
        tracker.close()
        sound.close()
        cv2.destroyAllWindows()

    return 0


def main(argv=None):
    """Main entry point for the application."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    )

    config = Config(camera_index=args.camera, sound_dir=args.sounds,
                    avatar_path=args.avatar)

    print("\n" + "=" * 60)
    print("   EYE-CONTROLLED DIALER")
    print("=" * 60)
    print("\nControls:")
    print("  - Look left and right 5 times quickly to start")
    print("  - Look left/right to change the highlighted choice")
    print("  - Hold your gaze for 3 seconds to select it")
    print("  - Press 'H'/'L' to change the choice with the keyboard")
    print("  - Press 'Q' to quit")
    print()

    return run(config)


if __name__ == "__main__":
    raise SystemExit(main())
