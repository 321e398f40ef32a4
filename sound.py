"""
Audio cues played through pygame's mixer.

``Sound.play()`` returns immediately, so the dialer never waits for a cue
to finish. Missing files or a missing audio device only produce a warning.
"""

import logging

import pygame

logger = logging.getLogger(__name__)


class CuePlayer:
    """Plays named cues ("select", "change", "phone-ringing")."""

    def __init__(self, config):
        self.config = config
        self.sounds = {}
        self.enabled = self._init_mixer()

    def _init_mixer(self):
        if pygame.mixer.get_init():
            return True
        try:
            pygame.mixer.init()
        except pygame.error as e:
            logger.warning(f"Audio disabled, mixer unavailable: {e}")
            return False
        return True

    def _load(self, cue):
        if cue not in self.sounds:
            path = self.config.cue_path(cue)
            try:
                self.sounds[cue] = pygame.mixer.Sound(path)
            except (pygame.error, FileNotFoundError) as e:
                logger.warning(f"Unable to load cue '{cue}' from {path}: {e}")
                self.sounds[cue] = None
        return self.sounds[cue]

    def play(self, cue):
        if not self.enabled:
            return
        sound = self._load(cue)
        if sound is not None:
            sound.play()

    def stop(self, cue):
        sound = self.sounds.get(cue)
        if sound is not None:
            sound.stop()

    def close(self):
        if self.enabled:
            pygame.mixer.quit()
            self.enabled = False
