import logging
import math
import os
import random
from array import array

import pygame

from settings import ASSETS_PATH

logger = logging.getLogger(__name__)

SAMPLE_RATE = 22050
CUES = ("shoot", "explosion", "powerup")


def make_tone(freqs, duration, volume=0.3, square=False):
    """Mono 16-bit tone. ``freqs`` is a list of frequencies played back to back."""
    n = int(duration * SAMPLE_RATE)
    amp = int(32767 * max(0.0, min(1.0, volume)))
    step = max(1, n // len(freqs))
    buf = array("h", [0] * n)
    for i in range(n):
        f = freqs[min(len(freqs) - 1, i // step)]
        s = math.sin(2.0 * math.pi * f * i / SAMPLE_RATE)
        if square:
            s = 1.0 if s >= 0 else -1.0
        fade = 1.0 - i / n
        buf[i] = int(amp * s * fade)
    return buf


def make_noise(duration, volume=0.4):
    n = int(duration * SAMPLE_RATE)
    amp = int(32767 * volume)
    buf = array("h", [0] * n)
    level = 0.0
    for i in range(n):
        # brown-ish noise: integrate white noise and decay it
        level = max(-1.0, min(1.0, level * 0.98 + random.uniform(-0.2, 0.2)))
        buf[i] = int(amp * level * (1.0 - i / n))
    return buf


SYNTH = {
    "shoot": lambda: make_tone([400], 0.12, 0.1, square=True),
    "explosion": lambda: make_noise(0.5, 0.35),
    "powerup": lambda: make_tone([600, 800], 0.3, 0.15),
}


class Audio:
    """Named sound cues. Every call is best effort: if the mixer cannot start
    or a sound fails to play, audio switches itself off and the game goes on.
    """
    def __init__(self, enabled=True, assets_path=ASSETS_PATH):
        self.sounds = {}
        self.enabled = False
        if not enabled:
            return
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
            self.sounds = self._load_sounds(assets_path)
            self.enabled = True
        except (pygame.error, OSError, ValueError) as e:
            logger.warning("Sound initialization failed, disabling sound: %s", e)
            self.sounds = {}

    def _load_sounds(self, assets_path):
        freq, _size, channels = pygame.mixer.get_init()
        sounds = {}
        for cue in CUES:
            path = os.path.join(assets_path, cue + ".wav")
            if os.path.exists(path):
                sounds[cue] = pygame.mixer.Sound(path)
                continue
            samples = SYNTH[cue]()
            if channels == 2:
                stereo = array("h")
                for s in samples:
                    stereo.append(s)
                    stereo.append(s)
                samples = stereo
            sounds[cue] = pygame.mixer.Sound(buffer=samples.tobytes())
        if freq != SAMPLE_RATE:
            logger.debug("Mixer runs at %d Hz, synthesized cues will be pitched", freq)
        return sounds

    def play(self, cue):
        if not self.enabled:
            return
        sound = self.sounds.get(cue)
        if sound is None:
            return
        try:
            sound.play()
        except pygame.error as e:
            logger.warning("Error playing sound, disabling sound: %s", e)
            self.enabled = False

    def toggle(self):
        if self.sounds:
            self.enabled = not self.enabled
        return self.enabled
