"""Feedback signals the renderer reads: screen shake, the scrolling
starfield and the transient message stack.
"""
import random
from dataclasses import dataclass

from settings import STAR_COUNT, MESSAGE_DURATION


class ScreenShake:
    """Transient (intensity, duration) pair. The core triggers it; the
    renderer drains one frame per ``next_offset`` call.
    """
    def __init__(self):
        self.reset()

    def reset(self):
        self.intensity = 0
        self.duration = 0

    @property
    def active(self):
        return self.duration > 0

    def trigger(self, intensity, duration):
        self.intensity = intensity
        self.duration = duration

    def next_offset(self, rng=random):
        if self.duration <= 0:
            return 0, 0
        self.duration -= 1
        m = self.intensity
        return rng.uniform(-m, m), rng.uniform(-m, m)


@dataclass
class Star:
    x: float
    y: float
    size: float
    speed: float


class Starfield:
    def __init__(self, width, height, count=STAR_COUNT, rng=random):
        self.width = width
        self.height = height
        self.rng = rng
        self.stars = [Star(rng.uniform(0, width), rng.uniform(0, height),
                           rng.uniform(1, 3), rng.uniform(0.1, 0.5))
                      for _ in range(count)]

    def update(self):
        for star in self.stars:
            star.y += star.speed
            if star.y > self.height:
                star.y = 0
                star.x = self.rng.uniform(0, self.width)

    def resize(self, width, height):
        self.width = width
        self.height = height
        for star in self.stars:
            if star.x > width or star.y > height:
                star.x = self.rng.uniform(0, width)
                star.y = self.rng.uniform(0, height)


@dataclass
class Message:
    text: str
    color: tuple
    timer: int
    total: int

    @property
    def alpha(self):
        return int(255 * min(1.0, self.timer / float(self.total))) if self.total else 0


class Notifications:
    """Top-centre messages, newest first."""
    MAX_VISIBLE = 4

    def __init__(self):
        self.messages = []

    def __len__(self):
        return len(self.messages)

    def __iter__(self):
        return iter(self.messages)

    def push(self, text, color=(240, 240, 240), frames=MESSAGE_DURATION):
        self.messages.insert(0, Message(text, color, frames, frames))
        del self.messages[self.MAX_VISIBLE:]

    def update(self):
        for msg in self.messages:
            msg.timer -= 1
        self.messages = [m for m in self.messages if m.timer > 0]

    def clear(self):
        self.messages = []
