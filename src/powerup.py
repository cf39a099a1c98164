import math
import random
from enum import Enum

from body import Body
from particle import Spark
from settings import POWERUP_WEIGHTS, POWERUP_GRAVITY, POWERUP_MAX_SPEED, POWERUP_DRAG
from spawner import weighted_choice
from vector import vec


class PowerupKind(Enum):
    TRIPLE_SHOT = 'triple_shot'
    POWER_SHOT = 'power_shot'
    SHIELD = 'shield'
    SPEED_BOOST = 'speed_boost'
    HEALTH = 'health'
    EXTRA_LIFE = 'extra_life'

    @property
    def label(self):
        return LABELS[self]

    @property
    def color(self):
        return COLORS[self]


LABELS = {
    PowerupKind.TRIPLE_SHOT: 'Triple Shot',
    PowerupKind.POWER_SHOT: 'Power Shot',
    PowerupKind.SHIELD: 'Shield',
    PowerupKind.SPEED_BOOST: 'Speed Boost',
    PowerupKind.HEALTH: 'Health Restored',
    PowerupKind.EXTRA_LIFE: 'Extra Life',
}

COLORS = {
    PowerupKind.TRIPLE_SHOT: (255, 150, 0),
    PowerupKind.POWER_SHOT: (255, 220, 60),
    PowerupKind.SHIELD: (100, 150, 255),
    PowerupKind.SPEED_BOOST: (0, 255, 150),
    PowerupKind.HEALTH: (255, 100, 100),
    PowerupKind.EXTRA_LIFE: (255, 50, 200),
}

# kinds that run on a timer rather than applying instantly
TIMED_KINDS = (PowerupKind.TRIPLE_SHOT, PowerupKind.POWER_SHOT,
               PowerupKind.SHIELD, PowerupKind.SPEED_BOOST)


def random_kind(rng=random):
    kinds = [PowerupKind(name) for name in POWERUP_WEIGHTS]
    return weighted_choice(kinds, list(POWERUP_WEIGHTS.values()), rng)


class Powerup(Body):
    """Pickup dropped by destroyed enemies. Drifts down with gravity and
    drag, throwing off a small spark now and then.
    """
    SPARK_INTERVAL = 10

    def __init__(self, x, y, kind=None, size=20, rng=random):
        super().__init__(x, y, size)
        self.rng = rng
        self.kind = kind if kind is not None else random_kind(rng)
        self.vel.update(self.rng.uniform(-1, 1), self.rng.uniform(1, 2))
        self.rotation = self.rng.uniform(0, math.tau)
        self.rotation_speed = self.rng.uniform(-0.05, 0.05)
        self.oscillation_offset = self.rng.uniform(0, math.tau)
        self.oscillation_speed = self.rng.uniform(0.03, 0.07)
        self.pulse = 0.0
        self.age = 0
        self.particle_timer = 0

    def update(self):
        """Advance one frame; returns any hover sparks to add."""
        self.acc += vec(0, POWERUP_GRAVITY)
        self.integrate(max_speed=POWERUP_MAX_SPEED)
        self.vel.x += self.rng.uniform(-0.1, 0.1)
        self.vel *= POWERUP_DRAG

        self.age += 1
        self.rotation += self.rotation_speed
        self.pulse = math.sin(self.age * self.oscillation_speed + self.oscillation_offset) * 0.2

        self.particle_timer += 1
        if self.particle_timer > self.SPARK_INTERVAL:
            self.particle_timer = 0
            return [self._hover_spark()]
        return []

    def _hover_spark(self):
        offset = self.size / 2
        x = self.pos.x + self.rng.uniform(-offset, offset)
        y = self.pos.y + self.rng.uniform(-offset, offset)
        angle = self.rng.uniform(-0.5, 0.5) + math.pi * 1.5   # mostly upward
        return Spark(x, y, angle, self.rng.uniform(0.5, 1), self.rng.uniform(2, 4), self.kind.color,
                     rng=self.rng)
