import math
import random

from body import Body
from vector import vec, from_angle, random_unit, map_range

DEFAULT_COLOR = (255, 150, 0)


class Particle(Body):
    """Cosmetic debris. Size and alpha shrink with remaining life."""
    MAX_LIFE = 100

    def __init__(self, x, y, size=5, color=None, rng=random):
        self.rng = rng
        size = rng.uniform(size * 0.5, size)
        super().__init__(x, y, size, hitbox_size=0)
        self.vel = random_unit(rng) * rng.uniform(1, 3)
        self.original_size = size
        self.color = color or DEFAULT_COLOR
        self.alpha = 255
        self.life = float(self.MAX_LIFE)
        self.decay_rate = rng.uniform(1.5, 3)

    def update(self):
        self.acc += vec(self.rng.uniform(-0.1, 0.1), self.rng.uniform(-0.1, 0.1))
        self.integrate(drag=0.95)
        self.life -= self.decay_rate
        life = max(0.0, self.life)
        self.size = map_range(life, self.MAX_LIFE, 0, self.original_size, 0)
        self.alpha = int(map_range(life, self.MAX_LIFE, 0, 255, 0))

    @property
    def is_dead(self):
        return self.life <= 0


class Spark(Particle):
    """Particle with a fixed heading and a short trail."""
    TRAIL_LENGTH = 5

    def __init__(self, x, y, angle, speed, size, color=None, rng=random):
        super().__init__(x, y, size, color, rng)
        self.vel = from_angle(angle, speed)
        self.decay_rate = rng.uniform(2, 4)
        self.history = []

    def update(self):
        self.history.append(vec(self.pos.x, self.pos.y))
        if len(self.history) > self.TRAIL_LENGTH:
            self.history.pop(0)
        super().update()


class ParticleSystem:
    def __init__(self, rng=random):
        self.rng = rng
        self.particles = []

    def __len__(self):
        return len(self.particles)

    def __iter__(self):
        return iter(self.particles)

    def explode(self, x, y, count=10, size=20, color=None):
        """Burst of ``count`` particles at (x, y)."""
        for _ in range(count):
            self.particles.append(Particle(x, y, size, color, self.rng))

    def burst_ring(self, x, y, count=12, speed=3, size=6, color=None):
        """Evenly spaced sparks flying outwards, used for shield impacts."""
        for i in range(count):
            ang = math.tau * i / count
            self.particles.append(Spark(x, y, ang, speed, size, color, self.rng))

    def add(self, particles):
        self.particles.extend(particles)

    def update(self):
        for i in range(len(self.particles) - 1, -1, -1):
            p = self.particles[i]
            p.update()
            if p.is_dead:
                del self.particles[i]

    def clear(self):
        self.particles = []
