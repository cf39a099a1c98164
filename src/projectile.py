import logging
import math
import random

from body import Body

logger = logging.getLogger(__name__)


class Projectile(Body):
    """Player shot (a french fry). Flies at a fixed velocity until it leaves
    the screen or hits an enemy.
    """
    def __init__(self, x, y, vx=0, vy=-10, damage=1, size=15, rng=random):
        super().__init__(x, y, size, hitbox_size=size * 0.8)
        self.vel.update(vx, vy)
        self.damage = damage
        # visual only
        self.rotation = rng.uniform(0, math.tau)
        self.rotation_speed = rng.uniform(-0.1, 0.1)
        self.length = size * rng.uniform(1.5, 2.0)
        self.color = (255, 220, 100)
        logger.debug("Created projectile at (%.0f, %.0f) damage=%d", x, y, damage)

    def update(self):
        self.pos += self.vel
        self.rotation += self.rotation_speed
