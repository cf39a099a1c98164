import logging
import math
import random
from collections import namedtuple
from enum import Enum

from body import Body
from settings import (WIDTH, HEIGHT, ENEMY_BASE_SIZE, ENEMY_BASE_SPEED, ENEMY_BASE_SCORE,
                      ENEMY_PROJECTILE_SPEED, SHOOTER_IDEAL_DISTANCE, SHOOTER_RANGE,
                      BOMBER_PULL_RANGE)
from vector import vec, safe_normalize, map_range

logger = logging.getLogger(__name__)


class EnemyKind(Enum):
    BASIC = 'basic'
    SHOOTER = 'shooter'
    BOMBER = 'bomber'
    ZIGZAG = 'zigzag'


EnemyStats = namedtuple('EnemyStats', 'health size speed score color')

# health is fixed per kind; the rest are multipliers on the level-scaled base
STATS = {
    EnemyKind.BASIC: EnemyStats(1, 1.0, 1.0, 1.0, (200, 50, 50)),
    EnemyKind.SHOOTER: EnemyStats(2, 0.9, 0.8, 1.5, (50, 100, 200)),
    EnemyKind.BOMBER: EnemyStats(3, 1.3, 0.6, 2.0, (100, 50, 150)),
    EnemyKind.ZIGZAG: EnemyStats(1, 0.7, 1.5, 1.2, (50, 200, 100)),
}


class Enemy(Body):
    """Hostile ship. Movement comes from the per-kind behaviour in
    ``BEHAVIORS``; only shooters fire back.
    """
    def __init__(self, x, y, kind=EnemyKind.BASIC, level=1, bounds=(WIDTH, HEIGHT), rng=random):
        stats = STATS[kind]
        base_speed = ENEMY_BASE_SPEED * (1 + (level - 1) * 0.1)
        super().__init__(x, y, ENEMY_BASE_SIZE * stats.size)
        self.kind = kind
        self.level = level
        self.health = stats.health
        self.max_health = stats.health
        self.max_speed = base_speed * stats.speed
        self.score_value = int(round(ENEMY_BASE_SCORE * level * stats.score))
        self.color = stats.color
        self.rng = rng
        # set once the enemy has dropped in past the top edge
        self.entered = y >= 0

        self.animation_offset = self.rng.uniform(0, math.tau)
        self.animation_speed = self.rng.uniform(0.03, 0.08)
        self.rotation = 0.0
        self.pulse = 0.0
        self.age = 0

        self.behavior_timer = 0
        self.behavior_duration = self.rng.randint(60, 119)
        width, height = bounds
        self.target = vec(self.rng.uniform(width * 0.2, width * 0.8),
                          self.rng.uniform(height * 0.2, height * 0.6))

        self.shoot_cooldown = 0
        self.shoot_cooldown_max = None
        if kind is EnemyKind.SHOOTER:
            self.shoot_cooldown_max = int(self.rng.uniform(90, 120) / level)

        logger.debug("Created %s enemy hitbox=%.1f health=%d", kind.value, self.hitbox_size, self.health)

    @property
    def is_dead(self):
        return self.health <= 0

    def take_damage(self, amount):
        self.health -= amount
        return self.health <= 0

    def update(self, player_pos, width, height):
        """Advance one frame. Returns the enemy projectiles fired this frame."""
        self.behavior_timer += 1
        if self.behavior_timer >= self.behavior_duration:
            self.change_behavior(player_pos, width, height)
            self.behavior_timer = 0

        shots = BEHAVIORS[self.kind](self, player_pos)

        self.integrate(max_speed=self.max_speed)
        if not self.entered and self.pos.y >= 0:
            self.entered = True

        self.age += 1
        spin = 3 if self.kind is EnemyKind.ZIGZAG else 1
        self.rotation = self.age * 0.01 * spin
        self.pulse = math.sin(self.age * self.animation_speed + self.animation_offset) * 0.1

        if self.shoot_cooldown > 0:
            self.shoot_cooldown -= 1
        return shots

    def change_behavior(self, player_pos, width, height):
        self.behavior_duration = self.rng.randint(60, 119)
        if self.kind is EnemyKind.BASIC:
            self.target = vec(self.rng.uniform(width * 0.1, width * 0.9),
                              self.rng.uniform(height * 0.1, height * 0.7))
        elif self.kind is EnemyKind.SHOOTER:
            self.target = vec(self.rng.uniform(width * 0.2, width * 0.8),
                              self.rng.uniform(height * 0.2, height * 0.5))
        elif self.kind is EnemyKind.BOMBER:
            self.target = vec(player_pos)
        elif self.kind is EnemyKind.ZIGZAG:
            self.target = vec(player_pos.x + self.rng.uniform(-200, 200),
                              player_pos.y + self.rng.uniform(-200, 200))

    def _wave(self, rate):
        return self.age * rate + self.animation_offset

    def shoot(self, direction):
        v = safe_normalize(direction) * ENEMY_PROJECTILE_SPEED
        return EnemyProjectile(self.pos.x, self.pos.y, v.x, v.y, self.color)

    def is_offscreen(self, width, height, margin=None):
        m = self.size * 2 if margin is None else margin
        if not self.entered:
            # still dropping in: only the sides and bottom count
            return self.pos.x < -m or self.pos.x > width + m or self.pos.y > height + m
        return super().is_offscreen(width, height, m)


def basic_behavior(enemy, player_pos):
    steer = safe_normalize(enemy.target - enemy.pos) * 0.2
    steer.x += math.sin(enemy._wave(0.02)) * 0.05
    enemy.acc += steer
    return []


def shooter_behavior(enemy, player_pos):
    to_player = vec(player_pos) - enemy.pos
    distance = to_player.length()
    direction = safe_normalize(to_player)

    if distance < SHOOTER_IDEAL_DISTANCE * 0.8:
        enemy.acc += direction * -0.2
    elif distance > SHOOTER_IDEAL_DISTANCE * 1.2:
        enemy.acc += direction * 0.1
    else:
        strafe = vec(-direction.y, direction.x)
        enemy.acc += strafe * (math.sin(enemy._wave(0.03)) * 0.2)

    if enemy.shoot_cooldown <= 0 and distance < SHOOTER_RANGE:
        enemy.shoot_cooldown = enemy.shoot_cooldown_max
        return [enemy.shoot(to_player)]
    return []


def bomber_behavior(enemy, player_pos):
    to_player = vec(player_pos) - enemy.pos
    # closer means a stronger pull
    pull = map_range(to_player.length(), 0, BOMBER_PULL_RANGE, 0.3, 0.05)
    enemy.acc += safe_normalize(to_player) * pull
    wobble = enemy._wave(0.1)
    enemy.acc += vec(math.sin(wobble) * 0.02, math.cos(wobble) * 0.02)
    return []


def zigzag_behavior(enemy, player_pos):
    steer = safe_normalize(vec(player_pos) - enemy.pos) * 0.15
    steer.x += math.sin(enemy._wave(0.1)) * 0.5
    steer.y += math.cos(enemy._wave(0.08)) * 0.5
    enemy.acc += steer
    return []


BEHAVIORS = {
    EnemyKind.BASIC: basic_behavior,
    EnemyKind.SHOOTER: shooter_behavior,
    EnemyKind.BOMBER: bomber_behavior,
    EnemyKind.ZIGZAG: zigzag_behavior,
}


class EnemyProjectile(Body):
    """Shot fired by a shooter. Moves in a straight line and hurts the
    player on contact; worth nothing.
    """
    def __init__(self, x, y, vx, vy, color=None, size=10):
        super().__init__(x, y, size, hitbox_size=8)
        self.vel.update(vx, vy)
        self.health = 1
        self.damage = 1
        self.score_value = 0
        self.color = color or (200, 50, 50)
        self.rotation = 0.0

    def update(self):
        self.pos += self.vel
        self.rotation += 0.2
