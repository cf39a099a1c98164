import logging
import random

from enemy import Enemy, EnemyKind
from settings import (ENEMY_WEIGHTS, ENEMY_WEIGHT_BOOSTS, ENEMY_SPAWN_RATE, MIN_SPAWN_RATE,
                      SPAWN_RATE_STEP, DIFFICULTY_INCREASE, ENEMY_SPAWN_Y, HEIGHT)

logger = logging.getLogger(__name__)


def weighted_choice(items, weights, rng=random):
    """Pick one of ``items``: normalise the weights and walk the cumulative
    sum until it passes a uniform draw. Falls back to the first item.
    """
    total = float(sum(weights))
    if not items or total <= 0:
        return items[0] if items else None
    draw = rng.random()
    cumulative = 0.0
    for item, w in zip(items, weights):
        cumulative += w / total
        if draw < cumulative:
            return item
    return items[0]


def enemy_weights(level):
    """Spawn weights keyed by kind name, with the level-gated boosts applied."""
    weights = dict(ENEMY_WEIGHTS)
    for name, (min_level, boosted) in ENEMY_WEIGHT_BOOSTS.items():
        if level >= min_level:
            weights[name] = boosted
    return weights


def choose_enemy_kind(level, rng=random):
    weights = enemy_weights(level)
    kinds = [EnemyKind(name) for name in weights]
    return weighted_choice(kinds, list(weights.values()), rng)


class SpawnController:
    """Spawn cadence and difficulty ramp. One enemy every ``spawn_rate``
    frames; every ``DIFFICULTY_INCREASE`` frames the level goes up and the
    rate tightens (never below ``MIN_SPAWN_RATE``).
    """
    def __init__(self, rng=random):
        self.rng = rng
        self.reset()

    def reset(self):
        self.level = 1
        self.spawn_rate = ENEMY_SPAWN_RATE
        self.spawn_counter = 0
        self.difficulty_timer = 0

    def update(self, width, height=HEIGHT):
        """Tick the spawn counter; returns the enemies to add this frame."""
        self.spawn_counter += 1
        if self.spawn_counter < self.spawn_rate:
            return []
        self.spawn_counter = 0
        kind = choose_enemy_kind(self.level, self.rng)
        x = self.rng.uniform(0, width)
        return [Enemy(x, ENEMY_SPAWN_Y, kind, self.level, bounds=(width, height), rng=self.rng)]

    def tick_difficulty(self):
        """Returns True on the frame the level goes up."""
        self.difficulty_timer += 1
        if self.difficulty_timer < DIFFICULTY_INCREASE:
            return False
        self.difficulty_timer = 0
        self.increase_difficulty()
        return True

    def increase_difficulty(self):
        self.level += 1
        self.spawn_rate = max(MIN_SPAWN_RATE, self.spawn_rate - SPAWN_RATE_STEP)
        logger.info("Level %d, spawn rate %d frames", self.level, self.spawn_rate)
