import logging
import random

from body import Body
from powerup import PowerupKind, TIMED_KINDS
from projectile import Projectile
from settings import (WIDTH, HEIGHT, PLAYER_SIZE, PLAYER_MAX_SPEED, PLAYER_THRUST, PLAYER_DRAG,
                      PLAYER_HEALTH, PLAYER_LIVES, MAX_LIVES, SHOOT_COOLDOWN,
                      INVULNERABILITY_DURATION, SPEED_BOOST_FACTOR, HEALTH_POWERUP_AMOUNT,
                      POWERUP_DURATIONS)
from vector import constrain

logger = logging.getLogger(__name__)

# picking up one of a pair replaces the other
EXCLUSIVE = {
    PowerupKind.TRIPLE_SHOT: PowerupKind.POWER_SHOT,
    PowerupKind.POWER_SHOT: PowerupKind.TRIPLE_SHOT,
    PowerupKind.SHIELD: PowerupKind.SPEED_BOOST,
    PowerupKind.SPEED_BOOST: PowerupKind.SHIELD,
}


class Player(Body):
    def __init__(self, x=None, y=None, width=WIDTH, height=HEIGHT, size=PLAYER_SIZE, rng=random):
        x = width / 2 if x is None else x
        y = height - 100 if y is None else y
        super().__init__(x, y, size, hitbox_size=size * 0.8)
        self.max_speed = PLAYER_MAX_SPEED
        self.rng = rng

        # movement intent, set from input
        self.moving_left = False
        self.moving_right = False
        self.moving_up = False
        self.moving_down = False
        self.shooting = False

        self.health = PLAYER_HEALTH
        self.max_health = PLAYER_HEALTH
        self.lives = PLAYER_LIVES
        self.shoot_cooldown = 0
        self.shoot_cooldown_max = SHOOT_COOLDOWN
        self.is_invulnerable = False
        self.invulnerability_timer = 0
        self.invulnerability_duration = INVULNERABILITY_DURATION

        # kind -> remaining frames
        self.powerup_timers = {}

        self.angle = 0.0
        self.target_angle = 0.0
        self.thrust_animation = 0.0

    @property
    def is_dead(self):
        return self.lives <= 0

    @property
    def shielded(self):
        return self.has_powerup(PowerupKind.SHIELD)

    def has_powerup(self, kind):
        return self.powerup_timers.get(kind, 0) > 0

    @property
    def active_powerups(self):
        return dict(self.powerup_timers)

    @property
    def current_max_speed(self):
        if self.has_powerup(PowerupKind.SPEED_BOOST):
            return self.max_speed * SPEED_BOOST_FACTOR
        return self.max_speed

    def update(self, width, height):
        if self.moving_left:
            self.acc.x -= PLAYER_THRUST
        if self.moving_right:
            self.acc.x += PLAYER_THRUST
        if self.moving_up:
            self.acc.y -= PLAYER_THRUST
        if self.moving_down:
            self.acc.y += PLAYER_THRUST

        self.integrate(max_speed=self.current_max_speed, drag=PLAYER_DRAG)
        self.clamp_to(width, height)

        if self.shoot_cooldown > 0:
            self.shoot_cooldown -= 1

        # the shield keeps the player invulnerable regardless of the hit timer
        if self.invulnerability_timer > 0:
            self.invulnerability_timer -= 1
        if self.is_invulnerable and not self.shielded and self.invulnerability_timer <= 0:
            self.is_invulnerable = False

        self._tick_powerups()

        self.thrust_animation += 0.2
        self.target_angle = self.vel.x * 0.05
        self.angle += (self.target_angle - self.angle) * 0.1

    def _tick_powerups(self):
        for kind in list(self.powerup_timers):
            self.powerup_timers[kind] -= 1
            if self.powerup_timers[kind] > 0:
                continue
            del self.powerup_timers[kind]
            logger.debug("%s expired", kind.label)
            if kind is PowerupKind.SHIELD and self.invulnerability_timer <= 0:
                self.is_invulnerable = False

    def clamp_to(self, width, height):
        half = self.size / 2
        self.pos.x = constrain(self.pos.x, half, max(half, width - half))
        self.pos.y = constrain(self.pos.y, half, max(half, height - half))

    def apply_powerup(self, kind):
        if kind in TIMED_KINDS:
            rival = EXCLUSIVE.get(kind)
            if rival is not None and rival in self.powerup_timers:
                del self.powerup_timers[rival]
                if rival is PowerupKind.SHIELD and self.invulnerability_timer <= 0:
                    self.is_invulnerable = False
            self.powerup_timers[kind] = POWERUP_DURATIONS[kind.value]
            if kind is PowerupKind.SHIELD:
                self.is_invulnerable = True
        elif kind is PowerupKind.HEALTH:
            self.health = min(self.max_health, self.health + HEALTH_POWERUP_AMOUNT)
        elif kind is PowerupKind.EXTRA_LIFE:
            self.lives = min(MAX_LIVES, self.lives + 1)
        logger.debug("Applied powerup %s", kind.label)

    def clear_powerups(self):
        self.powerup_timers = {}

    def take_damage(self, amount):
        """Returns True if the hit landed."""
        if self.is_invulnerable:
            return False

        self.health -= amount
        self.clear_powerups()
        self.is_invulnerable = True
        self.invulnerability_timer = self.invulnerability_duration

        if self.health <= 0:
            self.lives -= 1
            if self.lives > 0:
                self.health = self.max_health
            else:
                self.health = 0
        return True

    def shoot(self):
        """Fire if the cooldown allows. Returns the new projectiles."""
        if self.shoot_cooldown > 0:
            return []
        self.shoot_cooldown = self.shoot_cooldown_max

        damage = 2 if self.has_powerup(PowerupKind.POWER_SHOT) else 1
        x, y = self.pos.x, self.pos.y
        if self.has_powerup(PowerupKind.TRIPLE_SHOT):
            shots = [Projectile(x, y, 0, -10, damage, rng=self.rng),
                     Projectile(x, y, -2, -9, damage, rng=self.rng),
                     Projectile(x, y, 2, -9, damage, rng=self.rng)]
        else:
            shots = [Projectile(x, y, 0, -10, damage, rng=self.rng)]
        logger.debug("Fired %d projectile(s), damage=%d", len(shots), damage)
        return shots
