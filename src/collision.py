"""Hit tests and combat resolution.

Everything collides as circles: two bodies touch when the distance between
their centres is less than the sum of their hitbox radii (half of
``hitbox_size``), plus an optional leniency buffer.

``resolve_collisions`` runs once per playing frame, after every entity has
moved. It mutates the session's collections in place and iterates them in
reverse so removals never skip an element.
"""
import logging

from powerup import Powerup, random_kind
from settings import (PLAYER_HIT_BUFFER, POWERUP_DROP_CHANCE, SHIELD_BOUNCE_DAMAGE,
                      SHIELD_KNOCKBACK)
from vector import safe_normalize

logger = logging.getLogger(__name__)

PICKUP_COLOR = (100, 255, 100)
SHIELD_COLOR = (100, 150, 255)


def circles_collide(a, b, buffer=0.0):
    """True if the two bodies overlap. Bodies without a position or hitbox
    never collide; that case is logged rather than raised.
    """
    pos_a, pos_b = getattr(a, 'pos', None), getattr(b, 'pos', None)
    size_a, size_b = getattr(a, 'hitbox_size', None), getattr(b, 'hitbox_size', None)
    if pos_a is None or pos_b is None or not size_a or not size_b:
        logger.warning("Collision check with missing data: %r vs %r", a, b)
        return False
    combined = size_a / 2 + size_b / 2 + buffer
    return pos_a.distance_to(pos_b) < combined


def resolve_collisions(game):
    enemy_projectiles_vs_player(game)
    enemies_vs_player(game)
    projectiles_vs_enemies(game)
    powerups_vs_player(game)


def enemy_projectiles_vs_player(game):
    player = game.player
    for i in range(len(game.enemy_projectiles) - 1, -1, -1):
        shot = game.enemy_projectiles[i]
        if player.is_invulnerable or not circles_collide(shot, player, PLAYER_HIT_BUFFER):
            continue
        if player.take_damage(shot.damage):
            game.shake.trigger(10, 5)
        game.particles.explode(shot.pos.x, shot.pos.y, 5, shot.size, shot.color)
        del game.enemy_projectiles[i]


def enemies_vs_player(game):
    player = game.player
    for i in range(len(game.enemies) - 1, -1, -1):
        enemy = game.enemies[i]
        if not circles_collide(enemy, player, PLAYER_HIT_BUFFER):
            continue

        if player.shielded:
            # the shield bounces the damage back onto the enemy
            game.particles.burst_ring(player.pos.x, player.pos.y, 12, 3, 6, SHIELD_COLOR)
            if enemy.take_damage(SHIELD_BOUNCE_DAMAGE):
                destroy_enemy(game, i)
            else:
                push = safe_normalize(enemy.pos - player.pos) * SHIELD_KNOCKBACK
                enemy.pos += push
                enemy.vel = push
            continue

        if player.is_invulnerable:
            continue
        player.take_damage(1)
        game.particles.explode(enemy.pos.x, enemy.pos.y, 10, enemy.size, enemy.color)
        del game.enemies[i]
        game.shake.trigger(10, 10)
        game.audio.play('explosion')


def projectiles_vs_enemies(game):
    for i in range(len(game.enemies) - 1, -1, -1):
        enemy = game.enemies[i]
        for j in range(len(game.projectiles) - 1, -1, -1):
            shot = game.projectiles[j]
            if not circles_collide(shot, enemy):
                continue
            enemy.take_damage(shot.damage)
            logger.debug("Hit %s enemy, health now %d", enemy.kind.value, enemy.health)
            game.particles.explode(shot.pos.x, shot.pos.y, 3, shot.size)
            del game.projectiles[j]
            if enemy.is_dead:
                destroy_enemy(game, i)
                break


def destroy_enemy(game, index):
    """Remove ``game.enemies[index]`` and hand out the kill rewards."""
    enemy = game.enemies.pop(index)
    game.add_score(enemy.score_value)
    game.particles.explode(enemy.pos.x, enemy.pos.y, 15, enemy.size * 1.5, enemy.color)
    if game.rng.random() < POWERUP_DROP_CHANCE:
        game.powerups.append(Powerup(enemy.pos.x, enemy.pos.y, random_kind(game.rng), rng=game.rng))
    game.shake.trigger(5, 5)
    game.audio.play('explosion')


def powerups_vs_player(game):
    player = game.player
    for i in range(len(game.powerups) - 1, -1, -1):
        powerup = game.powerups[i]
        if not circles_collide(powerup, player):
            continue
        player.apply_powerup(powerup.kind)
        game.particles.explode(powerup.pos.x, powerup.pos.y, 10, powerup.size, PICKUP_COLOR)
        del game.powerups[i]
        game.audio.play('powerup')
        game.notifications.push(powerup.kind.label, powerup.kind.color)


def cull_offscreen(game):
    """Drop anything that has left the playfield. No rewards, no effects."""
    w, h = game.width, game.height
    for group in (game.projectiles, game.enemy_projectiles, game.enemies, game.powerups):
        for i in range(len(group) - 1, -1, -1):
            if group[i].is_offscreen(w, h):
                del group[i]
