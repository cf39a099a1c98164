import pytest

from collision import circles_collide, resolve_collisions, cull_offscreen
from enemy import Enemy, EnemyKind, EnemyProjectile
from player import Player
from powerup import Powerup, PowerupKind
from projectile import Projectile
from settings import PLAYER_HEALTH


def place_enemy(game, x, y, kind=EnemyKind.BASIC, level=1):
    enemy = Enemy(x, y, kind, level)
    game.enemies.append(enemy)
    return enemy


class TestCirclesCollide:

    def test_overlap_uses_radius_sum(self):
        a = Projectile(0, 0)            # hitbox 12 -> radius 6
        b = Enemy(0, 0, EnemyKind.BASIC)  # hitbox 35 -> radius 17.5
        b.pos.update(23, 0)
        assert circles_collide(a, b)
        b.pos.update(24, 0)
        assert not circles_collide(a, b)

    def test_buffer_extends_reach(self):
        a = Player(0, 0)
        b = EnemyProjectile(0, 0, 0, 0)
        b.pos.update(a.hitbox_size / 2 + 4 + 3, 0)
        assert not circles_collide(a, b)
        assert circles_collide(a, b, buffer=5)

    def test_missing_data_never_collides(self):
        assert not circles_collide(object(), Player(0, 0))


class TestProjectilesVsEnemies:

    def test_basic_enemy_dies_to_one_hit(self, playing, no_drop):
        playing.rng = no_drop
        place_enemy(playing, 400, 200)
        playing.projectiles.append(Projectile(400, 200))
        resolve_collisions(playing)
        assert playing.enemies == []
        assert playing.projectiles == []
        assert playing.score == 100
        assert playing.audio.played == ['explosion']
        assert playing.shake.active
        assert playing.powerups == []

    def test_bomber_survives_two_hits(self, playing, no_drop):
        playing.rng = no_drop
        bomber = place_enemy(playing, 400, 200, EnemyKind.BOMBER)
        playing.projectiles.extend([Projectile(400, 200), Projectile(400, 200)])
        resolve_collisions(playing)
        assert playing.enemies == [bomber]
        assert bomber.health == 1
        assert playing.projectiles == []
        assert playing.score == 0

    def test_spare_shots_survive_a_kill(self, playing, no_drop):
        playing.rng = no_drop
        place_enemy(playing, 400, 200)
        playing.projectiles.extend([Projectile(400, 200), Projectile(400, 200)])
        resolve_collisions(playing)
        assert len(playing.projectiles) == 1

    def test_kill_can_drop_a_powerup(self, playing, always_drop):
        playing.rng = always_drop
        place_enemy(playing, 400, 200)
        playing.projectiles.append(Projectile(400, 200))
        resolve_collisions(playing)
        assert len(playing.powerups) == 1
        # a draw of 0.0 picks the first weighted kind
        assert playing.powerups[0].kind is PowerupKind.TRIPLE_SHOT


class TestEnemiesVsPlayer:

    def test_ram_hurts_player_and_removes_enemy(self, playing):
        place_enemy(playing, 400, 500)
        resolve_collisions(playing)
        assert playing.player.health == PLAYER_HEALTH - 1
        assert playing.enemies == []
        assert playing.score == 0
        assert playing.player.is_invulnerable

    def test_invulnerable_player_passes_through(self, playing):
        playing.player.take_damage(1)
        enemy = place_enemy(playing, 400, 500)
        resolve_collisions(playing)
        assert playing.enemies == [enemy]
        assert playing.player.health == PLAYER_HEALTH - 1

    def test_shield_kills_weak_enemy_with_reward(self, playing, no_drop):
        playing.rng = no_drop
        playing.player.apply_powerup(PowerupKind.SHIELD)
        place_enemy(playing, 410, 500)
        resolve_collisions(playing)
        assert playing.enemies == []
        assert playing.score == 100
        assert playing.player.health == PLAYER_HEALTH

    def test_shield_knocks_back_survivor(self, playing):
        playing.player.apply_powerup(PowerupKind.SHIELD)
        bomber = place_enemy(playing, 410, 500, EnemyKind.BOMBER)
        resolve_collisions(playing)
        assert playing.enemies == [bomber]
        assert bomber.health == 2
        assert bomber.pos.x > 410
        assert bomber.vel.x > 0
        assert playing.player.health == PLAYER_HEALTH


class TestEnemyProjectilesVsPlayer:

    def test_shot_hurts_player(self, playing):
        playing.enemy_projectiles.append(EnemyProjectile(400, 500, 0, 5))
        resolve_collisions(playing)
        assert playing.player.health == PLAYER_HEALTH - 1
        assert playing.enemy_projectiles == []

    def test_shot_passes_invulnerable_player(self, playing):
        playing.player.apply_powerup(PowerupKind.SHIELD)
        playing.enemy_projectiles.append(EnemyProjectile(400, 500, 0, 5))
        resolve_collisions(playing)
        assert len(playing.enemy_projectiles) == 1
        assert playing.player.health == PLAYER_HEALTH


class TestPowerupsVsPlayer:

    def test_pickup_applies_and_announces(self, playing):
        playing.powerups.append(Powerup(400, 500, PowerupKind.TRIPLE_SHOT))
        resolve_collisions(playing)
        assert playing.powerups == []
        assert playing.player.has_powerup(PowerupKind.TRIPLE_SHOT)
        assert playing.audio.played == ['powerup']
        assert [m.text for m in playing.notifications] == ['Triple Shot']

    def test_distant_powerup_stays(self, playing):
        playing.powerups.append(Powerup(100, 100, PowerupKind.SHIELD))
        resolve_collisions(playing)
        assert len(playing.powerups) == 1


class TestCullOffscreen:

    def test_removes_only_what_left(self, playing):
        playing.projectiles.extend([Projectile(400, -100), Projectile(400, 300)])
        place_enemy(playing, 400, -50)
        gone = place_enemy(playing, 400, 100)
        gone.pos.y = -200
        cull_offscreen(playing)
        assert [p.pos.y for p in playing.projectiles] == [300]
        assert [e.pos.y for e in playing.enemies] == [-50]
        assert playing.score == 0

    @pytest.mark.parametrize("x, y", [(-100, 300), (900, 300), (400, 700)])
    def test_enemy_shots_culled_on_every_edge(self, playing, x, y):
        playing.enemy_projectiles.append(EnemyProjectile(x, y, 0, 0))
        cull_offscreen(playing)
        assert playing.enemy_projectiles == []
