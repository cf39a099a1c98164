import random

import pygame
import pytest

from collision import cull_offscreen
from enemy import Enemy, EnemyKind
from game import Game, GameState
from powerup import Powerup, PowerupKind
from projectile import Projectile
from settings import DIFFICULTY_INCREASE, ENEMY_SPAWN_Y, PLAYER_HEALTH


def key_event(key, down=True):
    return pygame.event.Event(pygame.KEYDOWN if down else pygame.KEYUP, key=key)


def click(game, action):
    button = next(b for b in game.buttons() if b.action == action)
    game.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=button.rect.center))


class TestStateMachine:

    def test_starts_on_title_screen(self, game):
        assert game.game_state == GameState.START
        assert game.score == 0
        assert game.level == 1

    @pytest.mark.parametrize("key", [pygame.K_RETURN, pygame.K_SPACE])
    def test_key_starts_game(self, game, key):
        game.handle_event(key_event(key))
        assert game.game_state == GameState.PLAYING

    def test_click_starts_game(self, game):
        click(game, 'start')
        assert game.game_state == GameState.PLAYING

    def test_escape_on_title_requests_quit(self, game):
        game.handle_event(key_event(pygame.K_ESCAPE))
        assert game.request_quit

    def test_pause_and_resume(self, playing):
        playing.handle_event(key_event(pygame.K_ESCAPE))
        assert playing.game_state == GameState.PAUSED
        playing.handle_event(key_event(pygame.K_p))
        assert playing.game_state == GameState.PLAYING

    def test_paused_world_is_frozen(self, playing):
        playing.projectiles.append(Projectile(400, 300))
        playing.toggle_pause()
        for _ in range(10):
            playing.update()
        assert playing.projectiles[0].pos.y == 300
        assert playing.spawner.spawn_counter == 0

    def test_help_screen(self, playing):
        playing.handle_event(key_event(pygame.K_h))
        assert playing.game_state == GameState.HELP
        playing.handle_event(key_event(pygame.K_RETURN))
        assert playing.game_state == GameState.PLAYING

    def test_help_button(self, playing):
        click(playing, 'help')
        assert playing.game_state == GameState.HELP
        click(playing, 'resume')
        assert playing.game_state == GameState.PLAYING

    def test_high_score_panel_toggles_on_title(self, game):
        game.handle_event(key_event(pygame.K_TAB))
        assert game.show_high_scores
        click(game, 'scores')
        assert not game.show_high_scores

    def test_high_score_panel_ignored_while_playing(self, playing):
        playing.toggle_high_scores()
        assert not playing.show_high_scores


class TestMatchEnd:

    def kill_player(self, game):
        game.player.lives = 1
        game.player.health = 1
        game.enemies.append(Enemy(game.player.pos.x, game.player.pos.y, EnemyKind.BASIC))
        game.update()

    def test_zero_score_goes_straight_to_game_over(self, playing):
        self.kill_player(playing)
        assert playing.game_state == GameState.GAME_OVER
        assert len(playing.high_scores) == 0

    def test_qualifying_score_asks_for_name(self, playing):
        playing.score = 1200
        self.kill_player(playing)
        assert playing.game_state == GameState.NAME_ENTRY

        playing.handle_event(pygame.event.Event(pygame.TEXTINPUT, text="Ann<>"))
        playing.handle_event(key_event(pygame.K_BACKSPACE))
        playing.handle_event(pygame.event.Event(pygame.TEXTINPUT, text="e"))
        assert playing.name_input == "Ane"
        playing.handle_event(key_event(pygame.K_RETURN))

        assert playing.game_state == GameState.GAME_OVER
        assert playing.last_rank == 1
        assert playing.new_high
        entry = playing.high_scores.entries[0]
        assert (entry.name, entry.score, entry.level) == ("Ane", 1200, 1)

    def test_name_is_truncated(self, playing):
        playing.score = 50
        playing.end_match()
        assert playing.game_state == GameState.NAME_ENTRY
        playing.handle_event(pygame.event.Event(pygame.TEXTINPUT, text="ABCDEFGHIJKLMNOP"))
        assert playing.name_input == "ABCDEFGHIJKL"

    def test_empty_name_becomes_default(self, playing):
        playing.score = 50
        playing.end_match()
        click(playing, 'submit')
        assert playing.high_scores.entries[0].name == "PLAYER"

    def test_play_again_resets_session(self, playing):
        playing.score = 0
        playing.enemies.append(Enemy(100, 100))
        playing.end_match()
        assert playing.game_state == GameState.GAME_OVER
        playing.handle_event(key_event(pygame.K_RETURN))
        assert playing.game_state == GameState.PLAYING
        assert playing.enemies == []
        assert playing.player.health == PLAYER_HEALTH

    def test_escape_from_game_over_returns_to_title(self, playing):
        playing.end_match()
        playing.handle_event(key_event(pygame.K_ESCAPE))
        assert playing.game_state == GameState.START


class TestPlayingFrame:

    def test_movement_keys(self, playing):
        playing.handle_event(key_event(pygame.K_a))
        assert playing.player.moving_left
        playing.update()
        assert playing.player.pos.x < 400
        playing.handle_event(key_event(pygame.K_a, down=False))
        assert not playing.player.moving_left

    def test_keys_released_while_paused_clear(self, playing):
        playing.handle_event(key_event(pygame.K_RIGHT))
        playing.toggle_pause()
        playing.handle_event(key_event(pygame.K_RIGHT, down=False))
        assert not playing.player.moving_right

    def test_space_fires(self, playing):
        playing.handle_event(key_event(pygame.K_SPACE))
        playing.update()
        assert len(playing.projectiles) == 1
        assert 'shoot' in playing.audio.played
        playing.handle_event(key_event(pygame.K_SPACE, down=False))
        assert not playing._fire_key

    def test_mouse_fires_off_button(self, playing):
        playing.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(100, 100)))
        playing.update()
        assert len(playing.projectiles) == 1
        playing.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(100, 100)))
        assert not playing._fire_mouse

    def test_mute_key_toggles_audio(self, playing):
        playing.handle_event(key_event(pygame.K_m))
        assert not playing.audio.enabled

    def test_enemy_kill_scores(self, playing):
        playing.enemies.append(Enemy(400, 200, EnemyKind.BASIC))
        playing.projectiles.append(Projectile(400, 210, 0, 0))
        playing.update()
        assert playing.score == 100

    def test_level_up(self, playing):
        playing.spawner.difficulty_timer = DIFFICULTY_INCREASE - 1
        playing.update()
        assert playing.level == 2
        assert playing.level_up_timer > 0
        assert any(m.text == "Level 2" for m in playing.notifications)

    def test_enemies_spawn_over_time(self, playing):
        for _ in range(playing.enemy_spawn_rate):
            playing.update()
        assert len(playing.enemies) >= 1

    def test_resize_clamps_player(self, playing):
        playing.player.pos.update(700, 550)
        playing.handle_event(pygame.event.Event(pygame.VIDEORESIZE, w=400, h=300, size=(400, 300)))
        assert (playing.width, playing.height) == (400, 300)
        assert playing.player.pos.x <= 400 - playing.player.size / 2
        assert playing.player.pos.y <= 300 - playing.player.size / 2


class TestSnapshot:

    def test_title_snapshot(self, game):
        snap = game.snapshot()
        assert snap.state == 'START'
        assert [b.action for b in snap.buttons] == ['start', 'scores']
        assert snap.player.health == PLAYER_HEALTH

    def test_hover_marks_button(self, game):
        start = game.buttons()[0]
        game.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=start.rect.center, rel=(0, 0), buttons=(0, 0, 0)))
        snap = game.snapshot()
        assert snap.buttons[0].hovered
        assert not snap.buttons[1].hovered

    def test_playing_snapshot_lists_entities(self, playing):
        playing.enemies.append(Enemy(100, 100, EnemyKind.ZIGZAG))
        playing.particles.explode(50, 50, 4)
        snap = playing.snapshot()
        assert [e.kind for e in snap.enemies] == ['zigzag']
        assert len(snap.particles) == 4

    def test_default_collaborators(self):
        game = Game()
        assert not game.audio.enabled
        assert game.snapshot().best_score == 0


class TestSpawnedEnemies:

    @pytest.mark.parametrize("kind", list(EnemyKind))
    def test_each_kind_survives_dropping_in(self, playing, kind):
        enemy = Enemy(400, ENEMY_SPAWN_Y, kind, rng=playing.rng)
        playing.enemies.append(enemy)
        for _ in range(30):
            playing.update()
            assert enemy in playing.enemies

    def test_spawner_enemy_survives_first_frames(self, playing):
        playing.spawner.spawn_counter = playing.enemy_spawn_rate - 1
        playing.update()
        assert len(playing.enemies) == 1
        enemy = playing.enemies[0]
        for _ in range(10):
            playing.update()
        assert enemy in playing.enemies


class TestResize:

    def test_shrinking_keeps_onscreen_entities(self, playing):
        powerup = Powerup(700, 550, PowerupKind.SHIELD)
        enemy = Enemy(750, 400, EnemyKind.BOMBER)
        playing.powerups.append(powerup)
        playing.enemies.append(enemy)
        playing.resize(400, 300)
        cull_offscreen(playing)
        assert playing.powerups == [powerup]
        assert playing.enemies == [enemy]
        assert 0 <= powerup.pos.x <= 400 and powerup.pos.y <= 300
        assert 0 <= enemy.pos.x <= 400 and enemy.pos.y <= 300

    def test_enemy_above_top_is_left_to_drop_in(self, playing):
        enemy = Enemy(300, ENEMY_SPAWN_Y, EnemyKind.BASIC)
        playing.enemies.append(enemy)
        playing.resize(400, 300)
        assert enemy.pos.y == ENEMY_SPAWN_Y


class TestSeededSession:

    def run_session(self, seed, frames=400):
        game = Game(800, 600, rng=random.Random(seed))
        game.start_game()
        game._fire_key = True
        for _ in range(frames):
            game.update()
        return game.snapshot()

    def test_same_seed_same_session(self):
        first = self.run_session(99)
        assert first.projectiles
        assert first == self.run_session(99)
        assert first != self.run_session(98)
