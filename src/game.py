import logging
import random
from dataclasses import dataclass
from enum import Enum

import pygame

from audio import Audio
from collision import resolve_collisions, cull_offscreen
from effects import ScreenShake, Starfield, Notifications
from highscores import HighScoreTable, sanitize_name
from particle import ParticleSystem
from player import Player
from settings import (WIDTH, HEIGHT, MAX_NAME_LENGTH, DEFAULT_PLAYER_NAME, LEVEL_UP_DURATION)
from snapshot import build_snapshot
from spawner import SpawnController
from vector import constrain

logger = logging.getLogger(__name__)


class GameState(Enum):
    START = 0
    PLAYING = 1
    PAUSED = 2
    GAME_OVER = 3
    HELP = 4
    NAME_ENTRY = 5


MOVE_KEYS = {
    pygame.K_LEFT: 'moving_left', pygame.K_a: 'moving_left',
    pygame.K_RIGHT: 'moving_right', pygame.K_d: 'moving_right',
    pygame.K_UP: 'moving_up', pygame.K_w: 'moving_up',
    pygame.K_DOWN: 'moving_down', pygame.K_s: 'moving_down',
}
CONFIRM_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER)
MUZZLE_COLOR = (255, 200, 50)


@dataclass
class Button:
    action: str
    label: str
    rect: pygame.Rect

    def contains(self, pos):
        return self.rect.collidepoint(pos)


class Game:
    """One play session plus the screen flow around it.

    Owns every entity collection; nothing outside ``update`` mutates them.
    Input arrives as pygame events through ``handle_event``; rendering reads
    ``snapshot()``.
    """
    def __init__(self, width=WIDTH, height=HEIGHT, audio=None, high_scores=None, rng=random):
        self.width = width
        self.height = height
        self.rng = rng
        self.audio = audio if audio is not None else Audio(enabled=False)
        self.high_scores = high_scores if high_scores is not None else HighScoreTable()

        self.game_state = GameState.START
        self.starfield = Starfield(width, height, rng=rng)
        self.shake = ScreenShake()
        self.notifications = Notifications()
        self.spawner = SpawnController(rng)

        # UI sub-state
        self.show_high_scores = False
        self.name_input = ""
        self.pointer = (0, 0)
        self.last_rank = None
        self.new_high = False
        self.level_up_timer = 0
        self.request_quit = False
        self.frame = 0

        self._fire_key = False
        self._fire_mouse = False

        self.reset()

    def reset(self):
        self.player = Player(width=self.width, height=self.height, rng=self.rng)
        self.projectiles = []
        self.enemies = []
        self.enemy_projectiles = []
        self.powerups = []
        self.particles = ParticleSystem(self.rng)
        self.score = 0
        self.spawner.reset()
        self.shake.reset()
        self.notifications.clear()
        self.level_up_timer = 0
        self.name_input = ""
        self.last_rank = None
        self.new_high = False
        self._fire_key = False
        self._fire_mouse = False

    @property
    def level(self):
        return self.spawner.level

    @property
    def enemy_spawn_rate(self):
        return self.spawner.spawn_rate

    def add_score(self, points):
        self.score += points

    # ------------------------------------------------------------------
    # transitions

    def start_game(self):
        self.reset()
        self.show_high_scores = False
        self.game_state = GameState.PLAYING
        logger.info("Game started")

    def toggle_pause(self):
        if self.game_state == GameState.PLAYING:
            self.game_state = GameState.PAUSED
        elif self.game_state == GameState.PAUSED:
            self.game_state = GameState.PLAYING

    def open_help(self):
        if self.game_state == GameState.PLAYING:
            self.game_state = GameState.HELP

    def resume(self):
        if self.game_state in (GameState.PAUSED, GameState.HELP):
            self.game_state = GameState.PLAYING

    def toggle_high_scores(self):
        if self.game_state in (GameState.START, GameState.GAME_OVER):
            self.show_high_scores = not self.show_high_scores

    def end_match(self):
        self._fire_key = self._fire_mouse = False
        self.player.shooting = False
        if self.high_scores.qualifies(self.score):
            self.name_input = ""
            self.game_state = GameState.NAME_ENTRY
        else:
            self.game_state = GameState.GAME_OVER
        logger.info("Game over: score=%d level=%d", self.score, self.level)

    def submit_name(self):
        if self.game_state != GameState.NAME_ENTRY:
            return
        name = sanitize_name(self.name_input).strip() or DEFAULT_PLAYER_NAME
        self.last_rank = self.high_scores.record(self.score, name, self.level)
        self.new_high = self.last_rank == 1
        self.game_state = GameState.GAME_OVER

    def activate(self, action):
        handler = {
            'start': self.start_game,
            'scores': self.toggle_high_scores,
            'help': self.open_help,
            'resume': self.resume,
            'submit': self.submit_name,
        }.get(action)
        if handler is not None:
            handler()

    # ------------------------------------------------------------------
    # per-frame update

    def update(self):
        self.frame += 1
        self.starfield.update()
        if self.game_state == GameState.PLAYING:
            self.update_playing()
        self.notifications.update()
        if self.level_up_timer > 0:
            self.level_up_timer -= 1

    def update_playing(self):
        w, h = self.width, self.height
        player = self.player

        player.shooting = self._fire_key or self._fire_mouse
        player.update(w, h)
        if player.shooting:
            self.fire()

        for p in self.projectiles:
            p.update()

        for enemy in self.enemies:
            shots = enemy.update(player.pos, w, h)
            if shots:
                self.enemy_projectiles.extend(shots)
                self.particles.explode(enemy.pos.x, enemy.pos.y, 3, 5, enemy.color)

        for shot in self.enemy_projectiles:
            shot.update()

        for powerup in self.powerups:
            self.particles.add(powerup.update())

        self.particles.update()

        resolve_collisions(self)
        cull_offscreen(self)

        self.enemies.extend(self.spawner.update(w, h))
        if self.spawner.tick_difficulty():
            self.level_up_timer = LEVEL_UP_DURATION
            self.notifications.push(f"Level {self.level}", (255, 220, 150))

        if player.is_dead:
            self.end_match()

    def fire(self):
        shots = self.player.shoot()
        if not shots:
            return
        self.projectiles.extend(shots)
        p = self.player
        self.particles.explode(p.pos.x, p.pos.y - p.size / 2, 5, 5, MUZZLE_COLOR)
        self.audio.play('shoot')

    def resize(self, width, height):
        self.width = width
        self.height = height
        self.player.clamp_to(width, height)
        # pull drifting entities back inside so the next cull keeps them;
        # anything still above the top edge is left to drop in
        for body in self.enemies + self.powerups:
            body.pos.x = constrain(body.pos.x, 0, width)
            body.pos.y = min(body.pos.y, height)
        self.starfield.resize(width, height)

    # ------------------------------------------------------------------
    # UI regions

    def buttons(self):
        w, h = self.width, self.height

        def centered(action, label, y, bw=200, bh=50):
            return Button(action, label, pygame.Rect(w // 2 - bw // 2, int(y) - bh // 2, bw, bh))

        state = self.game_state
        if state == GameState.START:
            return [centered('start', "START GAME", h * 2 / 3),
                    centered('scores', "HIGH SCORES", h * 2 / 3 + 70)]
        if state == GameState.PLAYING:
            return [Button('help', "?", pygame.Rect(w - 54, h - 54, 36, 36))]
        if state in (GameState.PAUSED, GameState.HELP):
            return [centered('resume', "RESUME", h * 2 / 3 + (60 if state == GameState.HELP else 0))]
        if state == GameState.NAME_ENTRY:
            return [centered('submit', "SUBMIT", h * 2 / 3)]
        if state == GameState.GAME_OVER:
            return [centered('start', "PLAY AGAIN", h * 2 / 3),
                    centered('scores', "HIGH SCORES", h * 2 / 3 + 70)]
        return []

    def button_at(self, pos):
        for button in self.buttons():
            if button.contains(pos):
                return button
        return None

    def hovered_button(self):
        return self.button_at(self.pointer)

    # ------------------------------------------------------------------
    # input

    def handle_event(self, event):
        if event.type == pygame.KEYDOWN:
            self.handle_keydown(event)
        elif event.type == pygame.KEYUP:
            self.handle_keyup(event)
        elif event.type == pygame.TEXTINPUT:
            self.handle_text(event.text)
        elif event.type == pygame.MOUSEMOTION:
            self.pointer = event.pos
        elif event.type == pygame.MOUSEBUTTONDOWN:
            self.handle_mouse_down(event)
        elif event.type == pygame.MOUSEBUTTONUP:
            if event.button == 1:
                self._fire_mouse = False
        elif event.type == pygame.VIDEORESIZE:
            self.resize(event.w, event.h)

    def handle_keydown(self, event):
        k = event.key
        state = self.game_state

        if state == GameState.START:
            if k in CONFIRM_KEYS or k == pygame.K_SPACE:
                self.start_game()
            elif k == pygame.K_TAB:
                self.toggle_high_scores()
            elif k == pygame.K_ESCAPE:
                self.request_quit = True

        elif state == GameState.PLAYING:
            if k in (pygame.K_ESCAPE, pygame.K_p):
                self.toggle_pause()
            elif k == pygame.K_h:
                self.open_help()
            elif k == pygame.K_m:
                self.audio.toggle()
            elif k == pygame.K_SPACE:
                self._fire_key = True
            elif k in MOVE_KEYS:
                setattr(self.player, MOVE_KEYS[k], True)

        elif state == GameState.PAUSED:
            if k in (pygame.K_ESCAPE, pygame.K_p) or k in CONFIRM_KEYS:
                self.toggle_pause()

        elif state == GameState.HELP:
            if k in (pygame.K_ESCAPE, pygame.K_h) or k in CONFIRM_KEYS:
                self.resume()

        elif state == GameState.NAME_ENTRY:
            if k in CONFIRM_KEYS:
                self.submit_name()
            elif k == pygame.K_BACKSPACE:
                self.name_input = self.name_input[:-1]
            elif k == pygame.K_ESCAPE:
                self.name_input = ""

        elif state == GameState.GAME_OVER:
            if k in CONFIRM_KEYS or k == pygame.K_SPACE:
                self.start_game()
            elif k == pygame.K_TAB:
                self.toggle_high_scores()
            elif k == pygame.K_ESCAPE:
                self.show_high_scores = False
                self.game_state = GameState.START

    def handle_keyup(self, event):
        # movement flags clear in any state so keys released while paused
        # do not leave the ship drifting on resume
        k = event.key
        if k in MOVE_KEYS:
            setattr(self.player, MOVE_KEYS[k], False)
        elif k == pygame.K_SPACE:
            self._fire_key = False

    def handle_text(self, text):
        if self.game_state != GameState.NAME_ENTRY:
            return
        self.name_input = sanitize_name(self.name_input + text, MAX_NAME_LENGTH)

    def handle_mouse_down(self, event):
        if event.button != 1:
            return
        self.pointer = event.pos
        button = self.button_at(event.pos)
        if button is not None:
            self.activate(button.action)
        elif self.game_state == GameState.PLAYING:
            self._fire_mouse = True

    def snapshot(self):
        return build_snapshot(self)
