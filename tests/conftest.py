"""Shared fixtures. pygame runs headless for the whole suite."""
import os
import random

# must be set before pygame opens anything
os.environ['SDL_VIDEODRIVER'] = 'dummy'
os.environ['SDL_AUDIODRIVER'] = 'dummy'

import pytest
import pygame

from game import Game
from highscores import HighScoreStore, HighScoreTable


class RecordingAudio:
    """Stands in for Audio; remembers which cues were played."""
    def __init__(self):
        self.enabled = True
        self.played = []

    def play(self, cue):
        if self.enabled:
            self.played.append(cue)

    def toggle(self):
        self.enabled = not self.enabled
        return self.enabled


class FixedRandom(random.Random):
    """random.Random whose ``random()`` always returns the same draw."""
    def __init__(self, value):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def audio():
    return RecordingAudio()


@pytest.fixture
def score_path(tmp_path):
    return str(tmp_path / "highscores.json")


@pytest.fixture
def high_scores(score_path):
    return HighScoreTable(HighScoreStore(score_path))


@pytest.fixture
def game(audio, high_scores, rng):
    return Game(800, 600, audio=audio, high_scores=high_scores, rng=rng)


@pytest.fixture
def playing(game):
    """A session already in PLAYING with an empty field and the player parked."""
    game.start_game()
    game.player.pos.update(400, 500)
    return game


@pytest.fixture
def no_drop():
    return FixedRandom(0.99)


@pytest.fixture
def always_drop():
    return FixedRandom(0.0)


@pytest.fixture
def pygame_display():
    pygame.init()
    yield
    pygame.quit()
