"""Read-only per-frame view of a session, handed to the renderer."""
from dataclasses import dataclass
from typing import Optional, Tuple

from powerup import PowerupKind
from settings import POWERUP_DURATIONS


@dataclass(frozen=True)
class Sprite:
    kind: str
    x: float
    y: float
    size: float
    rotation: float = 0.0
    color: Tuple[int, int, int] = (255, 255, 255)
    alpha: int = 255
    phase: float = 0.0
    health: int = 0
    max_health: int = 0
    heading: float = 0.0


@dataclass(frozen=True)
class PlayerView:
    x: float
    y: float
    size: float
    angle: float
    speed: float
    thrust: float
    health: int
    max_health: int
    lives: int
    shielded: bool
    invulnerable: bool
    # (label, remaining frames, total frames)
    powerups: Tuple[Tuple[str, int, int], ...]


@dataclass(frozen=True)
class ButtonView:
    action: str
    label: str
    rect: Tuple[int, int, int, int]
    hovered: bool


@dataclass(frozen=True)
class FrameSnapshot:
    state: str
    width: int
    height: int
    frame: int
    score: int
    level: int
    best_score: int
    stars: Tuple[Tuple[float, float, float], ...]
    player: PlayerView
    enemies: Tuple[Sprite, ...]
    enemy_projectiles: Tuple[Sprite, ...]
    projectiles: Tuple[Sprite, ...]
    powerups: Tuple[Sprite, ...]
    particles: Tuple[Sprite, ...]
    messages: Tuple[Tuple[str, Tuple[int, int, int], int], ...]
    buttons: Tuple[ButtonView, ...]
    show_high_scores: bool
    high_scores: Tuple[Tuple[str, int, int, str], ...]
    name_input: str
    level_up_timer: int
    new_high: bool
    last_rank: Optional[int]
    audio_enabled: bool


def _player_view(player):
    powerups = tuple((kind.label, remaining, POWERUP_DURATIONS[kind.value])
                     for kind, remaining in player.powerup_timers.items())
    return PlayerView(
        x=player.pos.x, y=player.pos.y, size=player.size, angle=player.angle,
        speed=player.vel.length(), thrust=player.thrust_animation,
        health=player.health, max_health=player.max_health, lives=player.lives,
        shielded=player.has_powerup(PowerupKind.SHIELD),
        invulnerable=player.is_invulnerable, powerups=powerups)


def build_snapshot(game):
    hovered = game.hovered_button()
    buttons = tuple(ButtonView(b.action, b.label, tuple(b.rect),
                               hovered is not None and b.action == hovered.action)
                    for b in game.buttons())
    return FrameSnapshot(
        state=game.game_state.name,
        width=game.width,
        height=game.height,
        frame=game.frame,
        score=game.score,
        level=game.level,
        best_score=game.high_scores.best,
        stars=tuple((s.x, s.y, s.size) for s in game.starfield.stars),
        player=_player_view(game.player),
        enemies=tuple(Sprite(e.kind.value, e.pos.x, e.pos.y, e.size, e.rotation, e.color,
                             phase=e.pulse, health=e.health, max_health=e.max_health,
                             heading=e.vel.as_polar()[1])
                      for e in game.enemies),
        enemy_projectiles=tuple(Sprite('enemy_projectile', s.pos.x, s.pos.y, s.size, s.rotation, s.color)
                                for s in game.enemy_projectiles),
        projectiles=tuple(Sprite('projectile', p.pos.x, p.pos.y, p.size, p.rotation, p.color,
                                 phase=p.length, heading=p.vel.as_polar()[1])
                          for p in game.projectiles),
        powerups=tuple(Sprite(u.kind.value, u.pos.x, u.pos.y, u.size, u.rotation, u.kind.color,
                              phase=u.pulse)
                       for u in game.powerups),
        particles=tuple(Sprite('particle', p.pos.x, p.pos.y, p.size, 0.0, p.color, alpha=p.alpha)
                        for p in game.particles),
        messages=tuple((m.text, m.color, m.alpha) for m in game.notifications),
        buttons=buttons,
        show_high_scores=game.show_high_scores,
        high_scores=tuple((e.name, e.score, e.level, e.date) for e in game.high_scores.entries),
        name_input=game.name_input,
        level_up_timer=game.level_up_timer,
        new_high=game.new_high,
        last_rank=game.last_rank,
        audio_enabled=game.audio.enabled,
    )
