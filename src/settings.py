import os
from dataclasses import dataclass

ROOT_PATH = os.path.join(os.path.dirname(__file__), "..")
ASSETS_PATH = os.path.join(ROOT_PATH, "assets")

WIDTH, HEIGHT = 800, 600
MAX_WIDTH, MAX_HEIGHT = 1200, 800
FPS = 60
TITLE = "Space Potato"

# Player
PLAYER_SIZE = 40
PLAYER_MAX_SPEED = 5
PLAYER_THRUST = 0.5
PLAYER_DRAG = 0.9
PLAYER_HEALTH = 5
PLAYER_LIVES = 2
MAX_LIVES = 5
SHOOT_COOLDOWN = 15                 # frames between shots
INVULNERABILITY_DURATION = 90       # 1.5 seconds
SPEED_BOOST_FACTOR = 1.5
HEALTH_POWERUP_AMOUNT = 2

# Timed powerups, in frames
POWERUP_DURATIONS = {
    'triple_shot': 600,
    'power_shot': 600,
    'shield': 600,
    'speed_boost': 600,
}

# Powerup drops
POWERUP_DROP_CHANCE = 0.2
POWERUP_WEIGHTS = {
    'triple_shot': 0.25,
    'shield': 0.25,
    'speed_boost': 0.25,
    'health': 0.2,
    'extra_life': 0.05,
}
POWERUP_GRAVITY = 0.05
POWERUP_MAX_SPEED = 3
POWERUP_DRAG = 0.98

# Enemies
ENEMY_BASE_SIZE = 35
ENEMY_BASE_SPEED = 2
ENEMY_BASE_SCORE = 100
ENEMY_SPAWN_Y = -50
ENEMY_PROJECTILE_SPEED = 5
SHOOTER_IDEAL_DISTANCE = 250
SHOOTER_RANGE = 400
BOMBER_PULL_RANGE = 400

ENEMY_WEIGHTS = {
    'basic': 1.0,
    'shooter': 0.6,
    'bomber': 0.4,
    'zigzag': 0.5,
}
# (minimum level, boosted weight)
ENEMY_WEIGHT_BOOSTS = {
    'shooter': (2, 0.8),
    'bomber': (3, 0.6),
    'zigzag': (4, 0.7),
}

# Spawning / difficulty
ENEMY_SPAWN_RATE = 120              # frames between spawns at level 1
MIN_SPAWN_RATE = 40
SPAWN_RATE_STEP = 10
DIFFICULTY_INCREASE = 30 * FPS      # level up every 30 seconds

# Combat
PLAYER_HIT_BUFFER = 5
SHIELD_BOUNCE_DAMAGE = 1
SHIELD_KNOCKBACK = 6

# Feedback
MESSAGE_DURATION = 180
LEVEL_UP_DURATION = 120
STAR_COUNT = 200

# High scores
MAX_HIGH_SCORES = 10
MAX_NAME_LENGTH = 12
DEFAULT_PLAYER_NAME = "PLAYER"
NAME_PUNCTUATION = "-_.!?'"
DEFAULT_HIGHSCORE_FILE = os.path.join(ROOT_PATH, "highscores.json")


@dataclass
class Config:
    """Runtime options that can be overridden from the environment."""
    highscore_file: str = DEFAULT_HIGHSCORE_FILE
    log_level: str = "WARNING"
    mute: bool = False

    @classmethod
    def from_env(cls, environ=None):
        env = os.environ if environ is None else environ
        mute = env.get("SPACEPOTATO_MUTE", "").strip().lower() in ("1", "true", "yes", "on")
        return cls(
            highscore_file=env.get("SPACEPOTATO_HIGHSCORE_FILE") or DEFAULT_HIGHSCORE_FILE,
            log_level=(env.get("SPACEPOTATO_LOG_LEVEL") or "WARNING").upper(),
            mute=mute,
        )
