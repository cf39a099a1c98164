"""Small helpers on top of pygame's Vector2."""

import math
import random

from pygame.math import Vector2


def vec(x=0.0, y=0.0):
    """New Vector2 from two numbers, or a copy of an existing vector."""
    if isinstance(x, Vector2):
        return Vector2(x)
    return Vector2(float(x), float(y))


def limit(v, max_len):
    """Clamp the magnitude of ``v`` in place and return it."""
    if max_len is not None and v.length_squared() > max_len * max_len:
        v.scale_to_length(max_len)
    return v


def safe_normalize(v):
    """Unit vector in the direction of ``v``; zero vector stays zero."""
    if v.length_squared() == 0:
        return Vector2(0, 0)
    return v.normalize()


def heading(v):
    return math.atan2(v.y, v.x)


def from_angle(angle, length=1.0):
    return Vector2(math.cos(angle) * length, math.sin(angle) * length)


def random_unit(rng=random):
    return from_angle(rng.uniform(0, math.tau))


def map_range(value, in_lo, in_hi, out_lo, out_hi):
    if in_hi == in_lo:
        return out_lo
    return out_lo + (value - in_lo) * (out_hi - out_lo) / (in_hi - in_lo)


def constrain(value, lo, hi):
    return lo if value < lo else hi if value > hi else value
