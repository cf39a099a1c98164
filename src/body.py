from vector import vec, limit


class Body:
    """Anything that moves and can be hit: position, velocity, acceleration
    and a circular hitbox. ``hitbox_size`` is a diameter; ``size`` is only
    used for drawing and offscreen margins.
    """
    def __init__(self, x, y, size, hitbox_size=None):
        self.pos = vec(x, y)
        self.vel = vec()
        self.acc = vec()
        self.size = size
        self.hitbox_size = size if hitbox_size is None else hitbox_size

    @property
    def x(self):
        return self.pos.x

    @property
    def y(self):
        return self.pos.y

    def integrate(self, max_speed=None, drag=1.0):
        self.vel += self.acc
        limit(self.vel, max_speed)
        self.pos += self.vel
        self.acc = vec()
        if drag != 1.0:
            self.vel *= drag

    def is_offscreen(self, width, height, margin=None):
        m = self.size if margin is None else margin
        return (self.pos.x < -m or self.pos.x > width + m or
                self.pos.y < -m or self.pos.y > height + m)
