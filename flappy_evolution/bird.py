"""
A bird: physical state for one run plus the network that flies it.
"""

from .constants import (
    BIRD_SIZE,
    BIRD_START_Y,
    DAMPING,
    FLAP_THRESHOLD,
    GRAVITY,
    GROUND_HEIGHT,
    LIFT,
    VELOCITY_LIMIT,
    WORLD_HEIGHT,
    WORLD_WIDTH,
)


class Bird:
    """Represents one member of the population, controlled by its own network."""

    SIZE = BIRD_SIZE

    def __init__(self, net, bird_id):
        self.id = bird_id
        self.net = net  # owned, never shared with another bird
        self.reset()

    def reset(self):
        """Back to the starting position with a clean per-generation record."""
        self.y = BIRD_START_Y
        self.velocity = 0
        self.alive = True
        self.fitness = 0
        self.score = 0  # pipes passed

    @property
    def brain(self):
        return self.net.snapshot()

    def flap(self):
        """Overwrite velocity with the upward impulse (negative y is up)."""
        self.velocity = LIFT

    def move(self):
        """Gravity, air resistance, terminal velocity, then position."""
        self.velocity += GRAVITY
        self.velocity *= DAMPING
        self.velocity = max(-VELOCITY_LIMIT, min(VELOCITY_LIMIT, self.velocity))
        self.y += self.velocity

    def observe(self, pipe):
        """
        Normalized network inputs:

        * y / WORLD_HEIGHT
        * next pipe x / WORLD_WIDTH (1.0 with no pipe ahead)
        * next gap centre / WORLD_HEIGHT (0.5 with no pipe ahead)
        * velocity mapped from [-limit, limit] to [0, 1]
        """
        if pipe is not None:
            pipe_x = pipe.x
            gap_y = pipe.gap_center_y
        else:
            pipe_x = WORLD_WIDTH
            gap_y = WORLD_HEIGHT / 2

        return [
            self.y / WORLD_HEIGHT,
            pipe_x / WORLD_WIDTH,
            gap_y / WORLD_HEIGHT,
            (self.velocity + VELOCITY_LIMIT) / (VELOCITY_LIMIT * 2),
        ]

    def think(self, pipe):
        """Ask the network; flap if the output is high enough. Returns True on a flap."""
        output = self.net.predict(self.observe(pipe))
        if output[0] > FLAP_THRESHOLD:
            self.flap()
            return True
        return False

    def hit_bounds(self):
        return self.y + self.SIZE > WORLD_HEIGHT - GROUND_HEIGHT or self.y < 0

    def collides(self, pipe):
        if self.hit_bounds():
            return True
        return pipe is not None and pipe.collide(self.y, size=self.SIZE)

    def update(self, pipe):
        """One tick for a live bird: move, get rewarded, decide, check for death."""
        if not self.alive:
            return
        self.move()
        self.fitness += 1
        self.think(pipe)
        if self.collides(pipe):
            self.alive = False
