"""
Pipe obstacles: spawning, horizontal scrolling and the dynamic "challenge" variant.
"""

from .constants import (
    BIRD_SIZE,
    BIRD_X,
    DIRECTION_TIMER_RANGE,
    GAP_CHANGE_MAX,
    GAP_CHANGE_MIN,
    GAP_CHANGE_RATE,
    GAP_SNAP_DISTANCE,
    GAP_TIMER_RANGE,
    MAX_GAP_SIZE,
    MAX_PIPE_VERTICAL_SPEED,
    MIN_GAP_SIZE,
    PIPE_GAP,
    PIPE_MARGIN,
    PIPE_SPAWN_RATE,
    PIPE_SPEED,
    PIPE_WIDTH,
    WORLD_HEIGHT,
    WORLD_WIDTH,
)


def clamp(value, low, high):
    return max(low, min(high, value))


class Pipe:
    """A pair of pipe segments with a vertical gap between them."""

    WIDTH = PIPE_WIDTH
    VEL = PIPE_SPEED

    def __init__(self, x, top_height, gap_size=PIPE_GAP):
        self.x = x
        self.top_height = top_height
        self.gap_size = gap_size
        self.passed = False  # whether the birds have flown past this pipe

        # Challenge mode state, None while the pipe is static
        self.vertical_direction = None
        self.direction_change_timer = None
        self.target_gap_size = None
        self.gap_change_timer = None

    @property
    def bottom(self):
        """y of the top edge of the lower segment."""
        return self.top_height + self.gap_size

    @property
    def gap_center_y(self):
        return self.top_height + self.gap_size / 2

    @property
    def right(self):
        """Trailing edge."""
        return self.x + self.WIDTH

    @property
    def is_dynamic(self):
        return self.vertical_direction is not None

    def make_dynamic(self, rng):
        """Attach challenge mode state: random direction, standard gap, fresh timers."""
        self.vertical_direction = 1 if rng.random() > 0.5 else -1
        self.target_gap_size = self.gap_size
        self.direction_change_timer = rng.randint(*DIRECTION_TIMER_RANGE)
        self.gap_change_timer = rng.randint(*GAP_TIMER_RANGE)

    def make_static(self):
        """Drop challenge mode state and go back to the standard gap."""
        self.vertical_direction = None
        self.direction_change_timer = None
        self.target_gap_size = None
        self.gap_change_timer = None
        self.gap_size = PIPE_GAP
        self.clamp_height()

    def clamp_height(self):
        """Keep the whole gap plus margins on screen."""
        max_top = WORLD_HEIGHT - self.gap_size - PIPE_MARGIN
        self.top_height = clamp(self.top_height, PIPE_MARGIN, max_top)

    def move(self):
        """Move the pipe left across the screen."""
        self.x -= self.VEL

    def drift(self, rng, vertical_speed):
        """One tick of challenge mode: direction flips, gap resizing, vertical motion."""
        if not self.is_dynamic:
            return

        self.direction_change_timer -= 1
        if self.direction_change_timer <= 0:
            self.vertical_direction = -self.vertical_direction
            self.direction_change_timer = rng.randint(*DIRECTION_TIMER_RANGE)

        current_gap = self.gap_size
        diff = self.target_gap_size - current_gap
        if abs(diff) > GAP_SNAP_DISTANCE:
            step = min(abs(diff), GAP_CHANGE_RATE)
            step = step if diff > 0 else -step
            self.gap_size = clamp(current_gap + step, MIN_GAP_SIZE, MAX_GAP_SIZE)
        else:
            self.gap_size = self.target_gap_size

        self.gap_change_timer -= 1
        if self.gap_change_timer <= 0:
            change = rng.uniform(GAP_CHANGE_MIN, GAP_CHANGE_MAX)
            if rng.random() <= 0.5:
                change = -change
            self.target_gap_size = clamp(current_gap + change, MIN_GAP_SIZE, MAX_GAP_SIZE)
            self.gap_change_timer = rng.randint(*GAP_TIMER_RANGE)

        speed = min(vertical_speed, MAX_PIPE_VERTICAL_SPEED)
        self.top_height += self.vertical_direction * speed
        self.clamp_height()

    def collide(self, y, x=BIRD_X, size=BIRD_SIZE):
        """Return True if a square hitbox at (x, y) touches either segment."""
        if x + size > self.x and x < self.right:
            if y < self.top_height or y + size > self.bottom:
                return True
        return False


def spawn_pipe(rng, x=WORLD_WIDTH):
    """New pipe at the right edge with room for a standard gap plus margins."""
    span = WORLD_HEIGHT - PIPE_GAP - 2 * PIPE_MARGIN
    top_height = rng.random() * span + PIPE_MARGIN
    return Pipe(x, top_height)


class PipeStream:
    """Ordered (oldest first) list of pipes on screen."""

    def __init__(self, rng):
        self.rng = rng
        self.pipes = []

    def __len__(self):
        return len(self.pipes)

    def __iter__(self):
        return iter(self.pipes)

    def clear(self):
        self.pipes = []

    def update(self, frame_count, challenge_mode, vertical_speed):
        """Spawn on cadence, then scroll, drift and cull every pipe."""
        if frame_count % PIPE_SPAWN_RATE == 0:
            pipe = spawn_pipe(self.rng)
            if challenge_mode:
                pipe.make_dynamic(self.rng)
            self.pipes.append(pipe)

        for pipe in self.pipes:
            pipe.move()
            if challenge_mode:
                pipe.drift(self.rng, vertical_speed)

        self.pipes = [pipe for pipe in self.pipes if pipe.right >= 0]

    def make_static(self):
        for pipe in self.pipes:
            pipe.make_static()

    def nearest(self, x=BIRD_X):
        """Oldest pipe whose trailing edge is still ahead of x, or None."""
        for pipe in self.pipes:
            if pipe.right > x:
                return pipe
        return None

    def collect_passed(self, x=BIRD_X):
        """Mark pipes whose trailing edge went behind x. Returns how many were newly passed."""
        count = 0
        for pipe in self.pipes:
            if not pipe.passed and pipe.right < x:
                pipe.passed = True
                count += 1
        return count
