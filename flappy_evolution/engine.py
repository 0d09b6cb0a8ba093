"""
The simulation engine.

One call to update() is one logic tick:

    pipes spawn/scroll/drift -> every live bird moves, observes, decides and
    collides -> scoring -> if nobody is alive, evolve the next generation.

The engine is stepped the same way whether the caller renders every tick or
runs thousands of them back to back. All randomness comes from a single
random.Random instance, so a seeded engine replays exactly.
"""

import enum
import itertools
import random

from neat.reporting import ReporterSet

from .bird import Bird
from .constants import (
    HIDDEN_NODES,
    INPUT_NODES,
    MAX_PIPE_VERTICAL_SPEED,
    MIN_PIPE_VERTICAL_SPEED,
    OUTPUT_NODES,
    POPULATION_SIZE,
)
from .evolution import next_population
from .network import NeuralNetwork
from .pipes import PipeStream


class EngineState(enum.Enum):
    RUNNING = "running"
    EVOLVING = "evolving"


class GameEngine:
    """Population of birds, the pipe stream and the generation bookkeeping."""

    def __init__(self, population_size=POPULATION_SIZE,
                 shape=(INPUT_NODES, HIDDEN_NODES, OUTPUT_NODES),
                 rng=None, seed=None, reporters=None):
        input_nodes, hidden_nodes, output_nodes = shape
        if population_size < 1:
            raise ValueError(f"population_size must be at least 1, got {population_size}")
        if input_nodes != INPUT_NODES:
            raise ValueError(f"birds observe {INPUT_NODES} values, network has {input_nodes} inputs")
        if hidden_nodes < 1 or output_nodes < 1:
            raise ValueError(f"invalid network shape {shape}")

        if rng is not None and seed is not None:
            raise ValueError("pass either rng or seed, not both")

        self.rng = rng if rng is not None else random.Random(seed)
        self.population_size = population_size
        self.shape = tuple(shape)
        self.reporters = ReporterSet()
        for reporter in reporters or ():
            self.reporters.add(reporter)

        self._ids = itertools.count(1)
        self._pipes = PipeStream(self.rng)
        self._state = EngineState.RUNNING

        self.frame_count = 0
        self.score = 0
        self.high_score = 0
        self.generation = 1
        self.challenge_mode = False
        self.pipe_vertical_speed = MIN_PIPE_VERTICAL_SPEED

        self._birds = [
            Bird(NeuralNetwork(self.rng, *self.shape), self._next_id())
            for _ in range(population_size)
        ]
        self.reporters.start_generation(self.generation)

    def _next_id(self):
        return f"bird-{next(self._ids)}"

    # ---- read accessors ----

    @property
    def state(self):
        return self._state

    @property
    def birds(self):
        return tuple(self._birds)

    @property
    def pipes(self):
        return tuple(self._pipes)

    @property
    def alive_count(self):
        return sum(1 for bird in self._birds if bird.alive)

    def best_bird(self):
        """First bird still alive, else the first bird of the population."""
        for bird in self._birds:
            if bird.alive:
                return bird
        return self._birds[0]

    def add_reporter(self, reporter):
        self.reporters.add(reporter)

    # ---- controls ----

    def set_challenge_mode(self, enabled, vertical_speed=None):
        """
        Toggle moving pipes with resizing gaps.

        Only pipes spawned while enabled move. Disabling strips the dynamic
        state from every pipe on screen right away.
        """
        if vertical_speed is not None:
            self.pipe_vertical_speed = max(
                MIN_PIPE_VERTICAL_SPEED, min(MAX_PIPE_VERTICAL_SPEED, vertical_speed)
            )
        self.challenge_mode = bool(enabled)
        if not self.challenge_mode:
            self._pipes.make_static()

    def reset_game(self):
        """Clear pipes, clock and score and put every bird back at the start. Genomes stay."""
        self._pipes.clear()
        self.frame_count = 0
        self.score = 0
        for bird in self._birds:
            bird.reset()

    # ---- simulation ----

    def update(self):
        """Advance exactly one tick."""
        if self._state is not EngineState.RUNNING:
            raise RuntimeError("update() called while the population is evolving")

        self._pipes.update(self.frame_count, self.challenge_mode, self.pipe_vertical_speed)
        nearest = self._pipes.nearest()

        for bird in self._birds:
            bird.update(nearest)

        passed = self._pipes.collect_passed()
        if passed:
            self.score += passed
            for bird in self._birds:
                if bird.alive:
                    bird.score += passed

        self.high_score = max(self.high_score, self.score)
        self.frame_count += 1

        if self.alive_count == 0:
            self._evolve()

    def run(self, ticks):
        """Run `ticks` updates back to back. Returns how many generations ended."""
        start = self.generation
        for _ in range(ticks):
            self.update()
        return self.generation - start

    def _evolve(self):
        self._state = EngineState.EVOLVING
        try:
            new_birds, ranked = next_population(self._birds, self.rng, self._next_id)
            self.reporters.post_evaluate(self, ranked, None, ranked[0])

            self.high_score = max(self.high_score, self.score)
            self._birds = new_birds
            self.generation += 1
            self.reset_game()
        finally:
            self._state = EngineState.RUNNING

        self.reporters.end_generation(self, self._birds, None)
        self.reporters.start_generation(self.generation)
