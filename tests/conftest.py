import random

import pytest

from flappy_evolution.engine import GameEngine


class SequenceRng:
    """random.Random stand-in that replays fixed values for random()."""

    def __init__(self, values):
        self.values = list(values)

    def random(self):
        return self.values.pop(0)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def engine():
    """Small seeded engine for fast tests."""
    return GameEngine(population_size=10, seed=7)


@pytest.fixture
def kill_all():
    """End the current generation on the next update()."""

    def _kill(engine, fitnesses=None):
        for i, bird in enumerate(engine.birds):
            if fitnesses is not None:
                bird.fitness = fitnesses[i]
            bird.alive = False

    return _kill


@pytest.fixture
def sequence_rng():
    return SequenceRng
