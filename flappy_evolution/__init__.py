"""
Flappy Bird controllers evolved with a mutation-only genetic algorithm.

- Fixed 4-6-1 feedforward networks (tanh hidden, sigmoid output)
- Fitness = ticks survived
- Elitism + roulette wheel selection + gaussian mutation, no crossover
- Optional challenge mode: pipes drift vertically and resize their gaps
"""

from .bird import Bird
from .engine import EngineState, GameEngine
from .network import NetworkSnapshot, NeuralNetwork
from .pipes import Pipe, PipeStream
from .reporting import SimpleReporter, StatisticsReporter

__all__ = [
    "Bird",
    "EngineState",
    "GameEngine",
    "NetworkSnapshot",
    "NeuralNetwork",
    "Pipe",
    "PipeStream",
    "SimpleReporter",
    "StatisticsReporter",
]
