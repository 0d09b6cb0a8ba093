"""
Fixed-topology feedforward network used as each bird's genome.

input (4) -> hidden (6, tanh) -> output (1, sigmoid)

No backprop: the weights only change through mutate() during evolution.
Parameters live in numpy arrays, but every random draw goes through the
engine's random.Random so one seed drives the whole run.
"""

import math
from dataclasses import dataclass

import numpy as np

from .constants import (
    HIDDEN_NODES,
    INPUT_NODES,
    MUTATION_AMOUNT,
    MUTATION_RATE,
    OUTPUT_NODES,
)


def sigmoid(x):
    """Logistic function, written so that exp() never overflows."""
    x = np.asarray(x, dtype=float)
    z = np.exp(-np.abs(x))
    return np.where(x >= 0, 1.0 / (1.0 + z), z / (1.0 + z))


def random_gaussian(rng):
    """Standard normal sample via the Box-Muller transform."""
    u = 0.0
    v = 0.0
    while u == 0.0:
        u = rng.random()
    while v == 0.0:
        v = rng.random()
    return math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)


def _uniform(rng, *shape):
    size = math.prod(shape)
    values = np.fromiter((rng.uniform(-1, 1) for _ in range(size)), dtype=float, count=size)
    return values.reshape(shape)


def _perturb(param, rng, rate, amount):
    """In place: each element, with probability `rate`, gets N(0, 1) * `amount` added."""
    mask = np.fromiter((rng.random() < rate for _ in range(param.size)),
                       dtype=bool, count=param.size).reshape(param.shape)
    noise = np.array([random_gaussian(rng) for _ in range(int(mask.sum()))])
    param[mask] += noise * amount


@dataclass(frozen=True)
class NetworkSnapshot:
    """Read-only copy of a network's parameters and last activations."""

    input_nodes: int
    hidden_nodes: int
    output_nodes: int
    weights_ih: tuple
    weights_ho: tuple
    bias_h: tuple
    bias_o: tuple
    last_inputs: tuple
    last_hidden: tuple
    last_outputs: tuple


def _as_tuple(array):
    if array is None:
        return ()
    values = array.tolist()
    if array.ndim == 2:
        return tuple(tuple(row) for row in values)
    return tuple(values)


class NeuralNetwork:
    """The 'brain' of a bird. Owned by exactly one bird, never shared."""

    def __init__(self, rng, input_nodes=INPUT_NODES, hidden_nodes=HIDDEN_NODES,
                 output_nodes=OUTPUT_NODES):
        self.input_nodes = input_nodes
        self.hidden_nodes = hidden_nodes
        self.output_nodes = output_nodes

        # weights_ih[i, j]: input i -> hidden j
        # weights_ho[j, k]: hidden j -> output k
        self.weights_ih = _uniform(rng, input_nodes, hidden_nodes)
        self.weights_ho = _uniform(rng, hidden_nodes, output_nodes)
        self.bias_h = _uniform(rng, hidden_nodes)
        self.bias_o = _uniform(rng, output_nodes)

        # Visualization only, never read by the algorithm
        self.last_inputs = None
        self.last_hidden = None
        self.last_outputs = None

    @property
    def shape(self):
        return (self.input_nodes, self.hidden_nodes, self.output_nodes)

    def predict(self, inputs):
        """
        Forward pass. Returns a list with one value per output node, each in (0, 1).

        The only side effect is refreshing the last_* activation cache.
        """
        x = np.array(inputs, dtype=float)
        if x.shape != (self.input_nodes,):
            raise ValueError(
                f"expected {self.input_nodes} inputs, got {len(inputs)}"
            )

        hidden = np.tanh(x @ self.weights_ih + self.bias_h)
        outputs = sigmoid(hidden @ self.weights_ho + self.bias_o)

        self.last_inputs = x
        self.last_hidden = hidden
        self.last_outputs = outputs
        return outputs.tolist()

    def mutate(self, rng, rate=MUTATION_RATE, amount=MUTATION_AMOUNT):
        """Perturb each weight and bias with probability `rate` by N(0, 1) * `amount`."""
        for param in (self.weights_ih, self.weights_ho, self.bias_h, self.bias_o):
            _perturb(param, rng, rate, amount)

    def copy(self):
        """Deep copy: the clone shares no arrays with this network."""
        clone = NeuralNetwork.__new__(NeuralNetwork)
        clone.input_nodes = self.input_nodes
        clone.hidden_nodes = self.hidden_nodes
        clone.output_nodes = self.output_nodes
        clone.weights_ih = self.weights_ih.copy()
        clone.weights_ho = self.weights_ho.copy()
        clone.bias_h = self.bias_h.copy()
        clone.bias_o = self.bias_o.copy()
        clone.last_inputs = None
        clone.last_hidden = None
        clone.last_outputs = None
        return clone

    def snapshot(self):
        return NetworkSnapshot(
            input_nodes=self.input_nodes,
            hidden_nodes=self.hidden_nodes,
            output_nodes=self.output_nodes,
            weights_ih=_as_tuple(self.weights_ih),
            weights_ho=_as_tuple(self.weights_ho),
            bias_h=_as_tuple(self.bias_h),
            bias_o=_as_tuple(self.bias_o),
            last_inputs=_as_tuple(self.last_inputs),
            last_hidden=_as_tuple(self.last_hidden),
            last_outputs=_as_tuple(self.last_outputs),
        )
