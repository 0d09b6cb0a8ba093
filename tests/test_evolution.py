import itertools
import random

import numpy as np
import pytest

from flappy_evolution.bird import Bird
from flappy_evolution.evolution import ELITE_ID, next_population, pick_one, rank_by_fitness
from flappy_evolution.network import NeuralNetwork


def make_birds(rng, fitnesses):
    birds = []
    for i, fitness in enumerate(fitnesses):
        bird = Bird(NeuralNetwork(rng), f"b{i}")
        bird.fitness = fitness
        birds.append(bird)
    return birds


def id_factory():
    counter = itertools.count()
    return lambda: f"child-{next(counter)}"


def test_rank_is_descending_and_stable(rng):
    birds = make_birds(rng, [5, 7, 5, 7, 0])
    assert [b.id for b in rank_by_fitness(birds)] == ["b1", "b3", "b0", "b2", "b4"]


def test_pick_one_walks_the_wheel(rng, sequence_rng):
    ranked = make_birds(rng, [3, 1])
    assert pick_one(ranked, 4, sequence_rng([0.5])) is ranked[0]  # r = 2
    assert pick_one(ranked, 4, sequence_rng([0.9])) is ranked[1]  # r = 3.6
    assert pick_one(ranked, 4, sequence_rng([0.0])) is ranked[0]  # r = 0


def test_pick_one_never_selects_zero_fitness_when_others_score(rng):
    ranked = make_birds(rng, [10, 0, 0])
    draw = random.Random(1)
    assert all(pick_one(ranked, 10, draw) is ranked[0] for _ in range(500))


def test_pick_one_is_fitness_proportional(rng):
    ranked = make_birds(rng, [6, 3, 1])
    draw = random.Random(2)
    counts = {b.id: 0 for b in ranked}
    n = 20000
    for _ in range(n):
        counts[pick_one(ranked, 10, draw).id] += 1
    assert counts["b0"] / n == pytest.approx(0.6, abs=0.02)
    assert counts["b1"] / n == pytest.approx(0.3, abs=0.02)
    assert counts["b2"] / n == pytest.approx(0.1, abs=0.02)


def test_pick_one_zero_sum_falls_back_to_first(rng):
    ranked = make_birds(rng, [0, 0, 0, 0])
    draw = random.Random(3)
    assert all(pick_one(ranked, 0, draw) is ranked[0] for _ in range(100))


def test_next_population_keeps_size_and_clones_elite(rng):
    birds = make_birds(rng, [4, 20, 9, 20, 1, 0])
    champion = birds[1]  # first of the two tied on 20
    champion_params = champion.net.snapshot()

    new_birds, ranked = next_population(birds, rng, id_factory())

    assert len(new_birds) == len(birds)
    assert ranked[0] is champion

    elite = new_birds[0]
    assert elite.id == ELITE_ID
    assert elite.net is not champion.net
    snap = elite.net.snapshot()
    assert snap.weights_ih == champion_params.weights_ih
    assert snap.weights_ho == champion_params.weights_ho
    assert snap.bias_h == champion_params.bias_h
    assert snap.bias_o == champion_params.bias_o


def test_next_population_fresh_state_and_no_sharing(rng):
    birds = make_birds(rng, [4, 20, 9, 2])
    for bird in birds:
        bird.alive = False
        bird.y = 590
        bird.score = 3

    new_birds, _ = next_population(birds, rng, id_factory())

    old_nets = {id(b.net) for b in birds}
    new_nets = {id(b.net) for b in new_birds}
    assert len(new_nets) == len(new_birds)
    assert not old_nets & new_nets
    for bird in new_birds:
        assert bird.alive
        assert (bird.y, bird.velocity, bird.fitness, bird.score) == (300, 0, 0, 0)
    assert [b.id for b in new_birds[1:]] == ["child-0", "child-1", "child-2"]


def test_zero_fitness_children_all_descend_from_first(rng):
    birds = make_birds(rng, [0] * 8)
    for i, bird in enumerate(birds):
        bird.net.bias_o = np.array([1000.0 * i])

    new_birds, _ = next_population(birds, random.Random(4), id_factory())

    # mutation moves a parameter by a few tenths at most
    assert all(abs(b.net.bias_o[0]) < 5 for b in new_birds)


def test_outgoing_population_is_untouched(rng):
    birds = make_birds(rng, [5, 1, 3])
    before = [b.net.snapshot() for b in birds]
    next_population(birds, rng, id_factory())
    assert [b.net.snapshot() for b in birds] == before
