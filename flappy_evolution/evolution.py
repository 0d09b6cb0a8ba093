"""
Generational replacement: elitism + fitness-proportional selection + mutation.

There is no crossover. Every child has a single parent and differs from it
only by mutation.
"""

from .bird import Bird


ELITE_ID = "Champ"


def rank_by_fitness(birds):
    """Birds sorted by fitness, best first. Equal fitness keeps population order."""
    # sorted() is stable, reverse=True included
    return sorted(birds, key=lambda bird: bird.fitness, reverse=True)


def pick_one(ranked, sum_fitness, rng):
    """
    Roulette wheel selection over an already ranked list.

    Draw r in [0, sum_fitness) and walk the list subtracting fitness until r
    is used up. With sum_fitness == 0 the walk never starts and the first
    bird is returned.
    """
    index = 0
    r = rng.random() * sum_fitness
    while r > 0 and index < len(ranked):
        r -= ranked[index].fitness
        index += 1
    index -= 1
    index = max(0, min(index, len(ranked) - 1))
    return ranked[index]


def next_population(birds, rng, id_factory):
    """
    Build the next generation from the outgoing one.

    Slot 0 is an unmutated clone of the fittest genome. The remaining slots
    are mutated clones of roulette-selected parents. Returns (new_birds, ranked)
    where `ranked` is the outgoing population sorted by fitness.
    """
    sum_fitness = sum(bird.fitness for bird in birds)
    ranked = rank_by_fitness(birds)

    champion = ranked[0]
    new_birds = [Bird(champion.net.copy(), ELITE_ID)]

    while len(new_birds) < len(birds):
        parent = pick_one(ranked, sum_fitness, rng)
        child_net = parent.net.copy()
        child_net.mutate(rng)
        new_birds.append(Bird(child_net, id_factory()))

    return new_birds, ranked
