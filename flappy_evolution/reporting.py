"""
Generation reporters.

The engine drives a neat.reporting.ReporterSet, so any neat reporter hooks in
the usual way. The hook arguments map onto the engine as:

    start_generation(generation)
    post_evaluate(engine, ranked_birds, None, best_bird)   every bird is dead
    end_generation(engine, birds, None)                    new population in place

There is no speciation, so the species argument is always None.
"""

import statistics
import time

import neat.reporting


class SimpleReporter(neat.reporting.BaseReporter):
    """Prints clean per-generation info to stdout."""

    def __init__(self):
        self.generation = None
        self.start_time = None

    def start_generation(self, generation):
        self.generation = generation
        self.start_time = time.time()
        print(f"\n ****** Running generation {generation} ****** \n")

    def post_evaluate(self, config, population, species, best_genome):
        fitnesses = [bird.fitness for bird in population]

        if fitnesses:
            avg_fitness = statistics.mean(fitnesses)
            stdev_fitness = statistics.pstdev(fitnesses) if len(fitnesses) > 1 else 0.0
        else:
            avg_fitness = 0.0
            stdev_fitness = 0.0

        print(f"Population's average fitness: {avg_fitness:.5f} stdev: {stdev_fitness:.5f}")
        print(f"Best fitness: {best_genome.fitness} - pipes passed: {best_genome.score}")
        print(f"Score: {config.score}  High score: {max(config.high_score, config.score)}")

    def end_generation(self, config, population, species):
        if self.start_time is not None:
            dur = time.time() - self.start_time
            print(f"Generation time: {dur:.3f} sec")


class StatisticsReporter(neat.reporting.BaseReporter):
    """Keeps a per-generation history for summaries and plots."""

    def __init__(self):
        self.best_fitness = []
        self.mean_fitness = []
        self.scores = []

    def post_evaluate(self, config, population, species, best_genome):
        self.best_fitness.append(best_genome.fitness)
        self.mean_fitness.append(statistics.mean(bird.fitness for bird in population))
        self.scores.append(config.score)

    def get_fitness_mean(self):
        return list(self.mean_fitness)

    def best_fitnesses(self):
        return list(self.best_fitness)

    def best_score(self):
        return max(self.scores, default=0)
