"""
Headless training entry point.

    python -m flappy_evolution --generations 30 --seed 7
    python -m flappy_evolution --challenge --vertical-speed 3
    python -m flappy_evolution --watch          # pygame viewer
"""

import argparse

from .constants import MAX_PIPE_VERTICAL_SPEED, MIN_PIPE_VERTICAL_SPEED, POPULATION_SIZE
from .engine import GameEngine
from .reporting import SimpleReporter, StatisticsReporter


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="flappy_evolution",
        description="Evolve Flappy Bird controllers with a mutation-only genetic algorithm.",
    )
    parser.add_argument("--generations", type=int, default=50,
                        help="stop after this many generations have ended")
    parser.add_argument("--population", type=int, default=POPULATION_SIZE)
    parser.add_argument("--seed", type=int, default=None,
                        help="seed the single random generator for a reproducible run")
    parser.add_argument("--challenge", action="store_true",
                        help="moving pipes with resizing gaps")
    parser.add_argument("--vertical-speed", type=int, default=MIN_PIPE_VERTICAL_SPEED,
                        choices=range(MIN_PIPE_VERTICAL_SPEED, MAX_PIPE_VERTICAL_SPEED + 1),
                        metavar=f"{{{MIN_PIPE_VERTICAL_SPEED}..{MAX_PIPE_VERTICAL_SPEED}}}")
    parser.add_argument("--speed", type=int, default=1000,
                        help="ticks run per batch between budget checks")
    parser.add_argument("--max-ticks", type=int, default=None,
                        help="hard cap on ticks (a strong population can fly forever)")
    parser.add_argument("--quiet", action="store_true",
                        help="only print the final summary")
    parser.add_argument("--watch", action="store_true",
                        help="open the pygame viewer instead of training headless")
    return parser.parse_args(argv)


def train(engine, generations, speed=1000, max_ticks=None):
    """Step `engine` in batches of `speed` ticks until the budget runs out. Returns ticks run."""
    target = engine.generation + generations
    ticks = 0
    while engine.generation < target:
        batch = speed
        if max_ticks is not None:
            batch = min(batch, max_ticks - ticks)
            if batch <= 0:
                break
        for _ in range(batch):
            engine.update()
            ticks += 1
            if engine.generation >= target:
                break
    return ticks


def print_summary(engine, stats, ticks):
    print("\n================ TRAINING SUMMARY ================")
    print(f"Generations run      : {engine.generation - 1}")
    if ticks is not None:
        print(f"Ticks simulated      : {ticks}")
    print(f"High score           : {engine.high_score}")
    best = stats.best_fitnesses()
    if best:
        print(f"Best fitness         : {max(best)}")
        print(f"Last mean fitness    : {stats.get_fitness_mean()[-1]:.2f}")
    print(f"Challenge mode       : {engine.challenge_mode}"
          + (f" (vertical speed {engine.pipe_vertical_speed})" if engine.challenge_mode else ""))
    print("=================================================\n")


def main(argv=None):
    args = parse_args(argv)

    if args.watch:
        # imported lazily so headless training never needs a display
        from .viewer import Viewer

        viewer = Viewer(population_size=args.population, seed=args.seed)
        viewer.engine.set_challenge_mode(args.challenge, args.vertical_speed)
        viewer.run()
        return 0

    stats = StatisticsReporter()
    reporters = [stats] if args.quiet else [stats, SimpleReporter()]
    engine = GameEngine(population_size=args.population, seed=args.seed, reporters=reporters)
    engine.set_challenge_mode(args.challenge, args.vertical_speed)

    ticks = None
    try:
        ticks = train(engine, args.generations, args.speed, args.max_ticks)
    except KeyboardInterrupt:
        print("\n[INFO] Interrupted, stopping training")

    print_summary(engine, stats, ticks)
    return 0
