from flappy_evolution.engine import GameEngine
from flappy_evolution.train import main, parse_args, train


def test_parse_defaults():
    args = parse_args([])
    assert args.generations == 50
    assert args.population == 50
    assert args.vertical_speed == 1
    assert not args.challenge
    assert not args.watch


def test_train_stops_at_generation_budget():
    engine = GameEngine(population_size=5, seed=1)
    ticks = train(engine, 2, speed=100, max_ticks=100000)
    assert engine.generation == 3
    assert 0 < ticks < 100000


def test_train_respects_tick_cap():
    engine = GameEngine(population_size=5, seed=1)
    assert train(engine, 1000, speed=7, max_ticks=50) == 50


def test_main_prints_summary(capsys):
    code = main(["--generations", "2", "--population", "6", "--seed", "4",
                 "--challenge", "--vertical-speed", "3", "--max-ticks", "50000"])
    out = capsys.readouterr().out
    assert code == 0
    assert "Running generation 1" in out
    assert "Population's average fitness" in out
    assert "TRAINING SUMMARY" in out
    assert "vertical speed 3" in out


def test_main_quiet(capsys):
    main(["--generations", "1", "--population", "4", "--seed", "2", "--quiet"])
    out = capsys.readouterr().out
    assert "Running generation" not in out
    assert "TRAINING SUMMARY" in out
