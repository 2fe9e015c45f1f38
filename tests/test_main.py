import pathlib

import pytest

from main import load_config, parse_args
from tetris_core.simulate import simulate

CONFIG_PATH = pathlib.Path(__file__).resolve().parent.parent / "config" / "game.yaml"


def test_bundled_config_loads():
    config = load_config(CONFIG_PATH)
    assert config["cols"] == 10
    assert config["rows"] == 20
    assert config["initial_period_ms"] == 1000
    assert 0 < config["speed_increment"] <= 1
    assert config["randomizer"] in ("uniform", "bag")


def test_missing_config_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_empty_config_is_empty_dict(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == {}


def test_parse_args_defaults_and_overrides():
    args = parse_args([])
    assert args.mode == "play"
    assert args.seed is None
    args = parse_args(["--mode", "simulate", "--games", "3", "--seed", "9"])
    assert args.mode == "simulate"
    assert args.games == 3
    assert args.seed == 9


def test_simulate_is_reproducible(capsys):
    config = {"cols": 10, "rows": 20, "simulate_max_pieces": 200}
    first = simulate(config, num_games=2, seed=4)
    second = simulate(config, num_games=2, seed=4)
    assert first == second
    for record in first:
        assert record["level"] == record["lines"] // 10 + 1
        assert record["pieces"] <= 200
    out = capsys.readouterr().out
    assert "Game 1/2" in out
