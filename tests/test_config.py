import json

import pytest

from config_io import load_json_config
from config_parsing import DEFAULT_CONFIG, GameConfig, load_config, parse_game_config, parse_seed, parse_window_config
from utils import as_color, deep_get, deep_merge


def test_defaults_match_game_constants():
    cfg = parse_game_config(DEFAULT_CONFIG)
    assert cfg == GameConfig()
    assert cfg.player_speed == 250 and cfg.enemy_speed == 125
    assert cfg.cell_size == 50


def test_partial_file_is_laid_over_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"player": {"speed": 300}, "maze": {"size_range": [9, 3]}}), encoding="utf-8")
    raw = load_config(path)
    cfg = parse_game_config(raw)
    assert cfg.player_speed == 300
    assert cfg.player_radius == 18
    assert cfg.maze_size_range == (3, 9)
    assert parse_window_config(raw).width == 1000


def test_bad_values_fall_back():
    cfg = parse_game_config({"player": {"speed": "fast", "radius": -2}, "maze": {"size_range": "big"}})
    assert cfg.player_speed == 250
    assert cfg.player_radius == 18
    assert cfg.maze_size_range == (2, 14)


def test_window_colors():
    window = parse_window_config({"colors": {"wall": [300, -5, 10]}})
    assert window.colors["wall"] == (255, 0, 10)
    assert window.colors["coin"] == (255, 215, 0)


def test_seed():
    assert parse_seed({"seed": "42"}) == 42
    assert parse_seed({"seed": None}) is None
    assert parse_seed({"seed": "x"}) is None


def test_missing_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_json_config(tmp_path / "nope.json")


def test_invalid_config_exits(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{", encoding="utf-8")
    with pytest.raises(SystemExit):
        load_json_config(path)


def test_deep_helpers():
    base = {"a": {"b": 1, "c": 2}, "d": 3}
    merged = deep_merge(base, {"a": {"b": 5}})
    assert merged == {"a": {"b": 5, "c": 2}, "d": 3}
    assert base["a"]["b"] == 1
    assert deep_get(merged, "a.c", None) == 2
    assert deep_get(merged, "a.x.y", "dflt") == "dflt"
    assert as_color("red", (1, 2, 3)) == (1, 2, 3)
