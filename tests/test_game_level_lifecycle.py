import random

import pytest

from config_parsing import GameConfig, parse_window_config
from game import SCREEN_LEVEL, SCREEN_MAP, Game
from models import LevelStatus, MapData, Maze, MazeStatus, MovementIntent, SaveData, World

ENEMY_NEXT_DOOR = [
    [0, 0, 0, 0],
    [4, 1, 2, 0],
    [0, 0, 0, 0],
]


@pytest.fixture
def game(monkeypatch):
    """Game wired to an in-memory save, without opening a window."""
    g = Game.__new__(Game)
    g.cfg = GameConfig()
    g.window = parse_window_config({"window": {"fps": 30}})
    g.rng = random.Random(0)
    world = World(id="w0", index=0, name="Misty Warren", size=(1, 1))
    maze = Maze(id="m0", index=0, cells=ENEMY_NEXT_DOOR, status=MazeStatus.DISCOVERED)
    g.save = SaveData(
        worlds={"w0": world},
        maps={"w0": MapData(grid_walls=[["trbl"]], mazes={"m0": maze}, corridors=[])},
    )
    g.world = world
    g.maze = None
    g.session = None
    g.scheduler = None
    g.restart_countdown = None
    g.screen_name = SCREEN_MAP
    monkeypatch.setattr(g, "_current_intent", lambda: MovementIntent())
    g.enter_maze(maze)
    return g


def test_losing_reloads_the_level_after_a_second(game):
    lost = game.session
    lost.player.set_position(100, 75, lost.grid)

    game._update_level()
    assert lost.status == LevelStatus.LOST
    assert not game.scheduler.is_playing
    assert game.restart_countdown == 30

    for _ in range(29):
        game._update_level()
    assert game.session is lost

    game._update_level()
    assert game.session is not lost
    assert game.session.status == LevelStatus.PLAYING
    assert game.scheduler.is_playing
    assert game.restart_countdown is None
    assert game.screen_name == SCREEN_LEVEL
    assert game.session.coins == 1


def test_leaving_cancels_a_pending_restart(game):
    game.session.player.set_position(100, 75, game.session.grid)
    game._update_level()
    assert game.restart_countdown is not None
    game.leave_level()
    assert game.restart_countdown is None
    assert game.screen_name == SCREEN_MAP
