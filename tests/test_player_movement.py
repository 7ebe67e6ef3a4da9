import pytest

from cell_grid import CellGrid
from models import MovementIntent
from player import Player

DT = 1 / 60
RIGHT = MovementIntent(right=True)
CORRIDOR = [
    [0, 0, 0, 0],
    [4, 1, 1, 0],
    [0, 0, 0, 0],
]


def _player(blueprint, row, col, speed=250.0):
    grid = CellGrid.from_blueprint(blueprint, cell_size=50)
    return Player(grid.get(row, col), radius=18, speed=speed), grid


def test_stops_at_wall_and_stays():
    player, grid = _player(CORRIDOR, 1, 0)
    assert (player.x, player.y) == (25, 75)

    positions = []
    for _ in range(60):
        player.advance(DT, RIGHT, grid)
        positions.append(player.x)

    assert player.x == pytest.approx(25 + 26 * 250 / 60)
    assert player.wall_flags.right
    assert positions[25:] == [positions[25]] * len(positions[25:])
    assert player.y == 75


def test_no_input_no_motion():
    player, grid = _player(CORRIDOR, 1, 1)
    player.advance(DT, MovementIntent(), grid)
    assert (player.x, player.y) == (75, 75)


def test_diagonal_speed_is_scaled():
    open_room = [[1] * 7 for _ in range(7)]
    player, grid = _player(open_room, 3, 3)
    player.advance(0.1, MovementIntent(up=True, right=True), grid)
    assert player.x == pytest.approx(175 + 25 * 0.75)
    assert player.y == pytest.approx(175 - 25 * 0.75)


def test_opposite_keys_cancel():
    open_room = [[1] * 5 for _ in range(5)]
    player, grid = _player(open_room, 2, 2)
    player.advance(0.1, MovementIntent(left=True, right=True), grid)
    assert player.x == pytest.approx(125)


def test_cell_changes_only_when_centre_crosses():
    open_room = [[1] * 5 for _ in range(5)]
    player, grid = _player(open_room, 2, 2)
    player.set_position(149.9, 125, grid)
    assert (player.cell.row, player.cell.col) == (2, 2)
    player.set_position(150.0, 125, grid)
    assert (player.cell.row, player.cell.col) == (2, 3)


def test_wall_flags_from_neighbours():
    # Ground cell boxed in on three sides.
    blueprint = [
        [0, 0, 0],
        [0, 1, 1],
        [0, 0, 0],
    ]
    player, grid = _player(blueprint, 1, 1)
    player.set_position(60, 60, grid)
    player.advance(0, MovementIntent(), grid)
    flags = player.wall_flags
    assert flags.top and flags.left and flags.tl
    assert not flags.right and not flags.bottom


def test_collects_item_within_reach():
    blueprint = [[4, 1, 0]]
    player, grid = _player(blueprint, 0, 0)
    assert player.try_collect() is None  # door cell, no item
    player.set_position(51, 25, grid)
    item = player.try_collect()
    assert item is not None
    assert grid.get(0, 1).item is None
    assert player.try_collect() is None
