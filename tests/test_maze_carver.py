import logging
import random

import pytest

from maze_carver import MazeCarver, carve, enemy_quota, random_door_sides
from maze_test_utils import FirstChoiceRandom, LcgRandom, border_cells, bfs_reachable, walkable_cells
from models import DIRECTIONS, DOOR, ENEMY, GROUND, WALL, Direction


def test_first_choice_carve_is_fixed():
    maze = carve(3, 3, list(DIRECTIONS), FirstChoiceRandom())
    assert maze == [
        [0, 4, 0, 0, 0],
        [4, 1, 2, 1, 4],
        [0, 1, 0, 1, 0],
        [0, 1, 1, 1, 0],
        [0, 4, 0, 0, 0],
    ]


def test_seeded_carve_is_fixed():
    maze = carve(3, 3, list(DIRECTIONS), LcgRandom(4))
    assert maze == [
        [0, 4, 0, 0, 0],
        [4, 2, 0, 1, 0],
        [0, 1, 1, 1, 4],
        [0, 1, 0, 1, 0],
        [0, 0, 0, 4, 0],
    ]


def test_seeded_carve_replays_from_saved_state(rng):
    state = rng.getstate()
    first = carve(3, 3, list(DIRECTIONS), rng)
    rng.setstate(state)
    assert carve(3, 3, list(DIRECTIONS), rng) == first
    assert len(first) == 5 and all(len(row) == 5 for row in first)
    assert sum(row.count(ENEMY) for row in first) == 1


@pytest.mark.parametrize("seed", range(12))
def test_every_walkable_cell_is_connected(seed):
    rng = random.Random(seed)
    rows, cols = rng.randint(2, 14), rng.randint(2, 14)
    maze = carve(rows, cols, list(DIRECTIONS), rng)
    cells = walkable_cells(maze)
    assert bfs_reachable(maze, next(iter(cells))) == cells


@pytest.mark.parametrize("seed", range(12))
def test_no_two_by_two_open_block(seed):
    rng = random.Random(seed)
    maze = carve(10, 12, [Direction.TOP], rng)
    for r in range(len(maze) - 1):
        for c in range(len(maze[0]) - 1):
            block = (maze[r][c], maze[r][c + 1], maze[r + 1][c], maze[r + 1][c + 1])
            assert WALL in block, f"open 2x2 block at ({r}, {c})"


def test_border_holds_only_walls_and_doors():
    maze = carve(8, 6, list(DIRECTIONS), random.Random(7))
    assert len(maze) == 10 and len(maze[0]) == 8
    assert set(border_cells(maze)) <= {WALL, DOOR}
    for r, c in ((0, 0), (0, 7), (9, 0), (9, 7)):
        assert maze[r][c] == WALL


def test_one_door_per_requested_side():
    maze = carve(6, 6, [Direction.LEFT, Direction.BOTTOM], random.Random(3))
    assert DOOR not in maze[0]
    assert DOOR not in [row[-1] for row in maze]
    assert [row[0] for row in maze].count(DOOR) == 1
    assert maze[-1].count(DOOR) == 1


def test_doors_sit_next_to_a_path():
    maze = carve(9, 9, list(DIRECTIONS), random.Random(11))
    for r, row in enumerate(maze):
        for c, v in enumerate(row):
            if v != DOOR:
                continue
            around = [
                maze[r + dr][c + dc]
                for dr, dc in ((1, 0), (-1, 0), (0, 1), (0, -1))
                if 0 <= r + dr < len(maze) and 0 <= c + dc < len(row)
            ]
            assert any(x in (GROUND, ENEMY) for x in around)


def test_same_seed_same_maze():
    a = carve(9, 7, list(DIRECTIONS), random.Random(99))
    b = carve(9, 7, list(DIRECTIONS), random.Random(99))
    assert a == b


@pytest.mark.parametrize(
    "path_cells,expected",
    [(0, 1), (31, 1), (32, 2), (47, 2), (48, 3), (60, 4), (71, 4), (72, 5), (200, 5)],
)
def test_enemy_quota(path_cells, expected):
    assert enemy_quota(path_cells) == expected


@pytest.mark.parametrize("seed", range(8))
def test_enemy_count_matches_quota(seed):
    maze = carve(14, 14, [Direction.TOP], random.Random(seed))
    enemies = sum(row.count(ENEMY) for row in maze)
    ground = sum(row.count(GROUND) for row in maze)
    assert enemies == enemy_quota(ground + enemies)


def test_single_cell_maze_places_enemy_off_spiral():
    # The spiral never revisits the centre, so the enemy comes from the fallback.
    maze = carve(1, 1, list(DIRECTIONS), random.Random(0))
    assert maze == [
        [0, 4, 0],
        [4, 2, 4],
        [0, 4, 0],
    ]


def test_missing_door_side_is_skipped_with_warning(caplog):
    carver = MazeCarver(2, 2, random.Random(0))
    carver.add_border()
    # No path carved: nothing on any side can host a door.
    with caplog.at_level(logging.WARNING, logger="maze_carver"):
        placed = carver.place_doors([Direction.TOP])
    assert placed == []
    assert "door skipped" in caplog.text


def test_random_door_sides_never_empty(rng):
    for _ in range(50):
        sides = random_door_sides(rng)
        assert sides
        assert len(set(sides)) == len(sides)


@pytest.mark.parametrize("rows,cols", [(0, 3), (3, 0), (-1, 2)])
def test_invalid_dimensions(rows, cols):
    with pytest.raises(ValueError):
        carve(rows, cols, [Direction.TOP], random.Random(0))
