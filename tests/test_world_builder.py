import random

from maze_test_utils import FirstChoiceRandom
from models import Corridor, CorridorStatus, Direction, Maze, MazeStatus
from world_builder import build_map_data, derive_corridors, door_directions, new_save
from world_generator import WorldGridGenerator, deserialize_walls, new_tile_grid, remove_wall_between


def test_one_maze_per_tile_with_first_discovered():
    grid = WorldGridGenerator(2, 3, random.Random(4)).generate()
    data = build_map_data(grid, random.Random(4), (2, 6))
    mazes = data.mazes_by_index()
    assert [m.index for m in mazes] == list(range(6))
    assert mazes[0].status == MazeStatus.DISCOVERED
    assert all(m.status == MazeStatus.UNDISCOVERED for m in mazes[1:])
    for maze in mazes:
        assert 4 <= len(maze.cells) <= 8
        assert 4 <= len(maze.cells[0]) <= 8
    assert deserialize_walls(data.grid_walls)[0][0].walls == grid[0][0].walls


def test_doors_follow_open_sides_and_give_corridors():
    grid = WorldGridGenerator(3, 3, random.Random(10)).generate()
    data = build_map_data(grid, random.Random(10), (3, 8))
    by_index = {m.index: m for m in data.mazes.values()}
    for row in grid:
        for tile in row:
            doors = set(door_directions(by_index[tile.index].cells))
            assert doors <= set(tile.open_sides())
    # A spanning tree over 9 tiles: every corridor is one of its 8 edges.
    assert 0 < len(data.corridors) <= 8
    assert all(c.status == CorridorStatus.UNDISCOVERED for c in data.corridors)
    pairs = [c.tile_indices for c in data.corridors]
    assert len(pairs) == len(set(pairs))


def test_door_directions_in_blueprint():
    blueprint = [
        [0, 4, 0, 0],
        [0, 1, 1, 4],
        [0, 0, 0, 0],
    ]
    assert door_directions(blueprint) == [Direction.TOP, Direction.RIGHT]


def test_corridor_from_a_single_door():
    grid = new_tile_grid(1, 2)
    remove_wall_between(grid[0][0], grid[0][1])
    right_door = [[0, 0, 0], [0, 1, 4], [0, 0, 0]]
    no_door = [[0, 0, 0], [0, 1, 0], [0, 0, 0]]
    mazes = [Maze(id="a", index=0, cells=right_door), Maze(id="b", index=1, cells=no_door)]
    corridors = derive_corridors(grid, mazes)
    assert len(corridors) == 1
    assert corridors[0].tile_indices == (0, 1)


def test_corridor_indices_are_sorted():
    assert Corridor(id="c", tile_indices=(5, 2)).tile_indices == (2, 5)


def test_first_choice_map_is_stable():
    grid = WorldGridGenerator(1, 2, FirstChoiceRandom()).generate()
    data = build_map_data(grid, random.Random(0), (2, 2))
    assert data.grid_walls == [["tbl", "trb"]]
    assert len(data.corridors) == 1


def test_new_save_has_one_unmapped_world(rng):
    save = new_save(rng, (3, 2))
    (world,) = save.worlds.values()
    assert world.index == 0
    assert world.size == (3, 2)
    assert world.name
    assert save.maps == {}
