import random

import pytest

from models import Corridor, CorridorStatus, MapData, Maze, MazeStatus, SaveData, World
from progression import complete_maze, create_world_name

WALLED = [[0, 0, 0], [0, 1, 0], [0, 0, 0]]


def _save():
    """Three tiles in a row: 0 - 1 - 2, corridors between neighbours."""
    world = World(id="w0", index=0, name="Amber Halls", size=(1, 3))
    mazes = {
        "m0": Maze(id="m0", index=0, cells=WALLED, status=MazeStatus.DISCOVERED),
        "m1": Maze(id="m1", index=1, cells=WALLED),
        "m2": Maze(id="m2", index=2, cells=WALLED),
    }
    corridors = [Corridor(id="c01", tile_indices=(0, 1)), Corridor(id="c12", tile_indices=(1, 2))]
    map_data = MapData(grid_walls=[["tbl", "tb", "trb"]], mazes=mazes, corridors=corridors)
    return SaveData(worlds={"w0": world}, maps={"w0": map_data})


def test_completing_a_maze_discovers_neighbours():
    save = _save()
    result = complete_maze(save, "w0", "m0", random.Random(0))
    mazes = save.maps["w0"].mazes
    assert mazes["m0"].status == MazeStatus.COMPLETED
    assert mazes["m1"].status == MazeStatus.DISCOVERED
    assert mazes["m2"].status == MazeStatus.UNDISCOVERED
    assert result.discovered_corridors == ["c01"]
    assert result.discovered_mazes == ["m1"]
    assert not result.world_completed
    corridors = save.maps["w0"].corridors
    assert [c.status for c in corridors] == [CorridorStatus.DISCOVERED, CorridorStatus.UNDISCOVERED]


def test_completed_mazes_stay_completed():
    save = _save()
    complete_maze(save, "w0", "m1", random.Random(0))
    result = complete_maze(save, "w0", "m0", random.Random(0))
    assert save.maps["w0"].mazes["m1"].status == MazeStatus.COMPLETED
    assert result.discovered_mazes == []
    assert result.discovered_corridors == []


def test_last_maze_unlocks_a_bigger_world():
    save = _save()
    for maze_id in ("m0", "m1"):
        complete_maze(save, "w0", maze_id, random.Random(0))
    result = complete_maze(save, "w0", "m2", random.Random(0))
    assert result.world_completed
    new = result.new_world
    assert new is not None
    assert new.index == 1
    assert new.size == (2, 4)
    assert save.worlds[new.id] is new
    assert new.id not in save.maps


def test_missing_maze_or_map():
    save = _save()
    with pytest.raises(LookupError):
        complete_maze(save, "nope", "m0")
    with pytest.raises(LookupError):
        complete_maze(save, "w0", "nope")


def test_world_names_are_two_words():
    name = create_world_name(random.Random(3))
    assert len(name.split()) == 2
    assert create_world_name(random.Random(3)) == name


def test_replaying_a_finished_world_adds_no_more_worlds():
    world = World(id="w0", index=0, name="Ashen Vaults", size=(1, 1))
    maze = Maze(id="m0", index=0, cells=WALLED, status=MazeStatus.DISCOVERED)
    save = SaveData(
        worlds={"w0": world},
        maps={"w0": MapData(grid_walls=[["trbl"]], mazes={"m0": maze}, corridors=[])},
    )
    first = complete_maze(save, "w0", "m0", random.Random(0))
    assert first.world_completed
    for _ in range(2):
        again = complete_maze(save, "w0", "m0", random.Random(0))
        assert not again.world_completed
        assert again.new_world is None
    assert len(save.worlds) == 2
    assert [w.size for w in save.worlds_by_index()] == [(1, 1), (2, 2)]
