"""Fills a generated world grid with mazes and derives the corridors between them."""

from __future__ import annotations

import logging
import random
from typing import Dict, List, Sequence, Tuple

from cell_grid import door_direction
from game_types import MazeBlueprint
from maze_carver import carve
from models import (
    DOOR,
    Corridor,
    CorridorStatus,
    Direction,
    MapData,
    MapTile,
    Maze,
    MazeStatus,
    SaveData,
    World,
)
from progression import create_world_name
from utils import make_id
from world_generator import neighbor_tile, serialize_walls

logger = logging.getLogger(__name__)


def door_directions(blueprint: MazeBlueprint) -> List[Direction]:
    """Border sides that actually hold a door, without duplicates."""
    rows, cols = len(blueprint), len(blueprint[0])
    found: List[Direction] = []
    for r, line in enumerate(blueprint):
        for c, value in enumerate(line):
            if value != DOOR:
                continue
            d = door_direction(r, c, rows, cols)
            if d is not None and d not in found:
                found.append(d)
    return found


def derive_corridors(grid: Sequence[Sequence[MapTile]], mazes: Sequence[Maze]) -> List[Corridor]:
    """One corridor per pair of tiles joined by a door facing an existing neighbour."""
    by_index: Dict[int, Maze] = {m.index: m for m in mazes}
    seen: Dict[Tuple[int, int], Corridor] = {}
    for row in grid:
        for tile in row:
            maze = by_index.get(tile.index)
            if maze is None:
                continue
            for d in door_directions(maze.cells):
                other = neighbor_tile(grid, tile, d)
                if other is None:
                    continue
                pair = (min(tile.index, other.index), max(tile.index, other.index))
                if pair not in seen:
                    seen[pair] = Corridor(id=make_id(), tile_indices=pair, status=CorridorStatus.UNDISCOVERED)
    return [seen[k] for k in sorted(seen)]


def build_map_data(
    grid: Sequence[Sequence[MapTile]],
    rng: random.Random,
    maze_size_range: Tuple[int, int] = (2, 14),
) -> MapData:
    """Carve one maze per tile (row-major) with doors on the tile's open sides.

    The maze on tile 0 starts discovered; every other maze starts undiscovered.
    """
    lo, hi = maze_size_range
    mazes: Dict[str, Maze] = {}
    ordered: List[Maze] = []
    for row in grid:
        for tile in row:
            rows = rng.randint(lo, hi)
            cols = rng.randint(lo, hi)
            blueprint = carve(rows, cols, tile.open_sides(), rng)
            status = MazeStatus.DISCOVERED if tile.index == 0 else MazeStatus.UNDISCOVERED
            maze = Maze(id=make_id(), index=tile.index, cells=blueprint, status=status)
            mazes[maze.id] = maze
            ordered.append(maze)

    corridors = derive_corridors(grid, ordered)
    logger.debug("built %s mazes and %s corridors", len(mazes), len(corridors))
    return MapData(grid_walls=serialize_walls(grid), mazes=mazes, corridors=corridors)


def new_world(index: int, size: Tuple[int, int], rng: random.Random) -> World:
    return World(id=make_id(), index=index, name=create_world_name(rng), size=size)


def new_save(rng: random.Random, initial_size: Tuple[int, int] = (2, 2)) -> SaveData:
    """Fresh save with a single, not yet mapped, first world."""
    world = new_world(0, initial_size, rng)
    return SaveData(worlds={world.id: world}, maps={})
