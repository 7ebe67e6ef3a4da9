from __future__ import annotations

import random
from typing import Optional

from config_parsing import GameConfig
from level_session import LevelSession
from models import MapData, Maze, MazeStatus, SaveData, World
from world_generator import TileGrid, deserialize_walls


def get_world(save: SaveData, world_id: str) -> World:
    """Return a stored world or fail loudly.

    Raises:
        LookupError: If the world id is not in the save.
    """
    world = save.worlds.get(world_id)
    if world is None:
        raise LookupError(f"World '{world_id}' not found in save data.")
    return world


def get_map_data(save: SaveData, world_id: str) -> MapData:
    """Return the stored map of a world.

    Raises:
        LookupError: If the world has not been mapped yet.
    """
    get_world(save, world_id)
    map_data = save.maps.get(world_id)
    if map_data is None:
        raise LookupError(f"World '{world_id}' has no map data.")
    return map_data


def load_world_grid(save: SaveData, world_id: str) -> TileGrid:
    return deserialize_walls(get_map_data(save, world_id).grid_walls)


def get_maze(save: SaveData, world_id: str, maze_id: str) -> Maze:
    maze = get_map_data(save, world_id).mazes.get(maze_id)
    if maze is None:
        raise LookupError(f"Maze '{maze_id}' not found in world '{world_id}'.")
    return maze


def maze_for_tile(map_data: MapData, tile_index: int) -> Optional[Maze]:
    for maze in map_data.mazes.values():
        if maze.index == tile_index:
            return maze
    return None


def can_enter(maze: Maze) -> bool:
    return maze.status != MazeStatus.UNDISCOVERED


def load_level(
    save: SaveData,
    world_id: str,
    maze_id: str,
    cfg: GameConfig,
    rng: Optional[random.Random] = None,
) -> LevelSession:
    """Build a fresh level session for a stored maze."""
    maze = get_maze(save, world_id, maze_id)
    return LevelSession(maze.cells, cfg, rng)
