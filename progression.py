from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Set

from models import CorridorStatus, MazeStatus, SaveData, World
from utils import make_id

logger = logging.getLogger(__name__)

_ADJECTIVES = (
    "Amber", "Ashen", "Brass", "Crimson", "Dusky", "Emerald", "Frozen", "Gilded",
    "Hollow", "Ivory", "Jade", "Lost", "Misty", "Obsidian", "Silent", "Sunken",
)
_NOUNS = (
    "Labyrinth", "Warren", "Catacombs", "Hedges", "Halls", "Depths", "Tangle",
    "Cloisters", "Burrows", "Vaults", "Passages", "Reaches",
)


def create_world_name(rng: random.Random) -> str:
    return f"{rng.choice(_ADJECTIVES)} {rng.choice(_NOUNS)}"


@dataclass
class ProgressionResult:
    maze_id: str
    discovered_corridors: List[str] = field(default_factory=list)
    discovered_mazes: List[str] = field(default_factory=list)
    world_completed: bool = False
    new_world: Optional[World] = None


def complete_maze(
    save: SaveData,
    world_id: str,
    maze_id: str,
    rng: Optional[random.Random] = None,
) -> ProgressionResult:
    """Apply a won level to the save data in place.

    Corridors touching the maze's tile become discovered, undiscovered mazes
    on the far end of those corridors become discovered, and the maze itself
    is completed. When this win completes the last maze of the world a new,
    larger world is appended after the latest one.

    Raises:
        LookupError: If the world map or maze does not exist.
    """
    map_data = save.maps.get(world_id)
    if map_data is None:
        raise LookupError(f"No map data for world '{world_id}'.")
    maze = map_data.mazes.get(maze_id)
    if maze is None:
        raise LookupError(f"Maze '{maze_id}' not found in world '{world_id}'.")

    result = ProgressionResult(maze_id=maze_id)
    was_completed = all(m.status == MazeStatus.COMPLETED for m in map_data.mazes.values())
    affected: Set[int] = set()
    for corridor in map_data.corridors:
        if not corridor.touches(maze.index):
            continue
        affected.update(corridor.tile_indices)
        if corridor.status != CorridorStatus.DISCOVERED:
            corridor.status = CorridorStatus.DISCOVERED
            result.discovered_corridors.append(corridor.id)

    maze.status = MazeStatus.COMPLETED
    for other in map_data.mazes_by_index():
        if other.index in affected and other.status == MazeStatus.UNDISCOVERED:
            other.status = MazeStatus.DISCOVERED
            result.discovered_mazes.append(other.id)

    # Replaying a maze of an already finished world unlocks nothing new.
    if not was_completed and all(m.status == MazeStatus.COMPLETED for m in map_data.mazes.values()):
        result.world_completed = True
        result.new_world = _append_next_world(save, rng if rng is not None else random.Random())
        logger.info("world %s completed, unlocked '%s'", world_id, result.new_world.name)

    return result


def _append_next_world(save: SaveData, rng: random.Random) -> World:
    worlds = save.worlds_by_index()
    if not worlds:
        raise LookupError("Save data has no worlds to progress from.")
    latest = worlds[-1]
    world = World(
        id=make_id(),
        index=latest.index + 1,
        name=create_world_name(rng),
        size=(latest.size[0] + 1, latest.size[1] + 1),
    )
    save.worlds[world.id] = world
    return world
