from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from game_types import MazeBlueprint, Point
from geometry import LineSegment


class CellType(str, Enum):
    WALL = "wall"
    GROUND = "ground"
    ENEMY = "enemy"
    POWER_UP = "powerUp"
    DOOR = "door"


# Blueprint integers index into this list.
CELL_TYPES: List[CellType] = [
    CellType.WALL,
    CellType.GROUND,
    CellType.ENEMY,
    CellType.POWER_UP,
    CellType.DOOR,
]

WALL = CELL_TYPES.index(CellType.WALL)
GROUND = CELL_TYPES.index(CellType.GROUND)
ENEMY = CELL_TYPES.index(CellType.ENEMY)
POWER_UP = CELL_TYPES.index(CellType.POWER_UP)
DOOR = CELL_TYPES.index(CellType.DOOR)


class Direction(str, Enum):
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    @property
    def letter(self) -> str:
        """Single-letter code used by serialized wall strings."""
        return self.value[0]

    @property
    def offset(self) -> Tuple[int, int]:
        """(d_row, d_col) step towards the neighbour in this direction."""
        return _OFFSETS[self]


_OPPOSITES = {
    Direction.TOP: Direction.BOTTOM,
    Direction.RIGHT: Direction.LEFT,
    Direction.BOTTOM: Direction.TOP,
    Direction.LEFT: Direction.RIGHT,
}

_OFFSETS = {
    Direction.TOP: (-1, 0),
    Direction.RIGHT: (0, 1),
    Direction.BOTTOM: (1, 0),
    Direction.LEFT: (0, -1),
}

# Fixed enumeration order: top, right, bottom, left.
DIRECTIONS: Tuple[Direction, ...] = (
    Direction.TOP,
    Direction.RIGHT,
    Direction.BOTTOM,
    Direction.LEFT,
)


class ItemKind(str, Enum):
    COIN = "coin"
    POWER_UP = "powerUp"


class MazeStatus(str, Enum):
    UNDISCOVERED = "undiscovered"
    DISCOVERED = "discovered"
    COMPLETED = "completed"


class CorridorStatus(str, Enum):
    UNDISCOVERED = "undiscovered"
    DISCOVERED = "discovered"


class LevelStatus(str, Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


# ----------------------------
# Runtime maze cells
# ----------------------------


@dataclass(frozen=True)
class Item:
    kind: ItemKind
    x: float
    y: float
    radius: float


@dataclass
class DoorState:
    is_open: bool = True
    direction: Optional[Direction] = None


class CellLines(NamedTuple):
    top: LineSegment
    right: LineSegment
    bottom: LineSegment
    left: LineSegment


@dataclass
class Cell:
    """One square of a materialized maze.

    Position and edge lines derive from (row, col) and the cell size and are
    fixed at construction. ``type`` only changes through the door state.
    """

    row: int
    col: int
    type: CellType
    size: float
    item: Optional[Item] = None
    door: Optional[DoorState] = None
    x: float = field(init=False)
    y: float = field(init=False)
    lines: CellLines = field(init=False)

    def __post_init__(self) -> None:
        self.x = self.col * self.size
        self.y = self.row * self.size
        x, y, s = self.x, self.y, self.size
        self.lines = CellLines(
            top=LineSegment(x, y, x + s, y),
            right=LineSegment(x + s, y, x + s, y + s),
            bottom=LineSegment(x, y + s, x + s, y + s),
            left=LineSegment(x, y, x, y + s),
        )

    @property
    def center(self) -> Point:
        return (self.x + self.size / 2, self.y + self.size / 2)

    @property
    def is_door(self) -> bool:
        return self.door is not None

    def pluck_item(self) -> Optional[Item]:
        """Remove and return the held item; later calls return None."""
        item = self.item
        self.item = None
        return item

    def set_door_open(self, is_open: bool) -> None:
        """Open or close a door cell, mirroring the state into ``type``."""
        if self.door is None:
            raise ValueError(f"cell ({self.row}, {self.col}) is not a door")
        self.door.is_open = is_open
        self.type = CellType.DOOR if is_open else CellType.WALL


# ----------------------------
# Input / collision state
# ----------------------------


@dataclass(frozen=True)
class MovementIntent:
    """Held logical directions for one tick."""

    up: bool = False
    right: bool = False
    down: bool = False
    left: bool = False

    @property
    def is_diagonal(self) -> bool:
        return (self.up or self.down) and (self.left or self.right)


@dataclass
class WallFlags:
    top: bool = False
    right: bool = False
    bottom: bool = False
    left: bool = False
    tl: bool = False
    tr: bool = False
    bl: bool = False
    br: bool = False


# ----------------------------
# World grid
# ----------------------------


def _all_walls() -> Dict[Direction, bool]:
    return {d: True for d in DIRECTIONS}


@dataclass
class MapTile:
    row: int
    col: int
    index: int
    walls: Dict[Direction, bool] = field(default_factory=_all_walls)
    visited: bool = False

    def open_sides(self) -> List[Direction]:
        return [d for d in DIRECTIONS if not self.walls[d]]


# ----------------------------
# Persisted records
# ----------------------------


@dataclass
class World:
    id: str
    index: int
    name: str
    size: Tuple[int, int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "index": self.index,
            "name": self.name,
            "size": [self.size[0], self.size[1]],
        }

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "World":
        size = raw.get("size", [1, 1])
        return World(
            id=str(raw["id"]),
            index=int(raw.get("index", 0)),
            name=str(raw.get("name", "")),
            size=(int(size[0]), int(size[1])),
        )


@dataclass
class Maze:
    id: str
    index: int
    cells: MazeBlueprint
    status: MazeStatus = MazeStatus.UNDISCOVERED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "index": self.index,
            "cells": [list(row) for row in self.cells],
            "status": self.status.value,
        }

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "Maze":
        return Maze(
            id=str(raw["id"]),
            index=int(raw["index"]),
            cells=[[int(v) for v in row] for row in raw["cells"]],
            status=MazeStatus(raw.get("status", MazeStatus.UNDISCOVERED.value)),
        )


@dataclass
class Corridor:
    id: str
    tile_indices: Tuple[int, int]
    status: CorridorStatus = CorridorStatus.UNDISCOVERED

    def __post_init__(self) -> None:
        a, b = self.tile_indices
        self.tile_indices = (a, b) if a <= b else (b, a)

    def touches(self, tile_index: int) -> bool:
        return tile_index in self.tile_indices

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "status": self.status.value,
            "tileIndices": [self.tile_indices[0], self.tile_indices[1]],
        }

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "Corridor":
        a, b = raw["tileIndices"]
        return Corridor(
            id=str(raw["id"]),
            tile_indices=(int(a), int(b)),
            status=CorridorStatus(raw.get("status", CorridorStatus.UNDISCOVERED.value)),
        )


@dataclass
class MapData:
    """Everything persisted for one world's overworld map."""

    grid_walls: List[List[str]]
    mazes: Dict[str, Maze]
    corridors: List[Corridor]

    def mazes_by_index(self) -> List[Maze]:
        return sorted(self.mazes.values(), key=lambda m: m.index)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gridWalls": [list(row) for row in self.grid_walls],
            "mazes": {mid: m.to_dict() for mid, m in self.mazes.items()},
            "corridors": [c.to_dict() for c in self.corridors],
        }

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "MapData":
        mazes_raw = raw.get("mazes", {})
        if not isinstance(mazes_raw, dict):
            mazes_raw = {}
        return MapData(
            grid_walls=[[str(s) for s in row] for row in raw.get("gridWalls", [])],
            mazes={str(mid): Maze.from_dict(m) for mid, m in mazes_raw.items()},
            corridors=[Corridor.from_dict(c) for c in raw.get("corridors", [])],
        )


@dataclass
class SaveData:
    worlds: Dict[str, World] = field(default_factory=dict)
    maps: Dict[str, MapData] = field(default_factory=dict)

    def worlds_by_index(self) -> List[World]:
        return sorted(self.worlds.values(), key=lambda w: w.index)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "worlds": {wid: w.to_dict() for wid, w in self.worlds.items()},
            "maps": {wid: m.to_dict() for wid, m in self.maps.items()},
        }

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "SaveData":
        worlds_raw = raw.get("worlds", {}) if isinstance(raw.get("worlds"), dict) else {}
        maps_raw = raw.get("maps", {}) if isinstance(raw.get("maps"), dict) else {}
        return SaveData(
            worlds={str(wid): World.from_dict(w) for wid, w in worlds_raw.items()},
            maps={str(wid): MapData.from_dict(m) for wid, m in maps_raw.items()},
        )
