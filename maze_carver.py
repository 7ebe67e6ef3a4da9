"""
maze_carver.py

Randomized depth-first carving of a single maze blueprint.

Pipeline for one maze:
- carve one-cell-wide corridors into an all-wall interior (no 2x2 open blocks)
- surround the interior with a one-cell wall border
- punch one door per requested border side next to a corridor
- place enemies along an outward spiral from the centre
"""

from __future__ import annotations

import logging
import random
from typing import Iterable, List, Optional, Sequence, Tuple

from game_types import MazeBlueprint
from models import DIRECTIONS, DOOR, ENEMY, GROUND, WALL, Direction

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]

# (path-cell count threshold, enemy quota), checked top-down.
ENEMY_THRESHOLDS: Tuple[Tuple[int, int], ...] = ((72, 5), (60, 4), (48, 3), (32, 2))

# Each triple is (side, diagonal, side) around a cell. All three being open
# would close a 2x2 block of path once the cell is carved.
_CORNER_TRIPLES: Tuple[Tuple[Coord, Coord, Coord], ...] = (
    ((0, -1), (-1, -1), (-1, 0)),  # left, top-left, top
    ((-1, 0), (-1, 1), (0, 1)),  # top, top-right, right
    ((0, 1), (1, 1), (1, 0)),  # right, bottom-right, bottom
    ((1, 0), (1, -1), (0, -1)),  # bottom, bottom-left, left
)

# Spiral walk order: north, west, south, east.
_SPIRAL_DIRS: Tuple[Direction, ...] = (
    Direction.TOP,
    Direction.LEFT,
    Direction.BOTTOM,
    Direction.RIGHT,
)


def enemy_quota(path_cells: int) -> int:
    for threshold, quota in ENEMY_THRESHOLDS:
        if path_cells >= threshold:
            return quota
    return 1


def random_door_sides(rng: random.Random) -> List[Direction]:
    """Flip a coin per side until at least one side gets a door."""
    sides: List[Direction] = []
    while not sides:
        sides = [d for d in DIRECTIONS if rng.randrange(2) == 1]
    return sides


class MazeCarver:
    """Builds one maze blueprint. Only ``rng.randrange`` is used."""

    def __init__(self, rows: int, cols: int, rng: random.Random) -> None:
        if rows < 1 or cols < 1:
            raise ValueError(f"Maze dimensions must be positive, got {rows}x{cols}.")
        self.rows = rows
        self.cols = cols
        self.rng = rng
        self.grid: MazeBlueprint = [[WALL for _ in range(cols)] for _ in range(rows)]

    # ----------------------------
    # Grid access
    # ----------------------------

    @property
    def height(self) -> int:
        return len(self.grid)

    @property
    def width(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    def get(self, row: int, col: int) -> Optional[int]:
        if 0 <= row < self.height and 0 <= col < self.width:
            return self.grid[row][col]
        return None

    def _is_path(self, row: int, col: int) -> bool:
        return self.get(row, col) == GROUND

    def _orthogonal(self, row: int, col: int) -> List[Coord]:
        out: List[Coord] = []
        for d in DIRECTIONS:
            dr, dc = d.offset
            if self.get(row + dr, col + dc) is not None:
                out.append((row + dr, col + dc))
        return out

    # ----------------------------
    # Carving
    # ----------------------------

    def can_carve(self, row: int, col: int) -> bool:
        """A wall cell can become path unless it would open a 2x2 block."""
        if self.get(row, col) != WALL:
            return False
        for triple in _CORNER_TRIPLES:
            if all(self._is_path(row + dr, col + dc) for dr, dc in triple):
                return False
        return True

    def carve_paths(self) -> None:
        start = (self.rng.randrange(self.rows), self.rng.randrange(self.cols))
        self.grid[start[0]][start[1]] = GROUND
        stack: List[Coord] = [start]

        while stack:
            row, col = stack[-1]
            candidates = [c for c in self._orthogonal(row, col) if self.can_carve(*c)]
            if not candidates:
                stack.pop()
                continue
            chosen = candidates[self.rng.randrange(len(candidates))]
            self.grid[chosen[0]][chosen[1]] = GROUND
            stack.append(chosen)

    def add_border(self) -> None:
        w = self.width + 2
        body = [[WALL] + row + [WALL] for row in self.grid]
        self.grid = [[WALL] * w] + body + [[WALL] * w]

    # ----------------------------
    # Doors
    # ----------------------------

    def _border_side(self, side: Direction) -> List[Coord]:
        """Border cells on one side, corners excluded."""
        last_row, last_col = self.height - 1, self.width - 1
        if side == Direction.TOP:
            return [(0, c) for c in range(1, last_col)]
        if side == Direction.BOTTOM:
            return [(last_row, c) for c in range(1, last_col)]
        if side == Direction.LEFT:
            return [(r, 0) for r in range(1, last_row)]
        return [(r, last_col) for r in range(1, last_row)]

    def place_doors(self, sides: Iterable[Direction]) -> List[Direction]:
        """Punch a door on each requested side; returns the sides that got one."""
        requested = set(sides)
        placed: List[Direction] = []
        for side in DIRECTIONS:
            if side not in requested:
                continue
            candidates = [
                (r, c)
                for r, c in self._border_side(side)
                if any(self._is_path(nr, nc) for nr, nc in self._orthogonal(r, c))
            ]
            if not candidates:
                logger.warning("no border cell next to a path on side %s, door skipped", side.value)
                continue
            r, c = candidates[self.rng.randrange(len(candidates))]
            self.grid[r][c] = DOOR
            placed.append(side)
        return placed

    # ----------------------------
    # Enemies
    # ----------------------------

    def _spiral(self) -> Iterable[Coord]:
        """Walk an outward square spiral from the centre until it leaves the grid.

        Moves before inspecting, so the centre itself is not yielded.
        Off-grid positions are skipped but still advance the walk.
        """
        row = (self.rows + 1) // 2
        col = (self.cols + 1) // 2
        reach = 2 * max(self.height, self.width)
        steps = 0
        dir_idx = 0
        while steps <= reach:
            if dir_idx % 2 == 0:
                steps += 1
            dr, dc = _SPIRAL_DIRS[dir_idx % 4].offset
            for _ in range(steps):
                row += dr
                col += dc
                if self.get(row, col) is not None:
                    yield row, col
            dir_idx += 1

    def place_enemies(self) -> int:
        path_cells = [
            (r, c) for r in range(self.height) for c in range(self.width) if self.grid[r][c] == GROUND
        ]
        remaining = enemy_quota(len(path_cells))

        for r, c in self._spiral():
            if remaining <= 0:
                break
            if self.grid[r][c] == GROUND:
                self.grid[r][c] = ENEMY
                remaining -= 1

        if remaining > 0:
            # Spiral covered the grid without filling the quota.
            leftover = [(r, c) for r, c in path_cells if self.grid[r][c] == GROUND]
            while remaining > 0 and leftover:
                r, c = leftover.pop(self.rng.randrange(len(leftover)))
                self.grid[r][c] = ENEMY
                remaining -= 1
            if remaining > 0:
                logger.warning("enemy quota short by %s: not enough path cells", remaining)

        return enemy_quota(len(path_cells)) - remaining

    def build(self, door_sides: Sequence[Direction]) -> MazeBlueprint:
        self.carve_paths()
        self.add_border()
        self.place_doors(door_sides)
        self.place_enemies()
        return self.grid


def carve(
    rows: int,
    cols: int,
    door_sides: Iterable[Direction],
    rng: Optional[random.Random] = None,
) -> MazeBlueprint:
    """Generate a maze blueprint.

    Args:
        rows: Interior rows (the result has rows + 2 with the border).
        cols: Interior columns (the result has cols + 2 with the border).
        door_sides: Border sides that should get a door.
        rng: Random source; a fresh unseeded one if omitted.

    Returns:
        Integer matrix indexing into models.CELL_TYPES.
    """
    carver = MazeCarver(rows, cols, rng if rng is not None else random.Random())
    return carver.build(list(door_sides))
