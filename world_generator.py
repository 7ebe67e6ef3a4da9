"""Overworld tile grid: randomized depth-first generation and wall serialization."""

from __future__ import annotations

import random
from typing import Iterator, List, Optional, Sequence

from models import DIRECTIONS, Direction, MapTile

TileGrid = List[List[MapTile]]

_LETTERS = {d.letter: d for d in DIRECTIONS}


def new_tile_grid(rows: int, cols: int) -> TileGrid:
    """All tiles closed on every side and unvisited."""
    if rows <= 0 or cols <= 0:
        raise ValueError(f"World dimensions must be positive, got {rows}x{cols}.")
    return [[MapTile(row=r, col=c, index=r * cols + c) for c in range(cols)] for r in range(rows)]


def remove_wall_between(a: MapTile, b: MapTile) -> None:
    for d in DIRECTIONS:
        dr, dc = d.offset
        if (a.row + dr, a.col + dc) == (b.row, b.col):
            a.walls[d] = False
            b.walls[d.opposite] = False
            return
    raise ValueError(f"tiles ({a.row}, {a.col}) and ({b.row}, {b.col}) are not adjacent")


class WorldGridGenerator:
    """Spanning-tree generator over a rows x cols tile grid.

    ``steps()`` performs one carving step per iteration so a renderer can
    show progress; ``generate()`` simply drains it.
    """

    def __init__(self, rows: int, cols: int, rng: Optional[random.Random] = None) -> None:
        self.rows = rows
        self.cols = cols
        self.rng = rng if rng is not None else random.Random()
        self.grid: TileGrid = new_tile_grid(rows, cols)
        self.stack: List[MapTile] = []
        self.removed_walls = 0

    def get(self, row: int, col: int) -> Optional[MapTile]:
        if 0 <= row < self.rows and 0 <= col < self.cols:
            return self.grid[row][col]
        return None

    def unvisited_neighbors(self, tile: MapTile) -> List[MapTile]:
        out: List[MapTile] = []
        for d in DIRECTIONS:
            dr, dc = d.offset
            n = self.get(tile.row + dr, tile.col + dc)
            if n is not None and not n.visited:
                out.append(n)
        return out

    def steps(self) -> Iterator[MapTile]:
        """Carve the grid, yielding the focused tile after every step."""
        start = self.grid[self.rng.randrange(self.rows)][self.rng.randrange(self.cols)]
        start.visited = True
        self.stack = [start]
        yield start

        while self.stack:
            current = self.stack[-1]
            candidates = self.unvisited_neighbors(current)
            if not candidates:
                self.stack.pop()
                if self.stack:
                    yield self.stack[-1]
                continue

            nxt = candidates[self.rng.randrange(len(candidates))]
            remove_wall_between(current, nxt)
            self.removed_walls += 1
            nxt.visited = True
            self.stack.append(nxt)
            yield nxt

    def generate(self) -> TileGrid:
        for _ in self.steps():
            pass
        return self.grid


def serialize_walls(grid: Sequence[Sequence[MapTile]]) -> List[List[str]]:
    """Encode each tile as the letters (t, r, b, l order) of its present walls."""
    return [["".join(d.letter for d in DIRECTIONS if tile.walls[d]) for tile in row] for row in grid]


def deserialize_walls(wall_data: Sequence[Sequence[str]]) -> TileGrid:
    """Rebuild a tile grid from serialized wall strings.

    Raises:
        ValueError: On an empty or ragged grid, or letters outside t/r/b/l.
    """
    if not wall_data or not wall_data[0]:
        raise ValueError("Wall data is empty.")
    cols = len(wall_data[0])
    grid: TileGrid = []
    for r, row in enumerate(wall_data):
        if len(row) != cols:
            raise ValueError(f"Wall data row {r} has {len(row)} tiles, expected {cols}.")
        tiles: List[MapTile] = []
        for c, code in enumerate(row):
            unknown = set(code) - set(_LETTERS)
            if unknown:
                raise ValueError(f"Unknown wall letters {sorted(unknown)} at ({r}, {c}).")
            walls = {d: d.letter in code for d in DIRECTIONS}
            tiles.append(MapTile(row=r, col=c, index=r * cols + c, walls=walls, visited=True))
        grid.append(tiles)
    return grid


def neighbor_tile(grid: Sequence[Sequence[MapTile]], tile: MapTile, direction: Direction) -> Optional[MapTile]:
    dr, dc = direction.offset
    r, c = tile.row + dr, tile.col + dc
    if 0 <= r < len(grid) and 0 <= c < len(grid[r]):
        return grid[r][c]
    return None


def format_grid(grid: Sequence[Sequence[MapTile]]) -> str:
    """ASCII picture of the tile walls, one text row per wall band."""
    if not grid:
        return ""
    width = len(grid[0])
    lines = [" " + "_" * (width * 2 - 1)]
    for row in grid:
        body = "|"
        for tile in row:
            body += "_" if tile.walls[Direction.BOTTOM] else " "
            body += "|" if tile.walls[Direction.RIGHT] else " "
        lines.append(body)
    return "\n".join(lines)
