from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from game_types import MazeBlueprint
from models import CELL_TYPES, DIRECTIONS, Cell, CellType, Direction, DoorState, Item, ItemKind

# Diagonal neighbour keys and their (d_row, d_col) offsets.
DIAGONAL_OFFSETS: Dict[str, Tuple[int, int]] = {
    "tl": (-1, -1),
    "tr": (-1, 1),
    "bl": (1, -1),
    "br": (1, 1),
}

_ITEMS_BY_TYPE = {
    CellType.GROUND: ItemKind.COIN,
    CellType.POWER_UP: ItemKind.POWER_UP,
}


def validate_blueprint(blueprint: Sequence[Sequence[int]]) -> Tuple[int, int]:
    """Check shape and values of a blueprint.

    Returns:
        (rows, cols)

    Raises:
        ValueError: If the blueprint is empty, ragged, or has unknown values.
    """
    if not blueprint or not blueprint[0]:
        raise ValueError("Maze blueprint is empty.")
    cols = len(blueprint[0])
    for r, row in enumerate(blueprint):
        if len(row) != cols:
            raise ValueError(f"Blueprint row {r} has {len(row)} cells, expected {cols}.")
        for c, value in enumerate(row):
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < len(CELL_TYPES):
                raise ValueError(f"Blueprint value {value!r} at ({r}, {c}) is not a cell type.")
    return len(blueprint), cols


def door_direction(row: int, col: int, rows: int, cols: int) -> Optional[Direction]:
    """Border side a door sits on; later checks win on corners."""
    direction: Optional[Direction] = None
    if row == 0:
        direction = Direction.TOP
    if col == 0:
        direction = Direction.LEFT
    if row == rows - 1:
        direction = Direction.BOTTOM
    if col == cols - 1:
        direction = Direction.RIGHT
    return direction


class CellGrid:
    """Runtime cells of one maze with constant-time neighbour lookup."""

    def __init__(self, cells: List[List[Cell]], cell_size: float) -> None:
        self.cells = cells
        self.cell_size = cell_size
        self.rows = len(cells)
        self.cols = len(cells[0]) if cells else 0

    @classmethod
    def from_blueprint(
        cls,
        blueprint: MazeBlueprint,
        cell_size: float,
        coin_radius: float = 6.0,
        power_up_radius: float = 10.0,
    ) -> "CellGrid":
        rows, cols = validate_blueprint(blueprint)
        radii = {ItemKind.COIN: coin_radius, ItemKind.POWER_UP: power_up_radius}

        cells: List[List[Cell]] = []
        for r, line in enumerate(blueprint):
            row_cells: List[Cell] = []
            for c, value in enumerate(line):
                cell_type = CELL_TYPES[value]
                cell = Cell(row=r, col=c, type=cell_type, size=cell_size)
                kind = _ITEMS_BY_TYPE.get(cell_type)
                if kind is not None:
                    cx, cy = cell.center
                    cell.item = Item(kind=kind, x=cx, y=cy, radius=radii[kind])
                if cell_type == CellType.DOOR:
                    cell.door = DoorState(is_open=True, direction=door_direction(r, c, rows, cols))
                row_cells.append(cell)
            cells.append(row_cells)
        return cls(cells, cell_size)

    # ----------------------------
    # Lookup
    # ----------------------------

    def get(self, row: int, col: int) -> Optional[Cell]:
        """Cell at (row, col), or None outside the grid."""
        if 0 <= row < self.rows and 0 <= col < self.cols:
            return self.cells[row][col]
        return None

    def cell_at(self, x: float, y: float) -> Optional[Cell]:
        return self.get(int(y / self.cell_size), int(x / self.cell_size))

    def neighbors(self, cell: Cell) -> Dict[Direction, Optional[Cell]]:
        out: Dict[Direction, Optional[Cell]] = {}
        for d in DIRECTIONS:
            dr, dc = d.offset
            out[d] = self.get(cell.row + dr, cell.col + dc)
        return out

    def diagonal_neighbors(self, cell: Cell) -> Dict[str, Optional[Cell]]:
        return {k: self.get(cell.row + dr, cell.col + dc) for k, (dr, dc) in DIAGONAL_OFFSETS.items()}

    def iter_cells(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def cells_of_type(self, cell_type: CellType) -> List[Cell]:
        return [c for c in self.iter_cells() if c.type == cell_type]

    def doors(self) -> List[Cell]:
        """Door cells in row-major order, open or closed."""
        return [c for c in self.iter_cells() if c.is_door]

    @property
    def pixel_size(self) -> Tuple[float, float]:
        """(width, height) in world units."""
        return (self.cols * self.cell_size, self.rows * self.cell_size)

    def to_blueprint(self) -> MazeBlueprint:
        """Current cell types as a blueprint. Closed doors stay doors."""
        out: MazeBlueprint = []
        for row in self.cells:
            out.append([CELL_TYPES.index(CellType.DOOR if c.is_door else c.type) for c in row])
        return out
