from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

import pygame

from cell_grid import CellGrid
from geometry import Circle, distance, segment_intersects_circle
from models import Cell, CellType, Direction, Item, MovementIntent, WallFlags


logger = logging.getLogger(__name__)


def _is_wall(cell: Optional[Cell]) -> bool:
    return cell is not None and cell.type == CellType.WALL


class Player:
    """Top-down circle controller resolved against the maze wall grid.

    Collision feedback is one tick stale: ``wall_flags`` are computed after a
    move and consulted by the next one.
    """

    def __init__(
        self,
        spawn_cell: Cell,
        radius: float,
        speed: float,
        diagonal_factor: float = 0.75,
    ) -> None:
        self.radius = radius
        self.speed = speed
        self.diagonal_factor = diagonal_factor
        cx, cy = spawn_cell.center
        self.pos = pygame.Vector2(cx, cy)
        self.cell = spawn_cell
        self.wall_flags = WallFlags()

    @property
    def x(self) -> float:
        return self.pos.x

    @property
    def y(self) -> float:
        return self.pos.y

    @property
    def circle(self) -> Circle:
        return Circle(self.pos.x, self.pos.y, self.radius)

    def distance_to(self, x: float, y: float) -> float:
        return distance(self.pos.x, self.pos.y, x, y)

    # ---------
    # Movement
    # ---------

    def advance(self, dt: float, intent: MovementIntent, grid: CellGrid) -> None:
        """Advance the player by dt seconds.

        Args:
            dt: Delta time (seconds).
            intent: Held logical directions.
            grid: Maze cells of the running level.
        """
        dx, dy = self._displacement(dt, intent)
        self.set_position(self.pos.x + dx, self.pos.y + dy, grid)
        self._update_wall_flags(grid)

    def _displacement(self, dt: float, intent: MovementIntent) -> Tuple[float, float]:
        step = self.speed * dt
        flags = self.wall_flags
        dx = 0.0
        dy = 0.0

        if intent.up:
            dy = 0.0 if flags.top else dy - step
        if intent.down:
            dy = 0.0 if flags.bottom else dy + step
        if intent.left:
            dx = 0.0 if flags.left else dx - step
        if intent.right:
            dx = 0.0 if flags.right else dx + step

        # Push away from a wedged corner along the opposite diagonal.
        if flags.tr:
            dx -= step
            dy += step
        elif flags.tl:
            dx += step
            dy += step
        elif flags.br:
            dx -= step
            dy -= step
        elif flags.bl:
            dx += step
            dy -= step

        if intent.is_diagonal:
            dx *= self.diagonal_factor
            dy *= self.diagonal_factor
        return dx, dy

    def set_position(self, x: float, y: float, grid: CellGrid) -> None:
        """Commit a position and refresh cell membership."""
        self.pos.update(x, y)
        row = int(y / grid.cell_size)
        col = int(x / grid.cell_size)
        if row != self.cell.row or col != self.cell.col:
            cell = grid.get(row, col)
            if cell is not None:
                self.cell = cell

    def _update_wall_flags(self, grid: CellGrid) -> None:
        circle = self.circle
        lines = self.cell.lines
        n: Dict[Direction, Optional[Cell]] = grid.neighbors(self.cell)
        diag = grid.diagonal_neighbors(self.cell)

        hits_top = segment_intersects_circle(lines.top, circle)
        hits_right = segment_intersects_circle(lines.right, circle)
        hits_bottom = segment_intersects_circle(lines.bottom, circle)
        hits_left = segment_intersects_circle(lines.left, circle)

        f = self.wall_flags
        f.top = _is_wall(n[Direction.TOP]) and hits_top
        f.right = _is_wall(n[Direction.RIGHT]) and hits_right
        f.bottom = _is_wall(n[Direction.BOTTOM]) and hits_bottom
        f.left = _is_wall(n[Direction.LEFT]) and hits_left
        f.tl = _is_wall(diag["tl"]) and hits_top and hits_left
        f.tr = _is_wall(diag["tr"]) and hits_top and hits_right
        f.bl = _is_wall(diag["bl"]) and hits_bottom and hits_left
        f.br = _is_wall(diag["br"]) and hits_bottom and hits_right

    # ---------
    # Items
    # ---------

    def try_collect(self) -> Optional[Item]:
        """Pluck the current cell's item when the circles overlap its centre."""
        item = self.cell.item
        if item is None:
            return None
        cx, cy = self.cell.center
        if self.distance_to(cx, cy) <= self.radius + item.radius:
            plucked = self.cell.pluck_item()
            logger.debug("plucked %s at (%s, %s)", item.kind.value, self.cell.row, self.cell.col)
            return plucked
        return None
