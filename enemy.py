from __future__ import annotations

import random
from typing import List, Optional, Tuple

import pygame

from cell_grid import CellGrid
from geometry import distance
from models import Cell, CellType, Direction

_BLOCKING = (CellType.WALL, CellType.DOOR)


def _axis_step(current: float, target: float, step: float) -> float:
    """Signed move towards target on one axis, never past it."""
    if target > current:
        return min(step, target - current)
    if target < current:
        return -min(step, current - target)
    return 0.0


class Enemy:
    """Wanders cell centre to cell centre, avoiding immediate reversals."""

    def __init__(
        self,
        cell: Cell,
        radius: float,
        speed: float,
        retarget_distance: float = 2.0,
    ) -> None:
        self.radius = radius
        self.speed = speed
        self.retarget_distance = retarget_distance
        cx, cy = cell.center
        self.pos = pygame.Vector2(cx, cy)
        self.target = pygame.Vector2(cx, cy)
        self.direction: Optional[Direction] = None

    @property
    def x(self) -> float:
        return self.pos.x

    @property
    def y(self) -> float:
        return self.pos.y

    def candidate_moves(self, grid: CellGrid) -> List[Tuple[Direction, Cell]]:
        current = grid.cell_at(self.pos.x, self.pos.y)
        if current is None:
            return []
        moves = [
            (d, cell)
            for d, cell in grid.neighbors(current).items()
            if cell is not None and cell.type not in _BLOCKING
        ]
        if self.direction is not None and len(moves) > 1:
            reverse = self.direction.opposite
            moves = [(d, cell) for d, cell in moves if d != reverse]
        return moves

    def advance(self, dt: float, grid: CellGrid, rng: random.Random) -> None:
        if distance(self.pos.x, self.pos.y, self.target.x, self.target.y) <= self.retarget_distance:
            moves = self.candidate_moves(grid)
            if moves:
                _, cell = moves[rng.randrange(len(moves))]
                self.target.update(*cell.center)

        step = self.speed * dt
        dx = _axis_step(self.pos.x, self.target.x, step)
        dy = _axis_step(self.pos.y, self.target.y, step)

        if dx > 0 and dy == 0:
            self.direction = Direction.RIGHT
        elif dx < 0 and dy == 0:
            self.direction = Direction.LEFT
        elif dx == 0 and dy < 0:
            self.direction = Direction.TOP
        elif dx == 0 and dy > 0:
            self.direction = Direction.BOTTOM

        self.pos.update(self.pos.x + dx, self.pos.y + dy)
