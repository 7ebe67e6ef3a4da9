from __future__ import annotations

import logging
import math
import random
from typing import List, Optional

from cell_grid import CellGrid
from config_parsing import GameConfig
from enemy import Enemy
from game_types import MazeBlueprint
from geometry import distance
from models import Cell, CellType, ItemKind, LevelStatus, MovementIntent
from player import Player

logger = logging.getLogger(__name__)


def find_spawn_cell(grid: CellGrid) -> Cell:
    """First door in row-major order, else the first ground cell."""
    doors = grid.doors()
    if doors:
        return doors[0]
    grounds = grid.cells_of_type(CellType.GROUND)
    if grounds:
        logger.warning("maze has no door, spawning on ground at (%s, %s)", grounds[0].row, grounds[0].col)
        return grounds[0]
    raise ValueError("Maze has neither a door nor a ground cell to spawn on.")


class LevelSession:
    """State of one level attempt: entities, coins, doors and the outcome.

    Doors start open. While coins remain, standing on a ground cell closes
    them; collecting the last coin reopens them for good. Reaching a door
    after that wins; touching an enemy loses.
    """

    def __init__(
        self,
        blueprint: MazeBlueprint,
        cfg: GameConfig,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.cfg = cfg
        self.rng = rng if rng is not None else random.Random()
        self.grid = CellGrid.from_blueprint(
            blueprint,
            cell_size=cfg.cell_size,
            coin_radius=cfg.coin_radius,
            power_up_radius=cfg.power_up_radius,
        )
        self.doors: List[Cell] = self.grid.doors()
        self.coins = sum(1 for c in self.grid.iter_cells() if c.item and c.item.kind == ItemKind.COIN)
        self.power_ups_collected = 0
        self.got_all_coins = False
        self.status = LevelStatus.PLAYING
        self.elapsed = 0.0

        self.player = Player(
            find_spawn_cell(self.grid),
            radius=cfg.player_radius,
            speed=cfg.player_speed,
            diagonal_factor=cfg.diagonal_factor,
        )
        self.enemies: List[Enemy] = [
            Enemy(
                cell,
                radius=cfg.enemy_radius,
                speed=cfg.enemy_speed,
                retarget_distance=cfg.enemy_retarget_distance,
            )
            for cell in self.grid.cells_of_type(CellType.ENEMY)
        ]
        logger.debug(
            "level built: %sx%s cells, %s coins, %s doors, %s enemies",
            self.grid.rows,
            self.grid.cols,
            self.coins,
            len(self.doors),
            len(self.enemies),
        )

    @property
    def is_over(self) -> bool:
        return self.status != LevelStatus.PLAYING

    def set_doors_open(self, is_open: bool) -> None:
        for door in self.doors:
            door.set_door_open(is_open)
        logger.debug("doors %s", "opened" if is_open else "closed")

    def nearest_door_distance(self) -> float:
        best = math.inf
        for door in self.doors:
            cx, cy = door.center
            best = min(best, self.player.distance_to(cx, cy))
        return best

    def tick(self, dt: float, intent: MovementIntent) -> LevelStatus:
        """Advance the session one frame and return its status."""
        if self.is_over:
            return self.status
        self.elapsed += dt

        self.player.advance(dt, intent, self.grid)
        for enemy in self.enemies:
            enemy.advance(dt, self.grid, self.rng)

        self._update_doors()
        if self._check_win():
            return self.status
        self._collect_items()
        self._check_enemy_contact()
        return self.status

    def _update_doors(self) -> None:
        if (
            self.player.cell.type == CellType.GROUND
            and not self.got_all_coins
            and any(d.door is not None and d.door.is_open for d in self.doors)
        ):
            self.set_doors_open(False)

    def _check_win(self) -> bool:
        if self.coins > 0:
            return False
        if not self.got_all_coins:
            self.got_all_coins = True
            self.set_doors_open(True)
        if self.nearest_door_distance() < self.player.radius:
            self.status = LevelStatus.WON
            logger.info("level won after %.1fs", self.elapsed)
            return True
        return False

    def _collect_items(self) -> None:
        item = self.player.try_collect()
        if item is None:
            return
        if item.kind == ItemKind.COIN:
            self.coins -= 1
            if self.coins == 0:
                logger.debug("all coins collected")
        else:
            self.power_ups_collected += 1

    def _check_enemy_contact(self) -> None:
        reach = self.player.radius
        for enemy in self.enemies:
            if distance(enemy.x, enemy.y, self.player.x, self.player.y) < reach + enemy.radius:
                self.status = LevelStatus.LOST
                logger.info("level lost after %.1fs", self.elapsed)
                return
