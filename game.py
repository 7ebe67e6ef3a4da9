from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

import pygame

from camera import update_camera
from config_parsing import load_config, parse_game_config, parse_seed, parse_window_config
from frame_scheduler import FrameScheduler
from level_loader import can_enter, get_map_data, get_world, load_level, load_world_grid, maze_for_tile
from level_session import LevelSession
from models import LevelStatus, MapTile, Maze, MovementIntent, World
from progression import complete_maze
from rendering import GameRenderer
from storage import SaveFile
from utils import deep_get
from world_builder import build_map_data, new_save
from world_generator import TileGrid, WorldGridGenerator

logger = logging.getLogger(__name__)

SCREEN_WORLDS = "worlds"
SCREEN_MAP = "map"
SCREEN_LEVEL = "level"

_UP_KEYS = (pygame.K_UP, pygame.K_w)
_RIGHT_KEYS = (pygame.K_RIGHT, pygame.K_d)
_DOWN_KEYS = (pygame.K_DOWN, pygame.K_s)
_LEFT_KEYS = (pygame.K_LEFT, pygame.K_a)


def intent_from_keys(keys: pygame.key.ScancodeWrapper) -> MovementIntent:
    """Map held arrow / WASD keys to logical directions."""
    return MovementIntent(
        up=any(keys[k] for k in _UP_KEYS),
        right=any(keys[k] for k in _RIGHT_KEYS),
        down=any(keys[k] for k in _DOWN_KEYS),
        left=any(keys[k] for k in _LEFT_KEYS),
    )


class Game:
    """Top-level game orchestration (screens, loop, update, render)."""

    def __init__(self, cfg_path: Path) -> None:
        raw = load_config(cfg_path)
        self.cfg = parse_game_config(raw)
        self.window = parse_window_config(raw)
        self.window_w = self.window.width
        self.window_h = self.window.height
        self.rng = random.Random(parse_seed(raw))

        self.save_file = SaveFile(Path(str(deep_get(raw, "storage.save_path", "save/mazecrawl.json"))))
        self.save = self.save_file.load()
        if not self.save.worlds:
            self.save = new_save(self.rng, self.cfg.initial_world_size)
            self.save_file.save(self.save)
            logger.info("started a new save at %s", self.save_file.path)

        self.screen_name = SCREEN_WORLDS
        self.world: Optional[World] = None
        self.world_grid: Optional[TileGrid] = None
        self.generator: Optional[WorldGridGenerator] = None
        self.generator_steps: Optional[Iterator[MapTile]] = None
        self.generator_focus: Optional[MapTile] = None
        self.maze: Optional[Maze] = None
        self.session: Optional[LevelSession] = None
        self.scheduler: Optional[FrameScheduler] = None
        self.restart_countdown: Optional[int] = None

        self.world_buttons: List[Tuple[pygame.Rect, World]] = []
        self.tile_buttons: List[Tuple[pygame.Rect, MapTile]] = []

        self._init_pygame()
        self.font = pygame.font.Font(None, 28)
        self.renderer = GameRenderer(self.window_w, self.window_h, self.window.colors, self.font)
        self.camera = pygame.Vector2(0, 0)

    # ----------------------------
    # Initialization
    # ----------------------------

    def _init_pygame(self) -> None:
        """Initialize pygame and create window + clock."""
        pygame.init()
        self.screen = pygame.display.set_mode((self.window_w, self.window_h))
        # Capture the actual size in case the platform adjusted it.
        self.window_w, self.window_h = self.screen.get_size()
        pygame.display.set_caption(self.window.title)
        self.clock = pygame.time.Clock()

    # ----------------------------
    # Screens
    # ----------------------------

    def open_world(self, world: World) -> None:
        """Show a world's map, generating it step by step if it has none yet."""
        self.world = world
        self.screen_name = SCREEN_MAP
        if world.id in self.save.maps:
            self.world_grid = load_world_grid(self.save, world.id)
            self.generator = None
            self.generator_steps = None
            return
        rows, cols = world.size
        logger.info("generating world '%s' (%sx%s)", world.name, rows, cols)
        self.generator = WorldGridGenerator(rows, cols, self.rng)
        self.generator_steps = self.generator.steps()
        self.world_grid = self.generator.grid

    def _advance_generation(self) -> None:
        if self.generator is None or self.generator_steps is None or self.world is None:
            return
        try:
            self.generator_focus = next(self.generator_steps)
            return
        except StopIteration:
            pass
        map_data = build_map_data(self.generator.grid, self.rng, self.cfg.maze_size_range)
        self.save.maps[self.world.id] = map_data
        self.save_file.save(self.save)
        self.world_grid = load_world_grid(self.save, self.world.id)
        self.generator = None
        self.generator_steps = None
        self.generator_focus = None

    def enter_maze(self, maze: Maze) -> None:
        if self.world is None:
            return
        self.maze = maze
        self.restart_countdown = None
        self.session = load_level(self.save, self.world.id, maze.id, self.cfg, self.rng)
        self.scheduler = FrameScheduler(self._on_tick, max_dt=self.cfg.max_frame_dt)
        self.scheduler.start()
        self.screen_name = SCREEN_LEVEL
        logger.info("entering maze %s of '%s'", maze.index, self.world.name)

    def restart_level(self) -> None:
        if self.maze is not None:
            self.enter_maze(self.maze)

    def leave_level(self) -> None:
        if self.scheduler is not None:
            self.scheduler.stop()
        self.restart_countdown = None
        self.session = None
        self.scheduler = None
        self.screen_name = SCREEN_MAP

    def _finish_level(self) -> None:
        """Record a won level, persist it and go back to the map."""
        if self.world is None or self.maze is None:
            return
        result = complete_maze(self.save, self.world.id, self.maze.id, self.rng)
        self.save_file.save(self.save)
        logger.info(
            "maze completed: %s corridors and %s mazes discovered",
            len(result.discovered_corridors),
            len(result.discovered_mazes),
        )
        self.leave_level()
        if result.new_world is not None:
            self.screen_name = SCREEN_WORLDS

    # ----------------------------
    # Simulation
    # ----------------------------

    def _current_intent(self) -> MovementIntent:
        return intent_from_keys(pygame.key.get_pressed())

    def _on_tick(self, dt: float) -> None:
        if self.session is None or self.scheduler is None:
            return
        status = self.session.tick(dt, self._current_intent())
        if status == LevelStatus.PLAYING:
            return
        self.scheduler.stop()
        if status == LevelStatus.WON:
            self._finish_level()
        else:
            # Reload the level from its blueprint after about one second.
            self.restart_countdown = self.window.fps

    def _update_level(self) -> None:
        """Pump one level frame, or count down to the restart after a loss."""
        if self.restart_countdown is not None:
            self.restart_countdown -= 1
            if self.restart_countdown <= 0:
                self.restart_level()
            return
        if self.scheduler is not None:
            self.scheduler.pump()

    def _update_level_camera(self) -> None:
        if self.session is None:
            return
        world_w, world_h = self.session.grid.pixel_size
        player = self.session.player
        update_camera(self.camera, world_w, world_h, player.x, player.y, self.window_w, self.window_h)

    # ----------------------------
    # Events / loop
    # ----------------------------

    def _handle_keydown(self, key: int) -> bool:
        """Handle a keydown event; returns False to quit."""
        if key == pygame.K_ESCAPE:
            if self.screen_name == SCREEN_LEVEL:
                self.leave_level()
            elif self.screen_name == SCREEN_MAP:
                if self.generator is None:
                    self.screen_name = SCREEN_WORLDS
            else:
                return False
        elif self.screen_name == SCREEN_LEVEL and key == pygame.K_r:
            self.restart_level()
        elif self.screen_name == SCREEN_LEVEL and key == pygame.K_p:
            if self.scheduler is not None and self.session is not None and not self.session.is_over:
                self.scheduler.toggle()
        return True

    def _handle_mouse_click(self, pos: Tuple[int, int]) -> None:
        if self.screen_name == SCREEN_WORLDS:
            for rect, world in self.world_buttons:
                if rect.collidepoint(pos):
                    self.open_world(get_world(self.save, world.id))
                    return
        elif self.screen_name == SCREEN_MAP and self.generator is None and self.world is not None:
            map_data = get_map_data(self.save, self.world.id)
            for rect, tile in self.tile_buttons:
                if not rect.collidepoint(pos):
                    continue
                maze = maze_for_tile(map_data, tile.index)
                if maze is None:
                    raise LookupError(f"No maze on tile {tile.index} of world '{self.world.id}'.")
                if can_enter(maze):
                    self.enter_maze(maze)
                return

    def _handle_events(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN:
                if not self._handle_keydown(event.key):
                    return False
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._handle_mouse_click(event.pos)
        return True

    def _render(self) -> None:
        if self.screen_name == SCREEN_WORLDS:
            self.world_buttons = self.renderer.render_world_list(
                self.screen, self.save.worlds_by_index(), list(self.save.maps)
            )
        elif self.screen_name == SCREEN_MAP and self.world is not None and self.world_grid is not None:
            map_data = None if self.generator is not None else self.save.maps.get(self.world.id)
            self.tile_buttons = self.renderer.render_world_map(
                self.screen,
                self.world,
                self.world_grid,
                map_data,
                self.window.world_tile_px,
                self.generator_focus,
            )
        elif self.screen_name == SCREEN_LEVEL and self.session is not None and self.scheduler is not None:
            self._update_level_camera()
            self.renderer.render_level(self.screen, self.session, self.camera, not self.scheduler.is_playing)

    def run(self) -> None:
        running = True
        while running:
            running = self._handle_events()
            if not running:
                break
            if self.screen_name == SCREEN_MAP:
                self._advance_generation()
            elif self.screen_name == SCREEN_LEVEL:
                self._update_level()
            self._render()
            self.clock.tick(self.window.fps)

        pygame.quit()
