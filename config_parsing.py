from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from config_io import load_json_config
from game_types import Color
from utils import as_color, deep_get, deep_merge

DEFAULT_CONFIG: Dict[str, Any] = {
    "log_level": "INFO",
    "seed": None,
    "window": {"title": "Maze Crawler", "width": 1000, "height": 700, "fps": 60},
    "storage": {"save_path": "save/mazecrawl.json"},
    "maze": {"cell_size": 50, "size_range": [2, 14]},
    "world": {"initial_size": [2, 2], "tile_px": 120},
    "player": {"radius": 18, "speed": 250, "diagonal_factor": 0.75},
    "enemy": {"radius": 15, "speed": 125, "retarget_distance": 2},
    "items": {"coin_radius": 6, "power_up_radius": 10},
    "loop": {"max_frame_dt": 0.05},
    "colors": {},
}

_DEFAULT_COLORS: Dict[str, Color] = {
    "bg": (18, 20, 28),
    "wall": (54, 54, 54),
    "ground": (205, 205, 205),
    "door": (249, 175, 0),
    "coin": (255, 215, 0),
    "power_up": (30, 144, 255),
    "player": (40, 80, 230),
    "enemy": (230, 30, 30),
    "text": (235, 240, 255),
}


@dataclass(frozen=True)
class GameConfig:
    """Simulation constants shared by generation and the level session."""

    cell_size: float = 50.0
    player_radius: float = 18.0
    player_speed: float = 250.0
    diagonal_factor: float = 0.75
    enemy_radius: float = 15.0
    enemy_speed: float = 125.0
    enemy_retarget_distance: float = 2.0
    coin_radius: float = 6.0
    power_up_radius: float = 10.0
    maze_size_range: Tuple[int, int] = (2, 14)
    initial_world_size: Tuple[int, int] = (2, 2)
    max_frame_dt: float = 0.05


@dataclass(frozen=True)
class WindowConfig:
    title: str
    width: int
    height: int
    fps: int
    world_tile_px: int
    colors: Dict[str, Color]


def _parse_int_pair(raw: Any, default: Tuple[int, int], minimum: int = 1) -> Tuple[int, int]:
    """Parse [a, b] into an int pair, each at least ``minimum``."""
    if isinstance(raw, (list, tuple)) and len(raw) >= 2:
        try:
            return max(minimum, int(raw[0])), max(minimum, int(raw[1]))
        except (TypeError, ValueError):
            return default
    return default


def _positive_float(raw: Any, default: float) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def parse_game_config(raw: Dict[str, Any]) -> GameConfig:
    """Parse simulation settings from config data.

    Args:
        raw: Full (merged) config dictionary.

    Returns:
        GameConfig with defaults applied for missing or invalid values.
    """
    d = GameConfig()
    lo, hi = _parse_int_pair(deep_get(raw, "maze.size_range", None), d.maze_size_range)
    return GameConfig(
        cell_size=_positive_float(deep_get(raw, "maze.cell_size", None), d.cell_size),
        player_radius=_positive_float(deep_get(raw, "player.radius", None), d.player_radius),
        player_speed=_positive_float(deep_get(raw, "player.speed", None), d.player_speed),
        diagonal_factor=_positive_float(
            deep_get(raw, "player.diagonal_factor", None), d.diagonal_factor
        ),
        enemy_radius=_positive_float(deep_get(raw, "enemy.radius", None), d.enemy_radius),
        enemy_speed=_positive_float(deep_get(raw, "enemy.speed", None), d.enemy_speed),
        enemy_retarget_distance=_positive_float(
            deep_get(raw, "enemy.retarget_distance", None), d.enemy_retarget_distance
        ),
        coin_radius=_positive_float(deep_get(raw, "items.coin_radius", None), d.coin_radius),
        power_up_radius=_positive_float(
            deep_get(raw, "items.power_up_radius", None), d.power_up_radius
        ),
        maze_size_range=(min(lo, hi), max(lo, hi)),
        initial_world_size=_parse_int_pair(
            deep_get(raw, "world.initial_size", None), d.initial_world_size
        ),
        max_frame_dt=_positive_float(deep_get(raw, "loop.max_frame_dt", None), d.max_frame_dt),
    )


def parse_window_config(raw: Dict[str, Any]) -> WindowConfig:
    colors_raw = deep_get(raw, "colors", {})
    if not isinstance(colors_raw, dict):
        colors_raw = {}
    colors = {name: as_color(colors_raw.get(name), default) for name, default in _DEFAULT_COLORS.items()}
    return WindowConfig(
        title=str(deep_get(raw, "window.title", "Maze Crawler")),
        width=int(deep_get(raw, "window.width", 1000)),
        height=int(deep_get(raw, "window.height", 700)),
        fps=max(1, int(deep_get(raw, "window.fps", 60))),
        world_tile_px=max(40, int(deep_get(raw, "world.tile_px", 120))),
        colors=colors,
    )


def parse_seed(raw: Dict[str, Any]) -> Optional[int]:
    seed = raw.get("seed")
    if seed is None:
        return None
    try:
        return int(seed)
    except (TypeError, ValueError):
        return None


def load_config(path: Path) -> Dict[str, Any]:
    """Read a config file and lay it over the built-in defaults."""
    return deep_merge(DEFAULT_CONFIG, load_json_config(path))
