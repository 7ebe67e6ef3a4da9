from __future__ import annotations

from typing import Tuple

import pygame

from utils import clamp_float


def camera_target(focus_x: float, focus_y: float, window_w: int, window_h: int) -> Tuple[float, float]:
    """Return desired camera (x, y) target centred on a world point."""
    return focus_x - window_w / 2, focus_y - window_h / 2


def _axis(target: float, world: float, window: int) -> float:
    if world <= window:
        # Smaller than the window: centre the whole maze.
        return -(window - world) / 2
    return clamp_float(target, 0.0, world - window)


def update_camera(
    camera: pygame.Vector2,
    world_w: float,
    world_h: float,
    focus_x: float,
    focus_y: float,
    window_w: int,
    window_h: int,
) -> None:
    """Update the camera position with clamping to world bounds."""
    target_x, target_y = camera_target(focus_x, focus_y, window_w, window_h)
    camera.x = _axis(target_x, world_w, window_w)
    camera.y = _axis(target_y, world_h, window_h)


def world_to_screen(x: float, y: float, camera: pygame.Vector2) -> Tuple[int, int]:
    """Convert a world point to screen pixels using the camera offset."""
    return int(x - camera.x), int(y - camera.y)


def world_rect_to_screen(x: float, y: float, w: float, h: float, camera: pygame.Vector2) -> pygame.Rect:
    sx, sy = world_to_screen(x, y, camera)
    return pygame.Rect(sx, sy, int(w), int(h))
