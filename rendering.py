from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pygame

from camera import world_rect_to_screen, world_to_screen
from cell_grid import CellGrid
from enemy import Enemy
from game_types import Color
from level_session import LevelSession
from models import (
    CellType,
    DOOR,
    WALL,
    CorridorStatus,
    Direction,
    ItemKind,
    LevelStatus,
    MapData,
    MapTile,
    Maze,
    MazeStatus,
    World,
)
from player import Player
from world_generator import neighbor_tile

_HUD_BG = (0, 0, 0, 230)
_WHITE = (255, 255, 255)


def visible_cell_bounds(
    camera: pygame.Vector2,
    window_w: int,
    window_h: int,
    cell_size: float,
) -> Tuple[int, int, int, int]:
    """Compute visible cell bounds (left, top, right, bottom)."""
    cs = cell_size
    left = max(0, int(camera.x // cs))
    top = max(0, int(camera.y // cs))
    right = int((camera.x + window_w) // cs) + 1
    bottom = int((camera.y + window_h) // cs) + 1
    return left, top, right, bottom


def _dim(color: Color, factor: float) -> Color:
    return (int(color[0] * factor), int(color[1] * factor), int(color[2] * factor))


def _cell_color(cell_type: CellType, colors: Dict[str, Color]) -> Color:
    if cell_type == CellType.WALL:
        return colors["wall"]
    if cell_type == CellType.DOOR:
        return colors["door"]
    # Enemy and power-up cells are walkable ground underneath.
    return colors["ground"]


def draw_cells(
    surf: pygame.Surface,
    grid: CellGrid,
    camera: pygame.Vector2,
    window_w: int,
    window_h: int,
    colors: Dict[str, Color],
) -> None:
    """Draw every visible cell; a closed door is a wall and is drawn as one."""
    left, top, right, bottom = visible_cell_bounds(camera, window_w, window_h, grid.cell_size)
    for row in range(top, min(bottom, grid.rows)):
        for col in range(left, min(right, grid.cols)):
            cell = grid.cells[row][col]
            rect = world_rect_to_screen(cell.x, cell.y, cell.size + 1, cell.size + 1, camera)
            pygame.draw.rect(surf, _cell_color(cell.type, colors), rect)
            if cell.item is None:
                continue
            color = colors["coin"] if cell.item.kind == ItemKind.COIN else colors["power_up"]
            pygame.draw.circle(
                surf, color, world_to_screen(cell.item.x, cell.item.y, camera), int(cell.item.radius)
            )


def draw_player(surf: pygame.Surface, player: Player, camera: pygame.Vector2, color: Color) -> None:
    pygame.draw.circle(surf, color, world_to_screen(player.x, player.y, camera), int(player.radius))


def draw_enemies(
    surf: pygame.Surface, enemies: Iterable[Enemy], camera: pygame.Vector2, color: Color
) -> None:
    for enemy in enemies:
        pygame.draw.circle(surf, color, world_to_screen(enemy.x, enemy.y, camera), int(enemy.radius))


def _blit_label_box(
    surf: pygame.Surface,
    text_surfaces: List[pygame.Surface],
    box_rect: pygame.Rect,
    padding: int,
    line_gap: int,
) -> None:
    """Draw a translucent box with a white outline and its text lines."""
    overlay = pygame.Surface((box_rect.w, box_rect.h), pygame.SRCALPHA)
    overlay.fill(_HUD_BG)
    surf.blit(overlay, box_rect.topleft)
    pygame.draw.rect(surf, _WHITE, box_rect, width=1)

    cursor_y = box_rect.y + padding
    for surface in text_surfaces:
        surf.blit(surface, (box_rect.x + padding, cursor_y))
        cursor_y += surface.get_height() + line_gap


def draw_centered_message(surf: pygame.Surface, font: pygame.font.Font, lines: Sequence[str]) -> None:
    padding, line_gap = 16, 6
    texts = [font.render(line, True, _WHITE) for line in lines]
    w = max(t.get_width() for t in texts) + padding * 2
    h = sum(t.get_height() for t in texts) + line_gap * (len(texts) - 1) + padding * 2
    box = pygame.Rect(0, 0, w, h)
    box.center = surf.get_rect().center
    _blit_label_box(surf, texts, box, padding, line_gap)


def draw_hud(surf: pygame.Surface, hud_font: pygame.font.Font, text: str) -> None:
    """Draw the top status bar: monospace, white on black."""
    bar_height = hud_font.get_height() + 12
    bar = pygame.Surface((surf.get_width(), bar_height), pygame.SRCALPHA)
    bar.fill(_HUD_BG)
    surf.blit(bar, (0, 0))
    surf.blit(hud_font.render(text, True, _WHITE), (12, 6))


def draw_world_list(
    surf: pygame.Surface,
    font: pygame.font.Font,
    worlds: Sequence[World],
    mapped: Sequence[str],
    text_color: Color,
) -> List[Tuple[pygame.Rect, World]]:
    """Draw one button per world; returns their rects for hit testing."""
    buttons: List[Tuple[pygame.Rect, World]] = []
    y = 80
    for world in worlds:
        state = "" if world.id in mapped else "  (unexplored)"
        label = f"{world.index + 1}. {world.name}  {world.size[0]}x{world.size[1]}{state}"
        text = font.render(label, True, text_color)
        rect = pygame.Rect(0, 0, text.get_width() + 32, text.get_height() + 16)
        rect.midtop = (surf.get_width() // 2, y)
        pygame.draw.rect(surf, (40, 44, 60), rect, border_radius=6)
        pygame.draw.rect(surf, text_color, rect, width=1, border_radius=6)
        surf.blit(text, text.get_rect(center=rect.center))
        buttons.append((rect, world))
        y += rect.h + 12
    return buttons


def _tile_rect(tile: MapTile, origin: Tuple[int, int], tile_px: int) -> pygame.Rect:
    return pygame.Rect(origin[0] + tile.col * tile_px, origin[1] + tile.row * tile_px, tile_px, tile_px)


def _wall_segments(rect: pygame.Rect) -> Dict[Direction, Tuple[Tuple[int, int], Tuple[int, int]]]:
    return {
        Direction.TOP: (rect.topleft, rect.topright),
        Direction.RIGHT: (rect.topright, rect.bottomright),
        Direction.BOTTOM: (rect.bottomleft, rect.bottomright),
        Direction.LEFT: (rect.topleft, rect.bottomleft),
    }


def draw_maze_preview(
    surf: pygame.Surface, maze: Maze, rect: pygame.Rect, colors: Dict[str, Color], dim: float
) -> None:
    """Miniature of a maze blueprint scaled into ``rect``."""
    rows, cols = len(maze.cells), len(maze.cells[0])
    inner = rect.inflate(-12, -12)
    size = max(1, min(inner.w // cols, inner.h // rows))
    ox = inner.centerx - size * cols // 2
    oy = inner.centery - size * rows // 2
    palette = {WALL: colors["wall"], DOOR: colors["door"]}
    for r, line in enumerate(maze.cells):
        for c, value in enumerate(line):
            color = palette.get(value, colors["ground"])
            pygame.draw.rect(surf, _dim(color, dim), pygame.Rect(ox + c * size, oy + r * size, size, size))


def draw_world_map(
    surf: pygame.Surface,
    grid: Sequence[Sequence[MapTile]],
    map_data: Optional[MapData],
    tile_px: int,
    colors: Dict[str, Color],
    focus: Optional[MapTile] = None,
) -> List[Tuple[pygame.Rect, MapTile]]:
    """Draw the world grid, its mazes and discovered corridors.

    Without ``map_data`` only the walls are drawn, which is how the
    generation animation is shown. Returns tile rects for hit testing.
    """
    rows = len(grid)
    cols = len(grid[0]) if rows else 0
    origin = (
        (surf.get_width() - cols * tile_px) // 2,
        (surf.get_height() - rows * tile_px) // 2 + 20,
    )
    by_index = {m.index: m for m in map_data.mazes.values()} if map_data else {}
    tiles: List[Tuple[pygame.Rect, MapTile]] = []

    for row in grid:
        for tile in row:
            rect = _tile_rect(tile, origin, tile_px)
            tiles.append((rect, tile))
            maze = by_index.get(tile.index)
            if maze is None:
                fill = (60, 64, 84) if tile.visited else (30, 32, 42)
                pygame.draw.rect(surf, fill, rect)
                continue
            if maze.status == MazeStatus.UNDISCOVERED:
                pygame.draw.rect(surf, (30, 32, 42), rect)
                continue
            draw_maze_preview(surf, maze, rect, colors, 1.0 if maze.status == MazeStatus.DISCOVERED else 0.55)
            if maze.status == MazeStatus.COMPLETED:
                pygame.draw.rect(surf, colors["coin"], rect.inflate(-4, -4), width=2)

    if map_data is not None:
        for corridor in map_data.corridors:
            if corridor.status != CorridorStatus.DISCOVERED:
                continue
            a, b = corridor.tile_indices
            ta = grid[a // cols][a % cols]
            tb = grid[b // cols][b % cols]
            pygame.draw.line(
                surf,
                colors["door"],
                _tile_rect(ta, origin, tile_px).center,
                _tile_rect(tb, origin, tile_px).center,
                3,
            )

    for rect, tile in tiles:
        for d, (p1, p2) in _wall_segments(rect).items():
            if tile.walls[d] or neighbor_tile(grid, tile, d) is None:
                pygame.draw.line(surf, colors["text"], p1, p2, 2)

    if focus is not None:
        pygame.draw.rect(surf, colors["enemy"], _tile_rect(focus, origin, tile_px).inflate(-8, -8), width=3)
    return tiles


class GameRenderer:
    """Renderer that holds fonts and shared styling for every screen."""

    def __init__(self, window_w: int, window_h: int, colors: Dict[str, Color], font: pygame.font.Font) -> None:
        self.window_w = window_w
        self.window_h = window_h
        self.colors = colors
        self.update_fonts(font)

    def update_fonts(self, font: pygame.font.Font) -> None:
        self.font = font
        self.hud_font = pygame.font.SysFont("monospace", font.get_height())
        title_size = max(font.get_height(), int(font.get_height() * 1.4))
        self.title_font = pygame.font.SysFont("monospace", title_size)

    def render_world_list(
        self, screen: pygame.Surface, worlds: Sequence[World], mapped: Sequence[str]
    ) -> List[Tuple[pygame.Rect, World]]:
        screen.fill(self.colors["bg"])
        title = self.title_font.render("Worlds", True, self.colors["text"])
        screen.blit(title, title.get_rect(midtop=(self.window_w // 2, 20)))
        buttons = draw_world_list(screen, self.font, worlds, mapped, self.colors["text"])
        draw_hud(screen, self.hud_font, "Click a world | ESC: quit")
        pygame.display.flip()
        return buttons

    def render_world_map(
        self,
        screen: pygame.Surface,
        world: World,
        grid: Sequence[Sequence[MapTile]],
        map_data: Optional[MapData],
        tile_px: int,
        focus: Optional[MapTile] = None,
    ) -> List[Tuple[pygame.Rect, MapTile]]:
        screen.fill(self.colors["bg"])
        tiles = draw_world_map(screen, grid, map_data, tile_px, self.colors, focus)
        if map_data is None:
            hint = f"{world.name} | generating..."
        else:
            hint = f"{world.name} | Click a discovered maze | ESC: back"
        draw_hud(screen, self.hud_font, hint)
        pygame.display.flip()
        return tiles

    def render_level(
        self,
        screen: pygame.Surface,
        session: LevelSession,
        camera: pygame.Vector2,
        paused: bool,
    ) -> None:
        screen.fill(self.colors["bg"])
        draw_cells(screen, session.grid, camera, self.window_w, self.window_h, self.colors)
        draw_enemies(screen, session.enemies, camera, self.colors["enemy"])
        draw_player(screen, session.player, camera, self.colors["player"])
        draw_hud(
            screen,
            self.hud_font,
            f"Coins left: {session.coins} | Power-ups: {session.power_ups_collected} "
            f"| P: pause | R: restart | ESC: map",
        )
        if session.status == LevelStatus.LOST:
            draw_centered_message(screen, self.title_font, ["Caught!", "Restarting..."])
        elif paused and not session.is_over:
            draw_centered_message(screen, self.title_font, ["Paused", "Press P to resume"])
        pygame.display.flip()
