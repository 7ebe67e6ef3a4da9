#!/usr/bin/env python3
"""
generate_worlds.py

Appends fully mapped worlds to a save file without opening the game.

Per generated world:
- Picks the next index after the latest world, one tile larger per side
  (the very first world uses the configured initial size)
- Carves the world grid as a spanning tree
- Carves one maze per tile with doors on the tile's open sides
- Derives corridors; only the first maze starts discovered
"""

from __future__ import annotations

import argparse
import logging
import random
from pathlib import Path
from typing import List, Optional, Sequence

from config_parsing import GameConfig, load_config, parse_game_config
from models import SaveData, World
from storage import SaveFile
from world_builder import build_map_data, new_world
from world_generator import WorldGridGenerator, format_grid


class WorldBatchGenerator:
    def __init__(self, save: SaveData, cfg: GameConfig, rng: random.Random) -> None:
        self.save = save
        self.cfg = cfg
        self.rng = rng

    def next_world(self) -> World:
        worlds = self.save.worlds_by_index()
        if not worlds:
            return new_world(0, self.cfg.initial_world_size, self.rng)
        latest = worlds[-1]
        return new_world(latest.index + 1, (latest.size[0] + 1, latest.size[1] + 1), self.rng)

    def generate(self, count: int, show: bool = False) -> List[World]:
        created: List[World] = []
        for _ in range(count):
            world = self.next_world()
            rows, cols = world.size
            grid = WorldGridGenerator(rows, cols, self.rng).generate()
            map_data = build_map_data(grid, self.rng, self.cfg.maze_size_range)

            self.save.worlds[world.id] = world
            self.save.maps[world.id] = map_data
            created.append(world)

            print(
                f"Generated world{world.index}: '{world.name}' {rows}x{cols} "
                f"| mazes={len(map_data.mazes)} corridors={len(map_data.corridors)}"
            )
            if show:
                print(format_grid(grid))
        return created


# ----------------------------
# CLI
# ----------------------------


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate mapped Maze Crawler worlds.")
    p.add_argument("count", type=int, help="How many new worlds to generate.")
    p.add_argument(
        "--save",
        type=str,
        default="save/mazecrawl.json",
        help="Save file to extend (default: save/mazecrawl.json)",
    )
    p.add_argument(
        "--config",
        type=str,
        default=None,
        help="Optional game config for maze sizes and the first world size.",
    )
    p.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Optional RNG seed for reproducible generation.",
    )
    p.add_argument("--print", dest="show", action="store_true", help="Print each world grid.")
    return p.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    if args.count <= 0:
        raise SystemExit("count must be > 0")
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    cfg = parse_game_config(load_config(Path(args.config))) if args.config else GameConfig()
    save_file = SaveFile(Path(args.save))
    save = save_file.load()
    WorldBatchGenerator(save, cfg, random.Random(args.seed)).generate(args.count, show=args.show)
    save_file.save(save)


if __name__ == "__main__":
    main()
