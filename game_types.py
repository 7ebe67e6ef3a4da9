from __future__ import annotations

from typing import List, Tuple

Color = Tuple[int, int, int]
Point = Tuple[float, float]
MazeBlueprint = List[List[int]]
