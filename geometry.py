"""Intersection helpers shared by the movement resolver and the level session."""

from __future__ import annotations

import math
from typing import NamedTuple


class LineSegment(NamedTuple):
    ax: float
    ay: float
    bx: float
    by: float


class Circle(NamedTuple):
    cx: float
    cy: float
    r: float


def segment_intersects_circle(line: LineSegment, circle: Circle) -> bool:
    """Return True if the circle crosses the interior of the segment.

    The segment is parametrized as P(t) = A + t(B - A) with the circle centre
    moved to the origin, which gives a quadratic in t. Tangency (discriminant
    of zero) does not count, and neither does a crossing exactly at an
    endpoint: a root must lie in the open interval (0, 1).

    Args:
        line: Segment endpoints.
        circle: Circle centre and radius, same coordinate space as line.

    Returns:
        True if at least one intersection point lies strictly inside the segment.
    """
    ax = line.ax - circle.cx
    ay = line.ay - circle.cy
    bx = line.bx - circle.cx
    by = line.by - circle.cy

    a = (bx - ax) ** 2 + (by - ay) ** 2
    if a == 0:
        return False
    b = 2 * (ax * (bx - ax) + ay * (by - ay))
    c = ax**2 + ay**2 - circle.r**2

    disc = b**2 - 4 * a * c
    if disc <= 0:
        return False

    sqrt_disc = math.sqrt(disc)
    t1 = (-b + sqrt_disc) / (2 * a)
    t2 = (-b - sqrt_disc) / (2 * a)
    return 0 < t1 < 1 or 0 < t2 < 1


def distance(ax: float, ay: float, bx: float, by: float) -> float:
    return math.hypot(bx - ax, by - ay)
