"""
Minimum-area bounding rectangle by rotating calipers.

For a convex counter-clockwise polygon, one caliper lies flush on edge i and
the other three rest on the extreme vertices along the edge direction, its
normal and the reversed edge direction. Stepping i through every edge moves
all four calipers forward together; the smallest rectangle seen is kept.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

from .polygon import Point, Polygon


@dataclass(frozen=True)
class BoundingRectangle:
    corners: Tuple[Point, Point, Point, Point]
    width: float
    height: float
    angle: float  # degrees in [0, 90), rotation of the first side against the x axis

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def center(self) -> Point:
        xs = [c[0] for c in self.corners]
        ys = [c[1] for c in self.corners]
        return (sum(xs) / 4.0, sum(ys) / 4.0)


def _project(p: Point, origin: Point, axis: Point) -> float:
    return (p[0] - origin[0]) * axis[0] + (p[1] - origin[1]) * axis[1]


def _advance(pts: List[Point], start: int, axis: Point, sign: float) -> int:
    """Walk forward from start while the projection on axis keeps growing (sign=+1) or shrinking."""
    n = len(pts)
    idx = start
    for _ in range(n):
        nxt = (idx + 1) % n
        step = (pts[nxt][0] - pts[idx][0]) * axis[0] + (pts[nxt][1] - pts[idx][1]) * axis[1]
        if step * sign <= 0:
            break
        idx = nxt
    return idx


def _extreme(pts: List[Point], axis: Point, sign: float) -> int:
    best = 0
    best_val = sign * (pts[0][0] * axis[0] + pts[0][1] * axis[1])
    for i in range(1, len(pts)):
        val = sign * (pts[i][0] * axis[0] + pts[i][1] * axis[1])
        if val > best_val:
            best, best_val = i, val
    return best


def min_bounding_rectangle(polygon: Polygon) -> BoundingRectangle:
    """Return the minimum-area rectangle enclosing a convex counter-clockwise polygon.

    Raises:
        ValueError: polygon is clockwise or not convex.
    """
    if polygon.is_clockwise():
        raise ValueError("Bounding rectangle search requires a counter-clockwise polygon")
    if not polygon.is_convex():
        raise ValueError("Bounding rectangle search requires a convex polygon")

    pts = list(polygon.points)
    n = len(pts)
    best: BoundingRectangle | None = None
    right = top = left = -1

    for i in range(n):
        p0, p1 = pts[i], pts[(i + 1) % n]
        length = math.hypot(p1[0] - p0[0], p1[1] - p0[1])
        if length == 0:
            continue
        u = ((p1[0] - p0[0]) / length, (p1[1] - p0[1]) / length)
        v = (-u[1], u[0])  # inward normal for counter-clockwise winding

        if right < 0:
            right = _extreme(pts, u, 1.0)
            top = _extreme(pts, v, 1.0)
            left = _extreme(pts, u, -1.0)
        else:
            right = _advance(pts, right, u, 1.0)
            top = _advance(pts, top, v, 1.0)
            left = _advance(pts, left, u, -1.0)

        min_u = _project(pts[left], p0, u)
        max_u = _project(pts[right], p0, u)
        max_v = _project(pts[top], p0, v)
        width = max_u - min_u
        height = max_v
        if best is not None and width * height >= best.area:
            continue

        corners = (
            (p0[0] + min_u * u[0], p0[1] + min_u * u[1]),
            (p0[0] + max_u * u[0], p0[1] + max_u * u[1]),
            (p0[0] + max_u * u[0] + max_v * v[0], p0[1] + max_u * u[1] + max_v * v[1]),
            (p0[0] + min_u * u[0] + max_v * v[0], p0[1] + min_u * u[1] + max_v * v[1]),
        )
        angle = math.degrees(math.atan2(u[1], u[0])) % 90.0
        if math.isclose(angle, 90.0) or math.isclose(angle, 0.0, abs_tol=1e-9):
            angle = 0.0
        best = BoundingRectangle(corners=corners, width=width, height=height, angle=angle)

    if best is None:
        raise ValueError("Polygon has no non-degenerate edge")
    return best


__all__ = ["BoundingRectangle", "min_bounding_rectangle"]
