"""
Polygon primitives for search-region filtering.

Features:
- Point membership by signed angle sum (winding), scalar and vectorized
- Signed/unsigned area, orientation and centroid
- Convexity test
- Ear-clipping triangulation

Coordinates are plain floats in image space (x to the right, y down). The
orientation names follow the sign of the standard shoelace sum: positive is
counter-clockwise, negative is clockwise.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

import numpy as np

Point = Tuple[float, float]

# |total angle| above this counts as inside; on-edge points are not classified reliably.
INSIDE_EPSILON = 1e-6


def cross_product_length(a: Point, b: Point, c: Point) -> float:
    """Z component of BA x BC."""
    bax, bay = a[0] - b[0], a[1] - b[1]
    bcx, bcy = c[0] - b[0], c[1] - b[1]
    return bax * bcy - bay * bcx


def dot_product(a: Point, b: Point, c: Point) -> float:
    """BA . BC"""
    bax, bay = a[0] - b[0], a[1] - b[1]
    bcx, bcy = c[0] - b[0], c[1] - b[1]
    return bax * bcx + bay * bcy


def get_angle(a: Point, b: Point, c: Point) -> float:
    """Signed angle ABC in [-pi, pi]."""
    return math.atan2(cross_product_length(a, b, c), dot_product(a, b, c))


def _normalize_points(points: Iterable[Sequence[float]]) -> Tuple[Point, ...]:
    pts = []
    for p in points:
        pt = (float(p[0]), float(p[1]))
        # Zero-length edges carry no shape and stall the ear and caliper walks.
        if not pts or pts[-1] != pt:
            pts.append(pt)
    # Closing vertex may be repeated explicitly; the loop is always implicit here.
    while len(pts) > 1 and pts[0] == pts[-1]:
        pts.pop()
    if len(set(pts)) < 3:
        raise ValueError(f"Polygon needs at least 3 distinct points, got {len(set(pts))}")
    return tuple(pts)


@dataclass(frozen=True, init=False)
class Polygon:
    """Simple polygon, implicitly closed. Every operation returns new values."""

    points: Tuple[Point, ...]

    def __init__(self, points: Iterable[Sequence[float]]) -> None:
        object.__setattr__(self, "points", _normalize_points(points))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def _edges(self):
        pts = self.points
        n = len(pts)
        for i in range(n):
            yield pts[i], pts[(i + 1) % n]

    # -- membership --

    def contains(self, x: float, y: float) -> bool:
        """Return True if (x, y) is inside the polygon.

        Sums the signed angles subtended at the point by every edge. The total
        is +-2*pi inside and ~0 outside, for convex and concave polygons alike.
        """
        p = (float(x), float(y))
        total = 0.0
        for a, b in self._edges():
            total += get_angle(a, p, b)
        return abs(total) > INSIDE_EPSILON

    def contains_grid(self, xs, ys) -> np.ndarray:
        """Vectorized :meth:`contains` over broadcastable coordinate arrays."""
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        total = np.zeros(np.broadcast(xs, ys).shape, dtype=np.float64)
        for (ax, ay), (bx, by) in self._edges():
            pax, pay = ax - xs, ay - ys
            pbx, pby = bx - xs, by - ys
            total += np.arctan2(pax * pby - pay * pbx, pax * pbx + pay * pby)
        return np.abs(total) > INSIDE_EPSILON

    # -- area / orientation --

    def signed_area(self) -> float:
        """Shoelace area; positive for counter-clockwise, negative for clockwise."""
        s = 0.0
        for (x0, y0), (x1, y1) in self._edges():
            s += x0 * y1 - x1 * y0
        return s / 2.0

    def area(self) -> float:
        return abs(self.signed_area())

    def is_clockwise(self) -> bool:
        return self.signed_area() < 0

    def oriented_clockwise(self) -> "Polygon":
        if self.is_clockwise():
            return self
        return Polygon(reversed(self.points))

    def oriented_counter_clockwise(self) -> "Polygon":
        if self.is_clockwise():
            return Polygon(reversed(self.points))
        return self

    def centroid(self) -> Point:
        """Area-weighted centroid.

        Normalized by the signed area, so the result is correct for either
        orientation and for negative coordinates.
        """
        signed = self.signed_area()
        if signed == 0:
            raise ValueError("Centroid is undefined for a zero-area polygon")
        cx = cy = 0.0
        for (x0, y0), (x1, y1) in self._edges():
            f = x0 * y1 - x1 * y0
            cx += (x0 + x1) * f
            cy += (y0 + y1) * f
        return (cx / (6.0 * signed), cy / (6.0 * signed))

    def is_convex(self) -> bool:
        """True if every corner turns the same way (collinear corners are neutral)."""
        got_negative = got_positive = False
        pts = self.points
        n = len(pts)
        for i in range(n):
            cross = cross_product_length(pts[i], pts[(i + 1) % n], pts[(i + 2) % n])
            if cross < 0:
                got_negative = True
            elif cross > 0:
                got_positive = True
            if got_negative and got_positive:
                return False
        return True

    # -- triangulation --

    def triangulate(self) -> List["Triangle"]:
        """Ear-clipping triangulation, O(n^2).

        Works on a clockwise copy of the vertices; the polygon itself is left
        untouched.
        """
        pts = list(self.oriented_clockwise().points)
        triangles: List[Triangle] = []
        while len(pts) > 3:
            a, b, c = _find_ear(pts)
            triangles.append(Triangle(pts[a], pts[b], pts[c]))
            del pts[b]
        triangles.append(Triangle(pts[0], pts[1], pts[2]))
        return triangles


class Triangle(Polygon):
    def __init__(self, p0: Sequence[float], p1: Sequence[float], p2: Sequence[float]) -> None:
        super().__init__([p0, p1, p2])


def _forms_ear(pts: List[Point], a: int, b: int, c: int) -> bool:
    # Clockwise winding: a convex corner has BA x BC > 0.
    if cross_product_length(pts[a], pts[b], pts[c]) <= 0:
        return False
    triangle = Triangle(pts[a], pts[b], pts[c])
    for i, p in enumerate(pts):
        if i in (a, b, c):
            continue
        if triangle.contains(p[0], p[1]):
            return False
    return True


def _find_ear(pts: List[Point]) -> Tuple[int, int, int]:
    n = len(pts)
    for a in range(n):
        b = (a + 1) % n
        c = (b + 1) % n
        if _forms_ear(pts, a, b, c):
            return a, b, c
    raise ValueError("No ear found; polygon is not simple")


__all__ = [
    "INSIDE_EPSILON",
    "Point",
    "Polygon",
    "Triangle",
    "cross_product_length",
    "dot_product",
    "get_angle",
]
