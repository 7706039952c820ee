"""
Parsing of the pipe/comma-delimited search parameters.

- search area: ``"x|y|width|height"``
- polygon: ``"x,y|x,y|x,y|x,y"`` (three or four vertices)

Missing values fall back to settings.default_search_area / default_polygon.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from ...core.config import settings
from ..geometry.polygon import Polygon
from ..geometry.rect import Rect

MAX_POLYGON_POINTS = 4


def parse_search_area(text: Optional[str] = None) -> Rect:
    """Parse ``x|y|w|h`` into a Rect. Raises ValueError on malformed input."""
    raw = settings.default_search_area if not text else text
    parts = [p.strip() for p in raw.split("|")]
    if len(parts) != 4:
        raise ValueError(f"Search area must be 'x|y|width|height', got {raw!r}")
    try:
        x, y, w, h = (int(p) for p in parts)
    except ValueError as e:
        raise ValueError(f"Search area values must be integers, got {raw!r}") from e
    return Rect(x, y, w, h)


def parse_points(text: str) -> List[Tuple[float, float]]:
    points = []
    for chunk in text.split("|"):
        xy = [c.strip() for c in chunk.split(",")]
        if len(xy) != 2:
            raise ValueError(f"Polygon vertex must be 'x,y', got {chunk!r}")
        points.append((float(xy[0]), float(xy[1])))
    return points


def parse_polygon(text: Optional[str] = None) -> Polygon:
    """Parse ``x,y|x,y|...`` into a Polygon. Raises ValueError on malformed input."""
    raw = settings.default_polygon if not text else text
    points = parse_points(raw)
    if len(points) > MAX_POLYGON_POINTS:
        raise ValueError(f"At most {MAX_POLYGON_POINTS} polygon vertices are accepted, got {len(points)}")
    return Polygon(points)


__all__ = ["MAX_POLYGON_POINTS", "parse_search_area", "parse_points", "parse_polygon"]
