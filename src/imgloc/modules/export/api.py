"""
Boundary entry points.

Each call parses string parameters, loads both images, runs the core and
encodes the outcome. Failures are logged and collapse into the wire
sentinels; the core itself never returns sentinels.
"""
from __future__ import annotations

from typing import Optional

import cv2  # type: ignore

from ...core.logger import logger
from ..geometry.rect import Rect
from ..vision.image_search import search_with_options
from ..vision.template import ExhaustiveTemplateMatcher
from ..vision.utils import ImageLike, as_buffer
from .encode import NOT_FOUND, SENTINEL, encode_hit, encode_matches
from .params import parse_polygon, parse_search_area

_log = logger.bind(module="export")


def search_tile(
    source: ImageLike,
    tile: ImageLike,
    similarity: float,
    area: Optional[str] = None,
    points: Optional[str] = None,
) -> str:
    """Search tile inside area of source, keeping anchors inside the polygon.

    Returns ``count|cx|cy|...`` or ``-1`` when nothing is found or on failure.
    """
    try:
        zone = parse_search_area(area)
        polygon = parse_polygon(points)
        matches = ExhaustiveTemplateMatcher(similarity).process_image(
            as_buffer(source), as_buffer(tile), zone, polygon
        )
    except (ValueError, OSError, TypeError, cv2.error) as e:
        _log.warning("search_tile failed: {}", e)
        return SENTINEL
    return encode_matches(matches)


def search_in_image(source: ImageLike, tile: ImageLike, similarity: float) -> str:
    """Scan the whole source without area or polygon restrictions."""
    try:
        matches = ExhaustiveTemplateMatcher(similarity).process_image(
            as_buffer(source), as_buffer(tile)
        )
    except (ValueError, OSError, TypeError, cv2.error) as e:
        _log.warning("search_in_image failed: {}", e)
        return SENTINEL
    return encode_matches(matches)


def image_search_file(
    left: int,
    top: int,
    right: int,
    bottom: int,
    spec: str,
    source: ImageLike,
) -> str:
    """First-hit search of an option-prefixed image file inside inclusive bounds.

    Returns ``1|x|y|w|h`` or ``0``.
    """
    try:
        hit = search_with_options(source, spec, Rect.from_ltrb(left, top, right, bottom))
    except (ValueError, OSError, TypeError, cv2.error) as e:
        _log.warning("image_search failed: {}", e)
        return NOT_FOUND
    return encode_hit(hit)


__all__ = ["search_tile", "search_in_image", "image_search_file"]
