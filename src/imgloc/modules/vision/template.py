"""
Exhaustive template matching.

Features:
- Sum of absolute per-channel differences at every anchor of a search window
- Optional polygon filter on the anchor point (source coordinates)
- Integer thresholding and 5x5 non-maximum suppression
- Matches sorted by similarity (desc), ties in row-major scan order

Similarity of an anchor is 1 - SAD / (tw * th * channels * 255), so an exact
crop scores 1.0 and a fully inverted patch scores 0.0.
"""
from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

import numpy as np

from ...core.config import settings
from ...core.logger import logger
from ..geometry.polygon import Polygon
from ..geometry.rect import Rect
from .buffer import PixelBuffer
from .errors import FormatMismatchError, SizeViolationError
from .similarity_map import SimilarityMap
from .utils import ImageLike, as_buffer

ZoneLike = Union[Rect, Tuple[int, int, int, int]]


@dataclass(frozen=True)
class TemplateMatch:
    rect: Rect
    similarity: float

    @property
    def x(self) -> int:
        return self.rect.x

    @property
    def y(self) -> int:
        return self.rect.y

    @property
    def w(self) -> int:
        return self.rect.width

    @property
    def h(self) -> int:
        return self.rect.height

    @property
    def center(self) -> Tuple[int, int]:
        return self.rect.center


def _as_rect(zone: Optional[ZoneLike], default: Rect) -> Rect:
    if zone is None:
        return default
    if isinstance(zone, Rect):
        return zone
    return Rect(*(int(v) for v in zone))


def _sad_over_offsets(region: np.ndarray, tpl: np.ndarray, map_h: int, map_w: int) -> np.ndarray:
    # One pass per template pixel, each pass covering the whole map.
    th, tw = tpl.shape[:2]
    diff = np.zeros((map_h, map_w), dtype=np.int64)
    for i in range(th):
        for j in range(tw):
            window = region[i:i + map_h, j:j + map_w]
            diff += np.abs(window - tpl[i, j]).sum(axis=2)
    return diff


def _sad_over_anchors(region: np.ndarray, tpl: np.ndarray, eligible: np.ndarray) -> np.ndarray:
    # One pass per eligible anchor, each pass covering the whole template.
    th, tw = tpl.shape[:2]
    diff = np.zeros(eligible.shape, dtype=np.int64)
    for y, x in zip(*np.nonzero(eligible)):
        diff[y, x] = np.abs(region[y:y + th, x:x + tw] - tpl).sum()
    return diff


class ExhaustiveTemplateMatcher:
    """Brute-force template matcher over 1- or 3-channel 8-bit buffers."""

    def __init__(self, similarity_threshold: float = 0.9) -> None:
        self._similarity_threshold = 0.9
        self.similarity_threshold = similarity_threshold
        self.logger = logger.bind(module="TemplateMatcher")

    @property
    def similarity_threshold(self) -> float:
        """Minimal accepted similarity, clamped into [0, 1]."""
        return self._similarity_threshold

    @similarity_threshold.setter
    def similarity_threshold(self, value: float) -> None:
        self._similarity_threshold = min(1.0, max(0.0, float(value)))

    def similarity_map(
        self,
        source: Union[PixelBuffer, np.ndarray],
        template: Union[PixelBuffer, np.ndarray],
        search_zone: Optional[ZoneLike] = None,
        polygon: Optional[Polygon] = None,
    ) -> Tuple[SimilarityMap, int]:
        """Score every anchor of the clipped search zone.

        Returns the padded map of thresholded integer similarities and the
        maximum possible difference used to normalize them.

        Raises:
            FormatMismatchError: channel counts differ or are unsupported.
            SizeViolationError: template does not fit in the clipped zone.
        """
        src = as_buffer(source)
        tpl = as_buffer(template)
        if src.channels != tpl.channels:
            raise FormatMismatchError(
                f"Pixel format mismatch: source has {src.channels} channel(s), "
                f"template has {tpl.channels}"
            )

        zone = _as_rect(search_zone, src.bounds).intersect(src.bounds)
        if tpl.width > zone.width or tpl.height > zone.height:
            raise SizeViolationError(
                f"Template {tpl.width}x{tpl.height} is larger than search zone "
                f"{zone.width}x{zone.height} at ({zone.x},{zone.y})"
            )

        map_h = zone.height - tpl.height + 1
        map_w = zone.width - tpl.width + 1
        max_diff = tpl.width * tpl.height * tpl.channels * 255
        threshold = math.ceil(self._similarity_threshold * max_diff)

        if polygon is None:
            eligible = np.ones((map_h, map_w), dtype=bool)
        else:
            ys, xs = np.mgrid[zone.y:zone.y + map_h, zone.x:zone.x + map_w]
            eligible = polygon.contains_grid(xs, ys)

        region = src.region(zone).data.astype(np.int16)
        tpl16 = tpl.data.astype(np.int16)
        if not eligible.any():
            diff = np.full((map_h, map_w), max_diff, dtype=np.int64)
        elif tpl.width * tpl.height <= int(eligible.sum()):
            diff = _sad_over_offsets(region, tpl16, map_h, map_w)
        else:
            diff = _sad_over_anchors(region, tpl16, eligible)

        sim = max_diff - diff
        scores = np.where(eligible & (sim >= threshold), sim, 0)
        return SimilarityMap.from_scores(scores, origin_x=zone.x, origin_y=zone.y), max_diff

    def process_image(
        self,
        source: Union[PixelBuffer, np.ndarray],
        template: Union[PixelBuffer, np.ndarray],
        search_zone: Optional[ZoneLike] = None,
        polygon: Optional[Polygon] = None,
    ) -> List[TemplateMatch]:
        """Find all local-maximum matches of template in source.

        Without search_zone and polygon the whole source is scanned, which also
        serves to compare two images of the same size.

        Returns matches sorted by similarity (desc); an empty list if none.
        """
        started = time.perf_counter()
        tpl = as_buffer(template)
        sim_map, max_diff = self.similarity_map(source, tpl, search_zone, polygon)

        peaks = sim_map.peaks()
        # Stable sort keeps row-major order among equal scores.
        peaks.sort(key=lambda p: p[2], reverse=True)
        matches = [
            TemplateMatch(rect=Rect(x, y, tpl.width, tpl.height), similarity=score / max_diff)
            for x, y, score in peaks
        ]

        self.logger.debug(
            "exhaustive match: zone=({}, {}) map={}x{} polygon={} matches={} elapsed={:.1f}ms",
            sim_map.origin_x,
            sim_map.origin_y,
            sim_map.cols,
            sim_map.rows,
            polygon is not None,
            len(matches),
            (time.perf_counter() - started) * 1000.0,
        )
        return matches


def find_all_templates(
    image: ImageLike,
    template: ImageLike,
    *,
    threshold: Optional[float] = None,
    search_zone: Optional[ZoneLike] = None,
    polygon: Optional[Polygon] = None,
    grayscale: bool = False,
) -> List[TemplateMatch]:
    """Find all matches above threshold.

    Args:
        image: large image (path/bytes/np.ndarray/PixelBuffer)
        template: small image (path/bytes/np.ndarray/PixelBuffer)
        threshold: similarity threshold (settings.default_threshold if None)
        search_zone: (x, y, w, h) or Rect, clipped to the image
        polygon: only anchors inside this polygon are considered
        grayscale: compare single-channel versions of both images

    Returns matches sorted by score (desc).
    """
    thr = settings.default_threshold if threshold is None else float(threshold)
    src = as_buffer(image, grayscale=grayscale)
    tpl = as_buffer(template, grayscale=grayscale)
    return ExhaustiveTemplateMatcher(thr).process_image(src, tpl, search_zone, polygon)


def match_template(
    image: ImageLike,
    template: ImageLike,
    *,
    threshold: Optional[float] = None,
    search_zone: Optional[ZoneLike] = None,
    polygon: Optional[Polygon] = None,
) -> Optional[TemplateMatch]:
    """Best match location for template in image, or None below threshold."""
    matches = find_all_templates(
        image, template, threshold=threshold, search_zone=search_zone, polygon=polygon
    )
    return matches[0] if matches else None


def compare_images(first: ImageLike, second: ImageLike) -> float:
    """Whole-image likeness of two equally sized images in [0, 1]."""
    matches = ExhaustiveTemplateMatcher(0.0).process_image(as_buffer(first), as_buffer(second))
    return matches[0].similarity if matches else 0.0


__all__ = [
    "TemplateMatch",
    "ExhaustiveTemplateMatcher",
    "find_all_templates",
    "match_template",
    "compare_images",
]
