"""
First-hit image search with per-channel colour tolerance.

Unlike the exhaustive matcher, this search stops at the first anchor (in
row-major order) where every template pixel is within `variation` shades of
the source pixel on each channel. Template pixels equal to the transparent
colour match anything.

The search target may carry leading options, each followed by exactly one
space or tab::

    *n          colour variation 0..255
    *TransC     transparent colour: basic HTML name or hex RGB (0xRRGGBB)
    *wN *hN     resize template; -1 keeps the aspect ratio from the other side

e.g. ``"*30 *TransWhite *w-1 *h24 icons/ok.png"``.
"""
from __future__ import annotations

import re
import time
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import cv2  # type: ignore
import numpy as np

from ...core.logger import logger
from ..geometry.rect import Rect
from .buffer import PixelBuffer
from .errors import FormatMismatchError
from .utils import ImageLike, as_buffer, load_image

# RGB values of the basic HTML colour names.
HTML_COLORS = {
    "black": 0x000000,
    "silver": 0xC0C0C0,
    "gray": 0x808080,
    "white": 0xFFFFFF,
    "maroon": 0x800000,
    "red": 0xFF0000,
    "purple": 0x800080,
    "fuchsia": 0xFF00FF,
    "green": 0x008000,
    "lime": 0x00FF00,
    "olive": 0x808000,
    "yellow": 0xFFFF00,
    "navy": 0x000080,
    "blue": 0x0000FF,
    "teal": 0x008080,
    "aqua": 0x00FFFF,
}

_LEADING_INT = re.compile(r"^\s*([+-]?(?:0[xX][0-9a-fA-F]+|\d+))")
_DELIMITER = re.compile(r"[ \t]")

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class SearchHit:
    x: int
    y: int
    w: int
    h: int

    @property
    def center(self) -> Tuple[int, int]:
        return (self.x + self.w // 2, self.y + self.h // 2)


@dataclass
class SearchOptions:
    path: str
    variation: int = 0
    trans_color: Optional[Color] = None  # BGR, same order as loaded pixels
    width: int = 0
    height: int = 0


def _atoi(text: str) -> int:
    m = _LEADING_INT.match(text)
    if not m:
        return 0
    digits = m.group(1)
    base = 16 if "x" in digits.lower() else 10
    return int(digits, base)


def parse_color(name: str) -> Color:
    """Translate a colour name or hex RGB string into a BGR triple.

    Unparseable text resolves to black.
    """
    rgb = HTML_COLORS.get(name.lower())
    if rgb is None:
        try:
            rgb = int(name, 16) & 0xFFFFFF
        except ValueError:
            rgb = 0
    return (rgb & 0xFF, (rgb >> 8) & 0xFF, (rgb >> 16) & 0xFF)


def parse_search_options(spec: str) -> SearchOptions:
    """Split leading *options from the image path.

    Raises:
        ValueError: an option is not followed by a space/tab, or is unsupported.
    """
    opts = SearchOptions(path=spec)
    cp = spec.lstrip(" \t")
    while cp.startswith("*"):
        body = cp[1:]
        m = _DELIMITER.search(body)
        if m is None:
            raise ValueError(f"Search option must be followed by a space: {spec!r}")
        token = body[:m.start()]
        lowered = token.lower()
        if lowered.startswith("w"):
            opts.width = _atoi(token[1:])
        elif lowered.startswith("h"):
            opts.height = _atoi(token[1:])
        elif lowered.startswith("trans"):
            opts.trans_color = parse_color(token[5:])
        elif lowered.startswith("icon"):
            raise ValueError("Icon resources are not supported")
        else:
            opts.variation = min(255, max(0, _atoi(token)))
        opts.path = body[m.end():]
        cp = opts.path.lstrip(" \t")
    return opts


def resize_template(template: np.ndarray, width: int = 0, height: int = 0) -> np.ndarray:
    """Resize for *w/*h options. 0 keeps the original size of that side.

    Raises:
        ValueError: a requested or derived side is negative.
    """
    orig_h, orig_w = template.shape[:2]
    # -1 paired with 0 or with another -1 leaves no side to derive from.
    if (width == -1 or height == -1) and (not width or not height or width == height):
        width = height = 0
    if width == -1:
        width = int(orig_w / orig_h * height + 0.5)
    elif height == -1:
        height = int(orig_h / orig_w * width + 0.5)
    if width < 0 or height < 0:
        raise ValueError(f"Template size must not be negative, got {width}x{height}")
    width = width or orig_w
    height = height or orig_h
    if (width, height) == (orig_w, orig_h):
        return template
    # Nearest neighbour keeps exact colours so the transparent colour survives.
    return cv2.resize(np.ascontiguousarray(template), (width, height), interpolation=cv2.INTER_NEAREST)


def image_search(
    source: Union[PixelBuffer, np.ndarray],
    template: Union[PixelBuffer, np.ndarray],
    *,
    variation: int = 0,
    trans_color: Optional[Color] = None,
    region: Optional[Rect] = None,
) -> Optional[SearchHit]:
    """Return the first anchor where template matches within variation, or None.

    Args:
        source: image to search (1 or 3 channels)
        template: image to look for, same channel count
        variation: allowed absolute difference per channel (clamped to 0..255)
        trans_color: BGR colour treated as transparent in the template
        region: search area in source coordinates (whole source if None)

    Raises:
        FormatMismatchError: channel counts differ.
    """
    started = time.perf_counter()
    src = as_buffer(source)
    tpl = as_buffer(template)
    if src.channels != tpl.channels:
        raise FormatMismatchError(
            f"Pixel format mismatch: source has {src.channels} channel(s), "
            f"template has {tpl.channels}"
        )
    variation = min(255, max(0, int(variation)))

    zone = src.bounds if region is None else region.intersect(src.bounds)
    if tpl.width > zone.width or tpl.height > zone.height:
        return None
    map_h = zone.height - tpl.height + 1
    map_w = zone.width - tpl.width + 1

    area = src.region(zone).data.astype(np.int16)
    tpl16 = tpl.data.astype(np.int16)
    if trans_color is None:
        opaque = np.ones((tpl.height, tpl.width), dtype=bool)
    else:
        key = np.array(trans_color, dtype=np.int16)
        if tpl.channels == 1:
            b, g, r = trans_color
            key = np.array([int(0.114 * b + 0.587 * g + 0.299 * r + 0.5)], dtype=np.int16)
        opaque = ~(tpl16 == key).all(axis=2)

    rejected = np.zeros((map_h, map_w), dtype=bool)
    for i, j in zip(*np.nonzero(opaque)):
        window = area[i:i + map_h, j:j + map_w]
        rejected |= np.abs(window - tpl16[i, j]).max(axis=2) > variation
        if rejected.all():
            break

    candidates = np.flatnonzero(~rejected)
    hit = None
    if candidates.size:
        y, x = divmod(int(candidates[0]), map_w)
        hit = SearchHit(zone.x + x, zone.y + y, tpl.width, tpl.height)

    logger.bind(module="ImageSearch").debug(
        "image search: zone={} variation={} trans={} hit={} elapsed={:.1f}ms",
        zone.as_tuple(),
        variation,
        trans_color,
        hit,
        (time.perf_counter() - started) * 1000.0,
    )
    return hit


def search_with_options(
    source: ImageLike,
    spec: str,
    region: Optional[Rect] = None,
) -> Optional[SearchHit]:
    """Parse an option-prefixed template spec, load the template and search."""
    opts = parse_search_options(spec)
    template = resize_template(load_image(opts.path), opts.width, opts.height)
    return image_search(
        load_image(source),
        template,
        variation=opts.variation,
        trans_color=opts.trans_color,
        region=region,
    )


__all__ = [
    "HTML_COLORS",
    "SearchHit",
    "SearchOptions",
    "parse_color",
    "parse_search_options",
    "resize_template",
    "image_search",
    "search_with_options",
]
