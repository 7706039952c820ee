import cv2
import numpy as np
import pytest

from imgloc.modules.export import (
    NOT_FOUND,
    SENTINEL,
    encode_hit,
    encode_matches,
    image_search_file,
    search_in_image,
    search_tile,
)
from imgloc.modules.geometry import Rect
from imgloc.modules.vision import SearchHit
from imgloc.modules.vision.template import TemplateMatch


@pytest.fixture()
def board():
    """800x620 dark board with a 20x20 marker at (400, 300) and another at (100, 90)."""
    source = np.zeros((620, 800, 3), dtype=np.uint8)
    source[300:320, 400:420] = (40, 180, 220)
    source[90:110, 100:120] = (40, 180, 220)
    tile = source[300:320, 400:420].copy()
    return source, tile


def test_encode_matches():
    matches = [
        TemplateMatch(Rect(10, 20, 6, 4), 1.0),
        TemplateMatch(Rect(0, 0, 5, 5), 0.95),
    ]

    assert encode_matches(matches) == "2|13|22|2|2"
    assert encode_matches([]) == SENTINEL == "-1"


def test_encode_hit():
    assert encode_hit(SearchHit(5, 6, 7, 8)) == "1|5|6|7|8"
    assert encode_hit(None) == NOT_FOUND == "0"


def test_search_tile_with_default_area_and_polygon(board):
    source, tile = board

    # (100, 90) lies outside the default diamond
    assert search_tile(source, tile, 0.9) == "1|410|310"


def test_search_tile_with_explicit_region(board):
    source, tile = board

    result = search_tile(source, tile, 0.9, "0|0|800|620", "0,0|799,0|799,619|0,619")

    assert result == "2|110|100|410|310"


def test_search_tile_nothing_found(board):
    source, _ = board
    white = np.full((20, 20, 3), 255, dtype=np.uint8)

    assert search_tile(source, white, 0.9) == "-1"


@pytest.mark.parametrize(
    "area, points",
    [("1|2|3", None), (None, "1,1|2,2"), ("0|0|10|10", None)],
)
def test_search_tile_failures_collapse_to_sentinel(board, area, points):
    source, tile = board

    assert search_tile(source, tile, 0.9, area, points) == SENTINEL


def test_search_tile_missing_file():
    assert search_tile("/nonexistent/screen.png", "/nonexistent/tile.png", 0.9) == SENTINEL


def test_search_in_image(board, tmp_path):
    source, tile = board
    src_path = tmp_path / "screen.png"
    tile_path = tmp_path / "tile.png"
    cv2.imwrite(str(src_path), source)
    cv2.imwrite(str(tile_path), tile)

    assert search_in_image(str(src_path), str(tile_path), 0.9) == "2|110|100|410|310"
    assert search_in_image(tile, source, 0.9) == SENTINEL


def test_image_search_file(board, tmp_path):
    source, tile = board
    tile_path = tmp_path / "tile.png"
    cv2.imwrite(str(tile_path), tile)

    assert image_search_file(0, 0, 799, 619, str(tile_path), source) == "1|100|90|20|20"
    assert image_search_file(200, 200, 799, 619, str(tile_path), source) == "1|400|300|20|20"
    assert image_search_file(0, 0, 50, 50, str(tile_path), source) == NOT_FOUND
    assert image_search_file(0, 0, 799, 619, "*5", source) == NOT_FOUND


@pytest.mark.parametrize("options, expected", [("*w-5 ", NOT_FOUND), ("*w-1 *h-1 ", "1|100|90|20|20")])
def test_image_search_file_negative_resize(board, tmp_path, options, expected):
    source, tile = board
    tile_path = tmp_path / "tile.png"
    cv2.imwrite(str(tile_path), tile)

    assert image_search_file(0, 0, 799, 619, f"{options}{tile_path}", source) == expected
