from .api import image_search_file, search_in_image, search_tile
from .encode import NOT_FOUND, SENTINEL, encode_hit, encode_matches
from .params import parse_polygon, parse_search_area

__all__ = [
    "search_tile",
    "search_in_image",
    "image_search_file",
    "SENTINEL",
    "NOT_FOUND",
    "encode_matches",
    "encode_hit",
    "parse_search_area",
    "parse_polygon",
]
