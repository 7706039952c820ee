from .errors import FormatMismatchError, SizeViolationError
from .buffer import PixelBuffer
from .similarity_map import SimilarityMap
from .template import (
    TemplateMatch,
    ExhaustiveTemplateMatcher,
    find_all_templates,
    match_template,
    compare_images,
)
from .image_search import (
    SearchHit,
    image_search,
    parse_search_options,
    search_with_options,
)
from .utils import (
    ImageLike,
    as_buffer,
    load_image,
    to_gray,
)

__all__ = [
    "FormatMismatchError",
    "SizeViolationError",
    "PixelBuffer",
    "SimilarityMap",
    "TemplateMatch",
    "ExhaustiveTemplateMatcher",
    "find_all_templates",
    "match_template",
    "compare_images",
    "SearchHit",
    "image_search",
    "parse_search_options",
    "search_with_options",
    "ImageLike",
    "as_buffer",
    "load_image",
    "to_gray",
]
