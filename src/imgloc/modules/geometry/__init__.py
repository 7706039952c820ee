from .rect import Rect
from .polygon import (
    INSIDE_EPSILON,
    Point,
    Polygon,
    Triangle,
    cross_product_length,
    dot_product,
    get_angle,
)
from .calipers import BoundingRectangle, min_bounding_rectangle

__all__ = [
    "Rect",
    "INSIDE_EPSILON",
    "Point",
    "Polygon",
    "Triangle",
    "cross_product_length",
    "dot_product",
    "get_angle",
    "BoundingRectangle",
    "min_bounding_rectangle",
]
