import pytest

from imgloc.modules.export import parse_polygon, parse_search_area
from imgloc.modules.geometry import Rect


def test_search_area_parsed():
    assert parse_search_area("10|20|300|400") == Rect(10, 20, 300, 400)
    assert parse_search_area(" 1 | 2 | 3 | 4 ") == Rect(1, 2, 3, 4)


def test_search_area_defaults():
    assert parse_search_area() == Rect(70, 70, 720, 540)
    assert parse_search_area("") == Rect(70, 70, 720, 540)


@pytest.mark.parametrize("text", ["10|20|300", "a|b|c|d", "1|2|-3|4"])
def test_search_area_malformed(text):
    with pytest.raises(ValueError):
        parse_search_area(text)


def test_polygon_parsed():
    poly = parse_polygon("0,0|10,0|10,10|0,10")

    assert poly.points == ((0, 0), (10, 0), (10, 10), (0, 10))
    assert parse_polygon("0,0|10,0|5,8").area() == pytest.approx(40.0)


def test_polygon_defaults():
    poly = parse_polygon()

    assert poly.points == ((430, 70), (787, 335), (430, 605), (67, 333))


@pytest.mark.parametrize(
    "text",
    ["0,0|10,0", "0,0|10|10,10", "0,0|1,0|1,1|0,1|0,0.5", "x,y|1,1|2,2"],
)
def test_polygon_malformed(text):
    with pytest.raises(ValueError):
        parse_polygon(text)
