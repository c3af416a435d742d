import math

import pytest

from adsbviewer.models.aircraft import Coordinate
from adsbviewer.services.geo import COMPASS_POINTS, bearing, direction, distance

OBSERVER = Coordinate(lat=43.687737, lon=-65.128691)
HALIFAX = Coordinate(lat=44.8808, lon=-63.5086)
TORONTO = Coordinate(lat=43.6777, lon=-79.6248)


def test_bearing_cardinal_points():
    origin = Coordinate(lat=0.0, lon=0.0)

    assert bearing(origin, Coordinate(lat=1.0, lon=0.0)) == pytest.approx(0.0)
    assert bearing(origin, Coordinate(lat=0.0, lon=1.0)) == pytest.approx(90.0)
    assert bearing(origin, Coordinate(lat=-1.0, lon=0.0)) == pytest.approx(180.0)
    assert bearing(origin, Coordinate(lat=0.0, lon=-1.0)) == pytest.approx(270.0)


def test_bearing_is_normalized_for_westward_targets():
    result = bearing(OBSERVER, TORONTO)

    assert 0 <= result < 360
    assert result > 180


def test_bearing_to_same_point_is_zero():
    assert bearing(OBSERVER, OBSERVER) == 0


def test_bearing_just_west_of_north_stays_below_360():
    result = bearing(Coordinate(lat=0.0, lon=0.0), Coordinate(lat=45.0, lon=-1e-20))

    assert 0 <= result < 360
    assert direction(result) == "N"


@pytest.mark.parametrize(
    "target",
    [HALIFAX, TORONTO, Coordinate(lat=-33.9, lon=151.2), Coordinate(lat=89.9, lon=179.9)],
)
def test_bearing_range_and_direction_membership(target):
    result = bearing(OBSERVER, target)

    assert 0 <= result < 360
    assert direction(result) in COMPASS_POINTS


def test_distance_symmetry_and_zero():
    assert distance(OBSERVER, OBSERVER) == 0
    assert distance(OBSERVER, HALIFAX) == pytest.approx(distance(HALIFAX, OBSERVER))


def test_distance_known_values():
    # One degree of latitude on a 6371 km sphere
    one_degree = distance(Coordinate(lat=0.0, lon=0.0), Coordinate(lat=1.0, lon=0.0))
    assert one_degree == pytest.approx(6371 * math.pi / 180)

    assert distance(OBSERVER, HALIFAX) == pytest.approx(185, abs=2)


@pytest.mark.parametrize(
    ("bearing_deg", "expected"),
    [
        (0.0, "N"),
        (22.4, "N"),
        (22.5, "NE"),
        (90.0, "E"),
        (135.0, "SE"),
        (180.0, "S"),
        (225.0, "SW"),
        (270.0, "W"),
        (315.0, "NW"),
        (337.4, "NW"),
        (337.5, "N"),
        (359.9, "N"),
    ],
)
def test_direction_buckets(bearing_deg, expected):
    assert direction(bearing_deg) == expected
