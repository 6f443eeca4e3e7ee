import math

import pytest

from listy.core.distance import EARTH_RADIUS_KM, distance_km
from listy.providers.base import Coordinate


CDMX = Coordinate(19.4326, -99.1332)


@pytest.mark.parametrize(
    "coord",
    [CDMX, Coordinate(0.0, 0.0), Coordinate(90.0, 180.0), Coordinate(-45.5, -179.9)],
)
def test_distance_to_self_is_zero(coord):
    assert distance_km(coord, coord) == 0.0


def test_distance_is_symmetric():
    paris = Coordinate(48.8566, 2.3522)
    assert distance_km(CDMX, paris) == pytest.approx(distance_km(paris, CDMX))


def test_one_degree_of_latitude():
    d = distance_km(Coordinate(0.0, 0.0), Coordinate(1.0, 0.0))
    assert d == pytest.approx(EARTH_RADIUS_KM * math.pi / 180)


def test_antipodal_points_do_not_overflow():
    d = distance_km(Coordinate(0.0, 0.0), Coordinate(0.0, 180.0))
    assert d == pytest.approx(EARTH_RADIUS_KM * math.pi)


def test_coordinate_rejects_out_of_range():
    with pytest.raises(ValueError):
        Coordinate(91.0, 0.0)
    with pytest.raises(ValueError):
        Coordinate(0.0, -180.5)
