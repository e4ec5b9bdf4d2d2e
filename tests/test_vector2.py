import math

import pytest

from vector2 import Vector2


def test_arithmetic():
    a = Vector2(1.0, 2.0)
    b = Vector2(3.0, -1.0)
    assert a + b == Vector2(4.0, 1.0)
    assert a - b == Vector2(-2.0, 3.0)
    assert a * 2 == Vector2(2.0, 4.0)
    assert 2 * a == Vector2(2.0, 4.0)
    assert -a == Vector2(-1.0, -2.0)
    assert a.dot(b) == pytest.approx(1.0)


def test_cross_is_out_of_plane_component():
    assert Vector2(1.0, 0.0).cross(Vector2(0.0, 1.0)) == 1.0
    assert Vector2(0.0, 1.0).cross(Vector2(1.0, 0.0)) == -1.0


def test_perpendicular_rotates_counterclockwise():
    assert Vector2(1.0, 0.0).perpendicular() == Vector2(0.0, 1.0)


def test_normalized_zero_vector_is_zero():
    result = Vector2().normalized()
    assert result == Vector2()
    assert result.is_finite()


def test_normalized_non_finite_is_zero():
    assert Vector2(math.inf, 1.0).normalized() == Vector2()


def test_normalized_has_unit_length():
    assert Vector2(3.0, 4.0).normalized().magnitude() == pytest.approx(1.0)


def test_from_polar_and_distance():
    point = Vector2.from_polar(2.0, math.pi / 2)
    assert point.x == pytest.approx(0.0, abs=1e-12)
    assert point.y == pytest.approx(2.0)
    assert point.distance_to(Vector2()) == pytest.approx(2.0)
