import math

import pytest

from kgsnake.vector3 import Vector3


def test_add_then_subtract_round_trip():
    a = Vector3(1.5, -2.0, 3.25)
    b = Vector3(0.5, 4.0, -1.25)
    assert (a + b) - b == a


def test_negation_and_unary_plus():
    a = Vector3(1.0, -2.0, 3.0)
    assert -(-a) == a
    assert +a == a
    assert a + (-a) == Vector3(0.0, 0.0, 0.0)


def test_scalar_multiplication_both_sides():
    a = Vector3(1.0, 2.0, 3.0)
    assert a * 2 == 2 * a
    assert (a * 2) / 2 == a


def test_multiplying_by_vector_is_rejected():
    with pytest.raises(TypeError):
        Vector3(1, 2, 3) * Vector3(1, 2, 3)


def test_cross_of_unit_axes():
    assert Vector3.unit_x() ^ Vector3.unit_y() == Vector3.unit_z()
    assert Vector3.unit_y().cross(Vector3.unit_z()) == Vector3.unit_x()
    assert Vector3.unit_z() ^ Vector3.unit_x() == Vector3.unit_y()


def test_cross_is_perpendicular_to_operands():
    a = Vector3(1.0, 2.0, 3.0)
    b = Vector3(-4.0, 0.5, 2.0)
    c = a ^ b
    assert (c & a) == pytest.approx(0.0)
    assert c.dot(b) == pytest.approx(0.0)


def test_cross_is_anticommutative():
    a = Vector3(1.0, 2.0, 3.0)
    b = Vector3(-4.0, 0.5, 2.0)
    assert (a ^ b) == -(b ^ a)


def test_dot_with_itself_is_length_squared():
    a = Vector3(2.0, -3.0, 6.0)
    assert (a & a) == pytest.approx(a.length() ** 2)


def test_length_pythagorean():
    assert Vector3(3.0, 4.0, 0.0).length() == 5.0


def test_normalize_gives_unit_length_same_direction():
    a = Vector3(2.0, -3.0, 6.0)
    n = a.normalize()
    assert n.length() == pytest.approx(1.0)
    assert (n ^ a).length() == pytest.approx(0.0)
    assert (n & a) > 0


def test_normalize_zero_vector_raises():
    with pytest.raises(ZeroDivisionError):
        Vector3(0.0, 0.0, 0.0).normalize()


def test_iteration_and_unpacking():
    x, y, z = Vector3(1.0, 2.0, 3.0)
    assert (x, y, z) == (1.0, 2.0, 3.0)
    assert list(Vector3.unit_z()) == [0.0, 0.0, 1.0]


def test_vectors_are_immutable():
    v = Vector3(1.0, 2.0, 3.0)
    with pytest.raises(AttributeError):
        v.x = 0.0
    assert math.isclose(v.x, 1.0)