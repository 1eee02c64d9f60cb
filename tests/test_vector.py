import math

import numpy as np
import pytest

from magnetic_pendulum.types import Vector3D
from magnetic_pendulum.util import as_vector, lerp

# Small deterministic sample of vectors, including large/small magnitudes.
rng = np.random.default_rng(2024)
SAMPLES = [Vector3D(*rng.uniform(-100.0, 100.0, 3)) for _ in range(20)]
SAMPLES += [Vector3D(1e-8, -3e-9, 2e-7), Vector3D(0.0, 0.0, 0.0), Vector3D(1e6, -2e6, 5e5)]


def _close(a: Vector3D, b: Vector3D, tol: float = 1e-9) -> bool:
    scale = max(1.0, a.length(), b.length())
    return (a - b).length() <= tol * scale


def test_addition_commutative_and_associative():
    """a + b == b + a and (a + b) + c == a + (b + c) within rounding."""
    for a, b, c in zip(SAMPLES, SAMPLES[1:], SAMPLES[2:]):
        assert _close(a + b, b + a)
        assert _close((a + b) + c, a + (b + c))


def test_scale_identity_and_operators():
    """scale(1.0) is the identity; * and / agree with scale()."""
    for v in SAMPLES:
        assert v.scale(1.0) == v
        assert v * 2.5 == v.scale(2.5)
        assert 2.5 * v == v.scale(2.5)
        assert _close(v / 4.0, v.scale(0.25))
        assert -v == v.scale(-1.0)


def test_componentwise_multiply_divide():
    a = Vector3D(1.0, 2.0, 3.0)
    b = Vector3D(4.0, 5.0, 6.0)
    assert a * b == Vector3D(4.0, 10.0, 18.0)
    assert (a * b) / b == a


def test_cross_orthogonal_to_operands():
    """a × b is orthogonal to a and to b: (a × b)·a ≈ 0, (a × b)·b ≈ 0."""
    for a, b in zip(SAMPLES, SAMPLES[1:]):
        c = a.cross(b)
        tol = 1e-9 * max(1.0, a.length() * b.length() * max(a.length(), b.length()))
        assert abs(c.dot(a)) <= tol
        assert abs(c.dot(b)) <= tol


def test_cross_right_handed():
    x, y, z = Vector3D(1, 0, 0), Vector3D(0, 1, 0), Vector3D(0, 0, 1)
    assert x.cross(y) == z
    assert y.cross(z) == x
    assert z.cross(x) == y


def test_norms():
    v = Vector3D(3.0, 4.0, 12.0)
    assert v.length_squared() == 169.0
    assert v.length() == 13.0
    assert v.dot(v) == v.length_squared()
    for s in SAMPLES:
        assert s.length_squared() >= 0.0


def test_immutable():
    v = Vector3D(1.0, 2.0, 3.0)
    with pytest.raises(AttributeError):
        v.x = 5.0


def test_is_finite():
    assert Vector3D(1.0, 2.0, 3.0).is_finite()
    assert not Vector3D(math.nan, 0.0, 0.0).is_finite()
    assert not Vector3D(0.0, math.inf, 0.0).is_finite()


def test_conversions():
    assert as_vector([1, 2, 3]) == Vector3D(1.0, 2.0, 3.0)
    assert as_vector({"x": 1, "y": 2, "z": 3}) == Vector3D(1.0, 2.0, 3.0)
    assert as_vector(np.array([0.5, 0.0, -1.0])) == Vector3D(0.5, 0.0, -1.0)
    with pytest.raises(ValueError):
        as_vector([1, 2])
    with pytest.raises(ValueError):
        as_vector({"x": 1, "y": 2})


def test_lerp_endpoints():
    a, b = Vector3D(-1, 2, 0), Vector3D(3, 0, 4)
    assert lerp(a, b, 0.0) == a
    assert lerp(a, b, 1.0) == b
    assert _close(lerp(a, b, 0.5), Vector3D(1, 1, 2))
