import numpy as np
import pytest

from membership import build_membership, centroid, clip, trapezoidal, triangular, union


@pytest.mark.parametrize("x, expected", [
    (19, 0.0), (20, 0.0), (22, 0.5), (24, 1.0), (26, 0.5), (28, 0.0), (35, 0.0),
])
def test_triangular_points(x, expected):
    assert triangular(x, 20, 24, 28) == pytest.approx(expected)


@pytest.mark.parametrize("x, expected", [
    (-11, 0.0), (0, 0.5), (10, 1.0), (15, 1.0), (18, 1.0), (20, 0.5), (22, 0.0), (30, 0.0),
])
def test_trapezoidal_points(x, expected):
    assert trapezoidal(x, -10, 10, 18, 22) == pytest.approx(expected)


def test_scalar_in_float_out():
    assert isinstance(triangular(24, 20, 24, 28), float)
    assert isinstance(trapezoidal(24, 20, 22, 26, 28), float)


def test_array_in_array_out():
    U = np.arange(0, 101, 1, dtype=float)
    mu = triangular(U, 30, 50, 70)
    assert mu.shape == U.shape
    assert mu[50] == 1.0 and mu[30] == 0.0 and mu[40] == pytest.approx(0.5)


def test_matches_closed_form_on_regular_shapes():
    U = np.linspace(-20, 60, 321)
    tri = np.maximum(0, np.minimum((U - 20) / 4, (28 - U) / 4))
    trap = np.maximum(0, np.minimum(np.minimum((U + 10) / 20, 1), (22 - U) / 4))
    assert np.allclose(triangular(U, 20, 24, 28), tri)
    assert np.allclose(trapezoidal(U, -10, 10, 18, 22), trap)


@pytest.mark.parametrize("x", [30, 40, 49.99, 50, 60, 1e6])
def test_right_shoulder_is_one_not_nan(x):
    assert trapezoidal(x, 26, 30, 50, 50) == 1.0


def test_right_shoulder_ramp():
    assert trapezoidal(28, 26, 30, 50, 50) == pytest.approx(0.5)
    assert trapezoidal(26, 26, 30, 50, 50) == 0.0


def test_left_shoulder():
    assert trapezoidal(-100, 0, 0, 3, 6) == 1.0
    assert trapezoidal(0, 0, 0, 3, 6) == 1.0
    assert trapezoidal(4.5, 0, 0, 3, 6) == pytest.approx(0.5)


def test_degenerate_triangles():
    assert triangular(0, 0, 0, 10) == 1.0
    assert triangular(5, 0, 0, 10) == pytest.approx(0.5)
    assert triangular(10, 0, 10, 10) == 1.0
    assert triangular(5, 0, 10, 10) == pytest.approx(0.5)


def test_no_nan_anywhere_on_degenerate_shapes():
    U = np.linspace(-50, 150, 801)
    for mu in (trapezoidal(U, 50, 80, 110, 110), trapezoidal(U, 26, 30, 50, 50), triangular(U, 0, 0, 10)):
        assert not np.isnan(mu).any()
        assert ((mu >= 0) & (mu <= 1)).all()


def test_parameter_order_validated():
    with pytest.raises(ValueError):
        triangular(1, 3, 2, 4)
    with pytest.raises(ValueError):
        trapezoidal(1, 0, 5, 4, 6)


def test_build_membership_dispatch():
    assert build_membership(24, "Triangular", (20, 24, 28)) == 1.0
    assert build_membership(28, "Trapezoidal", (26, 30, 50, 50)) == pytest.approx(0.5)
    with pytest.raises(ValueError):
        build_membership(1, "Gaussian", (0, 1))


def test_clip_and_union():
    a = np.array([0.0, 0.5, 1.0])
    b = np.array([1.0, 0.2, 0.0])
    assert np.array_equal(clip(0.4, a), [0.0, 0.4, 0.4])
    assert np.array_equal(union(a, b), [1.0, 0.5, 1.0])


def test_centroid():
    U = np.arange(0, 11, dtype=float)
    assert centroid(U, np.ones_like(U)) == pytest.approx(5.0)
    assert centroid(U, triangular(U, 0, 2, 4)) == pytest.approx(2.0)


def test_centroid_empty_area():
    U = np.arange(0, 11, dtype=float)
    assert centroid(U, np.zeros_like(U)) == 0.0
    assert np.isnan(centroid(U, np.zeros_like(U), empty=np.nan))


@pytest.mark.parametrize("x", [-100, 0, 2.5, 5, 10, 1e6])
def test_two_sided_shoulder_is_one_everywhere(x):
    assert trapezoidal(x, 0, 0, 5, 5) == 1.0
