import itertools
import math
import warnings

import pytest

from dtxkit.zipf import ZipfGenerator, pow_approx, zeta


@pytest.mark.parametrize("a,b", [(0.5, 0.5), (2.0, 0.99), (7.0, 1.5), (0.9, 10.3)])
def test_pow_approx_fractional_exponent_is_roughly_right(a, b):
    assert pow_approx(a, b) == pytest.approx(math.pow(a, b), rel=0.1)


def test_pow_approx_rejects_negative_exponent():
    with pytest.raises(ValueError):
        pow_approx(2.0, -1.0)


def test_zeta_is_incremental():
    partial = zeta(0, 0.0, 40, 0.7)
    assert zeta(40, partial, 100, 0.7) == pytest.approx(zeta(0, 0.0, 100, 0.7))


def test_zeta_resets_when_shrinking():
    big = zeta(0, 0.0, 50, 0.5)
    assert zeta(50, big, 10, 0.5) == zeta(0, 0.0, 10, 0.5)


def test_sequential_generation_starts_at_seed_modulo_n():
    gen = ZipfGenerator(5, -1.0, 7)
    assert [gen.next() for _ in range(7)] == [2, 3, 4, 0, 1, 2, 3]


def test_uniform_values_cover_range():
    gen = ZipfGenerator(10, 0.0, 3)
    values = [gen.next() for _ in range(2000)]
    assert set(values) == set(range(10))


def test_large_theta_always_zero():
    gen = ZipfGenerator(1000, 50.0, 1)
    assert {gen.next() for _ in range(100)} == {0}


def test_skewed_values_in_range_and_concentrated():
    gen = ZipfGenerator(1000, 0.99, 17)
    values = list(itertools.islice(iter(gen), 5000))
    assert all(0 <= v < 1000 for v in values)
    assert values.count(0) > 5000 // 1000 * 20


def test_reseeded_copies_reproduce_each_other():
    base = ZipfGenerator(500, 0.8, 1)
    a = base.reseeded(42)
    b = base.reseeded(42)
    assert [a.next() for _ in range(100)] == [b.next() for _ in range(100)]
    assert a.n == base.n
    assert a.theta == base.theta


def test_same_seed_same_sequence():
    a = ZipfGenerator(300, 0.5, 9)
    b = ZipfGenerator(300, 0.5, 9)
    assert [a.next() for _ in range(200)] == [b.next() for _ in range(200)]


def test_change_n_limits_range():
    gen = ZipfGenerator(1000, 0.0, 4)
    gen.next()
    gen.change_n(3)
    assert gen.n == 3
    assert {gen.next() for _ in range(300)} <= {0, 1, 2}


@pytest.mark.parametrize("theta", [1.0, 5.0, 39.9])
def test_unsupported_theta_raises(theta):
    with pytest.raises(ValueError):
        ZipfGenerator(10, theta, 0)


@pytest.mark.parametrize("theta", [-0.5, -2.0])
def test_negative_theta_other_than_sequential_raises(theta):
    with pytest.raises(ValueError):
        ZipfGenerator(10, theta, 0)


def test_non_positive_n_raises():
    with pytest.raises(ValueError):
        ZipfGenerator(0, 0.5, 0)


def test_theta_near_one_warns():
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        gen = ZipfGenerator(100, 0.995, 0)
    assert any(issubclass(w.category, RuntimeWarning) for w in caught)
    assert 0 <= gen.next() < 100