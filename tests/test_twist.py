import numpy as np
import pytest

from rockbase.twist import Twist


def test_default_is_nan_and_invalid():
    twist = Twist()
    assert np.isnan(twist.linear).all()
    assert np.isnan(twist.angular).all()
    assert not twist.is_valid()


def test_set_zero_makes_valid():
    twist = Twist()
    twist.set_zero()
    assert twist.is_valid()
    assert np.array_equal(twist.linear, np.zeros(3))
    assert np.array_equal(twist.angular, np.zeros(3))


def test_set_nan_invalidates():
    twist = Twist([1, 2, 3], [4, 5, 6])
    assert twist.is_valid()
    twist.set_nan()
    assert not twist.is_valid()


def test_single_nan_entry_invalid():
    twist = Twist([1, np.nan, 3], [4, 5, 6])
    assert not twist.is_valid()


def test_add_and_sub_round_trip():
    a = Twist([1, 2, 3], [4, 5, 6])
    b = Twist([0.5, -1, 2], [1, 1, 1])
    total = a + b
    assert np.allclose((total - b).linear, a.linear)
    assert np.allclose((total - b).angular, a.angular)
    assert np.allclose(total.linear, a.linear + b.linear)


def test_wrong_shape_rejected():
    with pytest.raises(ValueError):
        Twist([1, 2], [1, 2, 3])