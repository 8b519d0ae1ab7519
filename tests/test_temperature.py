import pytest

from rockbase.temperature import (
    Temperature,
    celsius_to_kelvin,
    kelvin_to_celsius,
)


def test_default_is_unknown():
    unknown = Temperature()
    assert repr(unknown.kelvin) == "nan"
    assert not unknown.is_in_range(Temperature.from_kelvin(0.0), Temperature.from_kelvin(1e9))


def test_zero_celsius_in_kelvin():
    assert Temperature.from_celsius(0).kelvin == pytest.approx(273.15)


@pytest.mark.parametrize("value", [-40.0, 0.0, 21.5, 100.0])
def test_conversion_round_trip(value):
    assert kelvin_to_celsius(celsius_to_kelvin(value)) == pytest.approx(value)
    assert Temperature.from_celsius(value).celsius == pytest.approx(value)


def test_from_kelvin_keeps_value():
    assert Temperature.from_kelvin(300.0).kelvin == 300.0


def test_is_approx():
    a = Temperature.from_kelvin(300.0)
    assert a.is_approx(Temperature.from_kelvin(300.0 + 1e-7))
    assert not a.is_approx(Temperature.from_kelvin(301.0))
    assert a.is_approx(Temperature.from_kelvin(301.0), prec=2.0)


def test_is_in_range_any_order():
    low = Temperature.from_kelvin(250.0)
    high = Temperature.from_kelvin(350.0)
    inside = Temperature.from_kelvin(300.0)
    outside = Temperature.from_kelvin(400.0)
    assert inside.is_in_range(low, high)
    assert inside.is_in_range(high, low)
    assert not outside.is_in_range(low, high)
    assert low.is_in_range(low, high)


def test_comparisons():
    a = Temperature.from_kelvin(10.0)
    b = Temperature.from_kelvin(20.0)
    assert a < b
    assert b > a
    assert a == Temperature.from_kelvin(10.0)
    assert not a == b


def test_arithmetic():
    a = Temperature.from_kelvin(10.0)
    b = Temperature.from_kelvin(20.0)
    assert (a + b).kelvin == 30.0
    assert (b - a).kelvin == 10.0
    assert (a * 3).kelvin == 30.0
    assert (3 * a).kelvin == 30.0


def test_str_format():
    assert str(Temperature.from_celsius(25.0)) == "[25.0 celsius]"