import re

import pytest

from rockbase.timestamp import Resolution, Time


def test_default_format_used_by_to_string():
    t = Time.from_microseconds(1_339_675_506_123_456)
    text = t.to_string()
    assert text == t.to_string(Resolution.MICROSECONDS, "%Y%m%d-%H:%M:%S")
    assert re.fullmatch(r"\d{8}-\d{2}:\d{2}:\d{2}:\d{6}[+-]\d{4}", text) is not None
    assert text[-12:-5] == ":123456"
    assert Time.from_string(text) == t


def test_to_time_values_documented_example():
    assert Time.from_microseconds(86400000000).to_time_values() == [0, 0, 0, 0, 0, 1]


def test_to_time_values_reconstruct():
    t = Time.from_microseconds(3 * 86400000000 + 5 * 3600000000 + 7 * 60000000 + 9 * 1000000 + 11 * 1000 + 13)
    us, ms, s, mi, h, d = t.to_time_values()
    rebuilt = (
        Time.from_seconds(d * 86400 + h * 3600 + mi * 60 + s)
        + Time.from_milliseconds(ms)
        + Time.from_microseconds(us)
    )
    assert rebuilt == t
    assert [us, ms, s, mi, h, d] == [13, 11, 9, 7, 5, 3]


def test_from_seconds_variants_agree():
    assert Time.from_seconds(1.5) == Time.from_milliseconds(1500)
    assert Time.from_seconds(2, 5) == Time.from_seconds(2) + Time.from_microseconds(5)
    assert Time.from_seconds(2).to_seconds() == 2.0


def test_from_seconds_float_rounds_to_microseconds():
    assert Time.from_seconds(0.0000015) == Time.from_microseconds(2)
    assert Time.from_seconds(-1.25) == Time.from_milliseconds(-1250)


def test_arithmetic_round_trip_and_ordering():
    a = Time.from_milliseconds(1234)
    b = Time.from_microseconds(56)
    assert (a + b) - b == a
    assert a > b and b < a and a >= a and b <= b and a != b
    assert Time.from_seconds(2) * 0.5 == Time.from_seconds(1)


def test_floordiv_truncates_toward_zero():
    assert Time.from_microseconds(-7) // 2 == Time.from_microseconds(-3)
    assert Time.from_microseconds(7) // 2 == Time.from_microseconds(3)


def test_is_null():
    assert Time().is_null()
    assert not Time.from_microseconds(1).is_null()


def test_to_milliseconds_and_timeval():
    t = Time.from_microseconds(2_345_678)
    assert t.to_milliseconds() == 2345
    sec, usec = t.to_timeval()
    assert Time.from_seconds(sec, usec) == t


def test_max_is_largest():
    assert Time.max().to_microseconds() == 2**63 - 1
    assert Time.max() > Time.now()


def test_now_and_monotonic_do_not_go_back():
    first = Time.now()
    second = Time.now()
    assert (second - first).to_microseconds() >= 0
    assert first > Time.from_time_values(2020, 1, 1, 0, 0, 0, 0, 0)
    mono_first = Time.monotonic()
    mono_second = Time.monotonic()
    assert (mono_second - mono_first).to_microseconds() >= 0


@pytest.mark.parametrize("resolution", list(Resolution))
def test_string_round_trip(resolution):
    t = Time.from_microseconds(1_339_675_506_123_456)
    parsed = Time.from_string(t.to_string(resolution), resolution)
    sec, usec = t.to_timeval()
    if resolution == Resolution.SECONDS:
        assert parsed == Time.from_seconds(sec)
    elif resolution == Resolution.MILLISECONDS:
        assert parsed == Time.from_seconds(sec) + Time.from_milliseconds(usec // 1000)
    else:
        assert parsed == t


def test_from_string_local_time_matches_time_values():
    parsed = Time.from_string("20120614-12:05:06:000100")
    assert parsed == Time.from_time_values(2012, 6, 14, 12, 5, 6, 0, 100)


def test_from_string_milliseconds():
    parsed = Time.from_string("20120614-12:05:06:123", Resolution.MILLISECONDS)
    assert parsed == Time.from_time_values(2012, 6, 14, 12, 5, 6, 123, 0)


def test_from_string_utc_epoch():
    assert Time.from_string("19700101-00:00:00:000000+0000").is_null()


def test_from_string_bad_subseconds():
    with pytest.raises(ValueError):
        Time.from_string("20120614-12:05:06:12")


def test_from_string_bad_format():
    with pytest.raises(ValueError):
        Time.from_string("not a time", Resolution.SECONDS)


def test_to_string_invalid_resolution():
    with pytest.raises(ValueError):
        Time().to_string(5)


def test_tz_info_to_seconds():
    assert Time.tz_info_to_seconds("+0130") == -(3600 + 1800)
    assert Time.tz_info_to_seconds("-0200") == 2 * 3600


@pytest.mark.parametrize("bad", ["+013", "abcde", "+01300"])
def test_tz_info_to_seconds_invalid(bad):
    with pytest.raises(ValueError):
        Time.tz_info_to_seconds(bad)


def test_timezone_offset_matches_local_epoch():
    local_epoch = Time.from_time_values(1970, 1, 2, 0, 0, 0, 0, 0)
    day = 86400
    assert local_epoch.to_seconds() - day == Time.get_timezone_offset(day)


def test_str_format():
    assert str(Time.from_microseconds(1234567)) == "1.234.567"