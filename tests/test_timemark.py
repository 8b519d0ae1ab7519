import re
import time

from rockbase.timemark import TimeMark
from rockbase.timestamp import Time


def test_passed_grows_with_sleep():
    mark = TimeMark("start")
    time.sleep(0.02)
    assert mark.passed() >= Time.from_milliseconds(10)


def test_cycles_non_negative_and_grow():
    mark = TimeMark("work")
    first = mark.cycles()
    sum(i * i for i in range(200000))
    assert mark.cycles() >= first >= 0


def test_label_kept():
    assert TimeMark("phase one").label == "phase one"


def test_str_format():
    text = str(TimeMark("loop"))
    match = re.fullmatch(
        r"(?P<cycles>\d+)cyc \((?P<passed>-?\d+\.\d{3}\.\d{3})s\) since (?P<label>.*)",
        text,
    )
    assert match is not None
    assert match.group("label") == "loop"
    assert int(match.group("cycles")) >= 0
    assert match.group("passed").startswith("0.")