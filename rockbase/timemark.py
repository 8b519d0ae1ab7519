"""Labelled marks for measuring elapsed wall-clock and processor time."""

from __future__ import annotations

import time

from rockbase.timestamp import Time


class TimeMark:
    """Records wall-clock and processor time at creation."""

    def __init__(self, label: str) -> None:
        self.label = label
        self.mark = Time.now()
        self.clock = time.process_time_ns() // 1000

    def passed(self) -> Time:
        """Return the wall-clock time since the mark."""
        return Time.now() - self.mark

    def cycles(self) -> int:
        """Return the processor time used since the mark, in microseconds."""
        return time.process_time_ns() // 1000 - self.clock

    def __str__(self) -> str:
        return f"{self.cycles()}cyc ({self.passed()}s) since {self.label}"