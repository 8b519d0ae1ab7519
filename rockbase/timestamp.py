"""Microsecond timestamps and durations."""

from __future__ import annotations

import calendar
import enum
import math
import re
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import ClassVar

_TZ_SUFFIX = re.compile(r"(.*)([\-+][0-9]{4})", re.DOTALL)
_TZ_INFO = re.compile(r"([+-]\d{2}|\d{3})(\d{2})")

_USEC_PER_DAY = 86_400_000_000
_USEC_PER_HOUR = 3_600_000_000
_USEC_PER_MINUTE = 60_000_000
_USEC_PER_SECOND = 1_000_000
_USEC_PER_MILLI = 1_000


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _trunc_divmod(a: int, b: int) -> tuple[int, int]:
    quotient = _trunc_div(a, b)
    return quotient, a - quotient * b


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class Resolution(enum.IntEnum):
    """Sub-second resolution used when formatting and parsing times."""

    SECONDS = 1
    MILLISECONDS = 1000
    MICROSECONDS = 1000000


@dataclass(frozen=True, order=True)
class Time:
    """A point in time or a duration, counted in microseconds."""

    microseconds: int = 0

    USEC_PER_SEC: ClassVar[int] = _USEC_PER_SECOND
    DEFAULT_FORMAT: ClassVar[str] = "%Y%m%d-%H:%M:%S"

    @classmethod
    def now(cls) -> Time:
        """Return the current wall-clock time."""
        return cls(time.time_ns() // 1000)

    @classmethod
    def monotonic(cls) -> Time:
        """Return the time of a monotonic clock."""
        return cls(time.monotonic_ns() // 1000)

    @classmethod
    def max(cls) -> Time:
        """Return the largest representable time."""
        return cls(2**63 - 1)

    @classmethod
    def from_microseconds(cls, value: int) -> Time:
        return cls(int(value))

    @classmethod
    def from_milliseconds(cls, value: int) -> Time:
        return cls(int(value) * _USEC_PER_MILLI)

    @classmethod
    def from_seconds(cls, value: int | float, microseconds: int = 0) -> Time:
        """Build a time from seconds; fractional seconds are rounded to microseconds."""
        if isinstance(value, float):
            seconds = int(value)
            fraction = _round_half_away((value - seconds) * _USEC_PER_SECOND)
            return cls(seconds * _USEC_PER_SECOND + fraction + int(microseconds))
        return cls(int(value) * _USEC_PER_SECOND + int(microseconds))

    @classmethod
    def from_time_values(
        cls, year, month, day, hour, minute, seconds, millis, micros
    ) -> Time:
        """Build a time from broken-down values given in the local time zone."""
        epoch = int(time.mktime((year, month, day, hour, minute, seconds, 0, 0, -1)))
        return cls(epoch * _USEC_PER_SECOND + millis * 1000 + micros)

    @classmethod
    def from_string(
        cls,
        string_time: str,
        resolution: Resolution = Resolution.MICROSECONDS,
        main_format: str | None = None,
    ) -> Time:
        """Parse a time as produced by :meth:`to_string`.

        A trailing ``+hhmm``/``-hhmm`` offset makes the result UTC based;
        without it the string is read as local time.
        """
        if main_format is None:
            main_format = cls.DEFAULT_FORMAT
        resolution = Resolution(resolution)

        main_time = string_time
        tz_info = ""
        match = _TZ_SUFFIX.fullmatch(string_time)
        if match:
            main_time, tz_info = match.group(1), match.group(2)

        usecs = 0
        if resolution > Resolution.SECONDS:
            pos = main_time.rfind(":")
            usecs_string = main_time[pos + 1:]
            length = len(usecs_string)
            if not (length == 6 or (length == 3 and resolution == Resolution.MILLISECONDS)):
                raise ValueError(
                    "Time.from_string: required resolution format does not match "
                    f"the given string '{string_time}' -- identified subseconds: "
                    f"'{usecs_string}'"
                )
            try:
                usecs = int(usecs_string)
            except ValueError:
                usecs = 0
            if resolution == Resolution.MILLISECONDS:
                usecs *= 1000
            if pos >= 0:
                main_time = main_time[:pos]

        try:
            parsed = datetime.strptime(main_time, main_format)
        except ValueError as exc:
            raise ValueError(
                f"Time.from_string failed: '{main_time}' did not match the given "
                f"format '{main_format}'"
            ) from exc

        if tz_info:
            seconds = calendar.timegm(parsed.timetuple()) + cls.tz_info_to_seconds(tz_info)
        else:
            seconds = int(time.mktime(parsed.timetuple()))
        return cls(seconds * _USEC_PER_SECOND + usecs)

    @staticmethod
    def get_timezone_offset(when: int) -> int:
        """Return local-interpretation minus UTC, in seconds, for ``when``."""
        broken_down = tuple(time.gmtime(when))[:8] + (-1,)
        return int(time.mktime(broken_down)) - int(when)

    @staticmethod
    def tz_info_to_seconds(tz_info: str) -> int:
        """Convert a ``+hhmm``/``-hhmm`` offset into seconds to add to reach UTC."""
        match = _TZ_INFO.fullmatch(tz_info) if len(tz_info) == 5 else None
        if match is None:
            raise ValueError(
                f"Time.tz_info_to_seconds: parsing of timezone offset '{tz_info}' failed"
            )
        hours, minutes = int(match.group(1)), int(match.group(2))
        offset = hours * 3600
        if offset < 0:
            offset -= minutes * 60
        else:
            offset += minutes * 60
        return -offset

    def is_null(self) -> bool:
        return self.microseconds == 0

    def to_seconds(self) -> float:
        return self.microseconds / _USEC_PER_SECOND

    def to_milliseconds(self) -> int:
        return _trunc_div(self.microseconds, _USEC_PER_MILLI)

    def to_microseconds(self) -> int:
        return self.microseconds

    def to_timeval(self) -> tuple[int, int]:
        """Return ``(seconds, microseconds)``, both truncated toward zero."""
        return _trunc_divmod(self.microseconds, _USEC_PER_SECOND)

    def to_time_values(self) -> list[int]:
        """Return [microseconds, milliseconds, seconds, minutes, hours, days]."""
        rest = self.microseconds
        days, rest = _trunc_divmod(rest, _USEC_PER_DAY)
        hours, rest = _trunc_divmod(rest, _USEC_PER_HOUR)
        minutes, rest = _trunc_divmod(rest, _USEC_PER_MINUTE)
        seconds, rest = _trunc_divmod(rest, _USEC_PER_SECOND)
        millis, rest = _trunc_divmod(rest, _USEC_PER_MILLI)
        return [rest, millis, seconds, minutes, hours, days]

    def to_string(
        self,
        resolution: Resolution = Resolution.MICROSECONDS,
        main_format: str | None = None,
    ) -> str:
        """Format in local time, with sub-seconds and the UTC offset appended."""
        if main_format is None:
            main_format = self.DEFAULT_FORMAT
        resolution = Resolution(resolution)
        seconds, usecs = self.to_timeval()
        local = datetime.fromtimestamp(seconds, tz=timezone.utc).astimezone()
        main = local.strftime(main_format)
        tz_info = local.strftime("%z")
        if resolution == Resolution.SECONDS:
            return f"{main}{tz_info}"
        if resolution == Resolution.MILLISECONDS:
            return f"{main}:{int(usecs / 1000.0):03d}{tz_info}"
        return f"{main}:{usecs:06d}{tz_info}"

    def __add__(self, other: Time) -> Time:
        if not isinstance(other, Time):
            return NotImplemented
        return Time(self.microseconds + other.microseconds)

    def __sub__(self, other: Time) -> Time:
        if not isinstance(other, Time):
            return NotImplemented
        return Time(self.microseconds - other.microseconds)

    def __floordiv__(self, divider: int) -> Time:
        return Time(_trunc_div(self.microseconds, int(divider)))

    def __mul__(self, factor: float) -> Time:
        return Time(int(self.microseconds * factor))

    def __str__(self) -> str:
        usecs = self.microseconds
        whole = _trunc_div(usecs, _USEC_PER_SECOND)
        millis = (abs(usecs) // 1000) % 1000
        micros = abs(usecs) % 1000
        return f"{whole}.{millis:03d}.{micros:03d}"