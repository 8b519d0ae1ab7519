"""Tracking of timeouts against the wall clock."""

from __future__ import annotations

from rockbase.timestamp import Time


class Timeout:
    """A timeout that starts when created; a null duration never elapses."""

    def __init__(self, timeout: Time | None = None) -> None:
        self.timeout = timeout if timeout is not None else Time.from_seconds(0)
        self.start_time = Time.now()

    def restart(self) -> None:
        """Start counting again from now."""
        self.start_time = Time.now()

    def elapsed(self, timeout: Time | None = None) -> bool:
        """Return True once the given (or stored) timeout has passed."""
        if timeout is None:
            timeout = self.timeout
        if timeout.is_null():
            return False
        return self.start_time + timeout < Time.now()

    def time_left(self, timeout: Time | None = None) -> Time:
        """Return the time remaining, or ``Time.max()`` for a null timeout."""
        if timeout is None:
            timeout = self.timeout
        if timeout.is_null():
            return Time.max()
        return self.start_time + timeout - Time.now()