"""
Ordering tokens for events.

A token is the decimal value of a hybrid logical clock (nanoseconds since the
epoch, bumped by one whenever the wall clock has not advanced) zero-padded to a
fixed width. Equal width makes string order match numeric order, so tokens can
sit inside composite index keys next to an aggregate id or event name.

Tokens from one clock are strictly increasing. Tokens from different processes
are ordered only as well as their wall clocks agree.
"""

import threading
import time as _time
from datetime import datetime, timedelta, timezone
from typing import Callable

from eventrepo.domain.exceptions import InvalidTimeTokenError

TOKEN_WIDTH = 20
MIN_TIME = "0" * TOKEN_WIDTH
MAX_TIME = "9" * TOKEN_WIDTH

_NS_PER_SECOND = 1_000_000_000


def format_token(value: int) -> str:
    """Render a clock value as a fixed-width token."""
    if value < 0 or value > int(MAX_TIME):
        raise InvalidTimeTokenError(f"clock value out of token range: {value}")
    return str(value).zfill(TOKEN_WIDTH)


def is_time_token(value: object) -> bool:
    return isinstance(value, str) and len(value) == TOKEN_WIDTH and value.isascii() and value.isdigit()


def validate_time_token(value: object) -> str:
    """Return value unchanged if it is a well-formed token. Raises InvalidTimeTokenError otherwise."""
    if not is_time_token(value):
        raise InvalidTimeTokenError(
            f"time token must be a {TOKEN_WIDTH}-digit string, got {value!r}"
        )
    return value  # type: ignore[return-value]


def token_from_datetime(moment: datetime) -> str:
    """Lowest token that could have been issued at or after `moment`. Naive datetimes are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    delta = moment - datetime(1970, 1, 1, tzinfo=timezone.utc)
    ns = (delta.days * 86_400 + delta.seconds) * _NS_PER_SECOND + delta.microseconds * 1_000
    return format_token(max(ns, 0))


def token_to_datetime(token: str) -> datetime:
    """Approximate UTC wall-clock instant a token was issued at (microsecond precision)."""
    seconds, remainder = divmod(int(validate_time_token(token)), _NS_PER_SECOND)
    return datetime.fromtimestamp(seconds, tz=timezone.utc) + timedelta(microseconds=remainder // 1_000)


class TimeTokenClock:
    """
    Issues strictly increasing tokens. Thread-safe.
    `now_ns` is the wall-clock source; tests inject a fixed or stepping one.
    """

    def __init__(self, now_ns: Callable[[], int] = _time.time_ns) -> None:
        self._now_ns = now_ns
        self._last = 0
        self._lock = threading.Lock()

    @property
    def last(self) -> str:
        """Most recently issued token, or MIN_TIME if none yet."""
        return format_token(self._last)

    def next_token(self) -> str:
        with self._lock:
            candidate = self._now_ns()
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
        return format_token(candidate)
