"""Ordering tokens: fixed width, strictly increasing, sentinel bounds, datetime conversion."""

import threading
from datetime import datetime, timezone

import pytest

from eventrepo.domain.exceptions import InvalidTimeTokenError
from eventrepo.domain.ordering import (
    MAX_TIME,
    MIN_TIME,
    TOKEN_WIDTH,
    TimeTokenClock,
    format_token,
    is_time_token,
    token_from_datetime,
    token_to_datetime,
    validate_time_token,
)


def test_tokens_strictly_increase_with_frozen_wall_clock():
    clock = TimeTokenClock(now_ns=lambda: 5)
    tokens = [clock.next_token() for _ in range(100)]
    assert tokens == sorted(tokens)
    assert len(set(tokens)) == 100


def test_tokens_do_not_go_back_when_wall_clock_does():
    readings = iter([1_000, 2_000, 1_500, 1_500, 3_000])
    clock = TimeTokenClock(now_ns=lambda: next(readings))
    tokens = [clock.next_token() for _ in range(5)]
    assert [int(t) for t in tokens] == [1_000, 2_000, 2_001, 2_002, 3_000]


def test_tokens_are_fixed_width_and_within_sentinels():
    clock = TimeTokenClock()
    token = clock.next_token()
    assert len(token) == TOKEN_WIDTH
    assert is_time_token(token)
    assert MIN_TIME < token < MAX_TIME


def test_string_order_matches_numeric_order():
    assert format_token(9) < format_token(10) < format_token(100)


def test_last_reports_most_recent_token():
    clock = TimeTokenClock(now_ns=lambda: 42)
    assert clock.last == MIN_TIME
    token = clock.next_token()
    assert clock.last == token


def test_clock_is_thread_safe():
    clock = TimeTokenClock(now_ns=lambda: 7)
    tokens: list[str] = []
    lock = threading.Lock()

    def issue():
        for _ in range(200):
            t = clock.next_token()
            with lock:
                tokens.append(t)

    threads = [threading.Thread(target=issue) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(set(tokens)) == 800


@pytest.mark.parametrize(
    "bad",
    [
        "",
        "123",
        "x" * TOKEN_WIDTH,
        12345,
        None,
        "\u0660" * TOKEN_WIDTH,  # Arabic-Indic zeros
        "\u0967" * TOKEN_WIDTH,  # Devanagari ones
    ],
)
def test_validate_time_token_rejects_malformed(bad):
    with pytest.raises(InvalidTimeTokenError):
        validate_time_token(bad)


def test_format_token_rejects_negative():
    with pytest.raises(InvalidTimeTokenError):
        format_token(-1)


def test_token_from_datetime_orders_with_issued_tokens():
    before = token_from_datetime(datetime(2020, 1, 1, tzinfo=timezone.utc))
    token = TimeTokenClock().next_token()
    assert before < token


def test_token_datetime_round_trip_to_the_second():
    moment = datetime(2024, 5, 17, 12, 30, 45, tzinfo=timezone.utc)
    token = token_from_datetime(moment)
    assert token_to_datetime(token).replace(microsecond=0) == moment


def test_naive_datetime_is_treated_as_utc():
    naive = datetime(2024, 5, 17, 12, 0, 0)
    aware = naive.replace(tzinfo=timezone.utc)
    assert token_from_datetime(naive) == token_from_datetime(aware)


def test_only_ascii_digits_make_a_token():
    assert is_time_token("0" * TOKEN_WIDTH)
    assert not is_time_token("٠" * TOKEN_WIDTH)
    assert not is_time_token("１" * TOKEN_WIDTH)  # fullwidth ones


def test_token_to_datetime_rejects_superscript_digits():
    # "²".isdigit() is True but int("²") raises ValueError
    with pytest.raises(InvalidTimeTokenError):
        token_to_datetime("²" * TOKEN_WIDTH)
