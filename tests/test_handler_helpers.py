"""Argument parsing and error replies shared by the bot commands."""
import asyncio
from datetime import date
from types import SimpleNamespace

import pytest

from errors import ClientNotFound, DataAccessFailure, InvalidInput
from handlers.common import (
    ledger_errors,
    parse_key_values,
    parse_month_year,
    progress_bar,
    split_date_and_note,
)
from security.auth import is_allowed
from security.rate_limiter import RateLimiter


class TestParseMonthYear:
    def test_defaults_to_current_month(self):
        assert parse_month_year([], date(2026, 10, 17)) == (2026, 10)

    def test_month_only(self):
        assert parse_month_year(["3"], date(2026, 10, 17)) == (2026, 3)

    def test_month_and_year(self):
        assert parse_month_year(["12", "2025"]) == (2025, 12)

    def test_not_a_number(self):
        with pytest.raises(InvalidInput):
            parse_month_year(["marzo"])


class TestParseKeyValues:
    def test_pairs(self):
        assert parse_key_values(["Hours=3", "date=2026-10-02"]) == {
            "hours": "3", "date": "2026-10-02",
        }

    def test_empty_value_allowed(self):
        assert parse_key_values(["note="]) == {"note": ""}

    @pytest.mark.parametrize("arg", ["hours", "=3"])
    def test_bare_words_rejected(self, arg):
        with pytest.raises(InvalidInput):
            parse_key_values([arg])


class TestSplitDateAndNote:
    DEFAULT = date(2026, 10, 17)

    def test_leading_date(self):
        assert split_date_and_note(["2026-10-02", "Sviluppo", "API"], self.DEFAULT) == (
            date(2026, 10, 2), "Sviluppo API")

    def test_note_starting_with_a_digit(self):
        assert split_date_and_note(["3", "call", "con", "cliente"], self.DEFAULT) == (
            self.DEFAULT, "3 call con cliente")

    def test_nothing_after_hours(self):
        assert split_date_and_note([], self.DEFAULT) == (self.DEFAULT, None)


def test_progress_bar_caps_at_full():
    assert progress_bar(50, length=10) == "█████░░░░░"
    assert progress_bar(140, length=4) == "████"


class FakeMessage:
    def __init__(self):
        self.replies = []

    async def reply_text(self, text, **kwargs):
        self.replies.append(text)


def run_failing(exc):
    message = FakeMessage()

    @ledger_errors("/cmd <arg>")
    async def handler(update, context):
        raise exc

    asyncio.run(handler(SimpleNamespace(message=message), None))
    return message.replies


class TestLedgerErrors:
    def test_invalid_input_shows_usage(self):
        (reply,) = run_failing(InvalidInput("Mese non valido"))
        assert "Mese non valido" in reply
        assert "/cmd <arg>" in reply

    def test_unknown_client(self):
        (reply,) = run_failing(ClientNotFound(7))
        assert "7" in reply

    def test_other_ledger_errors_reported_as_failure(self):
        (reply,) = run_failing(DataAccessFailure("connection refused"))
        assert "connection refused" not in reply

    def test_unrelated_errors_propagate(self):
        with pytest.raises(KeyError):
            run_failing(KeyError("boom"))


class TestRateLimiter:
    def test_refuses_over_limit_then_recovers(self):
        now = [0.0]
        limiter = RateLimiter(max_calls=2, window=60, clock=lambda: now[0])
        assert limiter.allow(1) and limiter.allow(1)
        assert not limiter.allow(1)
        assert limiter.allow(2)
        now[0] = 60.0
        assert limiter.allow(1)

    def test_refused_calls_do_not_extend_the_window(self):
        now = [0.0]
        limiter = RateLimiter(max_calls=1, window=10, clock=lambda: now[0])
        limiter.allow(1)
        now[0] = 5.0
        assert not limiter.allow(1)
        now[0] = 10.0
        assert limiter.allow(1)


class TestWhitelist:
    def test_empty_whitelist_allows_everyone(self):
        assert is_allowed(42, [])

    def test_only_listed_users(self):
        assert is_allowed(42, [42, 7])
        assert not is_allowed(8, [42, 7])
