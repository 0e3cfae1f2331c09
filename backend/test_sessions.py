"""
Unit tests for the trading session locator
"""
from datetime import date, timedelta

from conftest import FakeProvider, make_record
from services.sessions import locate_sessions

# 2024-01-08 is a Monday
MONDAY = date(2024, 1, 8)


def session_for(symbol="ABC"):
    return {symbol: make_record(symbol, 110, 90, 100, 1000)}


def test_skips_weekends_and_returns_most_recent_first():
    days = [date(2024, 1, d) for d in (1, 2, 3, 4, 5, 8)]
    provider = FakeProvider({d: session_for() for d in days})

    sessions = locate_sessions(provider, date(2024, 1, 9), target=5)

    assert [s.trade_date for s in sessions] == [date(2024, 1, d) for d in (8, 5, 4, 3, 2)]
    assert all(d.weekday() < 5 for d in provider.calls)


def test_starts_from_previous_day_unless_today_included():
    provider = FakeProvider({MONDAY: session_for()})
    sessions = locate_sessions(provider, MONDAY, target=1)
    assert provider.calls[0] == MONDAY - timedelta(days=3)
    assert sessions == []

    provider = FakeProvider({MONDAY: session_for()})
    sessions = locate_sessions(provider, MONDAY, target=1, include_today=True)
    assert [s.trade_date for s in sessions] == [MONDAY]


def test_holidays_count_against_budget():
    """Missing weekdays are probed until target + max_lookback probes are spent"""
    provider = FakeProvider({})
    sessions = locate_sessions(provider, MONDAY, target=5, max_lookback=12)
    assert sessions == []
    assert len(provider.calls) == 17
    assert all(d.weekday() < 5 for d in provider.calls)


def test_partial_window_when_budget_runs_out():
    provider = FakeProvider({date(2024, 1, 5): session_for(), date(2024, 1, 4): session_for()})
    sessions = locate_sessions(provider, MONDAY, target=5, max_lookback=2)
    assert [s.trade_date for s in sessions] == [date(2024, 1, 5), date(2024, 1, 4)]
    assert len(provider.calls) == 7


def test_empty_session_map_is_skipped():
    provider = FakeProvider({date(2024, 1, 5): {}, date(2024, 1, 4): session_for()})
    sessions = locate_sessions(provider, MONDAY, target=1)
    assert [s.trade_date for s in sessions] == [date(2024, 1, 4)]
