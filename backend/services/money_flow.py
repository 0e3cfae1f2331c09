"""
Chaikin money-flow accumulation across trading sessions.

Sessions must be folded oldest first: ``first_close`` is pinned on a symbol's
first contribution and ``last_close`` follows the latest one.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from services.bhavcopy import SessionRecord
from services.sessions import TradingSession

logger = logging.getLogger("scanner.money_flow")


@dataclass
class SymbolAccumulator:
    symbol: str
    sum_volume: float = 0.0
    sum_traded_value: float = 0.0
    sum_mf_volume: float = 0.0
    days: int = 0
    first_close: Optional[float] = None
    last_close: Optional[float] = None


def money_flow_multiplier(high: float, low: float, close: float) -> float:
    """Position of the close inside the day's range, in [-1, 1]. Flat days give 0."""
    day_range = high - low
    if day_range == 0:
        return 0.0
    return ((close - low) - (high - close)) / day_range


def fold_session(accumulators: Dict[str, SymbolAccumulator], records: Dict[str, SessionRecord]) -> int:
    """Fold one session into ``accumulators``; returns the number of rows that contributed."""
    contributed = 0
    for symbol, r in records.items():
        if r.volume <= 0 or r.high <= 0 or r.low <= 0:
            continue

        mfv = money_flow_multiplier(r.high, r.low, r.close) * r.volume

        acc = accumulators.get(symbol)
        if acc is None:
            acc = accumulators[symbol] = SymbolAccumulator(symbol=symbol)
        acc.sum_volume += r.volume
        acc.sum_traded_value += r.traded_value
        acc.sum_mf_volume += mfv
        acc.days += 1
        if acc.first_close is None:
            acc.first_close = r.close
        acc.last_close = r.close
        contributed += 1
    return contributed


def aggregate_sessions(sessions: Iterable[TradingSession]) -> Tuple[Dict[str, SymbolAccumulator], int]:
    """Fold sessions in chronological order regardless of the order given.

    Returns the accumulators and the number of sessions that contributed at least one row.
    """
    accumulators: Dict[str, SymbolAccumulator] = {}
    days_folded = 0
    for session in sorted(sessions, key=lambda s: s.trade_date):
        contributed = fold_session(accumulators, session.records)
        if contributed:
            days_folded += 1
        else:
            logger.debug(f"Session {session.trade_date.isoformat()} had no usable rows")
    return accumulators, days_folded
