from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List

from services.bhavcopy import SessionProvider, SessionRecord

logger = logging.getLogger("scanner.sessions")

WEEKEND = (5, 6)  # Saturday, Sunday


@dataclass
class TradingSession:
    trade_date: date
    records: Dict[str, SessionRecord]


def locate_sessions(
    provider: SessionProvider,
    today: date,
    target: int = 5,
    max_lookback: int = 12,
    include_today: bool = False,
) -> List[TradingSession]:
    """Walk backward from ``today`` collecting up to ``target`` sessions, most recent first.

    Weekends are skipped for free. Every weekday probe counts against a budget
    of ``target + max_lookback`` so the walk always terminates. An empty list
    means nothing was retrievable within the budget.
    """
    sessions: List[TradingSession] = []
    probes = 0
    cursor = today if include_today else today - timedelta(days=1)

    while len(sessions) < target and probes < target + max_lookback:
        if cursor.weekday() not in WEEKEND:
            probes += 1
            records = provider.fetch(cursor)
            if records:
                sessions.append(TradingSession(trade_date=cursor, records=records))
                logger.info(f"Found session {cursor.isoformat()} with {len(records)} symbols")
            else:
                logger.debug(f"No data for {cursor.isoformat()}")
        cursor -= timedelta(days=1)

    if len(sessions) < target:
        logger.warning(f"Collected {len(sessions)}/{target} sessions after {probes} probes")
    return sessions
