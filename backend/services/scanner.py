from __future__ import annotations

import logging
import time
from datetime import date

from app.settings import Settings
from models.scanner import ScanResponse
from services.bhavcopy import NseArchiveProvider, SessionProvider
from services.errors import NoSessionsError
from services.money_flow import aggregate_sessions
from services.ranking import rank_accumulators
from services.sessions import locate_sessions

logger = logging.getLogger("scanner.pipeline")


def run_scan(
    provider: SessionProvider | None = None,
    settings: Settings | None = None,
    today: date | None = None,
) -> ScanResponse:
    """Run one stealth-accumulation scan. All state is local to the call."""
    settings = settings or Settings()
    today = today or date.today()
    if provider is None:
        with NseArchiveProvider(settings) as owned:
            return _scan(owned, settings, today)
    return _scan(provider, settings, today)


def _scan(provider: SessionProvider, settings: Settings, today: date) -> ScanResponse:
    started = time.perf_counter()
    sessions = locate_sessions(
        provider,
        today,
        target=settings.target_sessions,
        max_lookback=settings.max_lookback,
        include_today=settings.include_today,
    )
    if not sessions:
        logger.warning(f"No sessions retrievable looking back from {today.isoformat()}")
        raise NoSessionsError()

    accumulators, days_folded = aggregate_sessions(sessions)
    if days_folded == 0:
        raise NoSessionsError()

    top_stocks = rank_accumulators(
        accumulators,
        days_folded,
        target=settings.target_sessions,
        min_days=settings.min_coverage_days,
        top_n=settings.top_n,
        liquidity_weight=settings.liquidity_weight,
    )
    logger.info(
        f"Scan complete: {days_folded} sessions, {len(accumulators)} symbols, "
        f"{len(top_stocks)} ranked in {time.perf_counter() - started:.1f}s"
    )
    return ScanResponse(days_analyzed=days_folded, top_stocks=top_stocks)
