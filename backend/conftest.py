"""
Shared fixtures for scanner tests
"""
import io
import zipfile
from datetime import date
from typing import Dict, Optional

import pytest

from services.bhavcopy import SessionRecord

BHAV_HEADER = "SYMBOL,SERIES,OPEN,HIGH,LOW,CLOSE,LAST,PREVCLOSE,TOTTRDQTY,TOTTRDVAL,TIMESTAMP,TOTALTRADES,ISIN,"


def make_record(symbol: str, high: float, low: float, close: float, volume: float,
                traded_value: Optional[float] = None, series: str = "EQ") -> SessionRecord:
    return SessionRecord(
        symbol=symbol,
        series=series,
        open=low,
        high=high,
        low=low,
        close=close,
        volume=volume,
        traded_value=traded_value if traded_value is not None else close * volume,
    )


def make_bhav_zip(rows, member_name: str = "cm01JAN2024bhav.csv") -> bytes:
    """Build an in-memory bhavcopy archive; rows are CSV lines without the header."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(member_name, "\n".join([BHAV_HEADER] + list(rows)) + "\n")
    return buf.getvalue()


class FakeProvider:
    """Serves fixed sessions by date and records every probe"""

    def __init__(self, sessions: Dict[date, Dict[str, SessionRecord]]):
        self.sessions = sessions
        self.calls = []

    def fetch(self, day: date):
        self.calls.append(day)
        return self.sessions.get(day)


@pytest.fixture
def fake_provider_factory():
    return FakeProvider
