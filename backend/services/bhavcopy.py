"""
NSE daily equity report (bhavcopy) retrieval and parsing.

The archive publishes one zip per trading day under
``{base}/{YYYY}/{MMM}/cm{DDMMMYYYY}bhav.csv.zip`` holding a single CSV member.
Days without a report (weekends, holidays, archive gaps) come back as
non-success responses and are reported as ``None``.
"""
from __future__ import annotations

import io
import logging
import math
import zipfile
import zlib
from dataclasses import dataclass
from datetime import date
from typing import Dict, Optional, Protocol

import pandas as pd
import requests

from app.settings import Settings
from services.errors import EmptyArchiveError, MalformedArchiveError

logger = logging.getLogger("scanner.bhavcopy")

MONTH_ABBR = ["JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC"]

NUMERIC_COLUMNS = ["OPEN", "HIGH", "LOW", "CLOSE", "TOTTRDQTY", "TOTTRDVAL"]
REQUIRED_COLUMNS = ["SYMBOL", "SERIES"] + NUMERIC_COLUMNS


@dataclass
class SessionRecord:
    symbol: str
    series: str
    open: float
    high: float
    low: float
    close: float
    volume: float
    traded_value: float


class SessionProvider(Protocol):
    def fetch(self, day: date) -> Optional[Dict[str, SessionRecord]]:
        ...


def build_archive_url(day: date, base_url: str) -> str:
    mmm = MONTH_ABBR[day.month - 1]
    return f"{base_url.rstrip('/')}/{day.year:04d}/{mmm}/cm{day.day:02d}{mmm}{day.year:04d}bhav.csv.zip"


def safe_number(value) -> float:
    """Parse a provider number; separators are stripped, junk becomes 0."""
    if value is None:
        return 0.0
    try:
        n = float(str(value).replace(",", "").strip())
    except ValueError:
        return 0.0
    return n if math.isfinite(n) else 0.0


def extract_first_member(payload: bytes) -> str:
    try:
        with zipfile.ZipFile(io.BytesIO(payload)) as archive:
            members = archive.namelist()
            if not members:
                raise EmptyArchiveError()
            data = archive.read(members[0])
    # Bad CRC, corrupt deflate stream, encrypted or unsupported members
    except (zipfile.BadZipFile, zlib.error, RuntimeError, NotImplementedError, EOFError) as e:
        raise MalformedArchiveError(f"Unreadable archive: {e}") from e
    return data.decode("utf-8", errors="ignore")


def parse_session(csv_text: str, equity_series: str = "EQ") -> Dict[str, SessionRecord]:
    """Parse one bhavcopy CSV into a symbol -> record map of regular equity rows."""
    df = pd.read_csv(io.StringIO(csv_text), dtype=str, skip_blank_lines=True, keep_default_na=False)
    df.columns = [str(c).strip() for c in df.columns]
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Bhavcopy is missing columns: {', '.join(missing)}")

    df = df[REQUIRED_COLUMNS].apply(lambda col: col.str.strip())
    df = df[df['SERIES'] == equity_series]

    records: Dict[str, SessionRecord] = {}
    for row in df.itertuples(index=False):
        # Last row wins on duplicate symbols
        records[row.SYMBOL] = SessionRecord(
            symbol=row.SYMBOL,
            series=row.SERIES,
            open=safe_number(row.OPEN),
            high=safe_number(row.HIGH),
            low=safe_number(row.LOW),
            close=safe_number(row.CLOSE),
            volume=safe_number(row.TOTTRDQTY),
            traded_value=safe_number(row.TOTTRDVAL),
        )
    return records


class NseArchiveProvider:
    """Fetches bhavcopy archives from the NSE historical equities archive."""

    def __init__(self, settings: Settings | None = None, session: requests.Session | None = None) -> None:
        self.settings = settings or Settings()
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': self.settings.user_agent,
            'Accept': 'application/zip,application/octet-stream,*/*',
            'Referer': self.settings.referer,
            'Cache-Control': 'no-cache',
        })

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "NseArchiveProvider":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def fetch_archive(self, url: str) -> Optional[bytes]:
        try:
            res = self.session.get(url, timeout=self.settings.request_timeout)
        except requests.RequestException as e:
            logger.debug(f"Request failed for {url}: {e}")
            return None
        if not res.ok:
            logger.debug(f"{url} returned HTTP {res.status_code}")
            return None
        return res.content

    def fetch(self, day: date) -> Optional[Dict[str, SessionRecord]]:
        url = build_archive_url(day, self.settings.archive_base_url)
        payload = self.fetch_archive(url)
        if payload is None:
            return None
        try:
            csv_text = extract_first_member(payload)
            records = parse_session(csv_text, self.settings.equity_series)
        except (EmptyArchiveError, MalformedArchiveError, ValueError, pd.errors.ParserError) as e:
            logger.info(f"Skipping {day.isoformat()}: {e}")
            return None
        return records or None
