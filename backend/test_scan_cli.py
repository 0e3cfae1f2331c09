"""
Tests for the command-line scan runner and log history
"""
import json
from datetime import date

import numpy as np

import scan
from logging_manager import LoggingManager, LogLevel
from models.scanner import RankedStock, ScanResponse
from services.errors import NoSessionsError
from services.serialization import make_json_serializable


def test_cli_prints_payload(monkeypatch, capsys):
    seen = {}

    def fake_run_scan(settings=None, today=None):
        seen["today"] = today
        seen["top_n"] = settings.top_n
        return ScanResponse(days_analyzed=5, top_stocks=[RankedStock(
            symbol="ABC", cmf=0.7, total_traded_value=1e6, total_volume=3000,
            days_count=5, price_change_5d_percent=12.38,
        )])

    monkeypatch.setattr(scan, "run_scan", fake_run_scan)
    assert scan.main(["--date", "2024-01-09", "--top", "3"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["daysAnalyzed"] == 5
    assert payload["topStocks"][0]["priceChange5dPercent"] == 12.38
    assert seen == {"today": date(2024, 1, 9), "top_n": 3}


def test_cli_exhaustion_exit_code(monkeypatch, capsys):
    def fake_run_scan(settings=None, today=None):
        raise NoSessionsError()

    monkeypatch.setattr(scan, "run_scan", fake_run_scan)
    assert scan.main([]) == 2
    assert "No recent trading days" in capsys.readouterr().err


def test_logging_manager_is_bounded():
    manager = LoggingManager(max_logs=3, logger_name="scanner.test_bounded")
    for i in range(5):
        manager.info(f"message {i}")
    logs = manager.get_logs()
    assert [entry.message for entry in logs] == ["message 2", "message 3", "message 4"]
    assert manager.get_logs(limit=1)[0].level == LogLevel.INFO
    manager.clear_logs()
    assert manager.get_logs() == []


def test_serialization_handles_numpy_and_non_finite():
    data = {"a": np.float64(1.5), "b": np.int64(2), "c": float("nan"), "d": date(2024, 1, 1), "e": (np.bool_(True),)}
    assert make_json_serializable(data) == {"a": 1.5, "b": 2, "c": None, "d": "2024-01-01", "e": [True]}
