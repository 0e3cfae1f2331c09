"""
In-memory log history for the scanner service

Features:
- Structured entries with levels (INFO, WARN, ERROR, DEBUG)
- Python ``logging`` integration for everything under the ``scanner`` logger
- Bounded, thread-safe history served by the /logs endpoints
"""

import logging
import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Deque, Dict, List, Optional

from services.serialization import make_json_serializable


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


LEVEL_MAP = {
    logging.DEBUG: LogLevel.DEBUG,
    logging.INFO: LogLevel.INFO,
    logging.WARNING: LogLevel.WARN,
    logging.ERROR: LogLevel.ERROR,
    logging.CRITICAL: LogLevel.ERROR,
}


@dataclass
class LogEntry:
    timestamp: str
    level: LogLevel
    message: str
    context: Optional[Dict[str, Any]] = None
    module: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "level": self.level.value,
            "message": self.message,
            "context": make_json_serializable(self.context or {}),
            "module": self.module,
        }


class LoggingManager:
    """Keeps the most recent ``max_logs`` entries"""

    def __init__(self, max_logs: int = 1000, logger_name: str = "scanner"):
        self.logs: Deque[LogEntry] = deque(maxlen=max_logs)
        self.lock = threading.RLock()
        self.setup_python_logging(logger_name)

    def setup_python_logging(self, logger_name: str):
        handler = LoggingHandler(self)
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter('%(message)s'))

        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.DEBUG)
        logger.addHandler(handler)

    def add_log(self, level: LogLevel, message: str, context: Optional[Dict[str, Any]] = None, module: Optional[str] = None):
        entry = LogEntry(
            timestamp=datetime.now().isoformat(),
            level=level,
            message=message,
            context=context,
            module=module,
        )
        with self.lock:
            self.logs.append(entry)

    def get_logs(self, limit: Optional[int] = None) -> List[LogEntry]:
        with self.lock:
            logs = list(self.logs)
        return logs[-limit:] if limit else logs

    def clear_logs(self):
        with self.lock:
            self.logs.clear()

    def info(self, message: str, context: Optional[Dict[str, Any]] = None, module: Optional[str] = None):
        self.add_log(LogLevel.INFO, message, context, module)

    def warn(self, message: str, context: Optional[Dict[str, Any]] = None, module: Optional[str] = None):
        self.add_log(LogLevel.WARN, message, context, module)

    def error(self, message: str, context: Optional[Dict[str, Any]] = None, module: Optional[str] = None):
        self.add_log(LogLevel.ERROR, message, context, module)


class LoggingHandler(logging.Handler):
    """Routes standard logging records into a LoggingManager"""

    def __init__(self, manager: LoggingManager):
        super().__init__()
        self.manager = manager

    def emit(self, record):
        try:
            context = {
                'filename': record.filename,
                'lineno': record.lineno,
                'funcname': record.funcName,
            }
            level = LEVEL_MAP.get(record.levelno, LogLevel.INFO)
            self.manager.add_log(level, self.format(record), context, record.name)
        except Exception:
            self.handleError(record)


# Global logging manager instance
logging_manager = LoggingManager()


def log_info(message: str, context: Optional[Dict[str, Any]] = None, module: Optional[str] = None):
    logging_manager.info(message, context, module)


def log_warn(message: str, context: Optional[Dict[str, Any]] = None, module: Optional[str] = None):
    logging_manager.warn(message, context, module)


def log_error(message: str, context: Optional[Dict[str, Any]] = None, module: Optional[str] = None):
    logging_manager.error(message, context, module)
