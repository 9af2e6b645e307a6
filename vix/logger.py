"""Logging handler that appends formatted records to a file."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

_LEVEL_NAMES = {
    logging.CRITICAL: "ERROR",
    logging.ERROR: "ERROR",
    logging.WARNING: "WARN",
    logging.INFO: "INFO",
    logging.DEBUG: "DEBUG",
}


class FileLogger(logging.Handler):
    """Append every record at DEBUG level or above to a log file."""

    def __init__(self, log_path: str | Path) -> None:
        super().__init__(level=logging.DEBUG)
        self.path = Path(log_path)
        self._file = open(self.path, "a", encoding="utf-8")

    @classmethod
    def init(cls, log_path: str | Path) -> FileLogger:
        """Create the log file and install the handler on the root logger."""
        path = Path(log_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = cls(path)
        root = logging.getLogger()
        for existing in [h for h in root.handlers if isinstance(h, FileLogger)]:
            root.removeHandler(existing)
            existing.close()
        root.addHandler(handler)
        root.setLevel(logging.DEBUG)
        return handler

    def format(self, record: logging.LogRecord) -> str:
        """Render a record as one timestamped log line."""
        stamp = datetime.fromtimestamp(record.created)
        timestamp = stamp.strftime("%Y-%m-%d %H:%M:%S") + f".{stamp.microsecond // 1000:03d}"
        level = _LEVEL_NAMES.get(record.levelno, record.levelname)
        source = record.pathname or "unknown"
        lineno = record.lineno or 0
        return f"[{timestamp}] {level} [{source}:{lineno}] {record.getMessage()}\n"

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._file.write(self.format(record))
            self._file.flush()
        except (OSError, ValueError):
            pass

    def flush(self) -> None:
        try:
            self._file.flush()
        except (OSError, ValueError):
            pass

    def close(self) -> None:
        try:
            self._file.close()
        finally:
            super().close()