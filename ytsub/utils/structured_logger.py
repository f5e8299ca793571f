"""
Structured logging of pass events.
Writes JSON lines with context next to the regular console log.
"""

import json
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Any


class StructuredLogger:
    """
    Logger that appends machine-parseable event entries to a JSON-lines file.

    Usage:
        logger = StructuredLogger("ytsub", log_dir=Path("logs"))
        logger.info("download_failed", url="https://...", returncode=1)
    """

    def __init__(
        self,
        name: str,
        log_dir: Path | None = None,
        enable_json: bool = True,
    ):
        """
        Initialize structured logger.

        Args:
            name: Logger name
            log_dir: Directory for JSON log files (None = disabled)
            enable_json: Enable JSON file logging
        """
        self.name = name
        self.log_dir = log_dir
        self.enable_json = enable_json and log_dir is not None

        self._json_file = None
        self.json_log_path: Path | None = None
        if self.enable_json:
            log_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            self.json_log_path = log_dir / f"ytsub_{timestamp}.jsonl"
            self._json_file = open(self.json_log_path, "a", encoding="utf-8")  # noqa: SIM115

        self._session_context: dict[str, Any] = {
            "session_id": f"{int(time.time())}_{id(self)}",
        }

    def _write_json(self, level: str, event: str, **context) -> None:
        if not self._json_file or self._json_file.closed:
            return

        entry = {
            "timestamp": datetime.now().isoformat(),
            "level": level,
            "event": event,
            **self._session_context,
            **context,
        }

        try:
            self._json_file.write(json.dumps(entry, default=str) + "\n")
            self._json_file.flush()
        except (OSError, TypeError, ValueError) as e:
            print(f"JSON logging failed: {e}", file=sys.stderr)

    def _log(self, level: str, event: str, **context) -> None:
        if self.enable_json:
            self._write_json(level, event, **context)

    def info(self, event: str, **context) -> None:
        self._log("INFO", event, **context)

    def warning(self, event: str, **context) -> None:
        self._log("WARNING", event, **context)

    def error(self, event: str, **context) -> None:
        self._log("ERROR", event, **context)

    def close(self) -> None:
        """Close JSON log file."""
        if self._json_file and not self._json_file.closed:
            self._json_file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class PassLogger:
    """Specialized logger for pass, download and organize events."""

    def __init__(self, logger: StructuredLogger | None = None):
        self.logger = logger or StructuredLogger("ytsub.events", enable_json=False)

    def pass_started(self, subscriptions: int, total_urls: int):
        self.logger.info("pass_started", subscriptions=subscriptions, total_urls=total_urls)

    def pass_skipped(self, interval_s: int | None):
        self.logger.warning(
            "pass_skipped", reason="previous pass still running", interval_s=interval_s
        )

    def pass_failed(self, error: str):
        self.logger.error("pass_failed", error=error)

    def pass_completed(
        self,
        duration_s: float,
        urls_succeeded: int,
        urls_failed: int,
        files_moved: int,
        files_failed: int,
    ):
        self.logger.info(
            "pass_completed",
            duration_s=round(duration_s, 2),
            urls_succeeded=urls_succeeded,
            urls_failed=urls_failed,
            files_moved=files_moved,
            files_failed=files_failed,
        )

    def download_completed(self, subscription: str, url: str):
        self.logger.info("download_completed", subscription=subscription, url=url)

    def download_failed(self, subscription: str, url: str, error: str, returncode: int | None):
        self.logger.error(
            "download_failed",
            subscription=subscription,
            url=url,
            error=error,
            returncode=returncode,
        )

    def file_moved(self, subscription: str, filename: str, destination: str):
        self.logger.info(
            "file_moved", subscription=subscription, filename=filename, destination=destination
        )

    def file_move_failed(self, subscription: str, filename: str):
        self.logger.error("file_move_failed", subscription=subscription, filename=filename)


def create_pass_logger(log_dir: Path | None = None) -> tuple[StructuredLogger, PassLogger]:
    """
    Create the structured loggers.

    Returns:
        Tuple of (base_logger, pass_logger)
    """
    base = StructuredLogger("ytsub.events", log_dir=log_dir, enable_json=log_dir is not None)
    return base, PassLogger(base)
