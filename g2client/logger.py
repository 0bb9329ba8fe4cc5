"""
Message-id based logging for the G2 clients.

Every log line is identified by a numeric message id. The id selects the
catalog text, the level and the published identifier
(``senzing-<product><id>``), so callers only pass an id and detail values.
Also tracks per-operation call metrics.
"""

import json
import logging
import sys
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

TRACE = 5
PANIC = logging.CRITICAL + 10

logging.addLevelName(TRACE, "TRACE")
logging.addLevelName(PANIC, "PANIC")

LEVELS = {
    "TRACE": TRACE,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "FATAL": logging.CRITICAL,
    "CRITICAL": logging.CRITICAL,
    "PANIC": PANIC,
}

# (first id, last id, level)
ID_LEVEL_RANGES = [
    (0, 999, TRACE),
    (1000, 1999, logging.DEBUG),
    (2000, 2999, logging.INFO),
    (3000, 3999, logging.WARNING),
    (4000, 4999, logging.ERROR),
    (5000, 5999, logging.CRITICAL),
    (6000, 6999, PANIC),
]

MESSAGE_ID_TEMPLATE = "senzing-{product_id:04d}{message_id:04d}"


def level_for_id(message_id: int) -> int:
    """Return the logging level implied by a message id."""
    for low, high, level in ID_LEVEL_RANGES:
        if low <= message_id <= high:
            return level
    return logging.INFO


def parse_level(level: str) -> int:
    """Translate a level name (TRACE ... PANIC) into a logging level."""
    try:
        return LEVELS[level.upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {level}") from None


class MessageLogger:
    """
    Logger keyed by message ids, with console and file outputs.
    Tracks metrics for the remote operations issued through it.
    """

    def __init__(
        self,
        name: str = "g2client",
        level: str = "INFO",
        product_id: int = 9999,
        id_messages: Optional[Dict[int, str]] = None,
        log_dir: Optional[Path] = None,
        enable_file: bool = False,
        enable_console: bool = True,
    ):
        """
        Initialize the message logger.

        Args:
            name: Logger name
            level: Log level (TRACE, DEBUG, INFO, WARN, ERROR, FATAL, PANIC)
            product_id: Component id used in published message ids
            id_messages: Catalog of message id -> text
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.product_id = product_id
        self.id_messages = dict(id_messages or {})
        # Not registered with logging.getLogger: two clients with the same
        # name must not share level or handlers.
        self.logger = logging.Logger(name, parse_level(level))
        self.logger.propagate = False

        self._lock = threading.Lock()
        self.metrics = {
            "calls": 0,
            "calls_successful": 0,
            "calls_failed": 0,
            "errors_by_type": {},
            "operation_success_rate": {},
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"g2client_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            self.logger.addHandler(file_handler)

        if not self.logger.handlers:
            self.logger.addHandler(logging.NullHandler())

    def close(self):
        """Flush and close every handler of this logger."""
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

    def set_level(self, level: str):
        """Change the level filter of the underlying logger."""
        self.logger.setLevel(parse_level(level))

    def is_trace(self) -> bool:
        """True when TRACE messages would be emitted."""
        return self.logger.isEnabledFor(TRACE)

    def message_id(self, message_id: int) -> str:
        return MESSAGE_ID_TEMPLATE.format(product_id=self.product_id, message_id=message_id)

    def log(self, message_id: int, *details: Any):
        """Log the catalog message for message_id with detail values."""
        level = level_for_id(message_id)
        if not self.logger.isEnabledFor(level):
            return
        text = self.id_messages.get(message_id, f"Unknown message id {message_id}.")
        message = f"{self.message_id(message_id)}: {text}"
        if details:
            message = f"{message} | Context: {json.dumps(list(details), default=str)}"
        self.logger.log(level, message)

    def info(self, message: str, **kwargs):
        """Log free-form info message with optional context."""
        if kwargs:
            message = f"{message} | Context: {json.dumps(kwargs, default=str)}"
        self.logger.info(message)

    # Metric tracking methods

    def record_call(self, operation: str):
        """Record a remote operation attempt."""
        with self._lock:
            self.metrics["calls"] += 1
            stats = self.metrics["operation_success_rate"].setdefault(
                operation, {"attempts": 0, "successes": 0}
            )
            stats["attempts"] += 1

    def record_success(self, operation: str):
        """Record successful remote operation."""
        with self._lock:
            self.metrics["calls_successful"] += 1
            if operation in self.metrics["operation_success_rate"]:
                self.metrics["operation_success_rate"][operation]["successes"] += 1

    def record_failure(self, operation: str, error_type: str):
        """Record failed remote operation."""
        with self._lock:
            self.metrics["calls_failed"] += 1
            errors = self.metrics["errors_by_type"]
            errors[error_type] = errors.get(error_type, 0) + 1

    def get_metrics(self) -> dict:
        """Return a snapshot of current metrics."""
        with self._lock:
            snapshot = {
                "calls": self.metrics["calls"],
                "calls_successful": self.metrics["calls_successful"],
                "calls_failed": self.metrics["calls_failed"],
                "errors_by_type": dict(self.metrics["errors_by_type"]),
                "operation_success_rate": {
                    op: dict(stats) for op, stats in self.metrics["operation_success_rate"].items()
                },
            }
        for stats in snapshot["operation_success_rate"].values():
            if stats["attempts"] > 0:
                stats["success_rate"] = round(stats["successes"] / stats["attempts"], 3)
        return snapshot

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        total = metrics["calls"]
        overall_rate = 0
        if total > 0:
            overall_rate = round(metrics["calls_successful"] / total * 100, 1)

        self.info("=== Remote Call Metrics ===")
        self.info(f"Calls: {metrics['calls_successful']}/{total} ({overall_rate}% success)")

        for operation, stats in metrics["operation_success_rate"].items():
            rate = stats.get("success_rate", 0) * 100
            self.info(f"  {operation}: {stats['successes']}/{stats['attempts']} ({rate:.1f}%)")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")
