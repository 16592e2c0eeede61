"""
Logging and in-process metrics for TrueReview.

Log calls take keyword fields (`logger.info("Analysis finished", blocks=2)`).
In production the fields are emitted as one JSON object per line on stdout;
in development they are appended to a readable line as key=value pairs.
"""

import json
import logging
import sys
import time
from contextvars import ContextVar
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Dict, List, Optional

from truereview.config import settings

# Set per HTTP request by the API middleware
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

_FIELDS_ATTR = "fields"


class StructuredLogger:
    """Thin wrapper that turns keyword arguments into record fields."""

    def __init__(self, name: str):
        self._logger = logging.getLogger(name)

    def _emit(self, level: int, message: str, exc_info: bool = False, **fields):
        if self._logger.isEnabledFor(level):
            # stacklevel 3 points function/line at the caller, not this wrapper
            self._logger.log(level, message, exc_info=exc_info, extra={_FIELDS_ATTR: fields}, stacklevel=3)

    def debug(self, message: str, **fields):
        self._emit(logging.DEBUG, message, **fields)

    def info(self, message: str, **fields):
        self._emit(logging.INFO, message, **fields)

    def warning(self, message: str, **fields):
        self._emit(logging.WARNING, message, **fields)

    def error(self, message: str, exc_info: bool = False, **fields):
        self._emit(logging.ERROR, message, exc_info=exc_info, **fields)


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
            "environment": settings.environment,
        }
        request_id = request_id_var.get()
        if request_id:
            entry["request_id"] = request_id
        fields = getattr(record, _FIELDS_ATTR, None)
        if fields:
            entry["data"] = fields
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class KeyValueFormatter(logging.Formatter):
    """Readable development format with fields appended as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = getattr(record, _FIELDS_ATTR, None)
        if fields:
            line += " | " + " ".join(f"{key}={value}" for key, value in fields.items())
        return line


def setup_logging(level: str = "INFO", json_format: bool = True):
    """Replace root handlers with a single stdout handler."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if json_format else KeyValueFormatter())
    root_logger.addHandler(handler)

    logging.getLogger("python_multipart").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


def init_logging():
    """Initialize logging based on environment settings."""
    setup_logging(
        level="INFO" if settings.is_production else "DEBUG",
        json_format=settings.is_production,
    )


# ============== METRICS ==============


class MetricsCollector:
    """Process-local counters and latency samples, exposed on /admin/metrics."""

    MAX_SAMPLES = 1000

    def __init__(self):
        self._counters: Dict[str, int] = {}
        self._timings: Dict[str, List[float]] = {}
        self._start_time = time.time()

    def increment(self, name: str, value: int = 1):
        self._counters[name] = self._counters.get(name, 0) + value

    def timing(self, name: str, seconds: float):
        samples = self._timings.setdefault(name, [])
        samples.append(seconds)
        del samples[:-self.MAX_SAMPLES]

    def get_stats(self) -> Dict[str, Any]:
        timings = {}
        for name, samples in self._timings.items():
            ordered = sorted(samples)
            timings[name] = {
                "count": len(ordered),
                "avg_ms": round(1000 * sum(ordered) / len(ordered), 3),
                "p50_ms": round(1000 * ordered[len(ordered) // 2], 3),
                "max_ms": round(1000 * ordered[-1], 3),
            }
        return {
            "uptime_seconds": time.time() - self._start_time,
            "counters": dict(self._counters),
            "timings": timings,
        }

    def reset(self):
        self._counters.clear()
        self._timings.clear()


# Global metrics instance
metrics = MetricsCollector()


def track_analysis(name: str):
    """Count calls, empty inputs, verdicts and failures of an analysis function."""
    def decorator(func):
        logger = StructuredLogger(func.__module__)

        @wraps(func)
        def wrapper(*args, **kwargs):
            metrics.increment(f"analysis.{name}.total")
            start = time.perf_counter()
            try:
                report = func(*args, **kwargs)
            except Exception as e:
                metrics.increment(f"analysis.{name}.errors")
                logger.error(f"{func.__name__} failed", exc_info=True, error=str(e))
                raise
            metrics.timing(f"analysis.{name}.latency", time.perf_counter() - start)

            if report is None:
                metrics.increment(f"analysis.{name}.empty")
            else:
                verdict = report.verdict.lower().replace(" ", "_")
                metrics.increment(f"analysis.{name}.verdict.{verdict}")
            return report

        return wrapper

    return decorator
