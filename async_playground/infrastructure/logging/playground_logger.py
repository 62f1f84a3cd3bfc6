"""
Structured logging for the playground.

Formatters for the package logger configured by the CLI:
- JSONFormatter for machine consumption and log files
- HumanFormatter for the console

Records may carry ``actor_id``, ``correlation_id``, ``operation`` and
``duration_ms`` through ``extra=``; both formatters pick them up.
"""
import json
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional


_CONTEXT_FIELDS = ("actor_id", "correlation_id", "operation", "duration_ms")


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in _CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                data[name] = value

        if record.exc_info and record.exc_info[0]:
            data["error"] = str(record.exc_info[1])
            data["error_type"] = record.exc_info[0].__name__

        return json.dumps(data, default=str)


class HumanFormatter(logging.Formatter):
    """Short console lines: time, level, optional actor, message, duration."""

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            f"[{datetime.fromtimestamp(record.created).strftime('%H:%M:%S')}]",
            f"[{record.levelname}]",
        ]

        actor_id = getattr(record, "actor_id", None)
        if actor_id:
            parts.append(f"[{actor_id}]")

        parts.append(record.getMessage())

        duration_ms = getattr(record, "duration_ms", None)
        if duration_ms is not None:
            parts.append(f"({duration_ms:.2f}ms)")

        if record.exc_info and record.exc_info[1] is not None:
            parts.append(f"ERROR: {record.exc_info[1]}")

        return " ".join(parts)


@dataclass
class OperationTiming:
    """Filled in when a timed operation finishes."""
    operation: str
    duration_ms: Optional[float] = None


@contextmanager
def timed_operation(
    logger: logging.Logger,
    operation: str,
    correlation_id: Optional[str] = None,
) -> Iterator[OperationTiming]:
    """
    Log the start, outcome and duration of a block.

    Usage:
        with timed_operation(logger, "feeder", correlation_id="ab12cd34") as timing:
            await run_feeder_scenario(feeder)
        timing.duration_ms
    """
    timing = OperationTiming(operation=operation)
    extra = {"operation": operation, "correlation_id": correlation_id}
    start = time.perf_counter()
    logger.debug(f"Starting {operation}", extra=extra)
    try:
        yield timing
    except Exception:
        timing.duration_ms = (time.perf_counter() - start) * 1000
        logger.error(
            f"Failed {operation}",
            exc_info=True,
            extra={**extra, "duration_ms": timing.duration_ms},
        )
        raise
    timing.duration_ms = (time.perf_counter() - start) * 1000
    logger.info(
        f"Completed {operation}",
        extra={**extra, "duration_ms": timing.duration_ms},
    )
