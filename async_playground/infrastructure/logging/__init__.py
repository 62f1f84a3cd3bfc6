from .playground_logger import (
    HumanFormatter,
    JSONFormatter,
    OperationTiming,
    timed_operation,
)

__all__ = [
    "HumanFormatter",
    "JSONFormatter",
    "OperationTiming",
    "timed_operation",
]
