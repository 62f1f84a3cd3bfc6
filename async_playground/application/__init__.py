"""
Application layer: demo use cases.
"""
from .demos import (
    ContextInheritanceResult,
    FanOutResult,
    RetentionResult,
    print_index,
    run_cancelled_long_task,
    run_context_inheritance,
    run_continuation_demo,
    run_fan_out,
    run_feeder_scenario,
    run_task_retention,
    run_underflow_scenario,
)

__all__ = [
    "ContextInheritanceResult",
    "FanOutResult",
    "RetentionResult",
    "print_index",
    "run_cancelled_long_task",
    "run_context_inheritance",
    "run_continuation_demo",
    "run_fan_out",
    "run_feeder_scenario",
    "run_task_retention",
    "run_underflow_scenario",
]
