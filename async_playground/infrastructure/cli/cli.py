"""
Async Playground Command-Line Interface.

Provides commands for:
- feeder: Concurrent start/stop eating against the ChickenFeeder actor
- underflow: Decrement an empty counter
- fan-out: Sequential vs. concurrent vs. task-group calls
- cancel: Cancel a long-running task
- continuation: Await a callback-style API answered on another thread
- context: Compare inherited and detached task contexts
- retention: Show a running task keeping its owner alive
- config: Show configuration
"""
import argparse
import asyncio
import logging
import sys
import uuid
from pathlib import Path
from typing import Optional, List

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from async_playground.application.demos import (
    run_cancelled_long_task,
    run_context_inheritance,
    run_continuation_demo,
    run_fan_out,
    run_feeder_scenario,
    run_task_retention,
    run_underflow_scenario,
)
from async_playground.domain.counter_events import CounterSnapshot
from async_playground.infrastructure.actors.counter_actor import (
    ChickenFeeder,
    IsolatedCounter,
)
from async_playground.infrastructure.cli.config import PlaygroundConfig
from async_playground.infrastructure.errors import PlaygroundError
from async_playground.infrastructure.logging.playground_logger import (
    HumanFormatter,
    JSONFormatter,
    timed_operation,
)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the playground CLI."""
    parser = argparse.ArgumentParser(
        prog="async-playground",
        description="Asyncio playground - actors, fan-out and cancellation demos",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s feeder
  %(prog)s underflow
  %(prog)s fan-out --width 5
  %(prog)s cancel --seconds 2
  %(prog)s continuation --name Ada
  %(prog)s context --label request-42
  %(prog)s retention
  %(prog)s config --show
        """,
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress non-essential output",
    )

    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit log lines as JSON",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "feeder",
        help="Three chickens start and stop eating concurrently",
    )

    subparsers.add_parser(
        "underflow",
        help="Decrement a counter that is already at zero",
    )

    fan_out_parser = subparsers.add_parser(
        "fan-out",
        help="Compare sequential, concurrent and task-group calls",
    )
    fan_out_parser.add_argument(
        "--width",
        type=int,
        help="Number of calls per strategy (default: from config)",
    )

    cancel_parser = subparsers.add_parser(
        "cancel",
        help="Start a long-running task and cancel it",
    )
    cancel_parser.add_argument(
        "--seconds",
        type=float,
        help="Duration of the long task (default: from config)",
    )

    continuation_parser = subparsers.add_parser(
        "continuation",
        help="Await a callback-style greeting service running on a worker thread",
    )
    continuation_parser.add_argument(
        "--name",
        default="world",
        help="Name to greet (default: world)",
    )

    context_parser = subparsers.add_parser(
        "context",
        help="Compare context seen by inherited and detached tasks",
    )
    context_parser.add_argument(
        "--label",
        default="main",
        help="Request label set by the caller (default: main)",
    )

    retention_parser = subparsers.add_parser(
        "retention",
        help="Drop an owner while its task runs and watch when it is released",
    )
    retention_parser.add_argument(
        "--seconds",
        type=float,
        default=0.5,
        help="Duration of the owner's task (default: 0.5)",
    )

    config_parser = subparsers.add_parser(
        "config",
        help="Show configuration",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        help="Show current configuration",
    )

    return parser


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = create_parser()
    return parser.parse_args(args)


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    json_output: bool = False,
    level: str = "INFO",
    log_dir: Optional[str] = None,
) -> logging.Logger:
    """Configure the package logger for CLI use."""
    if verbose:
        log_level = logging.DEBUG
    elif quiet:
        log_level = logging.WARNING
    else:
        log_level = getattr(logging, level)

    logger = logging.getLogger("async_playground")
    logger.setLevel(log_level)

    # Clear existing handlers
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(JSONFormatter() if json_output else HumanFormatter())
    logger.addHandler(console_handler)

    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(Path(log_dir) / "async_playground.log")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    return logger


def _snapshot_panel(title: str, snapshot: CounterSnapshot) -> Panel:
    content = Table.grid(padding=1)
    content.add_column(justify="right")
    content.add_column()
    content.add_row(Text("Count:", style="dim"), Text(str(snapshot.count), style="bold"))
    content.add_row(
        Text("Underflows:", style="dim"),
        Text(str(snapshot.underflow_count), style="yellow" if snapshot.underflow_count else "green"),
    )
    content.add_row(Text("Messages:", style="dim"), Text(str(snapshot.processed)))
    return Panel(content, title=title, border_style="blue")


async def run_feeder(
    args: argparse.Namespace,
    config: PlaygroundConfig,
    logger: logging.Logger,
    console: Console,
) -> int:
    """Execute the feeder command."""
    feeder = ChickenFeeder(ask_timeout=config.ask_timeout)
    await feeder.start()
    try:
        snapshot = await run_feeder_scenario(feeder)
    finally:
        await feeder.stop()

    console.print(_snapshot_panel("Chicken feeder", snapshot))
    return 0


async def run_underflow(
    args: argparse.Namespace,
    config: PlaygroundConfig,
    logger: logging.Logger,
    console: Console,
) -> int:
    """Execute the underflow command."""
    counter = IsolatedCounter(ask_timeout=config.ask_timeout)
    await counter.start()
    try:
        snapshot = await run_underflow_scenario(counter)
    finally:
        await counter.stop()

    console.print(_snapshot_panel("Underflow", snapshot))
    return 0


async def run_fan_out_command(
    args: argparse.Namespace,
    config: PlaygroundConfig,
    logger: logging.Logger,
    console: Console,
) -> int:
    """Execute the fan-out command."""
    width = args.width if args.width is not None else config.fan_out_width
    if width < 1:
        logger.error(f"--width must be at least 1, got {width}")
        return 1

    result = await run_fan_out(width)

    table = Table(title=f"Fan-out ({width} calls)")
    table.add_column("Strategy", style="bold")
    table.add_column("Results")
    table.add_row("sequential", ", ".join(result.sequential))
    table.add_row("concurrent", ", ".join(result.concurrent))
    table.add_row("task group", ", ".join(result.task_group))
    console.print(table)
    return 0


async def run_cancel(
    args: argparse.Namespace,
    config: PlaygroundConfig,
    logger: logging.Logger,
    console: Console,
) -> int:
    """Execute the cancel command."""
    seconds = args.seconds if args.seconds is not None else config.long_task_seconds
    outcome = await run_cancelled_long_task(seconds)
    style = "yellow" if outcome == "cancelled" else "green"
    console.print(Text(f"Long running task: {outcome}", style=style))
    return 0


async def run_continuation(
    args: argparse.Namespace,
    config: PlaygroundConfig,
    logger: logging.Logger,
    console: Console,
) -> int:
    """Execute the continuation command."""
    try:
        greeting = await run_continuation_demo(args.name, timeout=config.ask_timeout)
    except ValueError as e:
        logger.error(f"Greeting service failed: {e}")
        return 1

    console.print(Panel(Text(greeting, style="bold"), title="Continuation", border_style="blue"))
    return 0


async def run_context(
    args: argparse.Namespace,
    config: PlaygroundConfig,
    logger: logging.Logger,
    console: Console,
) -> int:
    """Execute the context command."""
    result = await run_context_inheritance(args.label)

    table = Table(title="Context inheritance")
    table.add_column("Reader", style="bold")
    table.add_column("request_label")
    table.add_row("caller", result.caller)
    table.add_row("create_task", result.inherited)
    table.add_row("fresh context", result.detached)
    table.add_row("caller after child set", result.caller_after_child_set)
    console.print(table)
    return 0


async def run_retention(
    args: argparse.Namespace,
    config: PlaygroundConfig,
    logger: logging.Logger,
    console: Console,
) -> int:
    """Execute the retention command."""
    result = await run_task_retention(args.seconds)

    content = Table.grid(padding=1)
    content.add_column(justify="right")
    content.add_column()
    content.add_row(Text("Alive while task runs:", style="dim"), Text(str(result.alive_while_running)))
    content.add_row(Text("Alive after task ends:", style="dim"), Text(str(result.alive_after_finish)))
    content.add_row(Text("Text:", style="dim"), Text(result.text, style="bold"))
    console.print(Panel(content, title="Task retention", border_style="blue"))
    return 0


async def run_config(
    args: argparse.Namespace,
    config: PlaygroundConfig,
    logger: logging.Logger,
    console: Console,
) -> int:
    """Execute the config command."""
    if not args.show:
        logger.info("Use --show to display the current configuration")
        return 0

    table = Table(title="Configuration")
    table.add_column("Key", style="bold")
    table.add_column("Value")
    for key, value in config.to_dict().items():
        table.add_row(key, str(value))
    console.print(table)
    return 0


async def main_async(
    args: Optional[List[str]] = None,
    console: Optional[Console] = None,
) -> int:
    """Async main entry point."""
    parsed_args = parse_args(args)

    if not parsed_args.command:
        create_parser().print_help()
        return 0

    try:
        config = PlaygroundConfig.from_env()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    logger = setup_logging(
        verbose=parsed_args.verbose,
        quiet=parsed_args.quiet,
        json_output=parsed_args.json_logs or config.json_logs,
        level=config.log_level,
        log_dir=config.log_dir,
    )
    console = console or Console()

    command_handlers = {
        "feeder": run_feeder,
        "underflow": run_underflow,
        "fan-out": run_fan_out_command,
        "cancel": run_cancel,
        "continuation": run_continuation,
        "context": run_context,
        "retention": run_retention,
        "config": run_config,
    }

    handler = command_handlers.get(parsed_args.command)

    if handler is None:
        logger.error(f"Unknown command: {parsed_args.command}")
        return 1

    try:
        with timed_operation(logger, parsed_args.command, correlation_id=uuid.uuid4().hex[:8]):
            return await handler(parsed_args, config, logger, console)
    except (PlaygroundError, asyncio.TimeoutError) as e:
        logger.error(f"{parsed_args.command} failed: {e!r}")
        return 1


def main(args: Optional[List[str]] = None) -> int:
    """Synchronous main entry point."""
    return asyncio.run(main_async(args))


if __name__ == "__main__":
    sys.exit(main())
