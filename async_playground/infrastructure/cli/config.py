"""
Playground CLI configuration and settings.

Centralizes configuration for the playground CLI,
including default values and environment variables.
"""
from dataclasses import dataclass
from typing import Optional, Dict, Any
import os


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass(frozen=True)
class PlaygroundConfig:
    """Configuration for playground CLI operations."""

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False
    log_dir: Optional[str] = None

    # Actors
    ask_timeout: float = 5.0  # Seconds a caller waits for a counter reply

    # Demos
    fan_out_width: int = 10
    long_task_seconds: float = 5.0

    def __post_init__(self):
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {VALID_LOG_LEVELS}, got {self.log_level!r}")
        if self.ask_timeout <= 0:
            raise ValueError(f"ask_timeout must be positive, got {self.ask_timeout}")
        if self.fan_out_width < 1:
            raise ValueError(f"fan_out_width must be at least 1, got {self.fan_out_width}")

    @classmethod
    def from_env(cls) -> 'PlaygroundConfig':
        """Create config from environment variables."""
        return cls(
            log_level=os.getenv("PLAYGROUND_LOG_LEVEL", "INFO").upper(),
            json_logs=os.getenv("PLAYGROUND_JSON_LOGS", "false").lower() == "true",
            log_dir=os.getenv("PLAYGROUND_LOG_DIR") or None,
            ask_timeout=float(os.getenv("PLAYGROUND_ASK_TIMEOUT", "5.0")),
            fan_out_width=int(os.getenv("PLAYGROUND_FAN_OUT_WIDTH", "10")),
            long_task_seconds=float(os.getenv("PLAYGROUND_LONG_TASK_SECONDS", "5.0")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for display."""
        return {
            "log_level": self.log_level,
            "json_logs": self.json_logs,
            "log_dir": self.log_dir,
            "ask_timeout": self.ask_timeout,
            "fan_out_width": self.fan_out_width,
            "long_task_seconds": self.long_task_seconds,
        }
