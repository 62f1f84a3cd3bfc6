"""
Playground error hierarchy.

Distinguishes recoverable from permanent errors.
"""


class PlaygroundError(Exception):
    """Base class for playground errors."""

    def __init__(self, message: str, recoverable: bool = True):
        super().__init__(message)
        self.recoverable = recoverable


class ActorNotRunningError(PlaygroundError):
    """Message sent to an actor whose mailbox is not being consumed."""

    def __init__(self, message: str, actor_id: str = ""):
        super().__init__(message, recoverable=False)
        self.actor_id = actor_id


class UnhandledMessageError(PlaygroundError):
    """Actor has no handler for the message type."""

    def __init__(self, message: str, message_type: str = ""):
        super().__init__(message, recoverable=False)
        self.message_type = message_type


class ContinuationMisuseError(PlaygroundError):
    """A continuation was resumed more than once."""

    def __init__(self, message: str):
        super().__init__(message, recoverable=False)
