"""
Playground Actor System

Actor-based isolation for shared mutable state.
"""
from .base import BaseActor
from .messages import (
    ActorMessage,
    # Commands
    Increment,
    Decrement,
    # Queries
    GetCount,
    GetSnapshot,
)
from .counter_actor import IsolatedCounter, ChickenFeeder

__all__ = [
    # Base
    "BaseActor",
    "ActorMessage",
    # Commands
    "Increment",
    "Decrement",
    # Queries
    "GetCount",
    "GetSnapshot",
    # Actors
    "IsolatedCounter",
    "ChickenFeeder",
]
