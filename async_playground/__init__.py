"""
Async Playground

Small asyncio demonstrations built around an actor-isolated counter.
"""
__version__ = "0.1.0"
