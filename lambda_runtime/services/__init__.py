"""
Services package.

Provides the control plane client and the poll loop driving the user handler.
"""

from .poll_loop import MAX_RETRIES, LoopState, PollLoop, run_handler
from .runtime_client import RuntimeClient, RuntimeEndpoints, parse_deadline

__all__ = [
    "MAX_RETRIES",
    "LoopState",
    "PollLoop",
    "RuntimeClient",
    "RuntimeEndpoints",
    "parse_deadline",
    "run_handler",
]
