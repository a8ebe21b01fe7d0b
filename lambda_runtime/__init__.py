"""
Python runtime client for the Lambda Runtime API.

Usage:
    from lambda_runtime import InvocationResponse, run_handler

    def handler(request):
        return InvocationResponse.success('{"data": "hello world!"}', "application/json")

    run_handler(handler)
"""

from .models import InvocationRequest, InvocationResponse
from .services import PollLoop, RuntimeClient, run_handler
from .version import get_version

__all__ = [
    "InvocationRequest",
    "InvocationResponse",
    "PollLoop",
    "RuntimeClient",
    "get_version",
    "run_handler",
]
