"""
Data model definitions package.
"""

from .invocation import ErrorPayload, InvocationRequest, InvocationResponse

__all__ = [
    "ErrorPayload",
    "InvocationRequest",
    "InvocationResponse",
]
