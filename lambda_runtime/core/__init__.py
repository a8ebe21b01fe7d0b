"""
Core logic package.

Provides the outcome model, response aggregation, logging and HTTP client setup.
"""

from .exceptions import ConfigurationError, ContractViolationError, LambdaRuntimeError
from .http_response import ResponseAggregator, ResponseCode, is_success_code
from .outcome import Outcome

__all__ = [
    "ConfigurationError",
    "ContractViolationError",
    "LambdaRuntimeError",
    "Outcome",
    "ResponseAggregator",
    "ResponseCode",
    "is_success_code",
]
