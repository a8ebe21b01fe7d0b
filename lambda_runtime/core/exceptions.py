"""
Custom exception classes.

Operational failures of the control plane (unreachable endpoint, HTTP error status,
missing protocol headers) are returned as Outcome values and never raised.
The exceptions below cover what must stop the runtime outright.
"""


class LambdaRuntimeError(Exception):
    """Base exception class for the runtime client."""

    pass


class ConfigurationError(LambdaRuntimeError):
    """Raised when required runtime configuration is missing or invalid."""

    def __init__(self, detail: str, cause: Exception = None):
        self.detail = detail
        self.cause = cause
        super().__init__(f"Invalid runtime configuration: {detail}")


class ContractViolationError(LambdaRuntimeError):
    """Raised when an internal invariant or the control plane contract is broken."""

    pass
