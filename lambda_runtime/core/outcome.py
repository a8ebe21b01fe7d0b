"""
Outcome type returned by every control plane call.

An Outcome holds either a result or a failure, never both. The active side is
fixed at construction and is the only one that can be read.
"""

from typing import Any, Generic, TypeVar

from .exceptions import ContractViolationError

TResult = TypeVar("TResult")
TFailure = TypeVar("TFailure")


class Outcome(Generic[TResult, TFailure]):
    __slots__ = ("_success", "_value")

    def __init__(self, success: bool, value: Any):
        object.__setattr__(self, "_success", bool(success))
        object.__setattr__(self, "_value", value)

    @classmethod
    def success(cls, result: TResult) -> "Outcome[TResult, TFailure]":
        return cls(True, result)

    @classmethod
    def failure(cls, failure: TFailure) -> "Outcome[TResult, TFailure]":
        return cls(False, failure)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def copy(self) -> "Outcome[TResult, TFailure]":
        return type(self)(self._success, self._value)

    __copy__ = copy

    def is_success(self) -> bool:
        return self._success

    def get_result(self) -> TResult:
        if not self._success:
            raise ContractViolationError("get_result() called on a failed outcome")
        return self._value

    def get_failure(self) -> TFailure:
        if self._success:
            raise ContractViolationError("get_failure() called on a successful outcome")
        return self._value

    def __eq__(self, other):
        if isinstance(other, Outcome):
            return self._success == other._success and self._value == other._value
        return NotImplemented

    # Payloads such as InvocationRequest are mutable.
    __hash__ = None

    def __repr__(self) -> str:
        side = "success" if self._success else "failure"
        return f"Outcome.{side}({self._value!r})"
