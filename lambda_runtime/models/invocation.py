"""
Invocation models.

One InvocationRequest is fetched from the control plane per poll cycle; the user
handler answers it with exactly one InvocationResponse.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

ERROR_CONTENT_TYPE = "application/json"

UNIX_EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


@dataclass
class InvocationRequest:
    """
    A unit of work handed out by the control plane.

    Optional metadata is left empty when the control plane does not send it.
    """

    payload: str = ""  # User payload (UTF-8 text)
    request_id: str = ""  # Unique per invocation, correlates the result post
    xray_trace_id: str = ""  # X-Ray trace header
    client_context: str = ""  # Client application/device info (Mobile SDK)
    cognito_identity: str = ""  # Cognito identity provider info (Mobile SDK)
    function_arn: str = ""  # ARN the invocation was requested for
    deadline: datetime = field(default=UNIX_EPOCH)  # Execution deadline (UTC)

    def get_time_remaining(self, now: Optional[datetime] = None) -> int:
        """
        Milliseconds left before the platform terminates the current execution.
        Negative once the deadline has passed.
        """
        if now is None:
            now = datetime.now(timezone.utc)
        return int((self.deadline - now).total_seconds() * 1000)


class ErrorPayload(BaseModel):
    """Body posted to the control plane for a failed invocation."""

    errorMessage: str
    errorType: str
    stackTrace: List[str] = Field(default_factory=list)


class InvocationResponse(BaseModel):
    """
    Result of a handler invocation.

    Build instances with success() or failure().
    """

    model_config = ConfigDict(frozen=True)

    payload: str = ""
    content_type: str = ""
    is_error: bool = False

    @classmethod
    def success(cls, payload: str, content_type: str = "") -> "InvocationResponse":
        """Create a successful invocation response with the given payload and content-type."""
        return cls(payload=payload, content_type=content_type or "", is_error=False)

    @classmethod
    def failure(cls, error_message: str, error_type: str) -> "InvocationResponse":
        """
        Create a failure response with the given error message and error type.
        The content-type is always set to application/json in this case.
        """
        body = ErrorPayload(errorMessage=error_message, errorType=error_type)
        return cls(payload=body.model_dump_json(), content_type=ERROR_CONTENT_TYPE, is_error=True)

    def is_success(self) -> bool:
        """True for success responses, False for failure responses."""
        return not self.is_error

    def get_payload(self) -> str:
        return self.payload

    def get_content_type(self) -> str:
        return self.content_type
