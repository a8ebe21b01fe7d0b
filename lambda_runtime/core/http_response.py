"""
Response aggregation for a single control plane exchange.
"""

from enum import IntEnum
from typing import Dict, Optional

from .exceptions import ContractViolationError


class ResponseCode(IntEnum):
    """
    Failure codes used in Outcome values.

    Any HTTP status is a valid failure value; REQUEST_NOT_MADE means no exchange
    completed (or the control plane broke the protocol on a 2xx response).
    """

    REQUEST_NOT_MADE = -1
    OK = 200
    ACCEPTED = 202
    BAD_REQUEST = 400
    FORBIDDEN = 403
    NOT_FOUND = 404
    PAYLOAD_TOO_LARGE = 413
    INTERNAL_SERVER_ERROR = 500


def is_success_code(code: int) -> bool:
    return 200 <= code <= 299


class ResponseAggregator:
    """
    Collects the headers, body and status code of one exchange.

    Header names are lower-cased, values are stored as received.
    """

    def __init__(self):
        self._headers: Dict[str, str] = {}
        self._body_parts = []
        self._response_code: Optional[int] = None

    def add_header(self, name: str, value: str) -> None:
        self._headers[name.lower()] = value

    def append_body(self, value: str) -> None:
        self._body_parts.append(value)

    def has_header(self, name: str) -> bool:
        return name.lower() in self._headers

    def get_header(self, name: str) -> str:
        key = name.lower()
        if key not in self._headers:
            raise ContractViolationError(f"Header not present in response: {name}")
        return self._headers[key]

    def get_body(self) -> str:
        return "".join(self._body_parts)

    def set_response_code(self, code: int) -> None:
        if self._response_code is not None:
            raise ContractViolationError("Response code already set for this exchange")
        self._response_code = code

    def get_response_code(self) -> int:
        if self._response_code is None:
            raise ContractViolationError("Response code read before the exchange completed")
        return self._response_code
