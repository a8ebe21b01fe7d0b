"""
Runtime Client

Talks to the control plane Runtime API: fetches the next invocation and reports
results. Every call returns an Outcome; transport and HTTP errors never raise.
"""

import logging
import sys
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import httpx

from ..config import RuntimeConfig
from ..core.exceptions import ContractViolationError
from ..core.http_client import HttpClientFactory
from ..core.http_response import ResponseAggregator, ResponseCode, is_success_code
from ..core.outcome import Outcome
from ..models.invocation import ERROR_CONTENT_TYPE, InvocationRequest, InvocationResponse

logger = logging.getLogger("lambda_runtime.runtime_client")

API_VERSION = "2018-06-01"

REQUEST_ID_HEADER = "lambda-runtime-aws-request-id"
TRACE_ID_HEADER = "lambda-runtime-trace-id"
CLIENT_CONTEXT_HEADER = "lambda-runtime-client-context"
COGNITO_IDENTITY_HEADER = "lambda-runtime-cognito-identity"
DEADLINE_MS_HEADER = "lambda-runtime-deadline-ms"
FUNCTION_ARN_HEADER = "lambda-runtime-invoked-function-arn"

DEFAULT_CONTENT_TYPE = "text/html"

# Width of the whole-seconds prefix of the deadline header.
DEADLINE_SECONDS_DIGITS = 10


@dataclass(frozen=True)
class RuntimeEndpoints:
    init_error: str
    next: str
    invocation_base: str

    @classmethod
    def from_base_url(cls, base_url: str) -> "RuntimeEndpoints":
        root = f"{base_url.rstrip('/')}/{API_VERSION}/runtime"
        return cls(
            init_error=f"{root}/init/error",
            next=f"{root}/invocation/next",
            invocation_base=f"{root}/invocation/",
        )

    def response_url(self, request_id: str) -> str:
        return f"{self.invocation_base}{request_id}/response"

    def error_url(self, request_id: str) -> str:
        return f"{self.invocation_base}{request_id}/error"


def parse_deadline(value: str) -> datetime:
    """
    Parse the lambda-runtime-deadline-ms header.

    The first 10 digits are whole seconds since the epoch, the remaining digits
    are the fractional part of the second.

    Raises:
        ContractViolationError: the header is not a usable timestamp
    """
    if len(value) < DEADLINE_SECONDS_DIGITS or not (value.isascii() and value.isdigit()):
        raise ContractViolationError(f"Malformed {DEADLINE_MS_HEADER} header: {value!r}")

    seconds = int(value[:DEADLINE_SECONDS_DIGITS])
    if not 0 < seconds < sys.maxsize:
        raise ContractViolationError(f"{DEADLINE_MS_HEADER} out of range: {value!r}")

    fraction = value[DEADLINE_SECONDS_DIGITS:]
    microseconds = int(fraction[:6].ljust(6, "0")) if fraction else 0
    return datetime.fromtimestamp(seconds, tz=timezone.utc) + timedelta(microseconds=microseconds)


class RuntimeClient:
    def __init__(self, endpoint: str, client: httpx.Client):
        """
        Args:
            endpoint: Control plane base URL (http://host:port)
            client: httpx.Client used for every exchange
        """
        self.endpoints = RuntimeEndpoints.from_base_url(endpoint)
        self.client = client

    @classmethod
    def from_config(cls, config: RuntimeConfig) -> "RuntimeClient":
        factory = HttpClientFactory(config)
        return cls(config.runtime_api_base_url, factory.create_sync_client())

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "RuntimeClient":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def get_next(self) -> Outcome[InvocationRequest, int]:
        """
        Ask the control plane for an invocation.

        Blocks until the control plane hands out work.
        """
        url = self.endpoints.next
        resp = ResponseAggregator()

        logger.debug(f"Making request to {url}")
        try:
            with self.client.stream("GET", url) as response:
                for name, value in response.headers.multi_items():
                    resp.add_header(name, value)
                for chunk in response.iter_text():
                    resp.append_body(chunk)
                resp.set_response_code(response.status_code)
        except httpx.RequestError as e:
            self._log_transport_error(url, e)
            logger.error("Failed to get next invocation. No Response from endpoint")
            return Outcome.failure(ResponseCode.REQUEST_NOT_MADE)

        logger.debug(f"Completed request to {url}")
        code = resp.get_response_code()

        if not is_success_code(code):
            logger.error(f"Failed to get next invocation. Http Response code: {code}")
            return Outcome.failure(code)

        if not resp.has_header(REQUEST_ID_HEADER) or not resp.get_header(REQUEST_ID_HEADER):
            logger.error(f"Failed to find a value for header {REQUEST_ID_HEADER} in response")
            return Outcome.failure(ResponseCode.REQUEST_NOT_MADE)

        request = InvocationRequest(
            payload=resp.get_body(),
            request_id=resp.get_header(REQUEST_ID_HEADER),
        )

        if resp.has_header(TRACE_ID_HEADER):
            request.xray_trace_id = resp.get_header(TRACE_ID_HEADER)
        if resp.has_header(CLIENT_CONTEXT_HEADER):
            request.client_context = resp.get_header(CLIENT_CONTEXT_HEADER)
        if resp.has_header(COGNITO_IDENTITY_HEADER):
            request.cognito_identity = resp.get_header(COGNITO_IDENTITY_HEADER)
        if resp.has_header(FUNCTION_ARN_HEADER):
            request.function_arn = resp.get_header(FUNCTION_ARN_HEADER)

        if resp.has_header(DEADLINE_MS_HEADER):
            request.deadline = parse_deadline(resp.get_header(DEADLINE_MS_HEADER))
            logger.info(
                f"Received invocation {request.request_id}. "
                f"Time remaining: {request.get_time_remaining()}ms"
            )

        return Outcome.success(request)

    def post_success(
        self, request_id: str, response: InvocationResponse
    ) -> Outcome[None, int]:
        """Tells the control plane that the function has succeeded."""
        content_type = response.get_content_type() or DEFAULT_CONTENT_TYPE
        return self._post(
            self.endpoints.response_url(request_id),
            response.get_payload(),
            content_type,
            request_id=request_id,
        )

    def post_failure(
        self, request_id: str, response: InvocationResponse
    ) -> Outcome[None, int]:
        """Tells the control plane that the function has failed."""
        return self._post(
            self.endpoints.error_url(request_id),
            response.get_payload(),
            ERROR_CONTENT_TYPE,
            request_id=request_id,
        )

    def post_init_error(self, response: InvocationResponse) -> Outcome[None, int]:
        """
        Tells the control plane that the runtime failed to initialize.
        Meant to be called before the poll loop starts.
        """
        return self._post(self.endpoints.init_error, response.get_payload(), ERROR_CONTENT_TYPE)

    def _post(
        self,
        url: str,
        payload: str,
        content_type: str,
        request_id: Optional[str] = None,
    ) -> Outcome[None, int]:
        body = payload.encode("utf-8")
        # The whole body goes out with an explicit length: no chunking, no Expect: 100-continue.
        headers = {
            "Content-Type": content_type,
            "Content-Length": str(len(body)),
        }

        logger.info(f"Making request to {url}")
        logger.debug(f"calculating content length... content-length: {len(body)}")

        try:
            response = self.client.post(url, content=body, headers=headers)
        except httpx.RequestError as e:
            self._log_transport_error(url, e, request_id=request_id)
            return Outcome.failure(ResponseCode.REQUEST_NOT_MADE)

        if not is_success_code(response.status_code):
            logger.error(
                f"Failed to post handler response to {url}. "
                f"Http response code: {response.status_code}."
            )
            return Outcome.failure(response.status_code)

        return Outcome.success(None)

    @staticmethod
    def _log_transport_error(url: str, error: Exception, request_id: Optional[str] = None):
        extra = {
            "target_url": url,
            "error_type": type(error).__name__,
            "error_detail": str(error),
        }
        if request_id:
            extra["aws_request_id"] = request_id
        logger.debug(f"Transport error while calling {url}: {error}", extra=extra)
