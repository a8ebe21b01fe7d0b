"""
Poll Loop

Drives the runtime: fetch the next invocation, run the user handler, report the
result, repeat. Strictly one invocation at a time on the calling thread.
"""

import logging
import os
from enum import Enum
from typing import Callable, Optional

import httpx
from pydantic import ValidationError

from ..config import RuntimeConfig
from ..core import request_context
from ..core.exceptions import ConfigurationError
from ..core.http_response import ResponseCode
from ..core.logging_config import setup_logging
from ..core.outcome import Outcome
from ..models.invocation import InvocationRequest, InvocationResponse
from ..version import get_version
from .runtime_client import RuntimeClient

logger = logging.getLogger("lambda_runtime.poll_loop")

Handler = Callable[[InvocationRequest], InvocationResponse]

MAX_RETRIES = 3

TRACE_ID_ENV = "_X_AMZN_TRACE_ID"
INVALID_RESPONSE_ERROR_TYPE = "Runtime.InvalidResponse"


class LoopState(str, Enum):
    POLLING = "POLLING"
    INVOKING = "INVOKING"
    REPORTING_RESULT = "REPORTING_RESULT"
    TERMINATED = "TERMINATED"


class PollLoop:
    """
    State machine over POLLING -> INVOKING -> REPORTING_RESULT -> POLLING.

    Terminates after MAX_RETRIES consecutive get_next failures, or as soon as a
    result post fails. Result posts are never retried.
    """

    def __init__(self, client: RuntimeClient, handler: Handler):
        self.client = client
        self.handler = handler
        self.state = LoopState.POLLING
        self.retries = 0
        self._request: Optional[InvocationRequest] = None
        self._response: Optional[InvocationResponse] = None

    def run(self) -> None:
        while self.state != LoopState.TERMINATED:
            if self.state == LoopState.POLLING:
                self._poll()
            elif self.state == LoopState.INVOKING:
                self._invoke()
            elif self.state == LoopState.REPORTING_RESULT:
                self._report()

    def _poll(self) -> None:
        outcome = self.client.get_next()

        if not outcome.is_success():
            failure = outcome.get_failure()
            if failure != ResponseCode.REQUEST_NOT_MADE:
                logger.info(
                    f"HTTP request was not successful. HTTP response code: {failure}. Retrying.."
                )
            self.retries += 1

            if self.retries >= MAX_RETRIES:
                logger.error(
                    "Exhausted all retries. This is probably a bug in "
                    f"httpx v{httpx.__version__} Exiting!",
                    extra={"retries": self.retries},
                )
                self.state = LoopState.TERMINATED
            return

        self.retries = 0
        self._request = outcome.get_result()
        self.state = LoopState.INVOKING

    def _invoke(self) -> None:
        request = self._request
        request_context.bind_invocation(request.request_id, request.xray_trace_id)
        if request.xray_trace_id:
            os.environ[TRACE_ID_ENV] = request.xray_trace_id
        else:
            os.environ.pop(TRACE_ID_ENV, None)

        logger.info("Invoking user handler")
        try:
            response = self.handler(request)
        except Exception as e:
            logger.exception(f"User handler raised {type(e).__name__}")
            response = InvocationResponse.failure(str(e), type(e).__name__)
        else:
            if not isinstance(response, InvocationResponse):
                logger.error(
                    f"User handler returned {type(response).__name__}, "
                    "expected InvocationResponse"
                )
                response = InvocationResponse.failure(
                    "Handler did not return an InvocationResponse",
                    INVALID_RESPONSE_ERROR_TYPE,
                )
        logger.info("Invoking user handler completed.")

        self._response = response
        self.state = LoopState.REPORTING_RESULT

    def _report(self) -> None:
        request_id = self._request.request_id
        response = self._response

        if response.is_success():
            outcome = self.client.post_success(request_id, response)
        else:
            outcome = self.client.post_failure(request_id, response)

        request_context.clear_invocation()
        self._request = None
        self._response = None

        if handle_post_outcome(outcome, request_id):
            self.state = LoopState.POLLING
        else:
            # TODO: retry result posts instead of giving up on the first failure.
            self.state = LoopState.TERMINATED


def handle_post_outcome(outcome: Outcome[None, int], request_id: str) -> bool:
    """Log a failed result post. Returns True when the post succeeded."""
    if outcome.is_success():
        return True

    failure = outcome.get_failure()
    if failure == ResponseCode.REQUEST_NOT_MADE:
        logger.error(f"Failed to send HTTP request for invocation {request_id}.")
        return False

    logger.info(
        f"HTTP Request for invocation {request_id} was not successful. "
        f"HTTP response code: {failure}."
    )
    return False


def load_config() -> RuntimeConfig:
    """
    Raises:
        ConfigurationError: AWS_LAMBDA_RUNTIME_API is missing or the environment is invalid
    """
    try:
        return RuntimeConfig()
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise ConfigurationError(f"invalid {fields or 'environment'}: {e}", e) from e


def run_handler(
    handler: Handler,
    config: Optional[RuntimeConfig] = None,
    client: Optional[RuntimeClient] = None,
    configure_logging: bool = True,
) -> None:
    """
    Entry point: serve invocations with the given handler until the loop terminates.

    Returning does not tell whether the control plane went away or a result post
    failed; restart the process to try again.

    Args:
        handler: Callable turning an InvocationRequest into an InvocationResponse
        config: Runtime settings; loaded from the environment when omitted
        client: Pre-built RuntimeClient; built from config when omitted and closed on exit
        configure_logging: Initialize logging from config.LOG_CONFIG_PATH
    """
    if config is None:
        config = load_config()

    if configure_logging:
        setup_logging(config.LOG_CONFIG_PATH, config.LOG_LEVEL)

    logger.info(f"Initializing the Python Lambda Runtime version {get_version()}")
    logger.debug(
        f"AWS_LAMBDA_RUNTIME_API defined in environment as: {config.AWS_LAMBDA_RUNTIME_API}"
    )

    owns_client = client is None
    if owns_client:
        client = RuntimeClient.from_config(config)

    try:
        PollLoop(client, handler).run()
    finally:
        if owns_client:
            client.close()
