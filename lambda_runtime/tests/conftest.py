import os

import httpx
import pytest

# RuntimeConfig reads the environment on construction; provide the control plane address up front.
os.environ.setdefault("AWS_LAMBDA_RUNTIME_API", "127.0.0.1:9001")

from lambda_runtime.core import request_context  # noqa: E402
from lambda_runtime.services.runtime_client import RuntimeClient  # noqa: E402

BASE_URL = "http://127.0.0.1:9001"


@pytest.fixture
def runtime_client():
    client = RuntimeClient(BASE_URL, httpx.Client(headers={"User-Agent": "test-agent"}))
    yield client
    client.close()


@pytest.fixture(autouse=True)
def _clear_request_context():
    request_context.clear_invocation()
    yield
    request_context.clear_invocation()
