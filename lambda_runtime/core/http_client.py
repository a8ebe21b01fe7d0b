import functools
import logging

import httpx

from ..config import RuntimeConfig
from ..version import get_version

logger = logging.getLogger("lambda_runtime.http_client")

USER_AGENT_PRODUCT = "AWS_Lambda_Python"


@functools.lru_cache(maxsize=None)
def get_user_agent() -> str:
    """User-Agent sent with every control plane request. Computed once per process."""
    return f"{USER_AGENT_PRODUCT}/{get_version()}"


class HttpClientFactory:
    """
    HTTP Client Factory for control plane connections.
    """

    def __init__(self, config: RuntimeConfig):
        self.config = config

    def build_timeout(self) -> httpx.Timeout:
        """
        No read/write/pool timeout: the control plane parks /next until work arrives,
        possibly across a frozen execution environment. Only connecting is bounded.
        """
        return httpx.Timeout(None, connect=self.config.CONNECT_TIMEOUT)

    def create_sync_client(self, **kwargs) -> httpx.Client:
        """
        Create an httpx.Client for the control plane.

        Args:
            **kwargs: Additional arguments for httpx.Client
        """
        kwargs.setdefault("timeout", self.build_timeout())
        # The control plane is local; never route it through host HTTP(S)_PROXY.
        kwargs.setdefault("trust_env", False)

        headers = dict(kwargs.pop("headers", None) or {})
        headers.setdefault("User-Agent", get_user_agent())

        logger.debug(
            f"Creating control plane client (connect timeout: {self.config.CONNECT_TIMEOUT}s)"
        )
        return httpx.Client(headers=headers, **kwargs)
