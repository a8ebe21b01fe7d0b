"""
Runtime configuration definition.

Loads configuration from environment variables and provides a Pydantic model.
Uses pydantic-settings for type safety and defaults.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LOG_CONFIG_PATH = str(Path(__file__).parent / "logging.yml")


class RuntimeConfig(BaseSettings):
    """
    Configuration for the runtime client.
    """

    # Control plane (injected by the platform, required)
    AWS_LAMBDA_RUNTIME_API: str = Field(
        ..., min_length=1, description="Control plane address (host:port)"
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Log level")
    LOG_CONFIG_PATH: str = Field(
        default=DEFAULT_LOG_CONFIG_PATH, description="Logging YAML config path"
    )

    # Transport
    CONNECT_TIMEOUT: float = Field(
        default=1.0, gt=0, description="Connect timeout for control plane requests (seconds)"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    @property
    def runtime_api_base_url(self) -> str:
        return f"http://{self.AWS_LAMBDA_RUNTIME_API}"
