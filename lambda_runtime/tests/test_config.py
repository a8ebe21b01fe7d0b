import pytest
from pydantic import ValidationError

from lambda_runtime.config import DEFAULT_LOG_CONFIG_PATH, RuntimeConfig


def test_defaults(monkeypatch):
    monkeypatch.setenv("AWS_LAMBDA_RUNTIME_API", "127.0.0.1:9001")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("CONNECT_TIMEOUT", raising=False)

    config = RuntimeConfig(_env_file=None)

    assert config.LOG_LEVEL == "INFO"
    assert config.LOG_CONFIG_PATH == DEFAULT_LOG_CONFIG_PATH
    assert config.CONNECT_TIMEOUT == 1.0
    assert config.runtime_api_base_url == "http://127.0.0.1:9001"


def test_runtime_api_is_required(monkeypatch):
    monkeypatch.delenv("AWS_LAMBDA_RUNTIME_API", raising=False)

    with pytest.raises(ValidationError):
        RuntimeConfig(_env_file=None)


def test_runtime_api_must_not_be_empty(monkeypatch):
    monkeypatch.setenv("AWS_LAMBDA_RUNTIME_API", "")

    with pytest.raises(ValidationError):
        RuntimeConfig(_env_file=None)


def test_connect_timeout_from_env(monkeypatch):
    monkeypatch.setenv("AWS_LAMBDA_RUNTIME_API", "localhost:8080")
    monkeypatch.setenv("CONNECT_TIMEOUT", "2.5")

    assert RuntimeConfig(_env_file=None).CONNECT_TIMEOUT == 2.5
