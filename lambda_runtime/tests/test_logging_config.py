import json
import logging
from unittest.mock import patch

from lambda_runtime.core import logging_config, request_context


def _record(msg="Test message", **extra):
    record = logging.LogRecord(
        name="lambda_runtime.poll_loop",
        level=logging.INFO,
        pathname="poll_loop.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_custom_json_formatter_includes_invocation_context():
    trace_id = "Root=1-abc-123;Sampled=1"
    request_context.bind_invocation("req-1", trace_id)

    log_json = json.loads(logging_config.CustomJsonFormatter().format(_record()))

    assert log_json["message"] == "Test message"
    assert log_json["level"] == "INFO"
    assert log_json["logger"] == "lambda_runtime.poll_loop"
    assert log_json["aws_request_id"] == "req-1"
    assert log_json["trace_id"] == trace_id


def test_custom_json_formatter_without_context():
    log_json = json.loads(logging_config.CustomJsonFormatter().format(_record()))

    assert "aws_request_id" not in log_json
    assert "trace_id" not in log_json


def test_custom_json_formatter_includes_extra_fields():
    record = _record(target_url="http://127.0.0.1:9001", error_type="ConnectError")

    log_json = json.loads(logging_config.CustomJsonFormatter().format(record))

    assert log_json["target_url"] == "http://127.0.0.1:9001"
    assert log_json["error_type"] == "ConnectError"


def test_setup_logging_substitutes_log_level(tmp_path):
    config_file = tmp_path / "logging.yml"
    config_file.write_text(
        "version: 1\n"
        "disable_existing_loggers: false\n"
        "loggers:\n"
        "  lambda_runtime.test_setup:\n"
        "    level: ${LOG_LEVEL}\n",
        encoding="utf-8",
    )

    logging_config.setup_logging(str(config_file), "debug")

    assert logging.getLogger("lambda_runtime.test_setup").level == logging.DEBUG


def test_setup_logging_falls_back_without_file(tmp_path):
    with patch("logging.basicConfig") as basic_config:
        logging_config.setup_logging(str(tmp_path / "missing.yml"), "WARNING")

    basic_config.assert_called_once_with(level="WARNING")


def test_packaged_config_loads():
    from lambda_runtime.config import DEFAULT_LOG_CONFIG_PATH

    with patch("logging.config.dictConfig") as dict_config:
        logging_config.setup_logging(DEFAULT_LOG_CONFIG_PATH, "INFO")

    config = dict_config.call_args.args[0]
    assert config["loggers"]["lambda_runtime"]["level"] == "INFO"
    assert config["handlers"]["console"]["formatter"] == "json"
