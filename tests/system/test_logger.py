"""日志配置的单元测试。"""

import json
import logging

from app.packages.system.core.config import get_settings
from app.packages.system.core.logger import (
    JsonFormatter,
    RequestIdFilter,
    build_logging_config,
    set_request_id,
)


def test_json_formatter_includes_request_id():
    record = logging.LogRecord("app", logging.INFO, __file__, 1, "menu %s deleted", (3,), None)
    set_request_id("req-42")
    try:
        RequestIdFilter().filter(record)
    finally:
        set_request_id(None)

    payload = json.loads(JsonFormatter().format(record))

    assert payload["msg"] == "menu 3 deleted"
    assert payload["level"] == "INFO"
    assert payload["request_id"] == "req-42"


def test_logging_config_switches_to_json_formatter():
    settings = get_settings().model_copy(update={"log_json": True})

    config = build_logging_config(settings)

    assert config["handlers"]["console"]["formatter"] == "json"
    assert config["handlers"]["file"]["formatter"] == "json"
    assert config["loggers"]["app"]["propagate"] is False
