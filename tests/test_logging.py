import json
import logging

import pytest

from embedgen.logging_utils import JsonFormatter, configure_logging


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_formatter_carries_extra_fields():
    record = logging.makeLogRecord({
        "name": "embedgen.service",
        "levelname": "INFO",
        "msg": "Built %s embed",
        "args": ("video",),
        "event": "embed.built",
    })

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "Built video embed"
    assert payload["event"] == "embed.built"
    assert payload["logger"] == "embedgen.service"


def test_configure_logging_json(settings, restore_root):
    configure_logging(settings.model_copy(update={"log_json": True, "log_level": "DEBUG"}))

    assert restore_root.level == logging.DEBUG
    assert len(restore_root.handlers) == 1
    assert isinstance(restore_root.handlers[0].formatter, JsonFormatter)


def test_configure_logging_plain(settings, restore_root):
    configure_logging(settings)

    assert restore_root.level == logging.INFO
    assert not isinstance(restore_root.handlers[0].formatter, JsonFormatter)
