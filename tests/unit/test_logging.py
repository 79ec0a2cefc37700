import json
import logging

import pytest

from backend.app.infra.logging import StructuredFormatter, configure_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "backend.app.test", logging.INFO, __file__, 1, "entry_created", None, None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_extras_as_pairs() -> None:
    line = StructuredFormatter().format(_record(entry_id="abc", count=2))

    assert "entry_created" in line
    assert "entry_id='abc'" in line
    assert "count=2" in line


def test_formatter_renders_json_lines() -> None:
    payload = json.loads(StructuredFormatter(as_json=True).format(_record(owner="Ana")))

    assert payload["event"] == "entry_created"
    assert payload["level"] == "INFO"
    assert payload["owner"] == "Ana"


def test_configure_logging_replaces_its_own_handler() -> None:
    logger = configure_logging({"level": "debug"})
    configure_logging({"level": "warning", "json": True})

    tagged = [h for h in logger.handlers if getattr(h, "_bitacora_handler", False)]
    assert len(tagged) == 1
    assert logger.level == logging.WARNING
    configure_logging({"level": "INFO"})


def test_configure_logging_rejects_unknown_level() -> None:
    with pytest.raises(RuntimeError):
        configure_logging({"level": "chatty"})
