"""
Module: tests/unit/test_logging.py

What:
    Validate the structured JSON logger used by the loader.

Why:
    Log entries are parsed by tooling; their core fields, bound context and
    redaction must not change silently.

How:
    Write entries to an in-memory stream and decode every line as JSON.

Interfaces:
    test_entries_carry_core_fields, test_bound_context_is_repeated,
    test_core_fields_cannot_be_overridden, test_sensitive_keys_are_redacted,
    test_unknown_level_is_rejected, test_get_logger_binds_component
"""

import io
import json

import pytest

from mainframer.utils.logging import REDACTED, JsonLogger, get_logger, redact


def test_entries_carry_core_fields(logger, log_entries):
    logger.info("config_loaded", path="/tmp/config.yml")
    logger.warning("config_missing")
    logger.error("config_invalid", kind="ConfigFileError")

    info, warning, error = log_entries()
    assert set(info) == {"ts", "lvl", "msg", "component", "path"}
    assert info["lvl"] == "INFO"
    assert warning["lvl"] == "WARN"
    assert error["lvl"] == "ERROR"
    assert error["kind"] == "ConfigFileError"


def test_bound_context_is_repeated(logger, log_entries):
    """
    What:
        Context attached with ``bind`` appears on every entry of the derived
        logger only; call fields take precedence.
    """
    bound = logger.bind(path="config.yml", attempt=1)
    bound.info("config_loaded")
    bound.error("config_invalid", attempt=2)
    logger.info("unbound")

    loaded, invalid, unbound = log_entries()
    assert loaded["path"] == "config.yml"
    assert invalid["attempt"] == 2
    assert "path" not in unbound
    assert bound.stream is logger.stream


def test_core_fields_cannot_be_overridden(logger, log_entries):
    logger.bind(component="other").info("event", msg="spoofed", lvl="DEBUG")
    (entry,) = log_entries()
    assert entry["component"] == "test"
    assert entry["msg"] == "event"
    assert entry["lvl"] == "INFO"


def test_sensitive_keys_are_redacted():
    """
    What:
        Raw document text is masked inside nested mappings and lists.
    """
    stream = io.StringIO()
    JsonLogger(stream=stream).info(
        "config_loaded",
        raw="remoteMachine:\n  host: secret",
        details={"content": "secret", "path": "config.yml"},
        attempts=[{"text": "secret", "ok": False}],
    )
    entry = json.loads(stream.getvalue())
    assert entry["raw"] == REDACTED
    assert entry["details"] == {"content": REDACTED, "path": "config.yml"}
    assert entry["attempts"] == [{"text": REDACTED, "ok": False}]
    assert entry["component"] == "mainframer"


def test_redact_leaves_plain_values():
    assert redact("text") == "text"
    assert redact(("a", {"raw": 1})) == ["a", {"raw": REDACTED}]


def test_unknown_level_is_rejected(logger):
    with pytest.raises(ValueError):
        logger.log("debug", "event")


def test_get_logger_binds_component():
    assert get_logger("config.loader").component == "config.loader"
