"""Structured Logging — JSONFormatter output shape."""

import json
import logging

from release_dispatch.infrastructure.observability import JSONFormatter


def _record(**extra):
    record = logging.LogRecord(
        "release_dispatch.test", logging.WARNING, __file__, 1,
        "dispatch failed", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_base_fields_present():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "WARNING"
    assert log["logger"] == "release_dispatch.test"
    assert log["message"] == "dispatch failed"
    assert "timestamp" in log


def test_extra_fields_surfaced_when_set():
    log = json.loads(JSONFormatter().format(
        _record(pass_id="p1", protocol="usenet", release_title=None),
    ))
    assert log["pass_id"] == "p1"
    assert log["protocol"] == "usenet"
    assert "release_title" not in log
