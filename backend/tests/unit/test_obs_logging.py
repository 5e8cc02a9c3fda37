from __future__ import annotations

import json
import logging

import pytest

from wanda.obs import logging as obs_logging
from wanda.obs.logging import InfoSamplingFilter, JSONLogFormatter, bind_context, configure_logging, reset_context


def _record(level: int = logging.INFO, **extra) -> logging.LogRecord:
    record = logging.LogRecord("wanda.test", level, __file__, 10, "trust adjusted", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_json_with_extra_fields() -> None:
    payload = json.loads(JSONLogFormatter().format(_record(user_id="u-1", after=40)))

    assert payload["msg"] == "trust adjusted"
    assert payload["level"] == "info"
    assert payload["user_id"] == "u-1"
    assert payload["after"] == 40


def test_formatter_redacts_sensitive_fields() -> None:
    payload = json.loads(JSONLogFormatter().format(_record(matricule="21A0001", details="insulte")))

    assert payload["matricule"] == "[redacted]"
    assert payload["details"] == "[redacted]"


def test_bound_context_is_included_and_reset() -> None:
    tokens = bind_context(actor_id="admin-1", operation="confirm_report")
    try:
        payload = json.loads(JSONLogFormatter().format(_record()))
    finally:
        reset_context(tokens)

    assert payload["actor_id"] == "admin-1"
    assert payload["operation"] == "confirm_report"
    assert "actor_id" not in json.loads(JSONLogFormatter().format(_record()))


def test_sampling_drops_info_but_keeps_warnings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(obs_logging.settings, "log_sampling_rate_info", 0.0)
    sampler = InfoSamplingFilter()

    assert not sampler.filter(_record())
    assert sampler.filter(_record(logging.WARNING))
    assert sampler.filter(_record(logging.ERROR))


def test_full_sampling_rate_keeps_info(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(obs_logging.settings, "log_sampling_rate_info", 1.0)

    assert InfoSamplingFilter().filter(_record())


def test_configure_logging_installs_json_handler(monkeypatch: pytest.MonkeyPatch) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    monkeypatch.setattr(obs_logging.settings, "log_level", "WARNING")
    try:
        configure_logging()

        (handler,) = root.handlers
        assert isinstance(handler.formatter, JSONLogFormatter)
        assert any(isinstance(item, InfoSamplingFilter) for item in handler.filters)
        assert root.level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
