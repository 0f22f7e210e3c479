"""Unit tests for ringcatalog.logging_config."""

from __future__ import annotations

import json
from collections.abc import Iterator

import pytest
import structlog

from ringcatalog.config import LoggingSettings
from ringcatalog.logging_config import configure_logging


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


def test_json_format_writes_one_object_per_line_to_stderr(
    capsys: pytest.CaptureFixture[str],
) -> None:
    configure_logging(LoggingSettings(level="INFO", format="json"))

    structlog.get_logger().info("reload_started", partitions=3)

    captured = capsys.readouterr()
    assert captured.out == ""
    event = json.loads(captured.err.strip())
    assert event["event"] == "reload_started"
    assert event["partitions"] == 3
    assert event["level"] == "info"
    assert "timestamp" in event


def test_level_filters_lower_events(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(LoggingSettings(level="WARNING", format="json"))

    log = structlog.get_logger()
    log.info("configuration_loaded")
    log.warning("configuration_unavailable", partition="ring2")

    lines = capsys.readouterr().err.strip().splitlines()
    assert [json.loads(line)["event"] for line in lines] == ["configuration_unavailable"]


def test_text_format_is_human_readable(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(LoggingSettings(level="DEBUG", format="text"))

    structlog.get_logger().debug("fetch_deduplicated", url="https://cdn.test/core.json")

    err = capsys.readouterr().err
    assert "fetch_deduplicated" in err
    assert "https://cdn.test/core.json" in err
