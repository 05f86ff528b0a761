"""Tests for the stitch-specific logging helpers."""

from __future__ import annotations

from typing import List

import pytest

from log_config.logger import log_outcome_summary, log_stitch_timing, logger


@pytest.fixture
def messages():
    captured: List[str] = []
    handler_id = logger.add(lambda message: captured.append(message.record["message"]), level="DEBUG")
    yield captured
    logger.remove(handler_id)


def test_outcome_summary_counts_and_logs(messages) -> None:
    counts = log_outcome_summary(["NO_GAP", "STITCHED", "NO_GAP"])

    assert counts == {"NO_GAP": 2, "STITCHED": 1}
    assert messages == ["Stitch outcomes: NO_GAP=2, STITCHED=1"]


def test_outcome_summary_silent_when_empty(messages) -> None:
    assert log_outcome_summary([]) == {}
    assert messages == []


def test_slow_stitch_warns(messages) -> None:
    log_stitch_timing(12, duration_ms=900.0, threshold_ms=250.0)
    log_stitch_timing(13, duration_ms=3.0, threshold_ms=250.0)

    assert messages[0].startswith("Slow stitch at frame 12")
    assert messages[1].startswith("Stitch at frame 13 took")
