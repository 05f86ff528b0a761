"""Tests for shot boundary detection."""

from __future__ import annotations

from typing import Dict, Tuple

import pytest

from configs.settings import BadFrameConfig
from loop_closure.contracts import StitchOutcome
from loop_closure.detector import find_frame_to_stitch


class _PercentageTable:
    """Stands in for a TrackSet: answers percentage_tracked from a table, 1.0 otherwise."""

    def __init__(self, table: Dict[Tuple[int, int], float]) -> None:
        self.table = table
        self.queries = []

    def percentage_tracked(self, frame_a: int, frame_b: int) -> float:
        self.queries.append((frame_a, frame_b))
        return self.table.get((frame_a, frame_b), 1.0)


def test_gap_followed_by_stable_shot_triggers_search() -> None:
    tracks = _PercentageTable({(8, 9): 0.1, (9, 10): 0.5})

    frame_to_stitch, outcome = find_frame_to_stitch(10, tracks, BadFrameConfig())

    assert frame_to_stitch == 9
    assert outcome is None
    assert tracks.queries == [(8, 9), (9, 10)]


def test_disabled() -> None:
    tracks = _PercentageTable({(8, 9): 0.0})

    frame_to_stitch, outcome = find_frame_to_stitch(10, tracks, BadFrameConfig(enabled=False))

    assert frame_to_stitch is None
    assert outcome is StitchOutcome.DISABLED
    assert tracks.queries == []


@pytest.mark.parametrize("frame_number", [0, 1, 2])
def test_not_enough_history(frame_number: int) -> None:
    tracks = _PercentageTable({})

    frame_to_stitch, outcome = find_frame_to_stitch(frame_number, tracks, BadFrameConfig(new_shot_length=2))

    assert frame_to_stitch is None
    assert outcome is StitchOutcome.INSUFFICIENT_HISTORY


def test_no_gap_when_transition_tracks_well() -> None:
    tracks = _PercentageTable({(8, 9): 0.2})

    frame_to_stitch, outcome = find_frame_to_stitch(10, tracks, BadFrameConfig())

    assert frame_to_stitch is None
    assert outcome is StitchOutcome.NO_GAP
    assert tracks.queries == [(8, 9)]


def test_unstable_new_shot_aborts() -> None:
    config = BadFrameConfig(new_shot_length=4)
    tracks = _PercentageTable({(6, 7): 0.05, (8, 9): 0.1})

    frame_to_stitch, outcome = find_frame_to_stitch(10, tracks, config)

    assert frame_to_stitch is None
    assert outcome is StitchOutcome.UNSTABLE_SHOT
    assert tracks.queries == [(6, 7), (7, 8), (8, 9)]


def test_stability_checked_through_current_frame() -> None:
    config = BadFrameConfig(new_shot_length=4)
    tracks = _PercentageTable({(6, 7): 0.05})

    frame_to_stitch, _ = find_frame_to_stitch(10, tracks, config)

    assert frame_to_stitch == 7
    assert tracks.queries == [(6, 7), (7, 8), (8, 9), (9, 10)]


def test_shot_length_one_uses_current_frame_as_anchor() -> None:
    tracks = _PercentageTable({(4, 5): 0.0})

    frame_to_stitch, _ = find_frame_to_stitch(5, tracks, BadFrameConfig(new_shot_length=1))

    assert frame_to_stitch == 5
    assert tracks.queries == [(4, 5)]
