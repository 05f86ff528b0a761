"""Tests for track set persistence."""

from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pytest

from exceptions import TrackIOError
from track.sim import ShotBreakConfig, simulate_shot_break
from track.track_io import load_track_set, save_track_set


def test_save_and_load_preserve_tracks(tmp_path: Path) -> None:
    track_set = simulate_shot_break(ShotBreakConfig(num_landmarks=5, reacquired=3, garbage_features=2))
    path = tmp_path / "out" / "tracks.json"

    save_track_set(path, track_set)
    loaded = load_track_set(path)

    assert loaded.track_ids() == track_set.track_ids()
    for original in track_set:
        restored = loaded.get(original.track_id)
        assert restored.frame_ids() == original.frame_ids()
    frame = track_set.first_frame()
    np.testing.assert_allclose(loaded.frame_descriptors(frame), track_set.frame_descriptors(frame), rtol=1e-6)
    assert loaded.frame_features(frame) == track_set.frame_features(frame)


def test_saved_file_is_versioned(tmp_path: Path) -> None:
    path = tmp_path / "tracks.json"
    save_track_set(path, simulate_shot_break(ShotBreakConfig(num_landmarks=2, reacquired=1, garbage_features=0)))

    document = json.loads(path.read_text())

    assert "schema_version" in document
    assert "tracks" in document["payload"]


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(TrackIOError):
        load_track_set(tmp_path / "nope.json")


def test_load_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(TrackIOError):
        load_track_set(path)


def test_load_malformed_payload(tmp_path: Path) -> None:
    path = tmp_path / "malformed.json"
    path.write_text(json.dumps({"schema_version": "1.0.0", "payload": {"tracks": [{"id": 1}]}}))
    with pytest.raises(TrackIOError):
        load_track_set(path)


def test_load_rejects_out_of_order_states(tmp_path: Path) -> None:
    state = {"feature": {"x": 0.0, "y": 0.0}, "descriptor": None}
    payload = {"tracks": [{"id": 1, "states": [dict(state, frame=3), dict(state, frame=2)]}]}
    path = tmp_path / "order.json"
    path.write_text(json.dumps({"schema_version": "1.0.0", "payload": payload}))
    with pytest.raises(TrackIOError):
        load_track_set(path)
