"""Tests for the stitch_tracks command line entry point."""

from __future__ import annotations

from pathlib import Path

from stitch_tracks import main
from track.sim import ShotBreakConfig, simulate_shot_break
from track.track_io import load_track_set, save_track_set


def test_cli_stitches_track_file(tmp_path: Path) -> None:
    config = ShotBreakConfig()
    source = tmp_path / "tracks.json"
    output = tmp_path / "stitched.json"
    save_track_set(source, simulate_shot_break(config))

    status = main(["--tracks", str(source), "--output", str(output)])

    assert status == 0
    assert load_track_set(output).size() == load_track_set(source).size() - config.reacquired


def test_cli_uses_config_file(tmp_path: Path) -> None:
    source = tmp_path / "tracks.json"
    output = tmp_path / "stitched.json"
    settings = tmp_path / "config.yaml"
    settings.write_text("loop_closure:\n  bf_detection_enabled: false\n")
    save_track_set(source, simulate_shot_break(ShotBreakConfig()))

    status = main(["--tracks", str(source), "--output", str(output), "--config", str(settings)])

    assert status == 0
    assert load_track_set(output).size() == load_track_set(source).size()


def test_cli_reports_missing_input(tmp_path: Path) -> None:
    status = main(["--tracks", str(tmp_path / "missing.json"), "--output", str(tmp_path / "out.json")])
    assert status == 1


def test_cli_reports_invalid_config(tmp_path: Path) -> None:
    source = tmp_path / "tracks.json"
    settings = tmp_path / "config.yaml"
    settings.write_text("bf_detection_percent_match_req: 3.0\n")
    save_track_set(source, simulate_shot_break(ShotBreakConfig()))

    status = main(["--tracks", str(source), "--output", str(tmp_path / "out.json"), "--config", str(settings)])

    assert status == 1
