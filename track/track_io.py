"""Persist track sets as versioned JSON documents."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import numpy as np

from contracts import Feature
from contracts.versioning import make_envelope, open_envelope
from exceptions import TrackError, TrackIOError
from log_config.logger import get_logger
from track.track import Track, TrackState
from track.track_set import TrackSet

logger = get_logger(__name__)


def track_set_to_dict(track_set: TrackSet) -> Dict[str, Any]:
    tracks: List[Dict[str, Any]] = []
    for track in track_set:
        states = []
        for state in track:
            feature = state.feature
            states.append(
                {
                    "frame": state.frame_id,
                    "feature": {
                        "x": feature.x,
                        "y": feature.y,
                        "magnitude": feature.magnitude,
                        "scale": feature.scale,
                        "angle": feature.angle,
                    },
                    "descriptor": None if state.descriptor is None else np.asarray(state.descriptor).ravel().tolist(),
                }
            )
        tracks.append({"id": track.track_id, "states": states})
    return {"tracks": tracks}


def track_set_from_dict(data: Dict[str, Any]) -> TrackSet:
    try:
        tracks = []
        for entry in data["tracks"]:
            track = Track(int(entry["id"]))
            for state in entry["states"]:
                descriptor = state.get("descriptor")
                track.append_state(
                    TrackState(
                        frame_id=int(state["frame"]),
                        feature=Feature(**state["feature"]),
                        descriptor=None if descriptor is None else np.asarray(descriptor, dtype=np.float32),
                    )
                )
            tracks.append(track)
        return TrackSet(tracks)
    except (KeyError, TypeError, ValueError, TrackError) as e:
        raise TrackIOError(f"Malformed track set data: {e}")


def load_track_set(path: Path) -> TrackSet:
    """Load a track set written by ``save_track_set``.

    Raises:
        TrackIOError: If the file is missing, not JSON, or malformed
    """
    if not path.exists():
        raise TrackIOError(f"Track file not found: {path}")
    try:
        document = json.loads(path.read_text())
        payload = open_envelope(document)
    except (json.JSONDecodeError, ValueError, AttributeError) as e:
        logger.error(f"Failed to read track file {path}: {e}")
        raise TrackIOError(f"Failed to read track file {path}: {e}")
    track_set = track_set_from_dict(payload)
    logger.info(f"Loaded {track_set.size()} tracks from {path}")
    return track_set


def save_track_set(path: Path, track_set: TrackSet) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(make_envelope(track_set_to_dict(track_set)), indent=2))
    except OSError as e:
        logger.error(f"Failed to write track file {path}: {e}")
        raise TrackIOError(f"Failed to write track file {path}: {e}")
    logger.info(f"Saved {track_set.size()} tracks to {path}")


__all__ = ["load_track_set", "save_track_set", "track_set_from_dict", "track_set_to_dict"]
