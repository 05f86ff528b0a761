"""Synthetic track sets with a shot break, for demos and tests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from contracts import Feature
from track.track import Track, TrackState
from track.track_set import TrackSet


@dataclass(frozen=True)
class ShotBreakConfig:
    num_landmarks: int = 40
    num_frames: int = 12
    bad_frame: int = 6
    reacquired: int = 30
    garbage_features: int = 15
    descriptor_dim: int = 32
    descriptor_noise: float = 0.01
    drift_px: float = 1.5
    seed: int = 7


def simulate_shot_break(config: ShotBreakConfig) -> TrackSet:
    """Tracks over frames ``1..num_frames`` with tracking lost at ``bad_frame``.

    Landmarks are tracked up to ``bad_frame - 1``. The bad frame only holds
    short-lived garbage features. From ``bad_frame + 1`` on, ``reacquired`` of
    the landmarks are tracked again under new track ids, with descriptors close
    to the ones they had before the break.
    """
    rng = np.random.default_rng(config.seed)
    descriptors = rng.random((config.num_landmarks, config.descriptor_dim)).astype(np.float32)
    positions = rng.uniform(0.0, 640.0, size=(config.num_landmarks, 2))

    def observe(landmark: int, frame: int) -> TrackState:
        x, y = positions[landmark] + frame * config.drift_px
        noise = rng.normal(0.0, config.descriptor_noise, config.descriptor_dim)
        return TrackState(
            frame_id=frame,
            feature=Feature(x=float(x), y=float(y)),
            descriptor=(descriptors[landmark] + noise).astype(np.float32),
        )

    tracks: List[Track] = []
    next_id = 0
    for landmark in range(config.num_landmarks):
        track = Track(next_id)
        for frame in range(1, config.bad_frame):
            track.append_state(observe(landmark, frame))
        tracks.append(track)
        next_id += 1

    for _ in range(config.garbage_features):
        x, y = rng.uniform(0.0, 640.0, size=2)
        garbage = Track(next_id)
        garbage.append_state(
            TrackState(
                frame_id=config.bad_frame,
                feature=Feature(x=float(x), y=float(y)),
                descriptor=rng.random(config.descriptor_dim).astype(np.float32),
            )
        )
        tracks.append(garbage)
        next_id += 1

    for landmark in rng.permutation(config.num_landmarks)[: config.reacquired]:
        track = Track(next_id)
        for frame in range(config.bad_frame + 1, config.num_frames + 1):
            track.append_state(observe(int(landmark), frame))
        tracks.append(track)
        next_id += 1

    return TrackSet(tracks)


__all__ = ["ShotBreakConfig", "simulate_shot_break"]
