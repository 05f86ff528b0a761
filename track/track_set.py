"""Immutable collection of feature tracks with per-frame queries."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Sequence

import numpy as np

from contracts import Feature
from exceptions import TrackError
from track.track import Track


class TrackSet:
    """Read-only view over a set of tracks with unique ids.

    Operations that change membership build a new ``TrackSet``; the tracks of an
    existing set are never added to or removed from it.
    """

    def __init__(self, tracks: Iterable[Track] = ()) -> None:
        self._tracks: List[Track] = list(tracks)
        self._by_id: Dict[int, Track] = {}
        for track in self._tracks:
            if track.track_id in self._by_id:
                raise TrackError(f"Duplicate track id {track.track_id}", track_id=track.track_id)
            self._by_id[track.track_id] = track

    def __len__(self) -> int:
        return len(self._tracks)

    def __iter__(self) -> Iterator[Track]:
        return iter(self._tracks)

    def __repr__(self) -> str:
        return f"TrackSet(tracks={len(self._tracks)})"

    def size(self) -> int:
        return len(self._tracks)

    def tracks(self) -> List[Track]:
        return list(self._tracks)

    def track_ids(self) -> List[int]:
        return [track.track_id for track in self._tracks]

    def get(self, track_id: int) -> Optional[Track]:
        return self._by_id.get(track_id)

    def first_frame(self) -> Optional[int]:
        frames = [track.first_frame for track in self._tracks if not track.empty]
        return min(frames) if frames else None

    def last_frame(self) -> Optional[int]:
        frames = [track.last_frame for track in self._tracks if not track.empty]
        return max(frames) if frames else None

    def all_frame_ids(self) -> List[int]:
        frame_ids = set()
        for track in self._tracks:
            frame_ids.update(track.frame_ids())
        return sorted(frame_ids)

    def active_tracks(self, frame_id: int) -> "TrackSet":
        return TrackSet(track for track in self._tracks if track.state_at(frame_id) is not None)

    def frame_features(self, frame_id: int) -> List[Feature]:
        """Features observed at ``frame_id``, aligned with ``active_tracks(frame_id)``."""
        features: List[Feature] = []
        for track in self._tracks:
            state = track.state_at(frame_id)
            if state is not None:
                features.append(state.feature)
        return features

    def frame_descriptors(self, frame_id: int) -> np.ndarray:
        """Descriptors observed at ``frame_id`` stacked as an ``(N, D)`` array."""
        rows: List[np.ndarray] = []
        for track in self._tracks:
            state = track.state_at(frame_id)
            if state is None:
                continue
            if state.descriptor is None:
                raise TrackError(
                    f"Track {track.track_id} has no descriptor at frame {frame_id}",
                    track_id=track.track_id,
                )
            rows.append(np.asarray(state.descriptor).ravel())
        if not rows:
            return np.empty((0, 0), dtype=np.float32)
        return np.vstack(rows)

    def percentage_tracked(self, frame_a: int, frame_b: int) -> float:
        """Fraction of the tracks present at ``frame_a`` that are still present at ``frame_b``."""
        ids_a = {track.track_id for track in self._tracks if track.state_at(frame_a) is not None}
        if not ids_a:
            return 0.0
        ids_b = {track.track_id for track in self._tracks if track.state_at(frame_b) is not None}
        return len(ids_a & ids_b) / len(ids_a)

    def without(self, track_ids: Iterable[int], replacements: Sequence[Track] = ()) -> "TrackSet":
        """Build a new set with ``track_ids`` removed and same-id ``replacements`` swapped in."""
        removed = set(track_ids)
        swapped = {track.track_id: track for track in replacements}
        kept = [swapped.get(track.track_id, track) for track in self._tracks if track.track_id not in removed]
        return TrackSet(kept)
