"""Feature tracks: append-only per-frame observation histories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional

import numpy as np

from contracts import Feature
from exceptions import TrackError


@dataclass(frozen=True)
class TrackState:
    frame_id: int
    feature: Feature
    descriptor: Optional[np.ndarray] = None


class Track:
    """History of one tracked feature, ordered by strictly increasing frame id."""

    def __init__(self, track_id: int, history: Optional[List[TrackState]] = None) -> None:
        self._track_id = int(track_id)
        self._history: List[TrackState] = []
        for state in history or []:
            self.append_state(state)

    @property
    def track_id(self) -> int:
        return self._track_id

    @property
    def history(self) -> List[TrackState]:
        return list(self._history)

    def __len__(self) -> int:
        return len(self._history)

    def __iter__(self) -> Iterator[TrackState]:
        return iter(self._history)

    def __repr__(self) -> str:
        if not self._history:
            return f"Track(id={self._track_id}, empty)"
        return f"Track(id={self._track_id}, frames={self.first_frame}..{self.last_frame}, states={len(self)})"

    @property
    def empty(self) -> bool:
        return not self._history

    @property
    def first_frame(self) -> int:
        if not self._history:
            raise TrackError("Empty track has no first frame", track_id=self._track_id)
        return self._history[0].frame_id

    @property
    def last_frame(self) -> int:
        if not self._history:
            raise TrackError("Empty track has no last frame", track_id=self._track_id)
        return self._history[-1].frame_id

    def frame_ids(self) -> List[int]:
        return [state.frame_id for state in self._history]

    def state_at(self, frame_id: int) -> Optional[TrackState]:
        # Histories are short; a linear scan from the back is enough.
        for state in reversed(self._history):
            if state.frame_id == frame_id:
                return state
            if state.frame_id < frame_id:
                break
        return None

    def append_state(self, state: TrackState) -> None:
        if self._history and state.frame_id <= self._history[-1].frame_id:
            raise TrackError(
                f"Track {self._track_id}: frame {state.frame_id} does not follow frame {self._history[-1].frame_id}",
                track_id=self._track_id,
            )
        self._history.append(state)

    def append(self, other: "Track") -> bool:
        """Extend this history with another track's states.

        Fails, leaving both tracks untouched, when the other history starts at or
        before this track's last frame. Gaps between the two are allowed.
        """
        if self._history and other._history and other._history[0].frame_id <= self._history[-1].frame_id:
            return False
        self._history.extend(other._history)
        return True

    def copy(self) -> "Track":
        duplicate = Track(self._track_id)
        duplicate._history = list(self._history)
        return duplicate
