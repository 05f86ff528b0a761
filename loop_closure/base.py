"""Loop closure interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict

from loop_closure.contracts import StitchReport
from track import TrackSet


class LoopCloser(ABC):
    def stitch(self, frame_number: int, track_set: TrackSet) -> TrackSet:
        """Return ``track_set`` with gaps closed at ``frame_number``, or the input unchanged."""
        return self.stitch_with_report(frame_number, track_set).track_set

    @abstractmethod
    def stitch_with_report(self, frame_number: int, track_set: TrackSet) -> StitchReport:
        """Stitch and describe the outcome; the report carries the resulting track set."""

    @abstractmethod
    def get_configuration(self) -> Dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def set_configuration(self, config: Dict[str, Any]) -> None:
        raise NotImplementedError

    @abstractmethod
    def check_configuration(self, config: Dict[str, Any]) -> bool:
        raise NotImplementedError

    @abstractmethod
    def clone(self) -> "LoopCloser":
        """Independent closer carrying the same configuration."""
