"""Loop closure result contracts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from track import TrackSet


class StitchOutcome(str, Enum):
    DISABLED = "DISABLED"
    INSUFFICIENT_HISTORY = "INSUFFICIENT_HISTORY"
    NO_GAP = "NO_GAP"
    UNSTABLE_SHOT = "UNSTABLE_SHOT"
    NO_CANDIDATE = "NO_CANDIDATE"
    STITCHED = "STITCHED"


@dataclass(frozen=True)
class StitchReport:
    frame_number: int
    outcome: StitchOutcome
    track_set: TrackSet
    frame_to_stitch: Optional[int] = None
    matched_frame: Optional[int] = None
    frames_searched: Tuple[int, ...] = ()
    match_count: int = 0
    merged_track_ids: Tuple[int, ...] = ()

    @property
    def search_attempted(self) -> bool:
        return self.outcome in (StitchOutcome.NO_CANDIDATE, StitchOutcome.STITCHED)

    @property
    def stitched(self) -> bool:
        return self.outcome is StitchOutcome.STITCHED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "frame_number": self.frame_number,
            "outcome": self.outcome.value,
            "frame_to_stitch": self.frame_to_stitch,
            "matched_frame": self.matched_frame,
            "frames_searched": list(self.frames_searched),
            "match_count": self.match_count,
            "merged_track_ids": list(self.merged_track_ids),
            "track_count": self.track_set.size(),
        }
