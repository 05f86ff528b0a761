"""Shot boundary detection: decides whether a stitch should be attempted."""

from __future__ import annotations

from typing import Optional, Tuple

from configs.settings import BadFrameConfig
from loop_closure.contracts import StitchOutcome
from track import TrackSet


def find_frame_to_stitch(
    frame_number: int,
    track_set: TrackSet,
    config: BadFrameConfig,
) -> Tuple[Optional[int], Optional[StitchOutcome]]:
    """Locate the anchor frame of a freshly formed shot that follows a bad frame.

    A stitch is warranted only when the transition into the anchor frame falls
    below the required tracked percentage and every transition from the anchor
    up to ``frame_number`` meets it again, i.e. a single bad transition followed
    by ``new_shot_length`` stable frames.

    Returns:
        ``(frame_to_stitch, None)`` when a stitch should be attempted, otherwise
        ``(None, outcome)`` naming why not.
    """
    if not config.enabled:
        return None, StitchOutcome.DISABLED
    if frame_number <= config.new_shot_length:
        return None, StitchOutcome.INSUFFICIENT_HISTORY

    required = config.percent_match_req
    frame_to_stitch = frame_number - config.new_shot_length + 1
    if track_set.percentage_tracked(frame_to_stitch - 1, frame_to_stitch) >= required:
        return None, StitchOutcome.NO_GAP

    for frame in range(frame_to_stitch + 1, frame_number + 1):
        if track_set.percentage_tracked(frame - 1, frame) < required:
            return None, StitchOutcome.UNSTABLE_SHOT

    return frame_to_stitch, None


__all__ = ["find_frame_to_stitch"]
