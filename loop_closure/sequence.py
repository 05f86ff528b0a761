"""Run loop closure over a range of frames."""

from __future__ import annotations

from typing import List, Optional, Tuple

from log_config.logger import get_logger, log_outcome_summary
from loop_closure.base import LoopCloser
from loop_closure.contracts import StitchReport
from track import TrackSet

logger = get_logger(__name__)


def stitch_sequence(
    closer: LoopCloser,
    track_set: TrackSet,
    first_frame: Optional[int] = None,
    last_frame: Optional[int] = None,
) -> Tuple[TrackSet, List[StitchReport]]:
    """Call the closer once per frame, feeding each result into the next call.

    Defaults to the frame range covered by ``track_set``.
    """
    first = track_set.first_frame() if first_frame is None else first_frame
    last = track_set.last_frame() if last_frame is None else last_frame
    if first is None or last is None:
        logger.warning("Track set is empty; nothing to stitch")
        return track_set, []

    reports: List[StitchReport] = []
    current = track_set
    for frame_number in range(first, last + 1):
        report = closer.stitch_with_report(frame_number, current)
        reports.append(report)
        current = report.track_set

    stitched = sum(1 for report in reports if report.stitched)
    logger.info(
        f"Processed frames {first}..{last}: {stitched} stitches, "
        f"{track_set.size()} -> {current.size()} tracks"
    )
    log_outcome_summary(report.outcome.value for report in reports)
    return current, reports


__all__ = ["stitch_sequence"]
