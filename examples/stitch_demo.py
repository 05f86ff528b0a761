"""Synthetic shot break demo."""

from __future__ import annotations

import json

from loop_closure import BadFramesLoopCloser, stitch_sequence
from track.sim import ShotBreakConfig, simulate_shot_break


def main() -> None:
    track_set = simulate_shot_break(ShotBreakConfig())
    closer = BadFramesLoopCloser()
    stitched, reports = stitch_sequence(closer, track_set)
    payload = {
        "tracks_before": track_set.size(),
        "tracks_after": stitched.size(),
        "stitches": [report.to_dict() for report in reports if report.stitched],
    }
    print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
