#!/usr/bin/env python3
"""Close bad-frame gaps in a saved track set.

Runs bad-frame loop closure once per frame over the track set's frame range
(or the range given) and writes the stitched track set.

Example:
    python stitch_tracks.py --tracks tracks.json --output stitched.json \\
        --config configs/loop_closure.yaml
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from configs.settings import BadFrameConfig, load_config
from exceptions import TrackStitchError
from log_config.logger import get_logger
from loop_closure import build_loop_closer, stitch_sequence
from track.track_io import load_track_set, save_track_set

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Stitch feature tracks across bad frames",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--tracks",
        type=Path,
        required=True,
        help="Input track set (JSON)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        required=True,
        help="Output track set (JSON)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Loop closure configuration (YAML); defaults are used when omitted",
    )
    parser.add_argument(
        "--first-frame",
        type=int,
        default=None,
        help="First frame to process (default: first frame of the track set)",
    )
    parser.add_argument(
        "--last-frame",
        type=int,
        default=None,
        help="Last frame to process (default: last frame of the track set)",
    )
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> int:
    config = load_config(args.config) if args.config is not None else BadFrameConfig()
    closer = build_loop_closer(config)
    track_set = load_track_set(args.tracks)

    stitched, reports = stitch_sequence(closer, track_set, args.first_frame, args.last_frame)
    save_track_set(args.output, stitched)

    for report in reports:
        if report.stitched:
            logger.info(
                f"frame {report.frame_number}: {report.frame_to_stitch} -> {report.matched_frame}, "
                f"merged {len(report.merged_track_ids)} tracks"
            )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    try:
        return run(args)
    except TrackStitchError as e:
        logger.error(f"Stitching failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
