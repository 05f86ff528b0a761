"""Loop closure module."""

from .bad_frames import BadFramesLoopCloser, build_loop_closer
from .base import LoopCloser
from .contracts import StitchOutcome, StitchReport
from .sequence import stitch_sequence

__all__ = [
    "BadFramesLoopCloser",
    "LoopCloser",
    "StitchOutcome",
    "StitchReport",
    "build_loop_closer",
    "stitch_sequence",
]
