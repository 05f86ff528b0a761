"""Track module."""

from .track import Track, TrackState
from .track_set import TrackSet

__all__ = ["Track", "TrackSet", "TrackState"]
