"""Merge anchor-frame tracks into matched historical tracks."""

from __future__ import annotations

from typing import Dict, Sequence, Set, Tuple

from contracts import MatchSet
from log_config.logger import get_logger
from track import Track, TrackSet

logger = get_logger(__name__)


def merge_tracks(
    matches: MatchSet,
    test_tracks: Sequence[Track],
    stitch_tracks: Sequence[Track],
    track_set: TrackSet,
) -> Tuple[TrackSet, Tuple[int, ...]]:
    """Append each matched anchor track onto its historical track.

    ``test_tracks`` and ``stitch_tracks`` are index-aligned with the features
    given to the matcher. Receiving tracks are copied before their first append,
    so ``track_set`` and its tracks are left untouched. A failed append skips
    that match; appends already made are kept.

    Returns:
        The rebuilt track set without the consumed anchor tracks, and the ids
        of those consumed tracks in merge order.
    """
    extended: Dict[int, Track] = {}
    consumed: Set[int] = set()
    consumed_order = []

    for match in matches:
        source = test_tracks[match.index_a]
        donor = stitch_tracks[match.index_b]
        receiver = extended.get(source.track_id)
        if receiver is None:
            receiver = source.copy()
        if not receiver.append(donor):
            logger.debug(f"Append of track {donor.track_id} onto {source.track_id} rejected")
            continue
        extended[source.track_id] = receiver
        if donor.track_id not in consumed:
            consumed.add(donor.track_id)
            consumed_order.append(donor.track_id)

    # Removal must compact the result: consumed ids may not survive as stale tracks.
    merged = track_set.without(consumed, replacements=list(extended.values()))
    return merged, tuple(consumed_order)


__all__ = ["merge_tracks"]
