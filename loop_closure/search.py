"""Backward candidate window and match acceptance."""

from __future__ import annotations

import math
from typing import List


def search_window(frame_to_stitch: int, max_search_length: int) -> List[int]:
    """Candidate frames, nearest first.

    Starts two frames before the anchor (the frame right before it is the bad
    one) and stops above ``max(0, start - max_search_length)``.
    """
    start = frame_to_stitch - 2
    lower = max(0, start - max_search_length)
    return list(range(start, lower, -1))


def accepts_match(match_count: int, test_size: int, stitch_size: int, percent_match_req: float) -> bool:
    """Matches must cover the required fraction of the combined feature pool.

    ``2 * matches >= floor(ratio * (test_size + stitch_size))``
    """
    return 2 * match_count >= math.floor(percent_match_req * (test_size + stitch_size))


__all__ = ["accepts_match", "search_window"]
