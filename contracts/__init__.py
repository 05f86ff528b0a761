"""Shared data contracts for feature tracking."""

from .types import Feature, Match, MatchSet

__all__ = [
    "Feature",
    "Match",
    "MatchSet",
]
