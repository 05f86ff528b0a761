"""Core data contracts for features and feature matches."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Tuple


@dataclass(frozen=True)
class Feature:
    x: float
    y: float
    magnitude: float = 0.0
    scale: float = 1.0
    angle: float = 0.0

    @property
    def loc(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Match:
    """Correspondence between two frames' active feature lists."""

    index_a: int
    index_b: int


@dataclass(frozen=True)
class MatchSet:
    """Ordered matches produced by one matcher invocation."""

    matches: Tuple[Match, ...] = field(default_factory=tuple)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[int, int]]) -> "MatchSet":
        return cls(matches=tuple(Match(int(a), int(b)) for a, b in pairs))

    def size(self) -> int:
        return len(self.matches)

    def __len__(self) -> int:
        return len(self.matches)

    def __iter__(self) -> Iterator[Match]:
        return iter(self.matches)
