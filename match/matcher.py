"""Feature matcher interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Sequence

import numpy as np

from contracts import Feature, MatchSet


class FeatureMatcher(ABC):
    """Computes correspondences between two frames' features."""

    name: str = ""

    @abstractmethod
    def match(
        self,
        features_a: Sequence[Feature],
        descriptors_a: np.ndarray,
        features_b: Sequence[Feature],
        descriptors_b: np.ndarray,
    ) -> MatchSet:
        """Return matches indexing into the a and b feature lists."""

    @abstractmethod
    def get_configuration(self) -> Dict[str, Any]:
        """Return this matcher's parameters as a key-value mapping."""

    @abstractmethod
    def set_configuration(self, config: Dict[str, Any]) -> None:
        """Apply parameters, keeping defaults for keys not given."""

    @abstractmethod
    def check_configuration(self, config: Dict[str, Any]) -> bool:
        """Return True if ``config`` is usable by this matcher."""
