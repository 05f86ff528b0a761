"""Exhaustive descriptor matcher with ratio test and cross check."""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

import numpy as np
from scipy.spatial.distance import cdist

from configs.validator import matcher_config_errors
from contracts import Feature, MatchSet
from exceptions import ConfigValidationError, MatchError
from match.matcher import FeatureMatcher

_DEFAULTS: Dict[str, Any] = {
    "metric": "euclidean",
    "max_ratio": 0.8,
    "max_distance": None,
    "cross_check": True,
}


def _as_rows(descriptors: np.ndarray) -> np.ndarray:
    array = np.asarray(descriptors, dtype=np.float64)
    if array.ndim == 1:
        array = array.reshape(1, -1) if array.size else array.reshape(0, 0)
    return array


class BruteForceMatcher(FeatureMatcher):
    name = "brute_force"

    def __init__(
        self,
        metric: str = "euclidean",
        max_ratio: float = 0.8,
        max_distance: Optional[float] = None,
        cross_check: bool = True,
    ) -> None:
        self.set_configuration(
            {
                "metric": metric,
                "max_ratio": max_ratio,
                "max_distance": max_distance,
                "cross_check": cross_check,
            }
        )

    def get_configuration(self) -> Dict[str, Any]:
        return {
            "metric": self._metric,
            "max_ratio": self._max_ratio,
            "max_distance": self._max_distance,
            "cross_check": self._cross_check,
        }

    def set_configuration(self, config: Dict[str, Any]) -> None:
        merged = dict(_DEFAULTS)
        merged.update(config)
        errors = matcher_config_errors(self.name, merged)
        if errors:
            raise ConfigValidationError(f"Invalid {self.name} matcher configuration", validation_errors=errors)
        self._metric = merged["metric"]
        self._max_ratio = float(merged["max_ratio"])
        self._max_distance = None if merged["max_distance"] is None else float(merged["max_distance"])
        self._cross_check = bool(merged["cross_check"])

    def check_configuration(self, config: Dict[str, Any]) -> bool:
        merged = dict(_DEFAULTS)
        merged.update(config)
        return not matcher_config_errors(self.name, merged)

    def match(
        self,
        features_a: Sequence[Feature],
        descriptors_a: np.ndarray,
        features_b: Sequence[Feature],
        descriptors_b: np.ndarray,
    ) -> MatchSet:
        desc_a = _as_rows(descriptors_a)
        desc_b = _as_rows(descriptors_b)
        if desc_a.shape[0] == 0 or desc_b.shape[0] == 0:
            return MatchSet()
        if desc_a.shape[0] != len(features_a) or desc_b.shape[0] != len(features_b):
            raise MatchError("Descriptor rows must align with features")
        if desc_a.shape[1] != desc_b.shape[1]:
            raise MatchError(f"Descriptor widths differ: {desc_a.shape[1]} vs {desc_b.shape[1]}")

        distances = cdist(desc_a, desc_b, metric=self._metric)
        best_b = np.argmin(distances, axis=1)
        best_a = np.argmin(distances, axis=0)

        pairs = []
        for i, j in enumerate(best_b):
            best = distances[i, j]
            if self._max_distance is not None and best > self._max_distance:
                continue
            if distances.shape[1] > 1:
                second = np.partition(distances[i], 1)[1]
                # Lowe ratio; a zero second distance means an ambiguous duplicate
                if second <= 0.0 or best >= self._max_ratio * second:
                    continue
            if self._cross_check and best_a[j] != i:
                continue
            pairs.append((i, int(j)))
        return MatchSet.from_pairs(pairs)
