"""OpenCV brute-force matcher with Lowe ratio test."""

from __future__ import annotations

from typing import Any, Dict, Sequence

import cv2
import numpy as np

from configs.validator import matcher_config_errors
from contracts import Feature, MatchSet
from exceptions import ConfigValidationError, MatchError
from match.matcher import FeatureMatcher

_NORMS = {
    "l2": cv2.NORM_L2,
    "hamming": cv2.NORM_HAMMING,
}

_DEFAULTS: Dict[str, Any] = {
    "norm": "l2",
    "max_ratio": 0.75,
}


class OpenCVMatcher(FeatureMatcher):
    name = "opencv_bf"

    def __init__(self, norm: str = "l2", max_ratio: float = 0.75) -> None:
        self.set_configuration({"norm": norm, "max_ratio": max_ratio})

    def get_configuration(self) -> Dict[str, Any]:
        return {"norm": self._norm, "max_ratio": self._max_ratio}

    def set_configuration(self, config: Dict[str, Any]) -> None:
        merged = dict(_DEFAULTS)
        merged.update(config)
        errors = matcher_config_errors(self.name, merged)
        if errors:
            raise ConfigValidationError(f"Invalid {self.name} matcher configuration", validation_errors=errors)
        self._norm = merged["norm"]
        self._max_ratio = float(merged["max_ratio"])
        self._bf = cv2.BFMatcher(_NORMS[self._norm], crossCheck=False)

    def check_configuration(self, config: Dict[str, Any]) -> bool:
        merged = dict(_DEFAULTS)
        merged.update(config)
        return not matcher_config_errors(self.name, merged)

    def _prepare(self, descriptors: np.ndarray) -> np.ndarray:
        # NORM_HAMMING needs packed uint8 rows, NORM_L2 needs float32
        dtype = np.uint8 if self._norm == "hamming" else np.float32
        array = np.asarray(descriptors)
        if self._norm == "hamming" and array.size and not np.issubdtype(array.dtype, np.integer):
            raise MatchError(f"Hamming norm needs packed integer descriptors, got {array.dtype}")
        if array.ndim != 2:
            array = array.reshape(-1, array.shape[-1]) if array.size else np.empty((0, 0))
        return np.ascontiguousarray(array, dtype=dtype)

    def match(
        self,
        features_a: Sequence[Feature],
        descriptors_a: np.ndarray,
        features_b: Sequence[Feature],
        descriptors_b: np.ndarray,
    ) -> MatchSet:
        des_a = self._prepare(descriptors_a)
        des_b = self._prepare(descriptors_b)
        if des_a.shape[0] == 0 or des_b.shape[0] == 0:
            return MatchSet()
        if des_a.shape[1] != des_b.shape[1]:
            raise MatchError(f"Descriptor widths differ: {des_a.shape[1]} vs {des_b.shape[1]}")

        pairs = []
        for candidates in self._bf.knnMatch(des_a, des_b, k=2):
            if not candidates:
                continue
            if len(candidates) == 1:
                pairs.append((candidates[0].queryIdx, candidates[0].trainIdx))
                continue
            m, n = candidates[0], candidates[1]
            if m.distance < self._max_ratio * n.distance:
                pairs.append((m.queryIdx, m.trainIdx))
        return MatchSet.from_pairs(pairs)
