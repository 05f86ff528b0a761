"""Loop closure that only bridges bad frames at shot boundaries."""

from __future__ import annotations

import copy
import dataclasses
import time
from typing import Any, Dict, List, Optional

from configs.settings import BadFrameConfig
from configs.validator import apply_defaults, config_errors, describe_config
from exceptions import ConfigError
from log_config.logger import get_logger, log_stitch_timing
from loop_closure.base import LoopCloser
from loop_closure.contracts import StitchOutcome, StitchReport
from loop_closure.detector import find_frame_to_stitch
from loop_closure.merge import merge_tracks
from loop_closure.search import accepts_match, search_window
from match.matcher import FeatureMatcher
from match.registry import available_matchers, check_matcher_configuration, create_matcher, matcher_block
from track import TrackSet

logger = get_logger(__name__)


def _overlay(base: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in update.items():
        if key == "feature_matcher" and isinstance(value, dict) and isinstance(merged.get(key), dict):
            # Switching implementation discards the previous implementation's parameters
            if value.get("type", merged[key].get("type")) != merged[key].get("type"):
                merged[key] = copy.deepcopy(value)
            else:
                merged[key].update(copy.deepcopy(value))
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class BadFramesLoopCloser(LoopCloser):
    """Stitch the first frame of a new shot back onto a recent past frame.

    When tracking collapses across one transition and then recovers for
    ``new_shot_length`` frames, the anchor (first) frame of the new shot is
    matched against up to ``max_search_length`` earlier frames, nearest first.
    The first candidate whose matches cover enough of the combined feature pool
    has the matched anchor tracks appended onto its tracks.
    """

    def __init__(
        self,
        matcher: Optional[FeatureMatcher] = None,
        config: Optional[BadFrameConfig] = None,
    ) -> None:
        self._config = config if config is not None else BadFrameConfig()
        self._matcher = matcher if matcher is not None else create_matcher(self._config.feature_matcher)

    @property
    def config(self) -> BadFrameConfig:
        return self._config

    @property
    def matcher(self) -> FeatureMatcher:
        return self._matcher

    def clone(self) -> "BadFramesLoopCloser":
        # Registered matchers are rebuilt so reconfiguring one closer leaves the other alone
        if self._matcher.name in available_matchers():
            matcher = create_matcher(matcher_block(self._matcher))
        else:
            matcher = self._matcher
        return BadFramesLoopCloser(matcher=matcher, config=self._config)

    def get_configuration(self) -> Dict[str, Any]:
        config = self._config.to_dict()
        config["feature_matcher"] = matcher_block(self._matcher)
        return config

    def set_configuration(self, config: Dict[str, Any]) -> None:
        """Apply ``config`` on top of the default configuration.

        Keys not present take their documented defaults. Without a
        ``feature_matcher`` block, or with one naming the current matcher's
        type, the current matcher instance is kept.

        Raises:
            ConfigValidationError: If the merged configuration is invalid
        """
        merged = _overlay(BadFrameConfig().to_dict(), config or {})
        new_config = BadFrameConfig.from_dict(merged)
        block = new_config.feature_matcher
        if "feature_matcher" not in (config or {}):
            matcher = self._matcher
        elif block.get("type") == self._matcher.name:
            # Same implementation: reconfigure the current instance, which may not be registered
            matcher = self._matcher
            matcher.set_configuration({key: value for key, value in block.items() if key != "type"})
        else:
            matcher = create_matcher(block)
        new_config = dataclasses.replace(new_config, feature_matcher=matcher_block(matcher))
        self._config = new_config
        self._matcher = matcher
        logger.debug(f"Loop closure configured: {self.get_configuration()}")

    def check_configuration(self, config: Dict[str, Any]) -> bool:
        if not isinstance(config, dict):
            return False
        filled = apply_defaults(_overlay(BadFrameConfig().to_dict(), config))
        if config_errors(filled):
            return False
        block = filled["feature_matcher"]
        if block.get("type") == self._matcher.name:
            params = {key: value for key, value in block.items() if key != "type"}
            matcher_ok = self._matcher.check_configuration(params)
        else:
            matcher_ok = check_matcher_configuration(block)
        return matcher_ok and abs(filled["bf_detection_percent_match_req"]) <= 1.0

    @staticmethod
    def describe_configuration() -> Dict[str, str]:
        return describe_config()

    def stitch_with_report(self, frame_number: int, track_set: TrackSet) -> StitchReport:
        start = time.perf_counter()
        report = self._stitch(frame_number, track_set)
        log_stitch_timing(frame_number, (time.perf_counter() - start) * 1000.0)
        return report

    def _stitch(self, frame_number: int, track_set: TrackSet) -> StitchReport:
        frame_to_stitch, outcome = find_frame_to_stitch(frame_number, track_set, self._config)
        if frame_to_stitch is None:
            logger.debug(f"Frame {frame_number}: no stitch ({outcome.value})")
            return StitchReport(frame_number=frame_number, outcome=outcome, track_set=track_set)

        stitch_set = track_set.active_tracks(frame_to_stitch)
        stitch_features = stitch_set.frame_features(frame_to_stitch)
        stitch_descriptors = stitch_set.frame_descriptors(frame_to_stitch)

        searched: List[int] = []
        for frame_to_test in search_window(frame_to_stitch, self._config.max_search_length):
            searched.append(frame_to_test)
            test_set = track_set.active_tracks(frame_to_test)
            matches = self._matcher.match(
                test_set.frame_features(frame_to_test),
                test_set.frame_descriptors(frame_to_test),
                stitch_features,
                stitch_descriptors,
            )
            if not accepts_match(
                matches.size(), test_set.size(), stitch_set.size(), self._config.percent_match_req
            ):
                logger.debug(
                    f"Frame {frame_number}: candidate {frame_to_test} rejected "
                    f"({matches.size()} matches, {test_set.size()}+{stitch_set.size()} features)"
                )
                continue

            merged, merged_ids = merge_tracks(matches, test_set.tracks(), stitch_set.tracks(), track_set)
            logger.info(
                f"Frame {frame_number}: stitched frame {frame_to_stitch} to frame {frame_to_test} "
                f"({matches.size()} matches, {len(merged_ids)} tracks merged)"
            )
            return StitchReport(
                frame_number=frame_number,
                outcome=StitchOutcome.STITCHED,
                track_set=merged,
                frame_to_stitch=frame_to_stitch,
                matched_frame=frame_to_test,
                frames_searched=tuple(searched),
                match_count=matches.size(),
                merged_track_ids=merged_ids,
            )

        logger.debug(f"Frame {frame_number}: no candidate matched frame {frame_to_stitch} in {searched}")
        return StitchReport(
            frame_number=frame_number,
            outcome=StitchOutcome.NO_CANDIDATE,
            track_set=track_set,
            frame_to_stitch=frame_to_stitch,
            frames_searched=tuple(searched),
        )


def build_loop_closer(config: BadFrameConfig) -> BadFramesLoopCloser:
    """Create a closer from a loaded configuration.

    Raises:
        ConfigError: If the nested matcher configuration is rejected
    """
    closer = BadFramesLoopCloser(config=config)
    if not closer.check_configuration(config.to_dict()):
        raise ConfigError("Loop closure configuration failed validation")
    return closer


__all__ = ["BadFramesLoopCloser", "build_loop_closer"]
