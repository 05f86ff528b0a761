"""Configuration loading for bad-frame loop closure."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml

from configs.validator import validate_config
from exceptions import ConfigValidationError, InvalidConfigError
from log_config.logger import get_logger

logger = get_logger(__name__)


def _default_matcher_block() -> Dict[str, Any]:
    return {"type": "brute_force"}


@dataclass(frozen=True)
class BadFrameConfig:
    enabled: bool = True
    percent_match_req: float = 0.2
    new_shot_length: int = 2
    max_search_length: int = 5
    feature_matcher: Dict[str, Any] = field(default_factory=_default_matcher_block)

    def __post_init__(self) -> None:
        if abs(self.percent_match_req) > 1.0:
            raise ConfigValidationError(
                f"bf_detection_percent_match_req must be within [-1.0, 1.0], got {self.percent_match_req}",
                validation_errors=["bf_detection_percent_match_req: absolute value exceeds 1.0"],
            )
        if self.new_shot_length < 0 or self.max_search_length < 0:
            raise ConfigValidationError(
                "Shot and search lengths must be non-negative",
                validation_errors=["bf_detection_new_shot_length/bf_detection_max_search_length: negative"],
            )
        # A new shot is at least one frame long
        if self.new_shot_length == 0:
            object.__setattr__(self, "new_shot_length", 1)
        object.__setattr__(self, "feature_matcher", copy.deepcopy(dict(self.feature_matcher)))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BadFrameConfig":
        """Build from the key-value form; unset keys take their documented defaults."""
        filled = validate_config(data or {})
        return cls(
            enabled=bool(filled["bf_detection_enabled"]),
            percent_match_req=float(filled["bf_detection_percent_match_req"]),
            new_shot_length=int(filled["bf_detection_new_shot_length"]),
            max_search_length=int(filled["bf_detection_max_search_length"]),
            feature_matcher=filled["feature_matcher"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bf_detection_enabled": self.enabled,
            "bf_detection_percent_match_req": self.percent_match_req,
            "bf_detection_new_shot_length": self.new_shot_length,
            "bf_detection_max_search_length": self.max_search_length,
            "feature_matcher": copy.deepcopy(self.feature_matcher),
        }


def load_config(path: Path) -> BadFrameConfig:
    """Load and validate configuration from YAML file.

    The parameters may sit at the top level or under a ``loop_closure`` section.

    Args:
        path: Path to configuration file

    Returns:
        Validated BadFrameConfig instance

    Raises:
        ConfigError: If configuration is invalid or cannot be loaded
    """
    try:
        logger.info(f"Loading configuration from {path}")
        if not path.exists():
            raise InvalidConfigError(f"Configuration file not found: {path}")

        data = yaml.safe_load(path.read_text()) or {}

    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration: {e}")
        raise InvalidConfigError(f"Failed to parse configuration file: {e}")

    if isinstance(data, dict) and "loop_closure" in data:
        data = data["loop_closure"] or {}

    config = BadFrameConfig.from_dict(data)
    logger.info(
        f"Configuration loaded successfully: enabled={config.enabled} "
        f"match_req={config.percent_match_req} new_shot={config.new_shot_length} "
        f"search={config.max_search_length} matcher={config.feature_matcher.get('type')}"
    )
    return config


__all__ = ["BadFrameConfig", "load_config"]
