"""Lookup of feature matcher implementations by configured type name."""

from __future__ import annotations

from typing import Any, Dict, List, Type

from exceptions import ConfigValidationError
from log_config.logger import get_logger
from match.brute_force import BruteForceMatcher
from match.matcher import FeatureMatcher
from match.opencv_bf import OpenCVMatcher

logger = get_logger(__name__)

DEFAULT_MATCHER = BruteForceMatcher.name

_MATCHERS: Dict[str, Type[FeatureMatcher]] = {
    BruteForceMatcher.name: BruteForceMatcher,
    OpenCVMatcher.name: OpenCVMatcher,
}


def register_matcher(name: str, matcher_cls: Type[FeatureMatcher]) -> None:
    if not issubclass(matcher_cls, FeatureMatcher):
        raise TypeError(f"{matcher_cls!r} is not a FeatureMatcher")
    _MATCHERS[name] = matcher_cls


def available_matchers() -> List[str]:
    return sorted(_MATCHERS)


def _split_block(block: Dict[str, Any]) -> tuple[str, Dict[str, Any]]:
    params = dict(block)
    return params.pop("type", DEFAULT_MATCHER), params


def matcher_block(matcher: FeatureMatcher) -> Dict[str, Any]:
    """Nested configuration block for ``matcher``: its type plus its own parameters."""
    block = {"type": matcher.name}
    block.update(matcher.get_configuration())
    return block


def create_matcher(block: Dict[str, Any]) -> FeatureMatcher:
    """Instantiate and configure the matcher named by ``block['type']``.

    Raises:
        ConfigValidationError: If the type is unknown or its parameters are invalid
    """
    name, params = _split_block(block)
    matcher_cls = _MATCHERS.get(name)
    if matcher_cls is None:
        logger.error(f"Unknown feature matcher type: {name}")
        raise ConfigValidationError(
            f"Unknown feature matcher type: {name}",
            validation_errors=[f"feature_matcher -> type: {name!r} is not one of {available_matchers()}"],
        )
    matcher = matcher_cls()
    matcher.set_configuration(params)
    return matcher


def check_matcher_configuration(block: Dict[str, Any]) -> bool:
    name, params = _split_block(block)
    matcher_cls = _MATCHERS.get(name)
    if matcher_cls is None:
        return False
    return matcher_cls().check_configuration(params)
