"""Feature matching module."""

from .brute_force import BruteForceMatcher
from .matcher import FeatureMatcher
from .opencv_bf import OpenCVMatcher
from .registry import available_matchers, check_matcher_configuration, create_matcher, register_matcher

__all__ = [
    "BruteForceMatcher",
    "FeatureMatcher",
    "OpenCVMatcher",
    "available_matchers",
    "check_matcher_configuration",
    "create_matcher",
    "register_matcher",
]
