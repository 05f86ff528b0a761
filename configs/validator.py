"""Configuration validation using JSON Schema."""

from __future__ import annotations

import copy
from typing import Any, Dict, List

import jsonschema
from jsonschema import Draft7Validator, validators

from exceptions import ConfigValidationError
from log_config.logger import get_logger

logger = get_logger(__name__)

# JSON Schema for the bad-frame loop closure parameters. Descriptions double as
# the per-key help text.
LOOP_CLOSURE_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "bf_detection_enabled": {
            "type": "boolean",
            "default": True,
            "description": (
                "Should bad frame detection be enabled? This option will attempt to "
                "bridge the gap between frames which don't meet certain criteria "
                "(percentage of feature points tracked) and will instead attempt "
                "to match features on the current frame against past frames to "
                "meet this criteria. This is useful when there can be bad frames."
            ),
        },
        "bf_detection_percent_match_req": {
            "type": "number",
            "minimum": -1.0,
            "maximum": 1.0,
            "default": 0.2,
            "description": (
                "The required percentage of features needed to be matched for a "
                "stitch to be considered successful (value must be between 0.0 and 1.0)."
            ),
        },
        "bf_detection_new_shot_length": {
            "type": "integer",
            "minimum": 0,
            "default": 2,
            "description": (
                "Number of frames for a new shot to be considered valid before "
                "attempting to stitch to prior shots."
            ),
        },
        "bf_detection_max_search_length": {
            "type": "integer",
            "minimum": 0,
            "default": 5,
            "description": (
                "Maximum number of frames to search in the past for matching to "
                "the end of the last shot."
            ),
        },
        "feature_matcher": {
            "type": "object",
            "default": {"type": "brute_force"},
            "properties": {
                "type": {"type": "string"},
            },
            "description": (
                "Feature matcher used to compare the start of a new shot against "
                "past frames. 'type' selects the implementation; the remaining "
                "keys configure it."
            ),
        },
    },
}

# Per-implementation parameter schemas for the nested feature matcher block.
MATCHER_SCHEMAS: Dict[str, Dict[str, Any]] = {
    "brute_force": {
        "type": "object",
        "additionalProperties": False,
        "properties": {
            "metric": {
                "type": "string",
                "enum": ["euclidean", "sqeuclidean", "cosine", "hamming"],
                "description": "Descriptor distance metric.",
            },
            "max_ratio": {
                "type": "number",
                "exclusiveMinimum": 0.0,
                "maximum": 1.0,
                "description": "Lowe ratio: best distance must be below this fraction of the second best.",
            },
            "max_distance": {
                "type": ["number", "null"],
                "minimum": 0.0,
                "description": "Reject matches farther apart than this (null disables).",
            },
            "cross_check": {
                "type": "boolean",
                "description": "Keep only mutual nearest neighbours.",
            },
        },
    },
    "opencv_bf": {
        "type": "object",
        "additionalProperties": False,
        "properties": {
            "norm": {
                "type": "string",
                "enum": ["l2", "hamming"],
                "description": "OpenCV norm: l2 for float descriptors, hamming for binary.",
            },
            "max_ratio": {
                "type": "number",
                "exclusiveMinimum": 0.0,
                "maximum": 1.0,
                "description": "Lowe ratio: best distance must be below this fraction of the second best.",
            },
        },
    },
}


def extend_with_default(validator_class):
    """Extend JSON Schema validator to set default values."""
    validate_properties = validator_class.VALIDATORS["properties"]

    def set_defaults(validator, properties, instance, schema):
        for prop, subschema in properties.items():
            if "default" in subschema and validator.is_type(instance, "object"):
                instance.setdefault(prop, copy.deepcopy(subschema["default"]))

        for error in validate_properties(validator, properties, instance, schema):
            yield error

    return validators.extend(validator_class, {"properties": set_defaults})


DefaultValidatingValidator = extend_with_default(Draft7Validator)


def _format_errors(errors) -> List[str]:
    messages = []
    for error in errors:
        path = " -> ".join(str(p) for p in error.path) if error.path else "root"
        messages.append(f"{path}: {error.message}")
    return messages


def config_errors(config: Dict[str, Any]) -> List[str]:
    """Return schema violations of ``config`` without raising or mutating it."""
    validator = Draft7Validator(LOOP_CLOSURE_SCHEMA)
    return _format_errors(validator.iter_errors(config))


def matcher_config_errors(matcher_type: str, params: Dict[str, Any]) -> List[str]:
    schema = MATCHER_SCHEMAS.get(matcher_type)
    if schema is None:
        return []
    return _format_errors(Draft7Validator(schema).iter_errors(params))


def apply_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``config`` with every unset key filled from the schema defaults."""
    filled = copy.deepcopy(config) if config else {}
    for _ in DefaultValidatingValidator(LOOP_CLOSURE_SCHEMA).iter_errors(filled):
        pass
    return filled


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Validate configuration against JSON Schema.

    Args:
        config: Configuration dictionary

    Returns:
        A copy of the configuration with defaults filled in

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ConfigValidationError(
            "Configuration must be a mapping",
            validation_errors=[f"root: {config!r} is not of type 'object'"],
        )
    filled = copy.deepcopy(config)
    try:
        validator = DefaultValidatingValidator(LOOP_CLOSURE_SCHEMA)
        error_messages = _format_errors(validator.iter_errors(filled))

        if error_messages:
            logger.error(f"Configuration validation failed with {len(error_messages)} errors")
            for msg in error_messages:
                logger.error(f"  - {msg}")

            raise ConfigValidationError(
                f"Configuration validation failed with {len(error_messages)} error(s). See logs for details.",
                validation_errors=error_messages,
            )

        logger.debug("Configuration validation passed")

    except jsonschema.exceptions.SchemaError as e:
        logger.error(f"Invalid schema: {e}")
        raise ConfigValidationError(f"Invalid schema definition: {e}")

    return filled


def describe_config() -> Dict[str, str]:
    """Per-key help text for the loop closure parameters."""
    return {key: prop["description"] for key, prop in LOOP_CLOSURE_SCHEMA["properties"].items()}


__all__ = [
    "LOOP_CLOSURE_SCHEMA",
    "MATCHER_SCHEMAS",
    "apply_defaults",
    "config_errors",
    "describe_config",
    "matcher_config_errors",
    "validate_config",
]
