"""Unit tests for loop closure configuration validation."""

import unittest

from configs.validator import (
    LOOP_CLOSURE_SCHEMA,
    apply_defaults,
    config_errors,
    describe_config,
    matcher_config_errors,
    validate_config,
)
from exceptions import ConfigValidationError


class TestConfigValidator(unittest.TestCase):
    """Test configuration validator."""

    def test_empty_config_gets_defaults(self):
        filled = validate_config({})
        self.assertEqual(filled["bf_detection_percent_match_req"], 0.2)
        self.assertEqual(filled["feature_matcher"], {"type": "brute_force"})

    def test_validate_does_not_mutate_input(self):
        config = {"bf_detection_enabled": False}
        validate_config(config)
        self.assertEqual(config, {"bf_detection_enabled": False})

    def test_apply_defaults_copies(self):
        config = {"bf_detection_enabled": False}
        filled = apply_defaults(config)
        self.assertEqual(filled["bf_detection_max_search_length"], 5)
        self.assertNotIn("bf_detection_max_search_length", config)

    def test_wrong_type_reported(self):
        with self.assertRaises(ConfigValidationError) as ctx:
            validate_config({"bf_detection_new_shot_length": "two"})
        self.assertTrue(any("bf_detection_new_shot_length" in msg for msg in ctx.exception.validation_errors))

    def test_bool_is_not_integer(self):
        self.assertTrue(config_errors({"bf_detection_max_search_length": True}))

    def test_non_mapping_rejected(self):
        with self.assertRaises(ConfigValidationError):
            validate_config(["not", "a", "mapping"])

    def test_matcher_block_must_be_mapping(self):
        self.assertTrue(config_errors({"feature_matcher": "brute_force"}))

    def test_matcher_parameters_checked(self):
        self.assertEqual(matcher_config_errors("brute_force", {"max_ratio": 0.5}), [])
        self.assertTrue(matcher_config_errors("brute_force", {"max_ratio": 0.0}))
        self.assertTrue(matcher_config_errors("opencv_bf", {"norm": "l1"}))

    def test_every_key_has_help_text(self):
        help_text = describe_config()
        self.assertEqual(set(help_text), set(LOOP_CLOSURE_SCHEMA["properties"]))
        self.assertTrue(all(help_text.values()))


if __name__ == "__main__":
    unittest.main()
