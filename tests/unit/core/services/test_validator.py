from __future__ import annotations

"""
Unit tests for the Configuration Validation Service.

Verifies:
1. Valid configurations pass through untouched.
2. Lenient coercion of numeric strings and floats, with warnings.
3. Fallback to defaults for invalid values in non-strict mode.
4. Exceptions in strict mode.
"""

import pytest

from partitionfs.core.services.validator import validate_config
from partitionfs.domain.config import get_default_config


def test_valid_config_has_no_warnings(mock_config_dict) -> None:
    clean, warnings = validate_config(mock_config_dict)

    assert warnings == []
    assert clean["root_name"] == "volume"
    assert clean["capacity"] == 5000
    assert clean["indent_width"] == 4
    assert clean["log_level"] == "DEBUG"


def test_missing_keys_are_filled_with_defaults() -> None:
    clean, warnings = validate_config({"capacity": 42})
    defaults = get_default_config()

    assert warnings == []
    assert clean["capacity"] == 42
    assert clean["root_name"] == defaults["root_name"]
    assert clean["indent_width"] == defaults["indent_width"]


def test_unknown_keys_are_dropped() -> None:
    clean, _ = validate_config({"theme": "dark"})
    assert "theme" not in clean


def test_non_dict_falls_back_to_defaults() -> None:
    clean, warnings = validate_config(["not", "a", "dict"])
    assert clean == get_default_config()
    assert len(warnings) == 1


def test_numeric_strings_are_coerced() -> None:
    clean, warnings = validate_config({"capacity": " 2048 ", "indent_width": 3.0})
    assert clean["capacity"] == 2048
    assert clean["indent_width"] == 3
    assert len(warnings) == 2


@pytest.mark.parametrize("field,value", [
    ("capacity", -5),
    ("capacity", True),
    ("capacity", "lots"),
    ("indent_width", -1),
    ("root_name", ""),
    ("root_name", 12),
    ("log_level", "VERBOSE"),
])
def test_invalid_values_fall_back(field, value) -> None:
    clean, warnings = validate_config({field: value})
    assert clean[field] == get_default_config()[field]
    assert len(warnings) == 1
    assert field in warnings[0]


def test_log_level_is_normalized() -> None:
    clean, _ = validate_config({"log_level": " info "})
    assert clean["log_level"] == "INFO"


def test_blank_log_file_becomes_none() -> None:
    clean, _ = validate_config({"log_file": "   "})
    assert clean["log_file"] is None


@pytest.mark.parametrize("config,error", [
    ({"capacity": -1}, ValueError),
    ({"capacity": "100"}, TypeError),
    ({"root_name": ""}, ValueError),
    ({"root_name": 3}, TypeError),
    ({"log_level": "LOUD"}, ValueError),
    ("nope", TypeError),
])
def test_strict_mode_raises(config, error) -> None:
    with pytest.raises(error):
        validate_config(config, strict=True)
