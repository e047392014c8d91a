from __future__ import annotations

"""
Unit tests for the Configuration Validation Service.

Verifies:
1. Missing keys are filled from the defaults.
2. Lenient coercion of booleans, CSV lists and extensions.
3. Strict mode raises on type mismatches.
"""

import pytest

from treefs.core.services.validator import validate_config
from treefs.domain.config import get_default_config
from treefs.infra.logging import LOG_LEVELS


def test_valid_config_passes_without_warnings(mock_config_dict):
    clean, warnings = validate_config(mock_config_dict)

    assert warnings == []
    assert clean == mock_config_dict


def test_non_dict_falls_back_to_defaults():
    clean, warnings = validate_config(["not", "a", "dict"])

    assert clean == get_default_config()
    assert len(warnings) == 1


def test_non_dict_strict_raises():
    with pytest.raises(TypeError):
        validate_config("nope", strict=True)


def test_missing_keys_use_defaults():
    clean, _ = validate_config({"auto_export": False})

    assert clean["auto_export"] is False
    assert clean["auto_import"] is True
    assert clean["root_name"] == "/"


def test_bool_coercion_from_strings_and_numbers():
    clean, warnings = validate_config({"auto_import": "no", "auto_export": 1})

    assert clean["auto_import"] is False
    assert clean["auto_export"] is True
    assert len(warnings) == 2


def test_csv_and_extension_normalization():
    clean, warnings = validate_config({
        "ignore_dirs": "node_modules, dist",
        "ignore_extensions": ["EXE", ".Tmp"],
    })

    assert clean["ignore_dirs"] == ["node_modules", "dist"]
    assert clean["ignore_extensions"] == [".exe", ".tmp"]
    assert warnings


def test_explicit_empty_list_is_kept():
    clean, _ = validate_config({"ignore_dirs": []})
    assert clean["ignore_dirs"] == []


def test_invalid_list_items_are_discarded():
    clean, warnings = validate_config({"ignore_files": ["ok.txt", 3, "  "]})

    assert clean["ignore_files"] == ["ok.txt"]
    assert any("ignore_files[1]" in w for w in warnings)


def test_log_level_normalization():
    clean, _ = validate_config({"log_level": "debug"})
    assert clean["log_level"] == "DEBUG"

    clean, warnings = validate_config({"log_level": "chatty"})
    assert clean["log_level"] == "INFO"
    assert warnings


@pytest.mark.parametrize("level", sorted(LOG_LEVELS))
def test_every_logging_level_is_accepted(level):
    clean, warnings = validate_config({"log_level": level.lower()}, strict=True)
    assert clean["log_level"] == level
    assert warnings == []


def test_blank_strings_fall_back():
    clean, _ = validate_config({"state_file": "   ", "root_name": ""})
    defaults = get_default_config()

    assert clean["state_file"] == defaults["state_file"]
    assert clean["root_name"] == "/"


def test_null_log_file_becomes_empty():
    clean, _ = validate_config({"log_file": None})
    assert clean["log_file"] == ""


def test_strict_mode_raises_on_wrong_types():
    with pytest.raises(TypeError):
        validate_config({"auto_import": "yes"}, strict=True)
    with pytest.raises(TypeError):
        validate_config({"ignore_dirs": 5}, strict=True)
    with pytest.raises(ValueError):
        validate_config({"ignore_extensions": ["exe"]}, strict=True)
    with pytest.raises(ValueError):
        validate_config({"log_level": "chatty"}, strict=True)
