# tests/50_core/test_parse_config.py
"""Tests for babelplan.config.config_loader.parse_config."""

from typing import Any

import pytest

import babelplan.config.config_loader as mod_config_loader


def test_parse_config_returns_none_for_empty_values() -> None:
    assert mod_config_loader.parse_config(None) is None
    assert mod_config_loader.parse_config({}) is None
    assert mod_config_loader.parse_config([]) is None


def test_parse_config_root_shape_is_kept() -> None:
    # --- setup ---
    data: dict[str, Any] = {
        "babel": {"stage": 0},
        "log_level": "debug",
        "mystery": True,  # preserved for validation
    }

    # --- execute ---
    result = mod_config_loader.parse_config(data)

    # --- verify ---
    assert result == data
    assert result is not data


def test_parse_config_flat_config_is_wrapped() -> None:
    # --- execute ---
    result = mod_config_loader.parse_config(
        {"stage": 0, "plugins": ["x"], "log_level": "debug", "strict_config": True},
    )

    # --- verify ---
    assert result == {
        "log_level": "debug",
        "strict_config": True,
        "babel": {"stage": 0, "plugins": ["x"]},
    }


def test_parse_config_flat_config_keeps_unknown_keys_in_babel() -> None:
    result = mod_config_loader.parse_config({"stag": 1})
    assert result == {"babel": {"stag": 1}}


def test_parse_config_rejects_lists() -> None:
    with pytest.raises(TypeError, match="Invalid top-level value: list"):
        mod_config_loader.parse_config(["stage", 0])
