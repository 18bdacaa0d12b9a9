# tests/50_core/test_load_and_validate_config.py

import logging
from argparse import Namespace
from pathlib import Path

import pytest

import babelplan.config.config_loader as mod_config_loader
import babelplan.logs as mod_logs
from tests.utils import make_summary, write_config_file
from tests.utils.log_fixtures import RecordCollector


def _args(**kwargs: object) -> Namespace:
    defaults: dict[str, object] = {"config": None, "log_level": None, "strict": None}
    defaults.update(kwargs)
    return Namespace(**defaults)


def test_returns_none_without_config(tmp_path: Path) -> None:
    assert mod_config_loader.load_and_validate_config(_args(), tmp_path) is None


def test_returns_none_for_empty_config(tmp_path: Path) -> None:
    write_config_file(tmp_path, "{}")
    assert mod_config_loader.load_and_validate_config(_args(), tmp_path) is None


def test_loads_flat_config(tmp_path: Path) -> None:
    # --- setup ---
    path = write_config_file(tmp_path, {"stage": 0, "presets": ["my-preset"]})

    # --- execute ---
    result = mod_config_loader.load_and_validate_config(_args(), tmp_path)

    # --- verify ---
    assert result is not None
    config_path, root_cfg, summary = result
    assert config_path == path.resolve()
    assert root_cfg == {"babel": {"stage": 0, "presets": ["my-preset"]}}
    assert summary == make_summary(strict=False)


def test_invalid_config_raises_silent_value_error(
    tmp_path: Path,
    log_records: RecordCollector,
) -> None:
    # --- setup ---
    write_config_file(tmp_path, {"babel": {"stage": 8}})

    # --- execute ---
    with pytest.raises(ValueError, match="contains validation errors") as exc_info:
        mod_config_loader.load_and_validate_config(_args(), tmp_path)

    # --- verify ---
    assert getattr(exc_info.value, "silent", False) is True
    assert exc_info.value.data.valid is False  # type: ignore[attr-defined]
    errors = "\n".join(log_records.messages(logging.ERROR))
    assert "Config .babelplan.json rejected: 1 error" in errors
    assert "`stage`" in errors


def test_warnings_are_logged_but_config_is_returned(
    tmp_path: Path,
    log_records: RecordCollector,
) -> None:
    # --- setup ---
    write_config_file(tmp_path, {"babel": {"stag": 0}})

    # --- execute ---
    result = mod_config_loader.load_and_validate_config(_args(), tmp_path)

    # --- verify ---
    assert result is not None
    warnings = "\n".join(log_records.messages(logging.WARNING))
    assert "Config .babelplan.json accepted with 1 warning (lenient)" in warnings
    assert "did you mean" in warnings


def test_strict_flag_makes_warnings_fatal(tmp_path: Path) -> None:
    write_config_file(tmp_path, {"babel": {"stag": 0}})
    with pytest.raises(ValueError, match="validation errors"):
        mod_config_loader.load_and_validate_config(_args(strict=True), tmp_path)


def test_config_log_level_applies_when_cli_is_silent(tmp_path: Path) -> None:
    # --- setup ---
    write_config_file(tmp_path, {"babel": {}, "log_level": "ERROR"})

    # --- execute ---
    mod_config_loader.load_and_validate_config(_args(), tmp_path)

    # --- verify ---
    assert mod_logs.getAppLogger().level == logging.ERROR


def test_cli_log_level_beats_config_log_level(tmp_path: Path) -> None:
    # --- setup ---
    logger = mod_logs.getAppLogger()
    logger.setLevel("warning")
    write_config_file(tmp_path, {"babel": {}, "log_level": "error"})

    # --- execute ---
    mod_config_loader.load_and_validate_config(_args(log_level="warning"), tmp_path)

    # --- verify ---
    assert logger.level == logging.WARNING


def test_unparseable_shape_names_file(tmp_path: Path) -> None:
    write_config_file(tmp_path, "[1, 2]")
    with pytest.raises(TypeError, match=r"Could not parse config \.babelplan\.json"):
        mod_config_loader.load_and_validate_config(_args(), tmp_path)


def test_env_log_level_beats_config_log_level(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    # --- setup ---
    monkeypatch.setenv("BABELPLAN_LOG_LEVEL", "warning")
    write_config_file(tmp_path, {"babel": {}, "log_level": "error"})

    # --- execute ---
    mod_config_loader.load_and_validate_config(_args(), tmp_path)

    # --- verify ---
    assert mod_logs.getAppLogger().level == logging.WARNING


def test_unknown_config_log_level_leaves_level_alone(tmp_path: Path) -> None:
    # --- setup ---
    logger = mod_logs.getAppLogger()
    logger.setLevel("info")
    write_config_file(tmp_path, {"babel": {}, "log_level": "loud"})

    # --- execute ---
    with pytest.raises(ValueError, match="validation errors"):
        mod_config_loader.load_and_validate_config(_args(), tmp_path)

    # --- verify ---
    assert logger.level == logging.INFO


def test_errors_are_grouped_under_one_heading(
    tmp_path: Path,
    log_records: RecordCollector,
) -> None:
    # --- setup ---
    write_config_file(tmp_path, {"babel": {"stage": 8, "runtime": "often"}})

    # --- execute ---
    with pytest.raises(ValueError, match="validation errors"):
        mod_config_loader.load_and_validate_config(_args(), tmp_path)

    # --- verify ---
    (listing,) = [m for m in log_records.messages(logging.ERROR) if "Errors:" in m]
    assert "`runtime`" in listing
    assert "`stage`" in listing
