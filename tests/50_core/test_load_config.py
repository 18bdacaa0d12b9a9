# tests/50_core/test_load_config.py
"""Tests for babelplan.config.config_loader.load_config."""

from pathlib import Path

import pytest

import babelplan.config.config_loader as mod_config_loader
from tests.utils import write_config_file


def test_load_config_reads_json(tmp_path: Path) -> None:
    path = write_config_file(tmp_path, {"babel": {"stage": 0}})
    assert mod_config_loader.load_config(path) == {"babel": {"stage": 0}}


def test_load_config_reads_jsonc_with_comments_and_trailing_commas(
    tmp_path: Path,
) -> None:
    # --- setup ---
    path = write_config_file(
        tmp_path,
        """
        // babel settings
        {
          "stage": 0, /* experimental */
          "plugins": ["a", "b",],
        }
        """,
        name=".babelplan.jsonc",
    )

    # --- execute ---
    result = mod_config_loader.load_config(path)

    # --- verify ---
    assert result == {"stage": 0, "plugins": ["a", "b"]}


def test_load_config_empty_jsonc_is_none(tmp_path: Path) -> None:
    path = write_config_file(tmp_path, "// nothing yet\n", name=".babelplan.jsonc")
    assert mod_config_loader.load_config(path) is None


def test_load_config_invalid_json_names_file_not_path(tmp_path: Path) -> None:
    # --- setup ---
    path = write_config_file(tmp_path, '{"stage": }')

    # --- execute and verify ---
    with pytest.raises(ValueError, match=r"\.babelplan\.json") as exc_info:
        mod_config_loader.load_config(path)
    assert str(tmp_path) not in str(exc_info.value)


def test_load_config_scalar_json_rejected(tmp_path: Path) -> None:
    path = write_config_file(tmp_path, "42")
    with pytest.raises(ValueError, match="root type"):
        mod_config_loader.load_config(path)


def test_load_config_python(tmp_path: Path) -> None:
    # --- setup ---
    path = write_config_file(
        tmp_path,
        "STAGE = 1\nconfig = {'babel': {'stage': STAGE, 'loose': False}}\n",
        name=".babelplan.py",
    )

    # --- execute ---
    result = mod_config_loader.load_config(path)

    # --- verify ---
    assert result == {"babel": {"stage": 1, "loose": False}}


def test_load_config_python_none_is_allowed(tmp_path: Path) -> None:
    path = write_config_file(tmp_path, "config = None\n", name=".babelplan.py")
    assert mod_config_loader.load_config(path) is None


def test_load_config_python_can_import_siblings(tmp_path: Path) -> None:
    # --- setup ---
    (tmp_path / "babel_shared_settings.py").write_text("STAGE = 3\n")
    path = write_config_file(
        tmp_path,
        "from babel_shared_settings import STAGE\nconfig = {'stage': STAGE}\n",
        name=".babelplan.py",
    )

    # --- execute ---
    result = mod_config_loader.load_config(path)

    # --- verify ---
    assert result == {"stage": 3}


def test_load_config_python_without_config_variable(tmp_path: Path) -> None:
    path = write_config_file(tmp_path, "stage = 0\n", name=".babelplan.py")
    with pytest.raises(ValueError, match="did not define `config`"):
        mod_config_loader.load_config(path)


def test_load_config_python_wrong_type(tmp_path: Path) -> None:
    path = write_config_file(tmp_path, "config = ['a']\n", name=".babelplan.py")
    with pytest.raises(TypeError, match="must be a dict or None, not list"):
        mod_config_loader.load_config(path)


def test_load_config_python_error_is_wrapped(tmp_path: Path) -> None:
    # --- setup ---
    path = write_config_file(tmp_path, "config = 1 / 0\n", name=".babelplan.py")

    # --- execute and verify ---
    with pytest.raises(RuntimeError, match="ZeroDivisionError") as exc_info:
        mod_config_loader.load_config(path)
    assert isinstance(exc_info.value.__cause__, ZeroDivisionError)
