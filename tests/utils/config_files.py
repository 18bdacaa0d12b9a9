# tests/utils/config_files.py

import json
from pathlib import Path
from typing import Any

from apathetic_schema import ApatheticSchema_ValidationSummary as ValidationSummary


def write_config_file(
    directory: Path,
    data: dict[str, Any] | str,
    *,
    name: str = ".babelplan.json",
) -> Path:
    """Write a config file; dicts are dumped as JSON, strings written as is."""
    path = directory / name
    text = data if isinstance(data, str) else json.dumps(data, indent=2)
    path.write_text(text, encoding="utf-8")
    return path


def make_summary(
    *,
    valid: bool = True,
    errors: list[str] | None = None,
    strict_warnings: list[str] | None = None,
    warnings: list[str] | None = None,
    strict: bool = True,
) -> ValidationSummary:
    """Helper to create a clean ValidationSummary."""
    return ValidationSummary(
        valid=valid,
        errors=errors or [],
        strict_warnings=strict_warnings or [],
        warnings=warnings or [],
        strict=strict,
    )
