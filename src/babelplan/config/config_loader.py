# src/babelplan/config/config_loader.py


import argparse
import logging
import runpy
import sys
from pathlib import Path
from typing import Any, cast

from apathetic_schema import ApatheticSchema_ValidationSummary as ValidationSummary
from apathetic_utils import (
    cast_hint,
    plural,
    remove_path_in_error_message,
    schema_from_typeddict,
)

from babelplan.logs import getAppLogger
from babelplan.meta import PROGRAM_CONFIG
from babelplan.utils import load_json_config

from .config_types import RootConfig
from .config_validate import validate_config


# Preferred first when several sit in the same directory.
CONFIG_SUFFIX_PRIORITY: dict[str, int] = {".py": 0, ".jsonc": 1, ".json": 2}


def find_config(
    args: argparse.Namespace,
    cwd: Path,
    *,
    missing_level: str = "debug",
) -> Path | None:
    """Locate a configuration file.

    missing_level: log-level for failing to find a configuration file.

    Search order:
      1. Explicit path from CLI (--config)
      2. .{PROGRAM_CONFIG}.py, .{PROGRAM_CONFIG}.jsonc, .{PROGRAM_CONFIG}.json
         in the current working directory, then each parent

    Returns the first matching path, or None if no config was found.
    """
    logger = getAppLogger()

    # --- 1. Explicit config path ---
    if getattr(args, "config", None):
        config = Path(args.config).expanduser().resolve()
        logger.trace(f"[find_config] Checking explicit path: {config}")
        if not config.exists():
            xmsg = f"Specified config file not found: {config}"
            raise FileNotFoundError(xmsg)
        if config.is_dir():
            xmsg = f"Specified config path is a directory, not a file: {config}"
            raise ValueError(xmsg)
        return config

    # --- 2. Default candidates, closest directory wins ---
    candidate_names = [f".{PROGRAM_CONFIG}{suffix}" for suffix in CONFIG_SUFFIX_PRIORITY]
    found: list[Path] = []
    for directory in (cwd, *cwd.parents):
        found = [directory / n for n in candidate_names if (directory / n).is_file()]
        if found:
            break

    if not found:
        # Expected absence: soft failure
        log_missing = getattr(logger, missing_level, logger.debug)
        log_missing("No config file found in %s or parents", cwd)
        return None

    # --- 3. Several at the same level ---
    if len(found) > 1:
        found.sort(key=lambda p: CONFIG_SUFFIX_PRIORITY.get(p.suffix, 99))
        logger.warning(
            "Multiple config files detected (%s); using %s.",
            ", ".join(p.name for p in found),
            found[0].name,
        )
    return found[0]


def _run_python_config(config_path: Path) -> dict[str, Any]:
    """Execute a .py config and return its module globals.

    The config's directory is importable while it runs, so it can pull
    shared settings from sibling modules.
    """
    config_dir = str(config_path.parent)
    pushed = config_dir not in sys.path
    if pushed:
        sys.path.insert(0, config_dir)
    try:
        return runpy.run_path(str(config_path), run_name="__babelplan_config__")
    except Exception as e:
        xmsg = (
            f"Error while executing Python config {config_path.name}:"
            f" {type(e).__name__}: {e}"
        )
        raise RuntimeError(xmsg) from e
    finally:
        if pushed and config_dir in sys.path:
            sys.path.remove(config_dir)


def load_config(config_path: Path) -> dict[str, Any] | list[Any] | None:
    """Load configuration data from a file.

    .py configs assign a dict (or None) to `config`; .json / .jsonc configs
    may use comments and trailing commas.

    Returns:
        The raw object defined in the config, or None for intentionally
        empty configs (empty file or `config = None`).

    Raises:
        ValueError: a .py config does not define `config`, or a JSON
            config does not parse
        TypeError: `config` is not a dict or None
        RuntimeError: the .py config raised while executing
    """
    logger = getAppLogger()
    logger.trace(f"[load_config] Loading from {config_path} ({config_path.suffix})")

    if config_path.suffix == ".py":
        namespace = _run_python_config(config_path)
        if "config" not in namespace:
            xmsg = f"{config_path.name} did not define `config`"
            raise ValueError(xmsg)
        result = namespace["config"]
        if result is not None and not isinstance(result, dict):
            xmsg = (
                f"config in {config_path.name} must be a dict or None"
                f", not {type(result).__name__}"
            )
            raise TypeError(xmsg)
        return cast("dict[str, Any] | None", result)

    try:
        return load_json_config(config_path)
    except ValueError as e:
        clean_msg = remove_path_in_error_message(str(e), config_path)
        xmsg = (
            f"Error while loading configuration file '{config_path.name}': {clean_msg}"
        )
        raise ValueError(xmsg) from e


def parse_config(
    raw_config: dict[str, Any] | list[Any] | None,
) -> dict[str, Any] | None:
    """Normalize user config into canonical RootConfig shape (no validation).

    Accepted forms:
      - None / {}                      → None (no config)
      - {"babel": {...}, ...}          → returned as is
      - {"stage": 0, "log_level": ...} → flat babel config; root keys
                                         (log_level, strict_config) are hoisted
    Unknown keys are preserved for the validation phase.
    """
    logger = getAppLogger()
    logger.trace(f"[parse_config] Parsing {type(raw_config).__name__}")

    if not raw_config:
        return None

    if not isinstance(raw_config, dict):
        xmsg = (
            f"Invalid top-level value: {type(raw_config).__name__}"
            " (expected an object with named keys)"
        )
        raise TypeError(xmsg)

    if "babel" in raw_config:
        return dict(raw_config)

    logger.trace("[parse_config] Detected flat babel config")
    root_keys = set(schema_from_typeddict(RootConfig)) - {"babel"}
    root: dict[str, Any] = {k: v for k, v in raw_config.items() if k in root_keys}
    root["babel"] = {k: v for k, v in raw_config.items() if k not in root_keys}
    return root


def _report_validation(summary: ValidationSummary, config_path: Path) -> None:
    """Log one headline for config_path, then each non-empty message group."""
    logger = getAppLogger()
    mode = "strict" if summary.strict else "lenient"
    groups = [
        (label, messages, level)
        for label, messages, level in (
            ("error", summary.errors, logging.ERROR),
            ("strict warning", summary.strict_warnings, logging.ERROR),
            ("warning", summary.warnings, logging.WARNING),
        )
        if messages
    ]

    if not groups:
        logger.debug("Config %s is valid (%s).", config_path.name, mode)
        return

    tally = ", ".join(
        f"{len(msgs)} {label}{plural(msgs)}" for label, msgs, _level in groups
    )
    if summary.valid:
        logger.warning(
            "Config %s accepted with %s (%s).", config_path.name, tally, mode
        )
    else:
        logger.error("Config %s rejected: %s (%s).", config_path.name, tally, mode)

    for label, messages, level in groups:
        bullets = "\n  • ".join(messages)
        heading = f"{label.capitalize()}{plural(messages)}"
        logger.log(level, "%s:\n  • %s", heading, bullets)


def load_and_validate_config(
    args: argparse.Namespace,
    cwd: Path | None = None,
) -> tuple[Path, RootConfig, ValidationSummary] | None:
    """Find, load, parse, and validate the user's configuration.

    Returns:
        (config_path, root_cfg, validation_summary), or None if no config
        file was found or it was empty.

    Raises:
        ValueError: the config failed validation (flagged `silent`, the
            summary has already been logged)
    """
    logger = getAppLogger()
    cwd = (cwd or Path.cwd()).resolve()

    config_path = find_config(args, cwd)
    if config_path is None:
        return None

    raw_config = load_config(config_path)
    if raw_config is None:
        return None

    try:
        parsed_cfg = parse_config(raw_config)
    except TypeError as e:
        xmsg = f"Could not parse config {config_path.name}: {e}"
        raise TypeError(xmsg) from e
    if parsed_cfg is None:
        return None

    # applied before validation so the report honours it
    logger.applyConfigLevel(args, parsed_cfg.get("log_level"))

    validation_result = validate_config(
        parsed_cfg, strict=getattr(args, "strict", None)
    )
    _report_validation(validation_result, config_path)
    if not validation_result.valid:
        xmsg = f"Configuration file {config_path.name} contains validation errors."
        exception = ValueError(xmsg)
        exception.silent = True  # type: ignore[attr-defined]
        exception.data = validation_result  # type: ignore[attr-defined]
        raise exception

    return config_path, cast_hint(RootConfig, parsed_cfg), validation_result
