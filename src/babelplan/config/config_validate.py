# src/babelplan/config/config_validate.py


from collections.abc import Mapping
from typing import Any

from apathetic_schema import (
    ApatheticSchema_SchemaErrorAggregator as SchemaErrorAggregator,
    ApatheticSchema_ValidationSummary as ValidationSummary,
    check_schema_conformance,
    collect_msg,
    flush_schema_aggregators,
    warn_keys_once,
)
from apathetic_utils import cast_hint, schema_from_typeddict

from babelplan.constants import (
    DEFAULT_STRICT_CONFIG,
    LOG_LEVEL_CHOICES,
    REACT_PROD_SENTINEL,
    RUNTIME_SUB_FLAGS,
    VALID_STAGES,
)
from babelplan.logs import getAppLogger

from .config_types import FeatureConfig, RootConfig


# --- constants ------------------------------------------------------

BOOL_FLAGS = ("loose", "setRuntimePath", "removePropTypes", "productionOptimizations")
LIST_FIELDS = ("presets", "plugins")

# Value-checked here rather than by type alone (ranges, literals, entry shapes).
BABEL_VALUE_FIELDS = {"stage", "modules", "runtime", *LIST_FIELDS}

ROOT_ONLY_KEYS = {"log_level", "strict_config"}
ROOT_ONLY_MSG = "Ignored {keys} {ctx}: set them at the top level of the config file."

SENTINEL_MSG = (
    "`presets` in babel config lists {name!r}: it is only recognised in"
    " build-level config and will be passed to Babel as a preset name."
    " Use `productionOptimizations: true` instead."
)

# Field-specific examples for better error messages
FIELD_EXAMPLES: dict[str, str] = {
    "root.babel.stage": "2",
    "root.babel.modules": '"commonjs"',
    "root.babel.runtime": '"helpers"',
    "root.babel.presets": '["my-preset", ["other-preset", {"opt": true}]]',
    "root.babel.plugins": '["my-plugin"]',
    "root.babel.loose": "true",
    "root.babel.setRuntimePath": "false",
    "root.babel.removePropTypes": "true",
    "root.babel.productionOptimizations": "true",
    "root.log_level": '"debug"',
    "root.strict_config": "true",
}


# ---------------------------------------------------------------------------
# feature values (raising)
# ---------------------------------------------------------------------------


def _validate_entries(cfg: Mapping[str, Any], field: str, label: str) -> None:
    entries = cfg[field]
    if not isinstance(entries, (list, tuple)):
        xmsg = (
            f"Invalid `{field}` in {label}: expected a list,"
            f" got {type(entries).__name__}"
        )
        raise TypeError(xmsg)
    for i, entry in enumerate(entries):
        if isinstance(entry, str):
            continue
        if (
            isinstance(entry, (list, tuple))
            and len(entry) == 2  # noqa: PLR2004
            and isinstance(entry[0], str)
            and isinstance(entry[1], dict)
        ):
            continue
        xmsg = (
            f"Invalid `{field}` entry #{i + 1} in {label}: {entry!r}"
            " (expected a name or a [name, options] pair)"
        )
        raise TypeError(xmsg)


def validate_feature_config(cfg: Mapping[str, Any], label: str) -> None:
    """Reject unsupported feature values, naming the offending field.

    Raises:
        TypeError: a field has the wrong type
        ValueError: a field has the right type but an unsupported value
    """
    if "stage" in cfg:
        stage = cfg["stage"]
        # bool is an int subclass: only False is a valid bool here
        if stage is not False and (
            isinstance(stage, bool)
            or not isinstance(stage, int)
            or stage not in VALID_STAGES
        ):
            xmsg = (
                f"Invalid `stage` in {label}: {stage!r}"
                f" (expected one of {', '.join(map(str, VALID_STAGES))} or false)"
            )
            raise ValueError(xmsg)

    if "modules" in cfg:
        modules = cfg["modules"]
        if modules is not False and not isinstance(modules, str):
            xmsg = (
                f"Invalid `modules` in {label}: {modules!r}"
                " (expected a module target such as 'commonjs', or false)"
            )
            raise TypeError(xmsg)

    if "runtime" in cfg:
        runtime = cfg["runtime"]
        if not isinstance(runtime, bool) and runtime not in RUNTIME_SUB_FLAGS:
            xmsg = (
                f"Invalid `runtime` in {label}: {runtime!r}"
                f" (expected true, false, {' or '.join(map(repr, RUNTIME_SUB_FLAGS))})"
            )
            raise ValueError(xmsg)

    for flag in BOOL_FLAGS:
        if flag in cfg and not isinstance(cfg[flag], bool):
            xmsg = (
                f"Invalid `{flag}` in {label}: expected true or false,"
                f" got {type(cfg[flag]).__name__}"
            )
            raise TypeError(xmsg)

    for field in LIST_FIELDS:
        if field in cfg:
            _validate_entries(cfg, field, label)


# ---------------------------------------------------------------------------
# main validator
# ---------------------------------------------------------------------------


def _set_valid_and_return(
    *,
    summary: ValidationSummary,  # modified
    agg: SchemaErrorAggregator,  # modified
) -> ValidationSummary:
    flush_schema_aggregators(summary=summary, agg=agg)
    summary.valid = not summary.errors and not summary.strict_warnings
    return summary


def _validate_root(
    parsed_cfg: dict[str, Any],
    *,
    summary: ValidationSummary,  # modified
) -> None:
    logger = getAppLogger()
    logger.trace(f"[validate_root] Validating root with {len(parsed_cfg)} keys")

    ok = check_schema_conformance(
        parsed_cfg,
        schema_from_typeddict(RootConfig),
        "in top-level configuration",
        strict_config=summary.strict,
        summary=summary,
        ignore_keys={"babel"},
        base_path="root",
        field_examples=FIELD_EXAMPLES,
    )

    log_level = parsed_cfg.get("log_level")
    if isinstance(log_level, str) and log_level.lower() not in LOG_LEVEL_CHOICES:
        collect_msg(
            f"key `log_level` must be one of {', '.join(LOG_LEVEL_CHOICES)},"
            f" got {log_level!r} (e.g. {FIELD_EXAMPLES['root.log_level']})",
            strict=True,
            summary=summary,
            is_error=True,
        )
    elif not ok and not (summary.errors or summary.strict_warnings):
        collect_msg(
            "Top-level configuration invalid.",
            strict=True,
            summary=summary,
            is_error=True,
        )


def _validate_babel(
    parsed_cfg: dict[str, Any],
    *,
    summary: ValidationSummary,  # modified
    agg: SchemaErrorAggregator,  # modified
) -> None:
    logger = getAppLogger()
    babel_raw = parsed_cfg.get("babel", {})
    if not isinstance(babel_raw, dict):
        collect_msg(
            "`babel` must be an object with named keys,"
            f" got {type(babel_raw).__name__}",
            strict=True,
            summary=summary,
            is_error=True,
        )
        return

    babel = cast_hint(dict[str, Any], babel_raw)
    logger.trace(f"[validate_babel] Checking {len(babel)} key(s)")

    _ok, prewarn = warn_keys_once(
        "log_level/strict_config",
        ROOT_ONLY_KEYS,
        babel,
        "in babel config",
        ROOT_ONLY_MSG,
        strict_config=summary.strict,
        summary=summary,
        agg=agg,
    )

    # bool flags and unknown keys
    check_schema_conformance(
        babel,
        schema_from_typeddict(FeatureConfig),
        "in babel config",
        strict_config=summary.strict,
        summary=summary,
        prewarn=prewarn,
        ignore_keys=BABEL_VALUE_FIELDS,
        base_path="root.babel",
        field_examples=FIELD_EXAMPLES,
    )

    # one field at a time so every bad value gets reported
    for key in sorted(BABEL_VALUE_FIELDS & babel.keys()):
        try:
            validate_feature_config({key: babel[key]}, "babel config")
        except (TypeError, ValueError) as e:
            collect_msg(
                f"{e} (e.g. {FIELD_EXAMPLES[f'root.babel.{key}']})",
                strict=True,
                summary=summary,
                is_error=True,
            )

    presets = babel.get("presets")
    if isinstance(presets, list) and REACT_PROD_SENTINEL in presets:
        collect_msg(
            SENTINEL_MSG.format(name=REACT_PROD_SENTINEL),
            strict=summary.strict,
            summary=summary,
        )


def validate_config(
    parsed_cfg: dict[str, Any],
    *,
    strict: bool | None = None,
) -> ValidationSummary:
    """Validate a parsed (normalized) config.

    strict=True  →  warnings become fatal, but still listed separately
    strict=False →  warnings remain non-fatal
    strict=None  →  the config's own `strict_config` key decides

    Returns a ValidationSummary object.
    """
    logger = getAppLogger()
    logger.trace(f"[validate_config] Starting validation (strict={strict})")

    strict_from_cfg = parsed_cfg.get("strict_config")
    if strict is not None:
        strict_config = strict
    elif isinstance(strict_from_cfg, bool):
        strict_config = strict_from_cfg
    else:
        strict_config = DEFAULT_STRICT_CONFIG

    summary = ValidationSummary(
        valid=True,
        errors=[],
        strict_warnings=[],
        warnings=[],
        strict=strict_config,
    )
    agg: SchemaErrorAggregator = {}

    _validate_root(parsed_cfg, summary=summary)
    _validate_babel(parsed_cfg, summary=summary, agg=agg)

    return _set_valid_and_return(summary=summary, agg=agg)
