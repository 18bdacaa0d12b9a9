# src/babelplan/config/config_resolve.py


from collections.abc import Mapping
from typing import Any

from babelplan.constants import (
    DEFAULT_LOOSE,
    DEFAULT_MODULES,
    DEFAULT_PRODUCTION_OPTIMIZATIONS,
    DEFAULT_REMOVE_PROP_TYPES,
    DEFAULT_SET_RUNTIME_PATH,
    DEFAULT_STAGE,
    REACT_PROD_SENTINEL,
)
from babelplan.logs import getAppLogger

from .config_types import BabelEntry, FeatureConfig, ResolvedFeatures


# --------------------------------------------------------------------------- #
# helpers
# --------------------------------------------------------------------------- #


def _pick(
    key: str,
    build_cfg: Mapping[str, Any],
    user_cfg: Mapping[str, Any],
    default: Any,
) -> Any:
    # presence, not truthiness: {"stage": False} must cancel the build stage
    if key in user_cfg:
        return user_cfg[key]
    if key in build_cfg:
        return build_cfg[key]
    return default


def split_build_presets(
    build_cfg: Mapping[str, Any],
) -> tuple[list[BabelEntry], bool]:
    """Separate real build presets from the legacy react-prod sentinel.

    Returns:
        (presets without the sentinel, whether the sentinel was present)
    """
    presets: list[BabelEntry] = []
    found_sentinel = False
    for entry in build_cfg.get("presets", []):
        if entry == REACT_PROD_SENTINEL:
            found_sentinel = True
            continue
        presets.append(entry)
    return presets, found_sentinel


# --------------------------------------------------------------------------- #
# main resolver
# --------------------------------------------------------------------------- #


def resolve_features(
    build_cfg: FeatureConfig | None = None,
    user_cfg: FeatureConfig | None = None,
) -> ResolvedFeatures:
    """Resolve every scalar feature flag: user → build → default.

    A key counts as set when it is present, whatever its value, so a user
    can cancel a build-level feature by setting it to false.
    """
    logger = getAppLogger()
    build: dict[str, Any] = dict(build_cfg or {})
    user: dict[str, Any] = dict(user_cfg or {})

    _, found_sentinel = split_build_presets(build)
    if found_sentinel and "productionOptimizations" not in build:
        logger.trace(
            f"[resolve_features] {REACT_PROD_SENTINEL!r} in build presets"
            " → productionOptimizations"
        )
        build["productionOptimizations"] = True

    resolved: ResolvedFeatures = {
        "modules": _pick("modules", build, user, DEFAULT_MODULES),
        "stage": _pick("stage", build, user, DEFAULT_STAGE),
        "loose": _pick("loose", build, user, DEFAULT_LOOSE),
        "runtime": _pick("runtime", build, user, None),
        "set_runtime_path": _pick(
            "setRuntimePath", build, user, DEFAULT_SET_RUNTIME_PATH
        ),
        "remove_prop_types": _pick(
            "removePropTypes", build, user, DEFAULT_REMOVE_PROP_TYPES
        ),
        "production_optimizations": _pick(
            "productionOptimizations", build, user, DEFAULT_PRODUCTION_OPTIMIZATIONS
        ),
    }
    return resolved
