# src/babelplan/composer.py

"""Compose the final Babel preset/plugin lists.

Two partial configurations are merged: the build-level one (set by a
framework adapter) and the user-level one (from the user's config file).
Scalar flags resolve user → build → default (see resolve_features()), and
list extras are appended in a fixed order around the presets and plugins
babelplan manages itself:

    presets: env, stage-N, build extras, user extras
    plugins: constant-elements + remove-prop-types (production),
             remove-prop-types (removePropTypes), user extras,
             transform-runtime, syntax-dynamic-import, build extras
"""

from typing import Any

from .config.config_resolve import resolve_features, split_build_presets
from .config.config_types import (
    BabelEntry,
    ComposedConfig,
    FeatureConfig,
    ResolvedFeatures,
)
from .config.config_validate import validate_feature_config
from .constants import (
    PLUGIN_CONSTANT_ELEMENTS,
    PLUGIN_REMOVE_PROP_TYPES,
    PLUGIN_SYNTAX_DYNAMIC_IMPORT,
    PLUGIN_TRANSFORM_RUNTIME,
    PRESET_ENV,
    PRESET_STAGE_TEMPLATE,
    REACT_PROD_SENTINEL,
    RUNTIME_PACKAGE,
    RUNTIME_SUB_FLAGS,
)
from .logs import getAppLogger
from .resolver import NodeModulesResolver, PackageResolver


def _stage_options(stage: int) -> dict[str, Any]:
    options: dict[str, Any] = {}
    if stage <= 2:  # noqa: PLR2004
        options["decoratorsLegacy"] = True
    if stage <= 1:
        options["pipelineProposal"] = "minimal"
    options["useBuiltIns"] = True
    return options


def _runtime_options(
    features: ResolvedFeatures,
    resolver: PackageResolver,
) -> dict[str, Any]:
    runtime = features["runtime"]
    options: dict[str, Any] = {}

    # runtime=True hands everything to the plugin's own defaults
    if runtime is not True:
        options["helpers"] = False
        options["polyfill"] = False
        options["regenerator"] = True
        if runtime in RUNTIME_SUB_FLAGS:
            options[runtime] = True

    if features["set_runtime_path"] is not False:
        options["moduleName"] = resolver.package_dir(RUNTIME_PACKAGE)

    if runtime is not True:
        modules = features["modules"]
        options["useESModules"] = not (isinstance(modules, str) and modules)

    return options


def compose_babel_config(
    build_cfg: FeatureConfig | None = None,
    user_cfg: FeatureConfig | None = None,
    *,
    resolver: PackageResolver | None = None,
) -> ComposedConfig:
    """Merge build-level and user-level intent into the final Babel config.

    Args:
        build_cfg: Build-level partial config (framework / build mode).
        user_cfg: User-level partial config (config file).
        resolver: Maps the package names babelplan emits to installed
            locations. Defaults to node_modules lookup from the cwd.

    Returns:
        {"presets": [...], "plugins": [...]} in their final order.

    Raises:
        ValueError, TypeError: an unsupported feature value.
        PackageNotFoundError: a required Babel package is not installed.
    """
    logger = getAppLogger()
    build: FeatureConfig = build_cfg or {}
    user: FeatureConfig = user_cfg or {}

    validate_feature_config(build, "build config")
    validate_feature_config(user, "user config")

    if resolver is None:
        resolver = NodeModulesResolver()

    features = resolve_features(build, user)
    logger.trace(f"[compose] resolved features: {features}")

    build_presets, found_sentinel = split_build_presets(build)
    if found_sentinel:
        logger.debug(
            "Build presets use the legacy %r name;"
            " treating it as productionOptimizations.",
            REACT_PROD_SENTINEL,
        )

    # --- presets ---
    presets: list[BabelEntry] = [
        (
            resolver.resolve(PRESET_ENV),
            {"loose": features["loose"], "modules": features["modules"]},
        ),
    ]

    stage = features["stage"]
    if stage is not False:
        presets.append(
            (
                resolver.resolve(PRESET_STAGE_TEMPLATE.format(stage=stage)),
                _stage_options(stage),
            )
        )
    else:
        logger.trace("[compose] stage preset disabled")

    presets.extend(build_presets)
    presets.extend(user.get("presets", []))

    # --- plugins ---
    plugins: list[BabelEntry] = []
    prop_types_removed = False

    if features["production_optimizations"]:
        plugins.append(resolver.resolve(PLUGIN_CONSTANT_ELEMENTS))
        plugins.append((resolver.resolve(PLUGIN_REMOVE_PROP_TYPES), {}))
        prop_types_removed = True

    if features["remove_prop_types"] and not prop_types_removed:
        plugins.append((resolver.resolve(PLUGIN_REMOVE_PROP_TYPES), {}))

    # user plugins run ahead of the runtime transform
    plugins.extend(user.get("plugins", []))

    if features["runtime"] is not False:
        plugins.append(
            (
                resolver.resolve(PLUGIN_TRANSFORM_RUNTIME),
                _runtime_options(features, resolver),
            )
        )
    else:
        logger.trace("[compose] runtime transform disabled")

    plugins.append(resolver.resolve(PLUGIN_SYNTAX_DYNAMIC_IMPORT))

    # build plugins land after the dynamic import syntax plugin
    plugins.extend(build.get("plugins", []))

    logger.debug(
        "Composed Babel config: %d preset(s), %d plugin(s)",
        len(presets),
        len(plugins),
    )
    return {"presets": presets, "plugins": plugins}
