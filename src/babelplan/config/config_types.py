# src/babelplan/config/config_types.py


import re
from typing import Any, Literal, TypedDict, Union

from typing_extensions import NotRequired


# A preset/plugin entry: a bare identifier or an (identifier, options) pair.
# User configs loaded from JSON carry pairs as two-item lists.
BabelEntry = Union[str, tuple[str, dict[str, Any]], list[Any]]

RuntimeSetting = Union[bool, Literal["helpers", "polyfill"]]
ModulesSetting = Union[str, Literal[False]]
StageSetting = Union[int, Literal[False]]


class FeatureConfig(TypedDict, total=False):
    """One layer of Babel intent (build-level or user-level).

    Every key is optional; a key that is present always beats the layer
    below it, even when its value is false.
    """

    presets: list[BabelEntry]  # extra presets, appended verbatim
    plugins: list[BabelEntry]  # extra plugins, appended verbatim
    modules: ModulesSetting  # module transform target, or False
    stage: StageSetting  # 0-3, or False for no stage preset
    loose: bool  # loose mode for preset-env
    runtime: RuntimeSetting  # runtime-transform plugin switch
    setRuntimePath: bool  # False → no moduleName for transform-runtime
    removePropTypes: bool  # strip propTypes
    productionOptimizations: bool  # constant elements + propTypes removal


class ResolvedFeatures(TypedDict):
    """Scalar feature flags after user → build → default precedence."""

    modules: ModulesSetting
    stage: StageSetting
    loose: bool
    runtime: RuntimeSetting | None  # None → default transform-runtime options
    set_runtime_path: bool
    remove_prop_types: bool
    production_optimizations: bool


class ComposedConfig(TypedDict):
    presets: list[BabelEntry]
    plugins: list[BabelEntry]


# --- framework output ---------------------------------------------------------


class ResolveConfig(TypedDict, total=False):
    alias: dict[str, str]


class RuleConfig(TypedDict):
    id: str
    test: re.Pattern[str]
    loader: str


class RulesConfig(TypedDict, total=False):
    extra: list[RuleConfig]


class FrameworkConfig(TypedDict):
    babel: FeatureConfig
    resolve: NotRequired[ResolveConfig]
    rules: NotRequired[RulesConfig]


class QuickConfig(TypedDict):
    """Framework config for a single-file app plus the render shim wiring."""

    commandConfig: FrameworkConfig
    defaultTitle: str
    renderShim: str  # module that renders the entry component
    renderShimAliases: dict[str, str]


class FrameworkArgs(TypedDict, total=False):
    """Command-line flags a framework adapter reacts to."""

    command: str  # build, serve, test
    inferno: bool
    inferno_compat: bool
    preact: bool
    preact_compat: bool
    hmr: bool
    hmre: bool


# --- user config file ---------------------------------------------------------


class RootConfig(TypedDict, total=False):
    babel: FeatureConfig

    # runtime behavior
    log_level: str
    strict_config: bool
