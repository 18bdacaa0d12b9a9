# src/babelplan/config/__init__.py

"""Configuration handling for babelplan.

Feature-config types, precedence resolution, and the user config file
pipeline (find → load → parse → validate).
"""

from .config_loader import (
    find_config,
    load_and_validate_config,
    load_config,
    parse_config,
)
from .config_resolve import resolve_features, split_build_presets
from .config_types import (
    BabelEntry,
    ComposedConfig,
    FeatureConfig,
    FrameworkArgs,
    FrameworkConfig,
    QuickConfig,
    ResolvedFeatures,
    ResolveConfig,
    RootConfig,
    RuleConfig,
    RulesConfig,
)
from .config_validate import (
    ValidationSummary,
    validate_config,
    validate_feature_config,
)


__all__ = [  # noqa: RUF022
    # config_loader
    "find_config",
    "load_and_validate_config",
    "load_config",
    "parse_config",
    # config_resolve
    "resolve_features",
    "split_build_presets",
    # config_types
    "BabelEntry",
    "ComposedConfig",
    "FeatureConfig",
    "FrameworkArgs",
    "FrameworkConfig",
    "QuickConfig",
    "ResolvedFeatures",
    "ResolveConfig",
    "RootConfig",
    "RuleConfig",
    "RulesConfig",
    # config_validate
    "ValidationSummary",
    "validate_config",
    "validate_feature_config",
]
