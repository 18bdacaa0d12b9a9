# src/babelplan/__init__.py

"""Babelplan — compose Babel presets and plugins from layered config.

Full developer API
==================
This package re-exports all non-private symbols from its submodules,
making it suitable for programmatic use from build tooling.
Anything prefixed with "_" is considered internal and may change.

Highlights:
    - compose_babel_config() → Merge build and user intent into presets/plugins
    - resolve_features()     → Scalar flag precedence (user → build → default)
    - get_framework()        → Framework adapters (React, Preact, Inferno)
    - main()                 → CLI entrypoint
"""

from .cli import main
from .composer import compose_babel_config
from .config import (
    BabelEntry,
    ComposedConfig,
    FeatureConfig,
    FrameworkArgs,
    FrameworkConfig,
    QuickConfig,
    ResolvedFeatures,
    RootConfig,
    ValidationSummary,
    find_config,
    load_and_validate_config,
    load_config,
    parse_config,
    resolve_features,
    validate_config,
    validate_feature_config,
)
from .constants import (
    DEFAULT_ENV_LOG_LEVEL,
    DEFAULT_ENV_NODE_ENV,
    DEFAULT_LOG_LEVEL,
    DEFAULT_LOOSE,
    DEFAULT_MODULES,
    DEFAULT_STAGE,
    DEFAULT_STRICT_CONFIG,
)
from .frameworks import FRAMEWORKS, ReactConfig, get_framework
from .logs import getAppLogger
from .meta import (
    PROGRAM_CONFIG,
    PROGRAM_DISPLAY,
    PROGRAM_ENV,
    PROGRAM_PACKAGE,
    PROGRAM_SCRIPT,
    Metadata,
    get_metadata,
)
from .resolver import (
    NodeModulesResolver,
    PackageNotFoundError,
    PackageResolver,
    PassthroughResolver,
    clear_resolver_cache,
)


__all__ = [  # noqa: RUF022
    # cli
    "main",
    # composer
    "compose_babel_config",
    # config
    "BabelEntry",
    "ComposedConfig",
    "FeatureConfig",
    "find_config",
    "FrameworkArgs",
    "FrameworkConfig",
    "QuickConfig",
    "load_and_validate_config",
    "load_config",
    "parse_config",
    "resolve_features",
    "ResolvedFeatures",
    "RootConfig",
    "validate_config",
    "validate_feature_config",
    "ValidationSummary",
    # constants
    "DEFAULT_ENV_LOG_LEVEL",
    "DEFAULT_ENV_NODE_ENV",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_LOOSE",
    "DEFAULT_MODULES",
    "DEFAULT_STAGE",
    "DEFAULT_STRICT_CONFIG",
    # frameworks
    "FRAMEWORKS",
    "get_framework",
    "ReactConfig",
    # logs
    "getAppLogger",
    # meta
    "get_metadata",
    "Metadata",
    "PROGRAM_CONFIG",
    "PROGRAM_DISPLAY",
    "PROGRAM_ENV",
    "PROGRAM_PACKAGE",
    "PROGRAM_SCRIPT",
    # resolver
    "clear_resolver_cache",
    "NodeModulesResolver",
    "PackageNotFoundError",
    "PackageResolver",
    "PassthroughResolver",
]
