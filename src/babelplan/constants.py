# src/babelplan/constants.py
"""Central constants used across the project."""

from typing import Literal


# --- env keys ---
DEFAULT_ENV_LOG_LEVEL: str = "LOG_LEVEL"
DEFAULT_ENV_NODE_ENV: str = "NODE_ENV"

# --- program defaults ---
DEFAULT_LOG_LEVEL: str = "info"
LOG_LEVEL_CHOICES: list[str] = [
    "trace",
    "debug",
    "info",
    "warning",
    "error",
    "critical",
    "silent",
]
DEFAULT_JSON_INDENT: int = 2

# --- config defaults ---
DEFAULT_STRICT_CONFIG: bool = False
DEFAULT_MODULES: Literal[False] = False  # no module transform
DEFAULT_STAGE: int = 2
DEFAULT_LOOSE: bool = True
DEFAULT_REMOVE_PROP_TYPES: bool = False
DEFAULT_SET_RUNTIME_PATH: bool = True
DEFAULT_PRODUCTION_OPTIMIZATIONS: bool = False

VALID_STAGES: tuple[int, ...] = (0, 1, 2, 3)
RUNTIME_SUB_FLAGS: tuple[str, ...] = ("helpers", "polyfill")

# Legacy build-level preset name standing in for productionOptimizations
REACT_PROD_SENTINEL: str = "react-prod"

# --- babel package identifiers ---
PRESET_ENV: str = "@babel/preset-env"
PRESET_STAGE_TEMPLATE: str = "@babel/preset-stage-{stage}"
PRESET_REACT: str = "@babel/preset-react"

PLUGIN_CONSTANT_ELEMENTS: str = "@babel/plugin-transform-react-constant-elements"
PLUGIN_REMOVE_PROP_TYPES: str = "babel-plugin-transform-react-remove-prop-types"
PLUGIN_TRANSFORM_RUNTIME: str = "@babel/plugin-transform-runtime"
PLUGIN_SYNTAX_DYNAMIC_IMPORT: str = "@babel/plugin-syntax-dynamic-import"

RUNTIME_PACKAGE: str = "@babel/runtime"

# --- react framework ---
REACT_HOT_LOADER_BABEL: str = "react-hot-loader/babel"
REACT_HOT_LOADER_LOADER: str = "react-hot-loader-loader"
REACT_HOT_LOADER_RULE_ID: str = "react-hot-loader"
DEFAULT_HOT_LOADER_MODULE_TEST: str = r"[/\\]src[/\\]App.js$"

# quick apps: entry module is wrapped by the toolchain's render shim
REACT_RENDER_SHIM: str = "nwb/lib/react/renderShim"
QUICK_HOT_LOADER_MODULE_TEST: str = r"[/\\]nwb[/\\]lib[/\\]react[/\\]importModule\.js$"
