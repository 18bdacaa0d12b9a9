# src/babelplan/frameworks/react.py

"""React adapter, including the Preact and Inferno compat targets."""

import posixpath
import re
from collections.abc import Mapping
from typing import Any

from babelplan.config.config_types import (
    FeatureConfig,
    FrameworkArgs,
    FrameworkConfig,
    QuickConfig,
)
from babelplan.constants import (
    DEFAULT_HOT_LOADER_MODULE_TEST,
    PRESET_REACT,
    QUICK_HOT_LOADER_MODULE_TEST,
    REACT_HOT_LOADER_BABEL,
    REACT_HOT_LOADER_LOADER,
    REACT_HOT_LOADER_RULE_ID,
    REACT_RENDER_SHIM,
)
from babelplan.logs import getAppLogger
from babelplan.resolver import NodeModulesResolver, PackageResolver
from babelplan.utils import is_production


BASE_DEPENDENCIES = ["react", "react-dom"]
INFERNO_DEPENDENCIES = [
    "inferno",
    "inferno-compat",
    "inferno-clone-vnode",
    "inferno-create-class",
    "inferno-create-element",
]
PREACT_DEPENDENCIES = ["preact", "preact-compat"]

# The dist build is used so the render() shim can still be hijacked;
# the package's "module" build would bypass it.
PREACT_COMPAT_DIST = "dist/preact-compat"
PREACT_CREATE_REACT_CLASS = "preact-compat/lib/create-react-class"


class ReactConfig:
    """Build, serve, and test configuration for React apps."""

    def __init__(
        self,
        args: FrameworkArgs | Mapping[str, Any],
        *,
        resolver: PackageResolver | None = None,
        production: bool | None = None,
    ) -> None:
        self._args: Mapping[str, Any] = args
        self._resolver = resolver if resolver is not None else NodeModulesResolver()
        self._production = is_production() if production is None else production

    # --- compat target ---

    def _compat_target(self) -> str | None:
        if self._args.get("inferno") or self._args.get("inferno_compat"):
            return "inferno"
        if self._args.get("preact") or self._args.get("preact_compat"):
            return "preact"
        return None

    def _is_build(self) -> bool:
        return str(self._args.get("command", "")).startswith("build")

    def _get_compat_dependencies(self) -> list[str]:
        target = self._compat_target()
        if target == "inferno":
            return list(INFERNO_DEPENDENCIES)
        if target == "preact":
            return list(PREACT_DEPENDENCIES)
        return []

    def _get_compat_name(self) -> str:
        target = self._compat_target()
        if target == "inferno":
            return "Inferno (React compat)"
        if target == "preact":
            return "Preact (React compat)"
        return "React"

    def _base_config(self) -> FrameworkConfig:
        return {
            "babel": {
                "presets": [
                    (
                        self._resolver.resolve(PRESET_REACT),
                        {"development": not self._production},
                    ),
                ],
            },
        }

    def _get_quick_config(self) -> dict[str, Any]:
        return {
            "defaultTitle": f"{self.get_name()} App",
            "renderShim": self._resolver.resolve(REACT_RENDER_SHIM),
            "renderShimAliases": {
                "react": self._resolver.package_dir("react"),
                "react-dom": self._resolver.package_dir("react-dom"),
            },
        }

    # --- public API ---

    def get_name(self) -> str:
        if self._is_build():
            return self._get_compat_name()
        return "React"

    def get_project_defaults(self) -> dict[str, Any]:
        return {}

    def get_project_dependencies(self) -> list[str]:
        return list(BASE_DEPENDENCIES)

    def get_project_questions(self) -> dict[str, Any] | None:
        """React projects need no extra answers when scaffolded."""
        return None

    def get_build_dependencies(self) -> list[str]:
        return self._get_compat_dependencies()

    def get_quick_dependencies(self) -> list[str]:
        deps = list(BASE_DEPENDENCIES)
        if self._is_build():
            deps.extend(self._get_compat_dependencies())
        return deps

    def get_build_config(self, *, use_module_path: bool = False) -> FrameworkConfig:
        """Build-level config: React preset, prod optimizations, compat aliases.

        With use_module_path, alias targets are installed package directories
        instead of bare package names.
        """
        logger = getAppLogger()
        config = self._base_config()

        if self._production:
            config["babel"]["productionOptimizations"] = True

        def alias_path(name: str) -> str:
            return self._resolver.package_dir(name) if use_module_path else name

        target = self._compat_target()
        if target == "inferno":
            config["resolve"] = {
                "alias": {
                    "react": alias_path("inferno-compat"),
                    "react-dom": alias_path("inferno-compat"),
                },
            }
        elif target == "preact":
            preact_compat = posixpath.join(
                alias_path("preact-compat"), PREACT_COMPAT_DIST
            )
            config["resolve"] = {
                "alias": {
                    "react": preact_compat,
                    "react-dom": preact_compat,
                    "create-react-class": PREACT_CREATE_REACT_CLASS,
                },
            }

        if target:
            logger.debug("Aliasing React to %s", self._get_compat_name())
        return config

    def get_serve_config(
        self,
        hot_loader_module_test: re.Pattern[str] | None = None,
    ) -> FrameworkConfig:
        """Dev-server config, wiring react-hot-loader unless HMR is turned off.

        hot_loader_module_test selects the module holding the main app
        component (src/App.js by default).
        """
        logger = getAppLogger()
        config = self._base_config()

        if self._args.get("hmr") is False or self._args.get("hmre") is False:
            logger.debug("Hot module replacement disabled")
            return config

        if hot_loader_module_test is None:
            hot_loader_module_test = re.compile(DEFAULT_HOT_LOADER_MODULE_TEST)

        babel: FeatureConfig = config["babel"]
        babel["plugins"] = [self._resolver.resolve(REACT_HOT_LOADER_BABEL)]
        # the injected react-hot-loader/patch must resolve too
        config["resolve"] = {
            "alias": {
                "react": self._resolver.package_dir("react"),
                "react-hot-loader": self._resolver.package_dir("react-hot-loader"),
            },
        }
        config["rules"] = {
            "extra": [
                {
                    "id": REACT_HOT_LOADER_RULE_ID,
                    "test": hot_loader_module_test,
                    "loader": self._resolver.resolve(REACT_HOT_LOADER_LOADER),
                },
            ],
        }
        return config

    def get_karma_test_config(self) -> FrameworkConfig:
        return self._base_config()

    # --- quick apps ---

    def get_quick_build_config(self) -> QuickConfig:
        """Build config for a single-file app, aliasing installed packages."""
        return {
            "commandConfig": self.get_build_config(use_module_path=True),
            **self._get_quick_config(),
        }  # type: ignore[typeddict-item]

    def get_quick_serve_config(self) -> QuickConfig:
        """Serve config for a single-file app.

        Hot reloading hooks the shim module that imports the entry component
        rather than src/App.js.
        """
        return {
            "commandConfig": self.get_serve_config(
                re.compile(QUICK_HOT_LOADER_MODULE_TEST)
            ),
            **self._get_quick_config(),
        }  # type: ignore[typeddict-item]
