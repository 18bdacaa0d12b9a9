# src/babelplan/cli.py

import argparse
import json
import platform
import re
import sys
from difflib import get_close_matches
from pathlib import Path
from typing import Any

from apathetic_utils import cast_hint

from .composer import compose_babel_config
from .config import (
    ComposedConfig,
    FrameworkArgs,
    FrameworkConfig,
    RootConfig,
    load_and_validate_config,
)
from .constants import DEFAULT_JSON_INDENT, LOG_LEVEL_CHOICES
from .frameworks import FRAMEWORKS, get_framework
from .logs import getAppLogger
from .meta import PROGRAM_DISPLAY, PROGRAM_SCRIPT, get_metadata
from .resolver import (
    NodeModulesResolver,
    PackageNotFoundError,
    PackageResolver,
    PassthroughResolver,
)


COMMANDS = ("build", "serve", "test")

# store_true flags only a framework adapter reads, by dest
FRAMEWORK_ONLY_FLAGS: dict[str, str] = {
    "preact": "--preact",
    "preact_compat": "--preact-compat",
    "inferno": "--inferno",
    "inferno_compat": "--inferno-compat",
    "quick": "--quick",
}

_INVALID_CHOICE = re.compile(r"invalid choice: '?([^'\s]+)'?")


# --------------------------------------------------------------------------- #
# CLI setup and helpers
# --------------------------------------------------------------------------- #


class HintingArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that suggests the closest option, command or framework."""

    def _suggest(self, message: str) -> list[str]:
        if "unrecognized arguments:" in message:
            known = [opt for action in self._actions for opt in action.option_strings]
            typed = message.split("unrecognized arguments:", 1)[1].split()
            typed = [tok for tok in typed if tok.startswith("-")]
        elif _INVALID_CHOICE.search(message):
            known = [
                str(choice)
                for action in self._actions
                if action.choices
                for choice in action.choices
            ]
            typed = _INVALID_CHOICE.findall(message)
        else:
            return []
        hints: list[str] = []
        for tok in typed:
            close = get_close_matches(tok, known, n=1, cutoff=0.6)
            if close:
                hints.append(close[0])
        return hints

    def error(self, message: str) -> None:  # type: ignore[override]
        lines = [f"{self.prog}: error: {message}"]
        lines.extend(f"Hint: did you mean {s}?" for s in self._suggest(message))
        self.print_usage(sys.stderr)
        self.exit(2, "\n".join(lines) + "\n")


def _setup_parser() -> argparse.ArgumentParser:
    """Define and return the CLI argument parser."""
    parser = HintingArgumentParser(
        prog=PROGRAM_SCRIPT,
        description="Compose Babel presets and plugins for a project build.",
    )

    parser.add_argument(
        "command",
        nargs="?",
        choices=COMMANDS,
        default="build",
        help="Which pipeline to compose for (default: build).",
    )
    parser.add_argument("-c", "--config", help="Path to the babelplan config file.")
    parser.add_argument(
        "-o",
        "--out",
        help="Write the composed JSON to this file instead of stdout.",
    )
    parser.add_argument(
        "--framework",
        choices=sorted(FRAMEWORKS),
        default=None,
        help="Framework adapter supplying the build-level config.",
    )

    # --- Compat targets ---
    compat = parser.add_mutually_exclusive_group()
    compat.add_argument(
        "--preact",
        action="store_true",
        help="Build a React app against Preact (React compat).",
    )
    compat.add_argument(
        "--inferno",
        action="store_true",
        help="Build a React app against Inferno (React compat).",
    )
    compat.add_argument(
        "--preact-compat",
        action="store_true",
        help="Same as --preact.",
    )
    compat.add_argument(
        "--inferno-compat",
        action="store_true",
        help="Same as --inferno.",
    )
    parser.add_argument(
        "--no-hmr",
        dest="hmr",
        action="store_false",
        default=None,
        help="Disable hot module replacement wiring for serve.",
    )
    parser.add_argument(
        "--quick",
        action="store_true",
        help="Compose for a single-file app (adds render shim settings).",
    )

    # --- Build mode ---
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--production",
        dest="production",
        action="store_const",
        const=True,
        help="Compose a production build (default: NODE_ENV=production).",
    )
    mode.add_argument(
        "--development",
        dest="production",
        action="store_const",
        const=False,
        help="Compose a development build.",
    )
    mode.set_defaults(production=None)

    # --- Package resolution ---
    parser.add_argument(
        "--root",
        help="Directory to search node_modules from (default: cwd).",
    )
    parser.add_argument(
        "--no-resolve",
        action="store_true",
        help="Emit package names instead of installed paths.",
    )

    # --- Output / validation ---
    parser.add_argument(
        "--indent",
        type=int,
        default=DEFAULT_JSON_INDENT,
        help=f"JSON indent width (default: {DEFAULT_JSON_INDENT}).",
    )
    parser.add_argument(
        "--strict",
        action="store_const",
        const=True,
        default=None,
        help="Treat config warnings as errors.",
    )
    parser.add_argument(
        "--validate-config",
        action="store_true",
        help="Validate the configuration file and exit.",
    )
    parser.add_argument("--version", action="store_true", help="Show version info.")

    log_level = parser.add_mutually_exclusive_group()
    log_level.add_argument(
        "-q",
        "--quiet",
        action="store_const",
        const="warning",
        dest="log_level",
        help="Suppress non-critical output (same as --log-level warning).",
    )
    log_level.add_argument(
        "-v",
        "--verbose",
        action="store_const",
        const="debug",
        dest="log_level",
        help="Verbose output (same as --log-level debug).",
    )
    log_level.add_argument(
        "--log-level",
        choices=LOG_LEVEL_CHOICES,
        default=None,
        dest="log_level",
        help="Set log verbosity level.",
    )
    return parser


def _initialize_logger(args: argparse.Namespace) -> None:
    """Initialize logger with CLI args, env vars, and defaults."""
    logger = getAppLogger()
    level = logger.applyCliLevel(args)
    logger.trace("[BOOT] log-level initialized: %s", level)

    logger.debug(
        "Runtime: Python %s (%s)",
        platform.python_version(),
        platform.python_implementation(),
    )


def _check_framework_flags(args: argparse.Namespace) -> None:
    """Reject adapter-only flags when no --framework was chosen."""
    if args.framework:
        return
    used = [flag for dest, flag in FRAMEWORK_ONLY_FLAGS.items() if getattr(args, dest)]
    if args.hmr is False:
        used.append("--no-hmr")
    if args.production is not None:
        used.append("--production" if args.production else "--development")
    if used:
        xmsg = (
            f"{', '.join(used)}: only valid together with a framework adapter"
            f" (e.g. --framework {sorted(FRAMEWORKS)[0]})"
        )
        raise ValueError(xmsg)


def _make_resolver(args: argparse.Namespace, cwd: Path) -> PackageResolver:
    if args.no_resolve:
        return PassthroughResolver()
    return NodeModulesResolver(Path(args.root) if args.root else cwd)


def _framework_config(
    args: argparse.Namespace,
    resolver: PackageResolver,
) -> tuple[FrameworkConfig | None, dict[str, Any]]:
    """Build-level config from the selected framework adapter, if any.

    The second item holds the quick-app settings under --quick, else {}.
    """
    logger = getAppLogger()
    if not args.framework:
        return None, {}

    framework_args: FrameworkArgs = {
        "command": args.command,
        "preact": args.preact,
        "preact_compat": args.preact_compat,
        "inferno": args.inferno,
        "inferno_compat": args.inferno_compat,
    }
    if args.hmr is not None:
        framework_args["hmr"] = args.hmr

    framework = get_framework(
        args.framework,
        framework_args,
        resolver=resolver,
        production=args.production,
    )
    logger.debug("Composing %s config for %s", args.command, framework.get_name())

    if args.quick:
        if args.command == "test":
            xmsg = "--quick applies to the build and serve commands only"
            raise ValueError(xmsg)
        quick = (
            framework.get_quick_serve_config()
            if args.command == "serve"
            else framework.get_quick_build_config()
        )
        settings = {k: v for k, v in quick.items() if k != "commandConfig"}
        return quick["commandConfig"], settings

    if args.command == "serve":
        return framework.get_serve_config(), {}
    if args.command == "test":
        return framework.get_karma_test_config(), {}
    return framework.get_build_config(), {}


def _render_output(
    composed: ComposedConfig,
    framework_cfg: FrameworkConfig | None,
    quick_settings: dict[str, Any],
) -> dict[str, Any]:
    output: dict[str, Any] = {"babel": composed}
    if framework_cfg is None:
        return output

    alias = framework_cfg.get("resolve", {}).get("alias")
    if alias:
        output["resolve"] = {"alias": dict(alias)}

    extra_rules = framework_cfg.get("rules", {}).get("extra")
    if extra_rules:
        output["rules"] = {
            "extra": [
                {**rule, "test": rule["test"].pattern} for rule in extra_rules
            ],
        }
    if quick_settings:
        output["quick"] = quick_settings
    return output


# --------------------------------------------------------------------------- #
# Main entry
# --------------------------------------------------------------------------- #


def main(argv: list[str] | None = None) -> int:
    logger = getAppLogger()  # init (use env + defaults)

    try:
        parser = _setup_parser()
        args = parser.parse_args(argv)

        _initialize_logger(args)

        # --- Version flag ---
        if args.version:
            logger.info("%s %s", PROGRAM_DISPLAY, get_metadata())
            return 0

        _check_framework_flags(args)
        cwd = Path.cwd().resolve()

        # --- Load configuration ---
        root_cfg: RootConfig = cast_hint(RootConfig, {})
        config_result = load_and_validate_config(args, cwd)
        if config_result is not None:
            config_path, root_cfg, _summary = config_result
            logger.debug("Using config: %s", config_path)
        else:
            logger.debug("No config file found; using defaults.")

        if args.validate_config:
            logger.info("Configuration is valid.")
            return 0

        # --- Compose ---
        resolver = _make_resolver(args, cwd)
        framework_cfg, quick_settings = _framework_config(args, resolver)
        build_cfg = framework_cfg["babel"] if framework_cfg else {}
        composed = compose_babel_config(
            build_cfg, root_cfg.get("babel", {}), resolver=resolver
        )

        rendered = json.dumps(
            _render_output(composed, framework_cfg, quick_settings),
            indent=args.indent,
        )
        if args.out:
            Path(args.out).write_text(rendered + "\n", encoding="utf-8")
            logger.info("Wrote Babel config to %s", args.out)
        else:
            print(rendered)  # noqa: T201

    except (
        OSError,  # includes FileNotFoundError
        PackageNotFoundError,
        ValueError,
        TypeError,
        RuntimeError,
    ) as e:
        # controlled termination
        if not getattr(e, "silent", False):
            logger.error("%s", e)
            logger.debug("Traceback:", exc_info=True)
        return 1

    except Exception as e:  # noqa: BLE001
        logger.critical("Unexpected internal error: %s", e, exc_info=True)
        return 1

    else:
        return 0
