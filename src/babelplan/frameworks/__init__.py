# src/babelplan/frameworks/__init__.py

"""Framework adapters that produce build-level Babel config."""

from collections.abc import Callable, Mapping
from difflib import get_close_matches
from typing import Any

from babelplan.resolver import PackageResolver

from .react import ReactConfig


FrameworkFactory = Callable[..., ReactConfig]

FRAMEWORKS: dict[str, FrameworkFactory] = {
    "react": ReactConfig,
}


def get_framework(
    name: str,
    args: Mapping[str, Any],
    *,
    resolver: PackageResolver | None = None,
    production: bool | None = None,
) -> ReactConfig:
    """Instantiate the adapter registered under *name*."""
    factory = FRAMEWORKS.get(name)
    if factory is None:
        xmsg = f"Unknown framework: {name!r}."
        close = get_close_matches(name, FRAMEWORKS.keys(), n=1, cutoff=0.6)
        if close:
            xmsg += f" Did you mean {close[0]!r}?"
        else:
            xmsg += f" Available: {', '.join(sorted(FRAMEWORKS))}"
        raise ValueError(xmsg)
    return factory(args, resolver=resolver, production=production)


__all__ = [
    "FRAMEWORKS",
    "ReactConfig",
    "get_framework",
]
