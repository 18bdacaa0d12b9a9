# src/babelplan/resolver.py

"""Locate installed npm packages the way Node's require.resolve() does.

Only the lookups babelplan needs are covered: walking ``node_modules``
directories from a root towards the filesystem root, reading ``main`` from
``package.json``, and trying the usual ``.js`` / ``.json`` / ``index.js``
candidates for subpath requests.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Protocol

from .logs import getAppLogger


# distinct (package, project root) pairs remembered by _find_package_dir
PACKAGE_DIR_CACHE_SIZE = 512


class PackageNotFoundError(LookupError):
    """An npm package (or a file inside one) could not be located."""

    def __init__(self, request: str, root: Path | str) -> None:
        self.request = request
        self.root = Path(root)
        super().__init__(
            f"Cannot find package '{request}' from {self.root}."
            " Is it installed in node_modules?"
        )


class PackageResolver(Protocol):
    def resolve(self, request: str) -> str: ...

    def package_dir(self, name: str) -> str: ...


def split_request(request: str) -> tuple[str, str]:
    """Split a module request into (package name, subpath).

    >>> split_request("@babel/runtime/package")
    ('@babel/runtime', 'package')
    >>> split_request("react-hot-loader")
    ('react-hot-loader', '')
    """
    parts = request.split("/")
    if request.startswith("@"):
        if len(parts) < 2 or not parts[1]:  # noqa: PLR2004
            xmsg = f"Invalid scoped package request: {request!r}"
            raise ValueError(xmsg)
        return "/".join(parts[:2]), "/".join(parts[2:])
    return parts[0], "/".join(parts[1:])


@lru_cache(maxsize=PACKAGE_DIR_CACHE_SIZE)
def _find_package_dir(name: str, root: Path) -> Path | None:
    for base in (root, *root.parents):
        candidate = base / "node_modules" / name
        if (candidate / "package.json").is_file():
            return candidate
    return None


def _read_main(package_dir: Path) -> str:
    try:
        manifest = json.loads((package_dir / "package.json").read_text("utf-8"))
    except (OSError, ValueError):
        return "index.js"
    main = manifest.get("main") if isinstance(manifest, dict) else None
    return main if isinstance(main, str) and main else "index.js"


def _file_candidates(target: Path) -> list[Path]:
    return [
        target,
        target.with_name(target.name + ".js"),
        target.with_name(target.name + ".json"),
        target / "index.js",
    ]


class NodeModulesResolver:
    """Resolve packages installed under ``node_modules`` above *root*."""

    def __init__(self, root: Path | str | None = None) -> None:
        self.root = Path(root if root is not None else Path.cwd()).resolve()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.root)!r})"

    def _locate(self, name: str) -> Path:
        found = _find_package_dir(name, self.root)
        if found is None:
            raise PackageNotFoundError(name, self.root)
        return found

    def package_dir(self, name: str) -> str:
        """Absolute directory of an installed package."""
        return str(self._locate(name))

    def resolve(self, request: str) -> str:
        """Absolute path of the file a ``require(request)`` would load."""
        logger = getAppLogger()
        name, subpath = split_request(request)
        package_dir = self._locate(name)

        target = package_dir / (subpath or _read_main(package_dir))
        for candidate in _file_candidates(target):
            if candidate.is_file():
                logger.trace(f"[resolve] {request} → {candidate}")
                return str(candidate)

        raise PackageNotFoundError(request, self.root)


class PassthroughResolver:
    """Leave identifiers for Babel to resolve on its own."""

    def resolve(self, request: str) -> str:
        return request

    def package_dir(self, name: str) -> str:
        return name


def clear_resolver_cache() -> None:
    """Forget memoized package locations (after installs, or in tests)."""
    _find_package_dir.cache_clear()
