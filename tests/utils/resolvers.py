# tests/utils/resolvers.py
"""Shared test helpers for package resolution."""

import json
from pathlib import Path
from typing import Any


class FakeResolver:
    """Resolver that maps every request to a predictable fake location.

    Records every lookup so tests can assert what was (or wasn't) resolved.
    """

    def __init__(self, prefix: str = "/nm") -> None:
        self.prefix = prefix
        self.resolved: list[str] = []
        self.package_dirs: list[str] = []

    def resolve(self, request: str) -> str:
        self.resolved.append(request)
        return f"{self.prefix}/{request}/index.js"

    def package_dir(self, name: str) -> str:
        self.package_dirs.append(name)
        return f"{self.prefix}/{name}"


def make_node_package(
    root: Path,
    name: str,
    *,
    main: str | None = None,
    files: dict[str, str] | None = None,
) -> Path:
    r"""Create ``root/node_modules/<name>`` with a package.json.

    Args:
        root: Directory that holds (or will hold) node_modules
        name: Package name, scoped names allowed ("@babel/runtime")
        main: Value for package.json "main" (omitted when None)
        files: Extra files relative to the package dir, as path: content.
            When neither main nor files are given, index.js is created.

    Example:
        >>> make_node_package(tmp_path, "@babel/preset-env", main="lib/index.js",
        ...                   files={"lib/index.js": ""})
    """
    pkg_dir = root / "node_modules" / name
    pkg_dir.mkdir(parents=True, exist_ok=True)

    manifest: dict[str, Any] = {"name": name, "version": "1.0.0"}
    if main is not None:
        manifest["main"] = main
    (pkg_dir / "package.json").write_text(json.dumps(manifest), encoding="utf-8")

    if files is None and main is None:
        files = {"index.js": "module.exports = {}\n"}
    for rel, content in (files or {}).items():
        path = pkg_dir / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return pkg_dir
