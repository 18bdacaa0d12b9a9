# src/babelplan/meta.py

"""Program identity and version metadata."""

import re
from contextlib import suppress
from dataclasses import dataclass
from importlib import metadata as importlib_metadata
from pathlib import Path


# --- program identity ---------------------------------------------------------

PROGRAM_PACKAGE = "babelplan"
PROGRAM_SCRIPT = "babelplan"
PROGRAM_DISPLAY = "Babelplan"
PROGRAM_CONFIG = "babelplan"  # .babelplan.json / .babelplan.jsonc / .babelplan.py
PROGRAM_ENV = "BABELPLAN"


@dataclass(frozen=True)
class Metadata:
    """Version information for the installed tool."""

    version: str
    commit: str

    def __str__(self) -> str:
        return f"{self.version} ({self.commit})"


def get_metadata() -> Metadata:
    """Return version info for this tool.

    - Installed distribution → importlib.metadata
    - Source checkout → version line in pyproject.toml
    """
    version = "unknown"
    commit = "unknown"

    with suppress(importlib_metadata.PackageNotFoundError):
        version = importlib_metadata.version(PROGRAM_PACKAGE)

    if version == "unknown":
        pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
        if pyproject.exists():
            text = pyproject.read_text(encoding="utf-8")
            match = re.search(r'(?m)^\s*version\s*=\s*["\']([^"\']+)["\']', text)
            if match:
                version = match.group(1)

    return Metadata(version, commit)
