# src/babelplan/utils.py

import json
import os
import re
from pathlib import Path
from typing import Any, cast

from apathetic_utils import load_jsonc

from .constants import DEFAULT_ENV_NODE_ENV
from .logs import getAppLogger


# String literals are matched first so commas inside them are never touched.
_STRING_OR_TRAILING_COMMA = re.compile(r'"(?:\\.|[^"\\])*"|,(?=\s*[}\]])')


def is_production() -> bool:
    """Whether the process is running a production build (NODE_ENV)."""
    return os.environ.get(DEFAULT_ENV_NODE_ENV) == "production"


def strip_trailing_commas(text: str) -> str:
    """Drop commas that directly precede `}` or `]`, outside string literals."""
    return _STRING_OR_TRAILING_COMMA.sub(
        lambda m: m.group(0) if m.group(0).startswith('"') else "", text
    )


def load_json_config(path: Path) -> dict[str, Any] | list[Any] | None:
    """Load a .json / .jsonc config file.

    Text that is already valid JSON (once trailing commas are dropped) is
    decoded directly, so string values reach the caller verbatim. Anything
    else, typically a file with comments, goes through `load_jsonc`.
    Empty files return None.
    """
    logger = getAppLogger()
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return None

    try:
        data = json.loads(strip_trailing_commas(text))
    except json.JSONDecodeError:
        logger.trace(f"[load_json_config] {path.name} has comments, using load_jsonc")
        return load_jsonc(path)

    if not isinstance(data, (dict, list)):
        xmsg = f"Invalid JSONC root type: {type(data).__name__}"
        raise ValueError(xmsg)  # noqa: TRY004
    return cast("dict[str, Any] | list[Any]", data)
