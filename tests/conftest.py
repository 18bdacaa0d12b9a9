# tests/conftest.py
"""Shared test setup for project."""

from collections.abc import Generator

import pytest

import babelplan.logs as mod_logs
import babelplan.resolver as mod_resolver
from tests.utils import DEFAULT_TEST_LOG_LEVEL
from tests.utils.log_fixtures import log_records


# These fixtures are intentionally re-exported so pytest can discover them.
__all__ = [
    "log_records",
]


# ----------------------------------------------------------------------
# Fixtures
# ----------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_logger_level() -> Generator[None, None, None]:
    """Reset logger level to DEFAULT_TEST_LOG_LEVEL before and after each test.

    The app logger is a module-level singleton, and both the CLI and the
    config loader change its level.
    """
    logger = mod_logs.getAppLogger()
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)
    yield
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)


@pytest.fixture(autouse=True)
def clean_build_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep NODE_ENV out of tests and forget memoized package lookups.

    Many tests create node_modules trees under tmp_path; stale cache entries
    from an earlier tree would otherwise leak across tests.
    """
    monkeypatch.delenv("NODE_ENV", raising=False)
    mod_resolver.clear_resolver_cache()
    yield
    mod_resolver.clear_resolver_cache()
