# tests/utils/__init__.py

from .config_files import make_summary, write_config_file
from .constants import DEFAULT_TEST_LOG_LEVEL, PROJ_ROOT
from .resolvers import FakeResolver, make_node_package


__all__ = [  # noqa: RUF022
    # config_files
    "make_summary",
    "write_config_file",
    # constants
    "DEFAULT_TEST_LOG_LEVEL",
    "PROJ_ROOT",
    # resolvers
    "FakeResolver",
    "make_node_package",
]
