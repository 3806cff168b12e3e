"""Shared types and exceptions for leaf_jinja."""

from collections.abc import Mapping, Sequence
from os import PathLike
from typing import Any

# Type aliases
Context = Mapping[str, Any]
ViewPath = str | PathLike[str]
ViewPaths = Sequence[ViewPath]
Options = Mapping[str, Any]


# Exceptions
class LeafJinjaError(Exception):
    """Base exception for leaf_jinja errors."""

    pass


class NotConfiguredError(LeafJinjaError, RuntimeError):
    """The facade was used before an environment was configured."""

    def __init__(self, operation: str):
        super().__init__(
            f"Cannot call {operation}() before the Jinja environment is configured. "
            "Call configure(view_paths, options) first."
        )
        self.operation = operation


class ConfigError(LeafJinjaError):
    """Configuration error."""

    pass
