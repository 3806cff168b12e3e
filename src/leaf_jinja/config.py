"""Configuration management and environment loading."""

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from jinja2 import BytecodeCache, FileSystemBytecodeCache, StrictUndefined, Undefined, select_autoescape

from .extensions import VITE_MODULE
from .types import ConfigError, Options

logger = logging.getLogger(__name__)

# Escaping strategies accepted for the ``autoescape`` option. Jinja only
# ships an HTML escaper, so every named strategy turns escaping on.
AUTOESCAPE_STRATEGIES = ("html", "js", "css", "url", "name")

# Options consumed by the facade or translated here; everything else is
# forwarded to jinja2.Environment untouched.
FACADE_OPTIONS = frozenset({"vite_module"})
TRANSLATED_OPTIONS = frozenset(
    {"cache", "debug", "autoescape", "strict_variables", "auto_reload", "charset"}
)

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off", "")


def _as_bool(value: Any, name: str) -> bool:
    """Coerce a bool or bool-like string, raising ConfigError otherwise."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    raise ConfigError(f"Invalid {name}: {value!r} (expected a boolean)")


def _autoescape(value: Any) -> bool | Callable[[str | None], bool]:
    """Translate an escaping strategy into Jinja's ``autoescape`` argument."""
    if isinstance(value, bool) or callable(value):
        return value
    if value is None:
        return False
    if isinstance(value, str):
        strategy = value.strip().lower()
        if strategy == "name":
            # Decide per template from its file extension
            return select_autoescape()
        if strategy in AUTOESCAPE_STRATEGIES:
            return True
        return _as_bool(strategy, "autoescape")
    raise ConfigError(f"Invalid autoescape: {value!r}")


def _bytecode_cache(value: Any) -> BytecodeCache | None:
    """Build the compiled-template cache from a directory or cache instance."""
    if value is None or value is False:
        return None
    if isinstance(value, BytecodeCache):
        return value
    if isinstance(value, str | os.PathLike):
        directory = Path(value)
        directory.mkdir(parents=True, exist_ok=True)
        return FileSystemBytecodeCache(str(directory))
    raise ConfigError(f"Invalid cache: {value!r} (expected a directory path)")


def environment_kwargs(options: Options | None = None) -> dict[str, Any]:
    """
    Translate a view options mapping into ``jinja2.Environment`` kwargs.

    Recognised keys:
        cache: Directory for compiled templates (or a BytecodeCache)
        debug: Debug mode; also the default for ``auto_reload``
        autoescape: Bool, callable, or strategy name ("html", "js", "css",
            "url", "name"). Defaults to "html".
        strict_variables: Raise on undefined variables
        auto_reload: Recompile templates when the source changes

    Any other key except ``charset`` and ``vite_module`` is passed through,
    so every Jinja option stays reachable.

    Args:
        options: Free-form options mapping

    Returns:
        Keyword arguments for jinja2.Environment
    """
    options = dict(options or {})
    kwargs: dict[str, Any] = {
        key: value
        for key, value in options.items()
        if key not in TRANSLATED_OPTIONS and key not in FACADE_OPTIONS
    }

    kwargs.setdefault("autoescape", _autoescape(options.get("autoescape", "html")))

    cache = _bytecode_cache(options.get("cache"))
    if cache is not None:
        kwargs.setdefault("bytecode_cache", cache)

    if "strict_variables" in options:
        strict = _as_bool(options["strict_variables"], "strict_variables")
        kwargs.setdefault("undefined", StrictUndefined if strict else Undefined)

    auto_reload = options.get("auto_reload")
    if auto_reload is None and "debug" in options:
        auto_reload = options["debug"]
    if auto_reload is not None:
        kwargs.setdefault("auto_reload", _as_bool(auto_reload, "auto_reload"))

    return kwargs


def loader_kwargs(options: Options | None = None) -> dict[str, Any]:
    """Keyword arguments for the filesystem loader (template encoding)."""
    charset = (options or {}).get("charset") or "utf-8"
    return {"encoding": charset}


@dataclass
class ViewConfig:
    """Configuration for a Jinja view facade."""

    # Directories searched for templates, in order
    view_paths: list[Path | str] = field(default_factory=list)

    # Directory for compiled templates; None disables caching
    cache: Path | str | None = None

    debug: bool = False

    # Bool, callable, or strategy name
    autoescape: bool | str | Callable[[str | None], bool] = "html"

    strict_variables: bool = False

    # None means "same as debug"
    auto_reload: bool | None = None

    charset: str = "utf-8"

    # Module exporting the optional ``vite`` asset helper
    vite_module: str = VITE_MODULE

    # Extra kwargs forwarded to jinja2.Environment
    extra: dict[str, Any] = field(default_factory=dict)

    def options(self) -> dict[str, Any]:
        """Build the options mapping accepted by ``Jinja.configure``."""
        options: dict[str, Any] = dict(self.extra)
        options.update(
            {
                "cache": self.cache,
                "debug": self.debug,
                "autoescape": self.autoescape,
                "strict_variables": self.strict_variables,
                "charset": self.charset,
                "vite_module": self.vite_module,
            }
        )
        if self.auto_reload is not None:
            options["auto_reload"] = self.auto_reload
        return options

    @classmethod
    def from_env(cls) -> "ViewConfig":
        """Create config from environment variables."""
        config = cls()

        # Read config from LEAF_VIEWS_ prefixed env vars
        if paths := os.getenv("LEAF_VIEWS_PATH"):
            config.view_paths = [Path(p) for p in paths.split(os.pathsep) if p]

        if cache := os.getenv("LEAF_VIEWS_CACHE"):
            config.cache = Path(cache)

        if debug := os.getenv("LEAF_VIEWS_DEBUG"):
            config.debug = cls._env_bool("LEAF_VIEWS_DEBUG", debug)

        if strict := os.getenv("LEAF_VIEWS_STRICT_VARIABLES"):
            config.strict_variables = cls._env_bool("LEAF_VIEWS_STRICT_VARIABLES", strict)

        if auto_reload := os.getenv("LEAF_VIEWS_AUTO_RELOAD"):
            config.auto_reload = cls._env_bool("LEAF_VIEWS_AUTO_RELOAD", auto_reload)

        if autoescape := os.getenv("LEAF_VIEWS_AUTOESCAPE"):
            strategy = autoescape.strip().lower()
            if strategy in AUTOESCAPE_STRATEGIES:
                config.autoescape = strategy
            else:
                config.autoescape = cls._env_bool("LEAF_VIEWS_AUTOESCAPE", strategy)

        if charset := os.getenv("LEAF_VIEWS_CHARSET"):
            config.charset = charset

        if vite_module := os.getenv("LEAF_VIEWS_VITE_MODULE"):
            config.vite_module = vite_module

        return config

    @staticmethod
    def _env_bool(name: str, value: str) -> bool:
        try:
            return _as_bool(value, name)
        except ConfigError:
            raise ConfigError(f"Invalid {name}: {value}") from None


def load_env_files(
    env_file: str | Path | None = None,
    env_files: list[str | Path] | None = None,
) -> list[Path]:
    """
    Load ``LEAF_VIEWS_*`` settings from .env files.

    Without arguments, ``.env`` and then ``.env.local`` are read from the
    working directory, so machine-local view settings override shared ones.
    Call this before ``ViewConfig.from_env()``.

    Args:
        env_file: Single env file to load
        env_files: Multiple env files to load (later files override earlier)

    Returns:
        The files that existed and were loaded, in load order
    """
    if env_files:
        candidates = [Path(f) for f in env_files]
    elif env_file:
        candidates = [Path(env_file)]
    else:
        candidates = [Path(".env"), Path(".env.local")]

    loaded = [path for path in candidates if path.exists()]
    for path in loaded:
        load_dotenv(path, override=True)
        logger.debug(f"Loaded view settings from {path}")
    return loaded
