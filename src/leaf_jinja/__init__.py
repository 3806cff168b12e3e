"""
leaf_jinja - Jinja views for Leaf applications.

Features:
- Filesystem template loading from one or more view directories
- Twig-style options (cache, debug, autoescape, strict_variables)
- Filters and functions with safe-markup and context options
- Extension bundles of filters, functions and globals
- Automatic debug extension and optional vite asset helper
"""

from .callables import TemplateCallable, TemplateFilter, TemplateFunction
from .config import ViewConfig, environment_kwargs, load_env_files, loader_kwargs
from .engine import Jinja
from .extensions import VITE_MODULE, ViewExtension, find_debug_extension, find_vite_helper
from .types import ConfigError, Context, LeafJinjaError, NotConfiguredError, Options, ViewPaths

__version__ = "0.1.0"

__all__ = [
    # Facade
    "Jinja",
    # Configuration
    "ViewConfig",
    "environment_kwargs",
    "loader_kwargs",
    "load_env_files",
    # Filters and functions
    "TemplateCallable",
    "TemplateFilter",
    "TemplateFunction",
    # Extensions
    "ViewExtension",
    "find_debug_extension",
    "find_vite_helper",
    "VITE_MODULE",
    # Types
    "Context",
    "Options",
    "ViewPaths",
    # Exceptions
    "LeafJinjaError",
    "NotConfiguredError",
    "ConfigError",
]
