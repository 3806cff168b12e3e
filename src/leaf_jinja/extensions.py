"""Extension bundles and discovery of optional integrations."""

import importlib
import logging
from collections.abc import Callable, Iterable
from typing import Any

import jinja2.ext
from jinja2 import Environment
from jinja2.ext import Extension

from .callables import TemplateFilter, TemplateFunction

logger = logging.getLogger(__name__)

# Hosting module expected to export a ``vite`` asset helper
VITE_MODULE = "leaf_vite"


class ViewExtension(Extension):
    """
    A bundle of filters, functions and globals registered as one unit.

    Subclasses override the ``get_*`` hooks. Jinja instantiates the
    extension when it is passed to ``Environment.add_extension`` (or the
    ``extensions`` argument of the environment), and the bundle is
    registered on that environment at that point.

    Example:
        class GreetingExtension(ViewExtension):
            def get_filters(self):
                return [TemplateFilter("shout", lambda s: s.upper() + "!")]

            def get_globals(self):
                return {"greeting": "Hello"}

        view.add_extension(GreetingExtension)
    """

    def __init__(self, environment: Environment):
        super().__init__(environment)

        for template_filter in self.get_filters():
            environment.filters[template_filter.name] = template_filter.to_jinja()
        for template_function in self.get_functions():
            environment.globals[template_function.name] = template_function.to_jinja()
        environment.globals.update(self.get_globals())

        logger.debug(f"Registered extension bundle {self.identifier}")

    def get_filters(self) -> Iterable[TemplateFilter]:
        """Filters provided by this extension."""
        return []

    def get_functions(self) -> Iterable[TemplateFunction]:
        """Functions provided by this extension."""
        return []

    def get_globals(self) -> dict[str, Any]:
        """Globals provided by this extension."""
        return {}


def find_debug_extension() -> type[Extension] | None:
    """Return Jinja's debug extension class if this Jinja release ships one."""
    return getattr(jinja2.ext, "DebugExtension", None)


def find_vite_helper(module: str = VITE_MODULE) -> Callable[..., Any] | None:
    """
    Look up the ``vite`` asset helper exported by a hosting module.

    Args:
        module: Dotted import path of the module providing ``vite``

    Returns:
        The helper, or None if the module is not installed or exports no
        callable ``vite``

    Raises:
        ImportError: If the module is installed but fails to import
    """
    parts = module.split(".")
    candidates = {".".join(parts[:i]) for i in range(1, len(parts) + 1)}

    try:
        provider = importlib.import_module(module)
    except ImportError as e:
        if e.name not in candidates:
            raise
        logger.debug(f"No vite helper: module '{module}' is not importable")
        return None

    helper = getattr(provider, "vite", None)
    if not callable(helper):
        logger.debug(f"No vite helper: '{module}' does not export a callable 'vite'")
        return None
    return helper
