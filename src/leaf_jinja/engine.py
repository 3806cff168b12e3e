"""Jinja view facade for Leaf applications."""

import logging
import sys
from collections.abc import Callable, Iterable
from typing import Any, TextIO

from jinja2 import Environment, FileSystemLoader
from jinja2.ext import Extension

from .callables import TemplateFilter, TemplateFunction
from .config import ViewConfig, environment_kwargs, loader_kwargs
from .extensions import VITE_MODULE, find_debug_extension, find_vite_helper
from .types import Context, NotConfiguredError, Options, ViewPaths

logger = logging.getLogger(__name__)


class Jinja:
    """
    Wrapper around a filesystem-backed Jinja environment.

    Every call is forwarded to the wrapped ``jinja2.Environment``; errors
    raised by Jinja (missing templates, syntax errors, undefined variables)
    reach the caller unchanged.

    Example:
        view = Jinja(["./views"], {"strict_variables": True})
        view.add_global("site", "Demo")
        view.add_filter("shout", lambda s: s.upper() + "!")

        html = view.render("index.html", {"name": "Ada"})
    """

    def __init__(
        self,
        view_paths: ViewPaths | None = None,
        options: Options | None = None,
    ):
        """
        Initialize the facade.

        Args:
            view_paths: Directories to load templates from. When empty the
                facade stays unconfigured until ``configure`` is called.
            options: Environment options (see ``environment_kwargs``)
        """
        self._env: Environment | None = None

        if view_paths:
            self.configure(view_paths, options)

    @classmethod
    def from_config(cls, config: ViewConfig) -> "Jinja":
        """Create a configured facade from a ViewConfig."""
        view = cls()
        view.configure(config.view_paths, config.options())
        return view

    def configure(self, view_paths: ViewPaths, options: Options | None = None) -> Environment:
        """
        Build the Jinja environment.

        A fresh loader and environment replace any previous ones; filters,
        functions and globals registered earlier are not carried over.

        Args:
            view_paths: Directories to load templates from, searched in order
            options: Environment options

        Returns:
            The new jinja2.Environment
        """
        options = dict(options or {})
        paths = [str(path) for path in view_paths]

        loader = FileSystemLoader(paths, **loader_kwargs(options))
        self._env = Environment(loader=loader, **environment_kwargs(options))

        self._setup_default_directives(options.get("vite_module") or VITE_MODULE)

        logger.debug(f"Configured Jinja environment with view paths: {', '.join(paths)}")
        return self._env

    def config(self, view_paths: ViewPaths, options: Options | None = None) -> Environment:
        """Alias for ``configure``."""
        return self.configure(view_paths, options)

    def render(self, view: str, context: Context | None = None) -> str:
        """
        Render a template.

        Args:
            view: Template name, relative to the view paths
            context: Variables passed to the template

        Returns:
            Rendered template string
        """
        template = self._require("render").get_template(view)
        return template.render(context or {})

    def display(
        self,
        view: str,
        context: Context | None = None,
        stream: TextIO | None = None,
    ) -> None:
        """
        Render a template and write it out instead of returning it.

        Args:
            view: Template name, relative to the view paths
            context: Variables passed to the template
            stream: Where to write; defaults to stdout
        """
        template = self._require("display").get_template(view)
        out = stream if stream is not None else sys.stdout
        for chunk in template.generate(context or {}):
            out.write(chunk)

    def get_environment(self) -> Environment:
        """Get the wrapped jinja2.Environment."""
        return self._require("get_environment")

    @property
    def environment(self) -> Environment:
        """Alias for ``get_environment()``."""
        return self.get_environment()

    @property
    def configured(self) -> bool:
        """Whether an environment has been configured."""
        return self._env is not None

    def add_global(self, name: str, value: Any) -> None:
        """Add a global variable available in all templates."""
        self._require("add_global").globals[name] = value

    def add_filter(
        self,
        name: str,
        func: Callable[..., Any],
        options: Options | None = None,
    ) -> None:
        """
        Register a filter.

        Args:
            name: Filter name used in templates
            func: Callable implementing the filter
            options: Filter options (``is_safe``, ``needs_context``, ...)
        """
        self.add_filter_raw(TemplateFilter(name, func, dict(options or {})))

    def add_filter_raw(self, template_filter: TemplateFilter) -> None:
        """Register a prebuilt TemplateFilter."""
        env = self._require("add_filter_raw")
        env.filters[template_filter.name] = template_filter.to_jinja()
        logger.debug(f"Registered filter '{template_filter.name}'")

    def add_function(
        self,
        name: str,
        func: Callable[..., Any],
        options: Options | None = None,
    ) -> None:
        """
        Register a template function.

        Args:
            name: Function name used in templates
            func: Callable implementing the function
            options: Function options (``is_safe``, ``needs_context``, ...)
        """
        self.add_function_raw(TemplateFunction(name, func, dict(options or {})))

    def add_function_raw(self, template_function: TemplateFunction) -> None:
        """Register a prebuilt TemplateFunction."""
        env = self._require("add_function_raw")
        env.globals[template_function.name] = template_function.to_jinja()
        logger.debug(f"Registered function '{template_function.name}'")

    def add_extension(self, extension: str | type[Extension]) -> None:
        """Add a Jinja extension class, or its dotted import path."""
        self._require("add_extension").add_extension(extension)

    def set_extensions(self, extensions: Iterable[str | type[Extension]]) -> None:
        """Add several Jinja extensions, in order."""
        env = self._require("set_extensions")
        for extension in extensions:
            env.add_extension(extension)

    def _setup_default_directives(self, vite_module: str) -> None:
        """Register the debug extension and vite helper when available."""
        debug_extension = find_debug_extension()
        if debug_extension is not None:
            self.add_extension(debug_extension)

        helper = find_vite_helper(vite_module)
        if helper is not None:

            def vite(files: Any, base_dir: str | None = None) -> Any:
                return helper(files, base_dir)

            self.add_function("vite", vite, {"is_safe": ["html"]})

    def _require(self, operation: str) -> Environment:
        if self._env is None:
            raise NotConfiguredError(operation)
        return self._env
