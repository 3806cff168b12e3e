"""Filter and function descriptors for the Jinja environment.

Jinja2 stores filters and template functions as plain callables. The
descriptors here carry a name and an options mapping next to the callable
and turn both into the callable Jinja2 expects:

- ``is_safe``: wrap the result in ``Markup`` so autoescaping skips it
- ``needs_context``: receive the active render context first
- ``needs_environment``: receive the environment first
- ``deprecated``: log a warning on every call
"""

import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from jinja2 import pass_context, pass_environment
from markupsafe import Markup

logger = logging.getLogger(__name__)

KNOWN_OPTIONS = frozenset({"is_safe", "needs_context", "needs_environment", "deprecated"})


@dataclass
class TemplateCallable:
    """A named callable plus the options describing how Jinja should call it."""

    name: str
    func: Callable[..., Any]
    options: dict[str, Any] = field(default_factory=dict)

    kind = "callable"

    def __post_init__(self) -> None:
        self.options = dict(self.options)
        unknown = set(self.options) - KNOWN_OPTIONS
        if unknown:
            logger.debug(
                f"Ignoring unknown options for {self.kind} '{self.name}': "
                f"{', '.join(sorted(unknown))}"
            )

    @property
    def is_safe(self) -> bool:
        """Whether the output is already safe markup."""
        return bool(self.options.get("is_safe"))

    @property
    def safe_contexts(self) -> list[str]:
        """Contexts the output is safe in, e.g. ``["html"]``."""
        value = self.options.get("is_safe")
        if not value:
            return []
        if value is True:
            return ["all"]
        if isinstance(value, str):
            return [value]
        return list(value)

    @property
    def needs_context(self) -> bool:
        return bool(self.options.get("needs_context"))

    @property
    def needs_environment(self) -> bool:
        return bool(self.options.get("needs_environment"))

    @property
    def deprecated(self) -> bool:
        return bool(self.options.get("deprecated"))

    def to_jinja(self) -> Callable[..., Any]:
        """
        Build the callable stored in the Jinja environment.

        The wrapped function is left untouched; a new wrapper carries the
        Jinja pass-argument marker and the safe-markup conversion.
        """
        func = self.func
        if not (self.is_safe or self.needs_context or self.needs_environment or self.deprecated):
            return func

        name = self.name
        kind = self.kind
        deprecated = self.deprecated
        is_safe = self.is_safe

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if deprecated:
                logger.warning(f"The {kind} '{name}' is deprecated")
            result = func(*args, **kwargs)
            # Only strings are marked safe; other values keep their type for chaining
            if is_safe and isinstance(result, str):
                return Markup(result)
            return result

        if self.needs_context and self.needs_environment:
            # Environment first, then context

            @functools.wraps(func)
            def with_environment(context: Any, *args: Any, **kwargs: Any) -> Any:
                return wrapper(context.environment, context, *args, **kwargs)

            return pass_context(with_environment)
        if self.needs_context:
            return pass_context(wrapper)
        if self.needs_environment:
            return pass_environment(wrapper)
        return wrapper


@dataclass
class TemplateFilter(TemplateCallable):
    """A filter, applied in templates as ``{{ value | name }}``."""

    kind = "filter"


@dataclass
class TemplateFunction(TemplateCallable):
    """A function, called in templates as ``{{ name(...) }}``."""

    kind = "function"
