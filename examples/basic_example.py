"""
Basic leaf_jinja Example
========================

This example demonstrates the core features of leaf_jinja:
- Loading views from a directory
- Globals, filters and functions
- Safe markup from template functions
- Extension bundles
- Configuration from environment variables

To run this example:
    uv run python examples/basic_example.py
"""

import tempfile
from pathlib import Path

from leaf_jinja import Jinja, TemplateFilter, ViewConfig, ViewExtension

# ============================================================================
# Extension bundle
# ============================================================================


class BlogExtension(ViewExtension):
    """Filters and globals shared by the blog views."""

    def get_filters(self):
        return [TemplateFilter("excerpt", lambda text, n=5: " ".join(text.split()[:n]) + "...")]

    def get_globals(self):
        return {"blog_name": "Notes"}


def main() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        views = Path(tmp)
        (views / "layout.html").write_text(
            "<h1>{{ site }} / {{ blog_name }}</h1>{% block content %}{% endblock %}"
        )
        (views / "post.html").write_text(
            '{% extends "layout.html" %}'
            "{% block content %}<p>{{ body | excerpt }}</p>{{ badge('new') }}{% endblock %}"
        )

        view = Jinja.from_config(ViewConfig(view_paths=[views], strict_variables=True))
        view.add_global("site", "Demo")
        view.add_function("badge", lambda text: f"<span class='badge'>{text}</span>", {"is_safe": ["html"]})
        view.add_extension(BlogExtension)

        print(view.render("post.html", {"body": "A <short> post about templates and views"}))


if __name__ == "__main__":
    main()
