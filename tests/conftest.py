"""Pytest configuration and fixtures."""

import os
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    # Remove any LEAF_VIEWS_ env vars that might interfere
    for key in list(os.environ.keys()):
        if key.startswith("LEAF_VIEWS_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def view_dir(tmp_path: Path) -> Path:
    """Create a temporary directory with test views."""
    views = tmp_path / "views"
    views.mkdir()
    (views / "hello.tpl").write_text("Hello, {{ name }}!")
    (views / "site.tpl").write_text("Welcome to {{ site }}.")
    (views / "upper.tpl").write_text("{{ name | upper }}")
    (views / "layout.html").write_text("<main>{% block content %}{% endblock %}</main>")
    (views / "page.html").write_text(
        '{% extends "layout.html" %}{% block content %}{{ body }}{% endblock %}'
    )
    (views / "partials").mkdir()
    (views / "partials" / "item.tpl").write_text("- {{ item }}")
    return views


@pytest.fixture
def write_view(view_dir: Path):
    """Write an extra view into the view directory."""

    def _write(name: str, source: str) -> str:
        path = view_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source)
        return name

    return _write


@pytest.fixture
def vite_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """Make an importable module exporting a ``vite`` helper; returns its name."""
    name = f"vite_{tmp_path.name}"
    site = tmp_path / "site"
    site.mkdir()
    (site / f"{name}.py").write_text(
        "def vite(files, base_dir=None):\n"
        "    if isinstance(files, str):\n"
        "        files = [files]\n"
        "    base = base_dir or 'build'\n"
        "    return ''.join(\n"
        "        f'<script type=\"module\" src=\"/{base}/{f}\"></script>' for f in files\n"
        "    )\n"
    )
    monkeypatch.syspath_prepend(str(site))
    return name


@pytest.fixture
def mock_env_file(tmp_path: Path) -> Path:
    """Create a temporary .env file."""
    env_file = tmp_path / ".env"
    env_file.write_text(
        """
LEAF_VIEWS_PATH=./views
LEAF_VIEWS_DEBUG=true
LEAF_VIEWS_STRICT_VARIABLES=1
"""
    )
    return env_file
