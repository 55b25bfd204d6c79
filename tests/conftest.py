"""Shared test fixtures for viewrender tests."""

from dataclasses import dataclass
from pathlib import Path

import pendulum
import pytest
from rich.console import Console

from viewrender.formatting import FormatterRegistry, build_registry

# 12:30 in New York (EDT)
FIXED_NOW = pendulum.datetime(2024, 3, 15, 16, 30, tz="UTC")


def fixed_clock() -> pendulum.DateTime:
    return FIXED_NOW


@dataclass(frozen=True, slots=True)
class ViewTree:
    """Paths for a small template tree on disk."""

    root: Path
    layout: Path
    profile: Path
    settings: Path
    nav: Path


@pytest.fixture
def registry() -> FormatterRegistry:
    return build_registry(timezone="America/New_York", clock=fixed_clock)


@pytest.fixture
def views(tmp_path: Path) -> ViewTree:
    """Create a layout and three fragments.

    Structure:
        tmp_path/views/
            master.html
            profile.html
            settings.html
            partials/nav.html
    """
    root = tmp_path / "views"
    (root / "partials").mkdir(parents=True)

    layout = root / "master.html"
    _ = layout.write_text(
        "<title>{% block title %}Site{% endblock %}</title>"
        "<main>{% block content %}{% endblock %}</main>"
    )

    profile = root / "profile.html"
    _ = profile.write_text(
        "{% block title %}Profile{% endblock %}"
        "{% block content %}<p>{{ user.name }}</p>{% endblock %}"
    )

    settings = root / "settings.html"
    _ = settings.write_text(
        "{% block content %}<p>{{ user.phone|format_phone }}</p>{% endblock %}"
    )

    nav = root / "partials" / "nav.html"
    _ = nav.write_text("<nav>{{ user.name|to_uppercase }}</nav>")

    return ViewTree(
        root=root, layout=layout, profile=profile, settings=settings, nav=nav
    )


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )


@pytest.fixture
def now() -> pendulum.DateTime:
    """The instant the `registry` fixture's clock reports."""
    return FIXED_NOW
