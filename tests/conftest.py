"""Shared fixtures for perch tests."""

from types import SimpleNamespace

import pytest

from perch.routing.manifest import Manifest


def _page(body: str):
    return SimpleNamespace(handler=lambda request, match: body)


@pytest.fixture
def site_manifest() -> Manifest:
    """A small site: index, about, a group, an API param route, and docs."""
    return Manifest.from_modules(
        {
            "./routes/index.py": _page("<h1>Home</h1>"),
            "./routes/about/index.py": _page("<h1>About</h1>"),
            "./routes/(admin)/dashboard.py": _page("<h1>Dashboard</h1>"),
            "./routes/api/users/[id].py": _page("<p>user</p>"),
            "./routes/docs/[...path].py": _page("<p>docs</p>"),
        }
    )


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
