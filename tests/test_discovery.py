"""Tests for perch.pages.discovery — building a manifest from a routes directory."""

from pathlib import Path

import pytest

from perch.config import PerchConfig
from perch.pages.discovery import discover_manifest
from perch.routing.manifest import determine_route, extract_params


def _write(root: Path, relative: str, source: str = "") -> None:
    file = root / relative
    file.parent.mkdir(parents=True, exist_ok=True)
    file.write_text(source)


@pytest.fixture
def routes_dir(tmp_path: Path) -> Path:
    root = tmp_path / "routes"
    _write(root, "index.py", "handler = lambda request, match: 'home'\n")
    _write(root, "about.py")
    _write(root, "[slug].py")
    _write(root, "blog/index.py")
    _write(root, "blog/[...path].py")
    _write(root, "blog/latest.py")
    _write(root, "(admin)/dashboard.py")
    _write(root, "__init__.py")
    _write(root, "notes.txt")
    _write(root, ".hidden.py")
    return root


class TestDiscoverManifest:
    def test_keys_are_route_paths(self, routes_dir: Path) -> None:
        manifest = discover_manifest(routes_dir)
        assert set(manifest) == {
            "./routes/index.py",
            "./routes/about.py",
            "./routes/[slug].py",
            "./routes/blog/index.py",
            "./routes/blog/[...path].py",
            "./routes/blog/latest.py",
            "./routes/(admin)/dashboard.py",
        }

    def test_literal_names_sort_first(self, routes_dir: Path) -> None:
        keys = list(discover_manifest(routes_dir))
        assert keys.index("./routes/about.py") < keys.index("./routes/[slug].py")
        assert keys.index("./routes/blog/latest.py") < keys.index("./routes/blog/[...path].py")

    def test_literal_route_wins_over_param(self, routes_dir: Path) -> None:
        manifest = discover_manifest(routes_dir)
        assert determine_route("/about", manifest) == "/about"
        assert determine_route("/contact", manifest) == "/:slug"
        assert extract_params("/contact", manifest) == {"slug": "contact"}

    def test_nested_routes(self, routes_dir: Path) -> None:
        manifest = discover_manifest(routes_dir)
        assert determine_route("/blog", manifest) == "/blog"
        assert determine_route("/blog/latest", manifest) == "/blog/latest"
        assert determine_route("/blog/2024/hello", manifest) == "/blog/:path+"
        assert determine_route("/dashboard", manifest) == "/dashboard"

    def test_modules_are_imported(self, routes_dir: Path) -> None:
        manifest = discover_manifest(routes_dir)
        module = manifest["./routes/index.py"].module
        assert module.handler(None, None) == "home"

    def test_route_config_override(self, tmp_path: Path) -> None:
        root = tmp_path / "routes"
        _write(
            root,
            "legacy.py",
            "from perch.routing.route import RouteConfig\nconfig = RouteConfig(route_override='/old/:id')\n",
        )
        manifest = discover_manifest(root)
        assert manifest["./routes/legacy.py"].route_override == "/old/:id"
        assert determine_route("/old/3", manifest) == "/old/:id"

    def test_custom_prefix(self, routes_dir: Path) -> None:
        manifest = discover_manifest(routes_dir, PerchConfig(route_prefix="./pages"))
        assert "./pages/about.py" in manifest

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Routes directory not found"):
            discover_manifest(tmp_path / "nope")

    def test_import_errors_propagate(self, tmp_path: Path) -> None:
        root = tmp_path / "routes"
        _write(root, "broken.py", "raise RuntimeError('boom')\n")
        with pytest.raises(RuntimeError, match="boom"):
            discover_manifest(root)
