"""Filesystem route discovery for a routes/ directory.

Walks the routes directory tree and builds a :class:`Manifest` whose
keys are route paths (``./routes/users/[id].py``). Within a directory,
literal names sort ahead of dynamic ones so that first-match resolution
prefers them; subdirectories are walked in place.

Bracketed names (``[id]``, ``[...path]``) and parenthesized groups
(``(admin)``) are kept verbatim in the key; translating them into URL
templates is the router's job.
"""

from __future__ import annotations

import importlib.util
import logging
from pathlib import Path
from types import ModuleType

from perch.config import DEFAULT_CONFIG, PerchConfig
from perch.routing.manifest import Manifest
from perch.routing.route import RouteEntry

logger = logging.getLogger("perch.routing")


def discover_manifest(routes_dir: str | Path, config: PerchConfig | None = None) -> Manifest:
    """Walk a routes directory and import every route module.

    Args:
        routes_dir: Path to the ``routes/`` directory.
        config: Conventions to use; only ``route_prefix`` matters here.

    Returns:
        A :class:`Manifest` in discovery order.
    """
    config = config or DEFAULT_CONFIG
    root = Path(routes_dir).resolve()
    if not root.is_dir():
        raise FileNotFoundError(f"Routes directory not found: {root}")

    entries: list[RouteEntry] = []
    _walk_directory(root, root, prefix=config.route_prefix.rstrip("/"), entries=entries)
    logger.debug("Discovered %d routes under %s", len(entries), root)
    return Manifest(entries)


def _walk_directory(
    directory: Path,
    root: Path,
    *,
    prefix: str,
    entries: list[RouteEntry],
) -> None:
    """Recursively collect route files in precedence order."""
    for item in sorted(directory.iterdir(), key=_precedence):
        if item.name.startswith(".") or item.name in ("__init__.py", "__pycache__"):
            continue
        if item.is_dir():
            _walk_directory(item, root, prefix=prefix, entries=entries)
        elif item.suffix == ".py":
            route_path = f"{prefix}/{item.relative_to(root).as_posix()}"
            entries.append(RouteEntry.from_module(route_path, _load_module(item)))


def _precedence(item: Path) -> tuple[int, str]:
    """Sort key: literal names, then ``[param]``, then ``[...rest]``.

    Matching is first-match, so narrower names must come first.
    """
    name = item.name
    if name.startswith("[..."):
        return (2, name)
    if name.startswith("["):
        return (1, name)
    return (0, name)


def _load_module(file: Path) -> ModuleType:
    """Import a route file under a unique, throwaway module name."""
    module_name = f"_route_{file.stem}_{id(file)}"
    spec = importlib.util.spec_from_file_location(module_name, file)
    if spec is None or spec.loader is None:
        msg = f"Cannot load route module {file}"
        raise ImportError(msg)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module
