"""Route manifest and first-match route resolution.

A manifest is an ordered collection of route entries. Matching walks
the entries in declaration order and stops at the first template that
matches the request path. There is no specificity ranking: a catch-all
declared before a literal route shadows it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

import httpx

from perch.config import DEFAULT_CONFIG, PerchConfig
from perch.routing.pattern import compile_template, translate_route_path
from perch.routing.route import DestinationKind, MatchResult, RouteEntry

logger = logging.getLogger("perch.routing")


class Manifest(Mapping[str, RouteEntry]):
    """Immutable, ordered mapping of route path -> :class:`RouteEntry`.

    Iteration order is declaration order and decides match precedence.

    Usage::

        manifest = Manifest.from_modules({
            "./routes/index.py": index_module,
            "./routes/users/[id].py": user_module,
        })
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: tuple[RouteEntry, ...] | list[RouteEntry] = ()) -> None:
        object.__setattr__(self, "_entries", {entry.path: entry for entry in entries})

    @classmethod
    def from_modules(cls, modules: Mapping[str, Any]) -> Manifest:
        """Build a manifest from a ``{route path: module}`` mapping."""
        return cls([RouteEntry.from_module(path, module) for path, module in modules.items()])

    def __getitem__(self, key: str) -> RouteEntry:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Manifest({list(self._entries)!r})"

    @property
    def entries(self) -> list[RouteEntry]:
        """All entries in declaration order."""
        return list(self._entries.values())


def template_for(entry: RouteEntry, config: PerchConfig | None = None) -> str:
    """The URL template an entry matches against (override wins)."""
    if entry.route_override:
        return entry.route_override
    return translate_route_path(entry.path, config)


def find_match(
    target: Any,
    manifest: Manifest,
    config: PerchConfig | None = None,
) -> MatchResult | None:
    """Return the first entry whose template matches *target*'s path.

    *target* is a path or absolute URL string, anything with a ``url``
    (such as an ``httpx.Request``), or an ``httpx.URL``. The HTTP method
    is ignored.
    """
    path = request_path(target)
    for entry in manifest.values():
        template = template_for(entry, config)
        params = compile_template(template).match(path)
        if params is not None:
            return MatchResult(entry=entry, template=template, params=params)
    return None


def determine_route(
    target: Any,
    manifest: Manifest | None = None,
    config: PerchConfig | None = None,
) -> str:
    """The template of the matching route, or ``"/"`` when nothing matches."""
    if manifest is None:
        return "/"
    match = find_match(target, manifest, config)
    if match is None:
        return "/"
    return match.template


def extract_params(
    target: Any,
    manifest: Manifest | None = None,
    config: PerchConfig | None = None,
) -> dict[str, str]:
    """Path parameters captured by the matching route.

    Empty captures are absent rather than present-but-empty.
    """
    if manifest is None:
        return {}
    match = find_match(target, manifest, config)
    if match is None:
        return {}
    return dict(match.params)


def destination_kind(
    target: Any,
    manifest: Manifest | None = None,
    config: PerchConfig | None = None,
) -> DestinationKind:
    """Classify a path as internal, a route, or not found.

    The internal-prefix check runs first and ignores the manifest.
    """
    config = config or DEFAULT_CONFIG
    path = request_path(target)
    if path.startswith(config.internal_prefix):
        return DestinationKind.INTERNAL
    if manifest is None:
        return DestinationKind.NOT_FOUND
    if find_match(path, manifest, config) is not None:
        return DestinationKind.ROUTE
    logger.debug("No route matches %r", path)
    return DestinationKind.NOT_FOUND


def request_path(target: Any) -> str:
    """Extract the URL path from a path string, URL, or request.

    URLs keep their percent-encoding, so ``/users/a%2Fb`` is one segment.
    Plain path strings are used as given.
    """
    if isinstance(target, str):
        if "://" not in target:
            return target
        target = httpx.URL(target)
    url = getattr(target, "url", target)
    if isinstance(url, httpx.URL):
        return url.raw_path.split(b"?", 1)[0].decode("ascii")
    path = getattr(url, "path", None)
    if isinstance(path, str):
        return path
    msg = f"Cannot determine a URL path from {type(target).__name__}"
    raise TypeError(msg)
