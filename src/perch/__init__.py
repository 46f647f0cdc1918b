"""Perch — exercise file-routed pages and partial navigation without a server.

Resolves file-style route paths into URL templates, matches requests
against a route manifest, and replays client-side partial navigation
against a parsed document: intercepted clicks and form submissions are
turned into requests, and the marked regions of the response are
patched into the live page.

Route matching::

    from perch import Manifest, find_match

    manifest = Manifest.from_modules({"./routes/users/[id].py": users})
    find_match("/users/42", manifest).params  # {"id": "42"}

Partial navigation::

    from perch import ClientNav, ManifestHandler, create_document

    doc = create_document(page_html)
    nav = ClientNav(doc, ManifestHandler(manifest))
    with nav.enable():
        await nav.click(doc.query_selector("a"))
"""

from importlib import import_module

__version__ = "0.1.0"
__all__ = [
    "Boundary",
    "ClientNav",
    "ConfigurationError",
    "DestinationKind",
    "Disposer",
    "Document",
    "Event",
    "HTTPError",
    "Manifest",
    "ManifestHandler",
    "MarkerError",
    "MatchResult",
    "MethodNotAllowed",
    "NavigationIntent",
    "NotFound",
    "PartialMarker",
    "PerchConfig",
    "PerchError",
    "ReplacementMode",
    "RouteConfig",
    "RouteEntry",
    "apply_partials",
    "apply_response",
    "create_document",
    "decode_marker",
    "destination_kind",
    "determine_route",
    "discover_manifest",
    "enable_partial_navigation",
    "encode_marker",
    "extract_boundaries",
    "extract_params",
    "find_match",
    "translate_route_path",
]

# Public name -> defining module. Resolved on first access so that
# ``import perch`` stays cheap.
_LAZY_IMPORTS: dict[str, str] = {
    "Boundary": "perch.partials.boundaries",
    "ClientNav": "perch.testing.client",
    "ConfigurationError": "perch.errors",
    "DestinationKind": "perch.routing.route",
    "Disposer": "perch.partials.navigation",
    "Document": "perch.dom",
    "Event": "perch.dom",
    "HTTPError": "perch.errors",
    "Manifest": "perch.routing.manifest",
    "ManifestHandler": "perch.testing.dispatch",
    "MarkerError": "perch.errors",
    "MatchResult": "perch.routing.route",
    "MethodNotAllowed": "perch.errors",
    "NavigationIntent": "perch.partials.navigation",
    "NotFound": "perch.errors",
    "PartialMarker": "perch.partials.markers",
    "PerchConfig": "perch.config",
    "PerchError": "perch.errors",
    "ReplacementMode": "perch.partials.markers",
    "RouteConfig": "perch.routing.route",
    "RouteEntry": "perch.routing.route",
    "apply_partials": "perch.partials.patch",
    "apply_response": "perch.partials.patch",
    "create_document": "perch.dom",
    "decode_marker": "perch.partials.markers",
    "destination_kind": "perch.routing.manifest",
    "determine_route": "perch.routing.manifest",
    "discover_manifest": "perch.pages.discovery",
    "enable_partial_navigation": "perch.partials.navigation",
    "encode_marker": "perch.partials.markers",
    "extract_boundaries": "perch.partials.boundaries",
    "extract_params": "perch.routing.manifest",
    "find_match": "perch.routing.manifest",
    "translate_route_path": "perch.routing.pattern",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    module_path = _LAZY_IMPORTS.get(name)
    if module_path is None:
        raise AttributeError(f"module 'perch' has no attribute {name!r}")
    return getattr(import_module(module_path), name)
