"""Perch configuration.

PerchConfig is a frozen dataclass — immutable after creation, passed
explicitly to every function that needs it. ``DEFAULT_CONFIG`` is used
when a caller passes ``None``.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PerchConfig:
    """Framework conventions. Immutable after creation.

    All fields mirror the conventions of the file-routed framework being
    emulated. Override what you need::

        config = PerchConfig(route_prefix="./pages", origin="http://testserver")
    """

    # Route paths
    route_prefix: str = "./routes"
    route_extensions: tuple[str, ...] = (".py", ".html", ".tsx", ".jsx", ".mts", ".ts", ".js", ".mjs")
    index_token: str = "index"

    # Paths served by the framework itself (client runtime, islands, ...)
    internal_prefix: str = "/_frsh"

    # Partial navigation
    partial_attribute: str = "f-partial"
    client_nav_attribute: str = "f-client-nav"
    partial_query_param: str = "fresh-partial"

    # Simulated requests
    origin: str = "http://localhost:8000"


DEFAULT_CONFIG = PerchConfig()
