"""Perch exception hierarchy.

Shared across routing, partials, and the testing helpers so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when configuration or a route module is malformed.

    Typically raised while building a manifest or resolving a route
    handler, never while matching.
    """


class MarkerError(PerchError, AssertionError):
    """A partial marker comment violates the marker protocol.

    Markers are produced by perch itself, so a malformed one is a bug in
    the renderer rather than a recoverable condition.
    """

    def __init__(self, detail: str) -> None:
        super().__init__(f"[BUG] {detail}")


@dataclass(frozen=True, slots=True)
class HTTPError(PerchError):
    """A dispatch failure that becomes an HTTP response.

    ``ManifestHandler`` turns it into a response with ``status``,
    ``detail`` as the body, and ``headers``.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()


class NotFound(HTTPError):  # noqa: N818
    """404: internal path, or no manifest entry matches."""

    def __init__(self, detail: str) -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: the route's handler mapping has no entry for the method."""

    def __init__(self, allowed: frozenset[str]) -> None:
        allow = ", ".join(sorted(allowed))
        super().__init__(
            status=405,
            detail=f"Method not allowed. Allowed methods: {allow}",
            headers=(("Allow", allow),),
        )
