"""Route entries, parsed segments, and match results as frozen dataclasses."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SegmentKind(Enum):
    """The role a single route-path segment plays in the URL template."""

    LITERAL = "literal"
    PARAM = "param"  # [id]
    REST = "rest"  # [...path]
    GROUP = "group"  # (admin)
    INDEX = "index"  # trailing index


@dataclass(frozen=True, slots=True)
class RouteSegment:
    """A parsed segment of a route path.

    Literal:  ``users``      (kind=LITERAL)
    Param:    ``[id]``       (kind=PARAM, name="id")
    Rest:     ``[...path]``  (kind=REST, name="path")
    Group:    ``(admin)``    (kind=GROUP, name="admin")
    Index:    ``index``      (kind=INDEX, only as the last segment)
    """

    value: str
    kind: SegmentKind = SegmentKind.LITERAL
    name: str | None = None

    def to_template(self) -> str | None:
        """Render this segment for a URL template, ``None`` if elided."""
        match self.kind:
            case SegmentKind.PARAM:
                return f":{self.name}"
            case SegmentKind.REST:
                return f":{self.name}+"
            case SegmentKind.GROUP:
                return None
            case SegmentKind.INDEX:
                return ""
            case _:
                return self.value


@dataclass(frozen=True, slots=True)
class RouteConfig:
    """Per-route configuration a route module may export as ``config``."""

    route_override: str | None = None


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """One route declared in a manifest.

    ``module`` is whatever object the route file produced (usually an
    imported module). It is opaque to the matcher; only ``path`` and
    ``route_override`` take part in matching.
    """

    path: str
    module: Any = None
    route_override: str | None = None

    @classmethod
    def from_module(cls, path: str, module: Any) -> RouteEntry:
        """Build an entry, reading the module's ``config.route_override`` if present.

        *module* may be a module object or a mapping of exports, and its
        ``config`` a :class:`RouteConfig` or a mapping.
        """
        config = module.get("config") if isinstance(module, Mapping) else getattr(module, "config", None)
        override = getattr(config, "route_override", None)
        if override is None and isinstance(config, Mapping):
            override = config.get("route_override")
        return cls(path=path, module=module, route_override=str(override) if override else None)


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Result of a successful manifest match."""

    entry: RouteEntry
    template: str
    params: dict[str, str] = field(default_factory=dict)


class DestinationKind(Enum):
    """Where a request path is headed."""

    INTERNAL = "internal"
    ROUTE = "route"
    NOT_FOUND = "notFound"
