"""Route-path translation and URL template matching.

A route path names a route file relative to the routes directory::

    ./routes/users/[id].py         -> /users/:id
    ./routes/docs/[...path].py     -> /docs/:path+
    ./routes/(admin)/dashboard.py  -> /dashboard
    ./routes/about/index.py        -> /about

Templates use ``:name`` for a single segment and ``:name+`` for one or
more segments. Override patterns declared by a route may also use
``:name*``, ``:name?`` and an anonymous ``*`` wildcard.
"""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass
from functools import lru_cache

from perch.config import DEFAULT_CONFIG, PerchConfig
from perch.routing.route import RouteSegment, SegmentKind

# :name with optional +, *, ? modifier, or a bare * wildcard
_TOKEN_RE = re.compile(r":(\w+)([+*?])?|\*")

_SEGMENT = r"[^/]+"
_SEGMENTS = r"[^/]+(?:/[^/]+)*"


def parse_route_path(path: str, config: PerchConfig | None = None) -> list[RouteSegment]:
    """Parse a route path string into segments.

    The route prefix and a recognized file extension are removed first.
    The leading empty segment (from the leading ``/``) is kept as a
    literal so that joining the rendered segments yields a rooted path.

    Examples::

        "./routes/users/[id].py" -> ["", "users", PARAM(id)]
        "./routes/(admin)/x.py"  -> ["", GROUP(admin), "x"]
    """
    config = config or DEFAULT_CONFIG
    stripped = _remove_extension(_remove_prefix(path, config.route_prefix), config.route_extensions)
    parts = stripped.split("/")
    last = len(parts) - 1

    segments: list[RouteSegment] = []
    for i, part in enumerate(parts):
        if part.startswith("[...") and part.endswith("]"):
            segments.append(RouteSegment(part, SegmentKind.REST, part[4:-1]))
        elif part.startswith("[") and part.endswith("]"):
            segments.append(RouteSegment(part, SegmentKind.PARAM, part[1:-1]))
        elif part.startswith("(") and part.endswith(")"):
            segments.append(RouteSegment(part, SegmentKind.GROUP, part[1:-1]))
        elif i == last and part == config.index_token:
            segments.append(RouteSegment(part, SegmentKind.INDEX))
        else:
            segments.append(RouteSegment(part))
    return segments


def translate_route_path(path: str, config: PerchConfig | None = None) -> str:
    """Translate a route path into a URL template.

    Group segments vanish, a trailing index collapses onto its parent,
    and a trailing ``/`` survives only when the input ended with one.
    The root index maps to exactly ``/``.
    """
    rendered = (segment.to_template() for segment in parse_route_path(path, config))
    template = "/".join(part for part in rendered if part is not None)
    if not template.startswith("/"):
        template = "/" + template
    if template == "/" or (template.endswith("/") and path.endswith("/")):
        return template
    return template.removesuffix("/")


@dataclass(frozen=True, slots=True)
class PathPattern:
    """A compiled URL template.

    ``names`` lists capture names in group order. Anonymous wildcards
    are named ``"0"``, ``"1"``, ... in the order they appear.
    """

    template: str
    regex: re.Pattern[str]
    names: tuple[str, ...]

    def match(self, path: str) -> dict[str, str] | None:
        """Match the whole *path*; return non-empty captures or ``None``."""
        m = self.regex.fullmatch(path)
        if m is None:
            return None
        return {name: value for name, value in zip(self.names, m.groups(), strict=True) if value}

    def test(self, path: str) -> bool:
        """True if the template matches the whole *path*."""
        return self.regex.fullmatch(path) is not None


@lru_cache(maxsize=512)
def compile_template(template: str) -> PathPattern:
    """Compile a URL template into a :class:`PathPattern`.

    Literal text matches exactly. ``:name`` captures one segment,
    ``:name+`` one or more, ``:name*`` zero or more, ``:name?`` an
    optional segment; ``*`` captures anything. An optional capture
    preceded by ``/`` makes the slash optional too, so ``/files/:rest*``
    matches ``/files``.
    """
    names: list[str] = []
    pieces: list[str] = []
    pos = 0
    wildcards = 0

    for token in _TOKEN_RE.finditer(template):
        literal = template[pos : token.start()]
        pos = token.end()

        if token.group(0) == "*":
            names.append(str(wildcards))
            wildcards += 1
            pieces.append(re.escape(literal) + "(.*)")
            continue

        names.append(token.group(1))
        modifier = token.group(2)
        body = _SEGMENTS if modifier in ("+", "*") else _SEGMENT

        if modifier in ("?", "*"):
            if literal.endswith("/"):
                pieces.append(re.escape(literal[:-1]) + f"(?:/({body}))?")
            else:
                pieces.append(re.escape(literal) + f"({body})?")
        else:
            pieces.append(re.escape(literal) + f"({body})")

    pieces.append(re.escape(template[pos:]))
    return PathPattern(template=template, regex=re.compile("".join(pieces)), names=tuple(names))


def _remove_prefix(s: str, prefix: str) -> str:
    return s.removeprefix(prefix) if prefix else s


def _remove_extension(path: str, extensions: tuple[str, ...]) -> str:
    ext = posixpath.splitext(path)[1]
    if ext and ext in extensions:
        return path[: -len(ext)]
    return path
