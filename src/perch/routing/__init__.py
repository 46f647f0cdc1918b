"""Routing — file-style route paths, URL templates, and manifest matching.

Route paths are translated into URL templates once and compiled into
cached patterns; matching walks a manifest in declaration order.
"""

from perch.routing.manifest import (
    Manifest,
    destination_kind,
    determine_route,
    extract_params,
    find_match,
)
from perch.routing.pattern import PathPattern, compile_template, parse_route_path, translate_route_path
from perch.routing.route import (
    DestinationKind,
    MatchResult,
    RouteConfig,
    RouteEntry,
    RouteSegment,
    SegmentKind,
)

__all__ = [
    "DestinationKind",
    "Manifest",
    "MatchResult",
    "PathPattern",
    "RouteConfig",
    "RouteEntry",
    "RouteSegment",
    "SegmentKind",
    "compile_template",
    "destination_kind",
    "determine_route",
    "extract_params",
    "find_match",
    "parse_route_path",
    "translate_route_path",
]
