"""Partials — marker comments, boundary extraction, patching, interception.

A rendered page marks independently updatable regions with comment
pairs. Partial navigation fetches a new rendering and copies only those
regions into the live document.
"""

from perch.partials.boundaries import Boundary, extract_boundaries
from perch.partials.markers import (
    END_PREFIX,
    START_PREFIX,
    PartialMarker,
    ReplacementMode,
    decode_marker,
    encode_marker,
    is_end_marker,
    is_start_marker,
)
from perch.partials.navigation import (
    Disposer,
    NavigationIntent,
    describe_request,
    enable_partial_navigation,
)
from perch.partials.patch import apply_boundary, apply_partials, apply_response, index_boundaries

__all__ = [
    "END_PREFIX",
    "START_PREFIX",
    "Boundary",
    "Disposer",
    "NavigationIntent",
    "PartialMarker",
    "ReplacementMode",
    "apply_boundary",
    "apply_partials",
    "apply_response",
    "decode_marker",
    "describe_request",
    "enable_partial_navigation",
    "encode_marker",
    "extract_boundaries",
    "index_boundaries",
    "is_end_marker",
    "is_start_marker",
]
