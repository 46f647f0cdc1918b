"""Patch a live document with the partial regions of a response.

Only regions delimited by partial markers change. Everything outside
them, markers included, is left untouched.

Usage::

    doc = create_document(page_html)
    applied = apply_partials(doc, response_html)

Regions are matched by ``(name, key)``. A response region with no live
counterpart is skipped. When a document repeats a ``(name, key)`` pair,
the first occurrence in document order wins.
"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING

from bs4 import Tag

from perch.dom import Document, parse_html
from perch.partials.boundaries import Boundary, extract_boundaries
from perch.partials.markers import ReplacementMode

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger("perch.partials")


def apply_partials(live: Document | Tag, response_html: str) -> int:
    """Merge the partial regions of *response_html* into *live*.

    Returns the number of live regions that were patched. Parse errors
    propagate unchanged.
    """
    incoming = extract_boundaries(parse_html(response_html))
    if not incoming:
        logger.debug("Response contains no partials; nothing to apply")
        return 0

    targets = index_boundaries(extract_boundaries(live))
    applied = 0
    for boundary in index_boundaries(incoming).values():
        target = targets.get(boundary.ident)
        if target is None:
            logger.debug("No live partial %r (key %r); skipping", boundary.name, boundary.key)
            continue
        apply_boundary(target, boundary)
        applied += 1
    return applied


async def apply_response(live: Document | Tag, response: httpx.Response) -> int:
    """Read *response* and apply its partials to *live*."""
    await response.aread()
    return apply_partials(live, response.text)


def index_boundaries(boundaries: list[Boundary]) -> dict[tuple[str, str], Boundary]:
    """Map ``(name, key)`` to the first boundary carrying it."""
    index: dict[tuple[str, str], Boundary] = {}
    for boundary in boundaries:
        if boundary.ident in index:
            logger.debug("Duplicate partial %r (key %r); keeping the first", boundary.name, boundary.key)
            continue
        index[boundary.ident] = boundary
    return index


def apply_boundary(target: Boundary, source: Boundary) -> None:
    """Copy *source*'s content into the *target* region.

    ``source.mode`` decides the merge: ``replace`` clears the target
    first, ``append`` inserts before the end marker, ``prepend`` inserts
    right after the start marker. Inserted nodes are deep copies, so
    *source*'s document is never modified.
    """
    nodes = [copy.copy(node) for node in source.iter_content()]

    match source.mode:
        case ReplacementMode.REPLACE:
            for node in target.content():
                node.extract()
            anchor = target.end
        case ReplacementMode.APPEND:
            anchor = target.end
        case ReplacementMode.PREPEND:
            anchor = target.start.next_sibling or target.end

    for node in nodes:
        anchor.insert_before(node)
