"""Boundary extraction — pair start/end marker comments into regions."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from bs4 import Comment, Tag

from perch.dom import Document, NodeKind, node_kind
from perch.partials.markers import ReplacementMode, decode_marker, is_end_marker, is_start_marker


@dataclass(frozen=True, slots=True, eq=False)
class Boundary:
    """A start/end marker pair found in one document.

    ``start`` and ``end`` share a parent; the boundary's content is the
    sibling run strictly between them. Boundaries are compared by
    identity since they point at live nodes.
    """

    name: str
    key: str
    mode: ReplacementMode
    start: Comment
    end: Comment

    @property
    def ident(self) -> tuple[str, str]:
        """The (name, key) pair used to match regions across documents."""
        return (self.name, self.key)

    def content(self) -> list:
        """Nodes strictly between the markers, in order."""
        return list(self.iter_content())

    def iter_content(self) -> Iterator:
        node = self.start.next_sibling
        while node is not None and node is not self.end:
            yield node
            node = node.next_sibling


def extract_boundaries(document: Document | Tag) -> list[Boundary]:
    """Find every partial boundary in *document*, in document order.

    A start marker is closed by the first later sibling end marker with
    the same name, key, and mode. Start markers with no such sibling are
    ignored. Boundaries do not nest inside one another's marker pair, but
    may sit at any depth of unrelated elements.

    Raises :class:`~perch.errors.MarkerError` for marker comments that do
    not parse.
    """
    root = document.soup if isinstance(document, Document) else document
    found: list[Boundary] = []
    _collect(root, found)
    return found


def _collect(parent: Tag, found: list[Boundary]) -> None:
    children = list(parent.children)
    for i, child in enumerate(children):
        kind = node_kind(child)
        if kind is NodeKind.ELEMENT:
            _collect(child, found)
            continue
        if kind is not NodeKind.COMMENT or not is_start_marker(child):
            continue

        start = decode_marker(str(child))
        for sibling in children[i + 1 :]:
            if node_kind(sibling) is not NodeKind.COMMENT or not is_end_marker(sibling):
                continue
            end = decode_marker(str(sibling))
            if start.pairs_with(end):
                found.append(
                    Boundary(
                        name=start.name,
                        key=start.key,
                        mode=start.mode,
                        start=child,
                        end=sibling,
                    )
                )
                break
