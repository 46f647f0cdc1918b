"""Partial assertion helpers for perch tests.

Each assertion produces a clear error message on failure.
"""

from bs4 import Tag

from perch.dom import Document, NodeKind, node_kind
from perch.partials.boundaries import Boundary, extract_boundaries


def find_partial(document: Document | Tag, name: str, key: str = "") -> Boundary | None:
    """The first boundary named *name* with *key*, or ``None``."""
    for boundary in extract_boundaries(document):
        if boundary.ident == (name, key):
            return boundary
    return None


def partial_html(document: Document | Tag, name: str, key: str = "") -> str:
    """Markup between the markers of partial *name*."""
    boundary = find_partial(document, name, key)
    assert boundary is not None, f"Document has no partial {name!r} (key {key!r})"
    return "".join(str(node) for node in boundary.iter_content())


def partial_text(document: Document | Tag, name: str, key: str = "") -> str:
    """Text content of partial *name*, whitespace-collapsed."""
    boundary = find_partial(document, name, key)
    assert boundary is not None, f"Document has no partial {name!r} (key {key!r})"
    parts = [_text_of(node) for node in boundary.iter_content()]
    return " ".join("".join(parts).split())


def assert_partial_contains(document: Document | Tag, name: str, text: str, key: str = "") -> None:
    """Assert the text of partial *name* contains *text*."""
    content = partial_text(document, name, key)
    assert text in content, (
        f"Partial {name!r} does not contain {text!r}.\n"
        f"Partial text: {content[:500]}"
    )


def assert_partial_not_contains(document: Document | Tag, name: str, text: str, key: str = "") -> None:
    """Assert the text of partial *name* does **not** contain *text*."""
    content = partial_text(document, name, key)
    assert text not in content, (
        f"Partial {name!r} unexpectedly contains {text!r}.\n"
        f"Partial text: {content[:500]}"
    )


def _text_of(node) -> str:
    match node_kind(node):
        case NodeKind.ELEMENT:
            return node.get_text()
        case NodeKind.TEXT:
            return str(node)
        case _:
            return ""
