"""Test utilities for file-routed apps with partial navigation.

Provides simulated request dispatch through a manifest, a client-nav
updater that patches a live document, and partial assertions::

    from perch.testing import ClientNav, ManifestHandler, assert_partial_contains
"""

from perch.testing.assertions import (
    assert_partial_contains,
    assert_partial_not_contains,
    find_partial,
    partial_html,
    partial_text,
)
from perch.testing.client import ClientNav, Exchange
from perch.testing.dispatch import ManifestHandler, resolve_handler, route_for, to_response

__all__ = [
    "ClientNav",
    "Exchange",
    "ManifestHandler",
    "assert_partial_contains",
    "assert_partial_not_contains",
    "find_partial",
    "partial_html",
    "partial_text",
    "resolve_handler",
    "route_for",
    "to_response",
]
