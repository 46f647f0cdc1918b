"""Templating — kida helpers that emit partial markers."""

from perch.templating.filters import partial, partial_end, partial_start, render_partial
from perch.templating.integration import create_environment

__all__ = [
    "create_environment",
    "partial",
    "partial_end",
    "partial_start",
    "render_partial",
]
