"""Partial markup helpers for kida templates.

These render the marker comments that delimit a partial, so templates
produce HTML the patch engine understands::

    {{ partial_start("main") }}
      <article>...</article>
    {{ partial_end("main") }}

    {{ rows_html | partial("feed", mode="append") }}
"""

import html
from typing import Any

from kida.template import Markup

from perch.partials.markers import ReplacementMode, encode_marker


def partial_start(name: str, mode: ReplacementMode | str = "replace", key: str = "") -> Markup:
    """Opening marker comment for partial *name*."""
    return Markup(f"<!--{encode_marker(name, mode, key)}-->")


def partial_end(name: str, mode: ReplacementMode | str = "replace", key: str = "") -> Markup:
    """Closing marker comment for partial *name*."""
    return Markup(f"<!--{encode_marker(name, mode, key, end=True)}-->")


def partial(content: Any, name: str, mode: ReplacementMode | str = "replace", key: str = "") -> Markup:
    """Wrap rendered *content* in a start/end marker pair.

    Markup passes through untouched; plain strings are escaped.

    Example:
        {{ comment_html | partial("comments", mode="append") }}
        → <!--frsh-partial:comments:1:-->...<!--/frsh-partial:comments:1:-->
    """
    if hasattr(content, "__html__"):
        body = content.__html__()
    else:
        body = html.escape(str(content))
    return Markup(f"{partial_start(name, mode, key)}{body}{partial_end(name, mode, key)}")


def render_partial(name: str, markup: str, mode: ReplacementMode | str = "replace", key: str = "") -> str:
    """Wrap trusted *markup* in markers outside of a template."""
    return str(partial(Markup(markup), name, mode, key))


BUILTIN_GLOBALS: dict[str, Any] = {
    "partial_end": partial_end,
    "partial_start": partial_start,
}


# All built-in perch filters, registered automatically on every env.
BUILTIN_FILTERS: dict[str, Any] = {
    "partial": partial,
}
