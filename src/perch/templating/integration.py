"""Kida environment setup.

Creates a kida Environment with perch's partial helpers registered, for
route handlers that render their responses from templates.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

from kida import Environment, FileSystemLoader

from perch.templating.filters import BUILTIN_FILTERS, BUILTIN_GLOBALS


def create_environment(
    template_dir: str | Path | None = None,
    *,
    filters: dict[str, Callable[..., Any]] | None = None,
    globals_: dict[str, Any] | None = None,
) -> Environment:
    """Create a kida Environment with partial filters and globals.

    Without *template_dir* the environment only supports
    ``env.from_string(...)``.
    """
    if template_dir is not None:
        env = Environment(loader=FileSystemLoader(str(template_dir)), autoescape=True)
    else:
        env = Environment(autoescape=True)

    env.update_filters(BUILTIN_FILTERS)

    # User-defined filters may override built-ins
    if filters:
        env.update_filters(filters)

    for name, value in BUILTIN_GLOBALS.items():
        env.add_global(name, value)

    for name, value in (globals_ or {}).items():
        env.add_global(name, value)

    return env
