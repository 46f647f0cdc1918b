"""Filesystem-based route manifests.

The ``routes/`` directory structure defines URL paths::

    routes/
      index.py            # /
      about.py            # /about
      (marketing)/
        pricing.py        # /pricing
      users/
        index.py          # /users
        [id].py           # /users/:id
      docs/
        [...path].py      # /docs/:path+

Usage::

    manifest = discover_manifest("routes")
    find_match("/users/42", manifest).params  # {"id": "42"}
"""

from perch.pages.discovery import discover_manifest

__all__ = [
    "discover_manifest",
]
