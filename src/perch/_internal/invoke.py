"""Invoke helpers — call sync or async callables uniformly.

Route handlers, request handlers, and partial updaters can be ``def`` or
``async def``. Any code that calls one of them must handle both cases.
This module keeps the sync/async check in exactly one place.

Usage::

    from perch._internal.invoke import invoke

    result = await invoke(handler, request, match)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync: returns immediately
        def handler(request, match):
            return "<h1>Hello</h1>"

        # async: the coroutine is awaited here
        async def handler(request, match):
            user = await load_user(match.params["id"])
            return f"<h1>{user.name}</h1>"
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
