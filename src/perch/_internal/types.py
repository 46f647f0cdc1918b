"""Shared type aliases used across perch modules."""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx

    from perch.dom import Event

# Partial updater: receives the intercepted event and the request to send
type Updater = Callable[[Event, httpx.Request], Any]

# Request handler: turns a simulated request into a response, sync or async
type RequestHandler = Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]
