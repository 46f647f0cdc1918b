"""Client-side partial navigation against a simulated handler.

``ClientNav`` is the updater a client-nav container uses in the
browser, rebuilt for tests: it claims the event, sends the request to a
handler, and patches the live document with the response's partials.

Usage::

    doc = create_document(page_html)
    nav = ClientNav(doc, ManifestHandler(manifest))
    with nav.enable():
        await nav.click(doc.query_selector("a[href='/docs/intro']"))
    assert_partial_contains(doc, "docs-content", "Introduction")
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from dataclasses import dataclass

import httpx
from bs4 import Tag

from perch._internal.invoke import invoke
from perch._internal.types import RequestHandler
from perch.config import DEFAULT_CONFIG, PerchConfig
from perch.dom import Document, Event
from perch.partials.navigation import Disposer, enable_partial_navigation
from perch.partials.patch import apply_response

logger = logging.getLogger("perch.testing")


@dataclass(frozen=True, slots=True)
class Exchange:
    """One request sent by :class:`ClientNav` and the response it got."""

    request: httpx.Request
    response: httpx.Response
    applied: int


class ClientNav:
    """Updater that fetches partial responses and applies them.

    Calling the instance claims the event immediately (the way an async
    browser handler calls ``preventDefault()`` before its first await)
    and returns an awaitable that performs the fetch and the patch.
    """

    __slots__ = ("_disposer", "config", "document", "handler", "history", "origin")

    def __init__(
        self,
        document: Document,
        handler: RequestHandler,
        *,
        origin: str | None = None,
        config: PerchConfig | None = None,
    ) -> None:
        self.document = document
        self.handler = handler
        self.config = config or DEFAULT_CONFIG
        self.origin = origin or self.config.origin
        self.history: list[Exchange] = []
        self._disposer: Disposer | None = None

    def __call__(self, event: Event, request: httpx.Request) -> Awaitable[int]:
        event.prevent_default()
        return self.fetch_and_apply(request)

    async def fetch_and_apply(self, request: httpx.Request) -> int:
        """Send *request* through the handler and patch the document."""
        response = await invoke(self.handler, request)
        applied = await apply_response(self.document, response)
        logger.debug("%s %s -> %d, %d partials applied", request.method, request.url, response.status_code, applied)
        self.history.append(Exchange(request=request, response=response, applied=applied))
        return applied

    def enable(self, container: Tag | None = None) -> Disposer:
        """Start intercepting navigation inside *container*.

        Defaults to the first element carrying the client-nav attribute,
        else the document body. Enabling again disposes the previous
        interception first.
        """
        if self._disposer is not None:
            self._disposer()
        if container is None:
            container = self.document.query_selector(f"[{self.config.client_nav_attribute}]") or self.document.body
        self._disposer = enable_partial_navigation(
            self.document,
            container,
            self.origin,
            self,
            config=self.config,
        )
        return self._disposer

    async def click(self, element: Tag) -> Event:
        """Click *element* and wait for the resulting update, if any."""
        event = self.document.click(element)
        await self.settle()
        return event

    async def submit(self, form: Tag, submitter: Tag | None = None) -> Event:
        """Submit *form* and wait for the resulting update, if any."""
        event = self.document.request_submit(form, submitter)
        await self.settle()
        return event

    async def settle(self) -> None:
        """Wait for every update triggered so far."""
        if self._disposer is not None:
            await self._disposer.settle()
