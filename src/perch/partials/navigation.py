"""Partial navigation — intercept links, buttons, and forms.

``enable_partial_navigation`` wires listeners onto a client-nav
container. Each intercepted gesture becomes an ``httpx.Request`` handed
to a caller-supplied updater together with the originating event. The
updater decides whether to claim the event (``event.prevent_default()``)
and how to fetch and apply the response.

Usage::

    async def updater(event, request):
        event.prevent_default()
        response = await handler(request)
        await apply_response(doc, response)

    with enable_partial_navigation(doc, container, origin, updater) as nav:
        doc.click(doc.query_selector("a"))
        await nav.settle()
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any

import httpx
from bs4 import Tag

from perch._internal.types import Updater
from perch.config import DEFAULT_CONFIG, PerchConfig
from perch.dom import Document, Event, Listener

logger = logging.getLogger("perch.partials")

_INTENT_EXTENSION = "perch.intent"
_SUPPORTED_METHODS = frozenset({"get", "post"})


@dataclass(frozen=True, slots=True)
class NavigationIntent:
    """What an intercepted gesture asks for.

    Attributes:
        trigger: ``"click"`` or ``"submit"``.
        method: Upper-case HTTP method.
        target: Absolute URL the request goes to.
        payload: Submitted form fields, in order (empty for clicks).
    """

    trigger: str
    method: str
    target: str
    payload: tuple[tuple[str, str], ...] = ()


def describe_request(request: httpx.Request) -> NavigationIntent | None:
    """The intent attached to a request built by the interceptor."""
    return request.extensions.get(_INTENT_EXTENSION)


class Disposer:
    """Handle returned by :func:`enable_partial_navigation`.

    Calling it removes every listener that was attached, exactly once.
    It is also a context manager that disposes on exit. Awaitables
    returned by the updater are kept so tests can wait for in-flight
    updates with :meth:`settle`; disposing does not cancel them.
    """

    __slots__ = ("_disposed", "_document", "_pending", "_registrations")

    def __init__(self, document: Document) -> None:
        self._document = document
        self._registrations: list[tuple[Tag, str, Listener]] = []
        self._pending: list[Any] = []
        self._disposed = False

    def __call__(self) -> None:
        if self._disposed:
            return
        for element, event_type, listener in self._registrations:
            self._document.remove_event_listener(element, event_type, listener)
        logger.debug("Removed %d partial navigation listeners", len(self._registrations))
        self._registrations.clear()
        self._disposed = True

    def __enter__(self) -> Disposer:
        return self

    def __exit__(self, *args: object) -> None:
        self()

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def listener_count(self) -> int:
        """Listeners currently attached through this handle."""
        return len(self._registrations)

    def listen(self, element: Tag, event_type: str, listener: Listener) -> None:
        """Attach *listener* and remember it for disposal."""
        self._document.add_event_listener(element, event_type, listener)
        self._registrations.append((element, event_type, listener))

    def track(self, result: Any) -> None:
        """Keep an updater result if it still has to be awaited."""
        if inspect.isawaitable(result):
            self._pending.append(result)

    async def settle(self) -> list[Any]:
        """Await every pending updater result, in dispatch order."""
        results: list[Any] = []
        while self._pending:
            results.append(await self._pending.pop(0))
        return results


def enable_partial_navigation(
    document: Document,
    container: Tag,
    origin: str,
    updater: Updater,
    *,
    config: PerchConfig | None = None,
) -> Disposer:
    """Intercept navigation inside *container*.

    - ``<a>`` with an ``f-partial`` attribute, or an ``href`` rooted at
      ``/``, gets a click listener.
    - ``<button>`` with ``f-partial`` gets a click listener unless it
      belongs to a form.
    - Every ``<form>`` gets one shared submit listener.

    Clicks become ``GET origin+target``. Submissions honor
    ``formaction``/``formmethod`` overrides and send their fields as a
    query string (GET) or a URL-encoded body (POST). Every GET carries the
    partial query parameter.
    """
    config = config or DEFAULT_CONFIG
    disposer = Disposer(document)

    def on_click(target: str) -> Listener:
        def listener(event: Event) -> None:
            request = _partial_get(origin, target, config)
            disposer.track(updater(event, request))

        return listener

    for anchor in document.query_selector_all("a", container):
        target = anchor.get(config.partial_attribute)
        if not target:
            href = anchor.get("href")
            if href is None or not _is_rooted(str(href)):
                continue
            target = href
        disposer.listen(anchor, "click", on_click(str(target)))

    for button in document.query_selector_all("button", container):
        target = button.get(config.partial_attribute)
        if not target:
            continue
        if document.form_owner(button) is not None:
            continue
        disposer.listen(button, "click", on_click(str(target)))

    def on_submit(event: Event) -> None:
        form = event.target
        if form is None or event.default_prevented:
            return
        if not _client_nav_enabled(form, config):
            logger.debug("Client navigation disabled for form; ignoring submit")
            return

        submitter = event.submitter
        method = str(_first_attr(("formmethod", submitter), ("method", form)) or "get").lower()
        if method not in _SUPPORTED_METHODS:
            logger.debug("Unsupported form method %r; ignoring submit", method)
            return

        action = _first_attr(
            (config.partial_attribute, submitter),
            ("formaction", submitter),
            (config.partial_attribute, form),
            ("action", form),
        )
        if not action:
            action = httpx.URL(document.url).path
        pairs = document.form_data(form, submitter)
        request = _form_request(origin, str(action), method, pairs, config)
        disposer.track(updater(event, request))

    for form in document.query_selector_all("form", container):
        disposer.listen(form, "submit", on_submit)

    logger.debug("Enabled partial navigation with %d listeners", disposer.listener_count)
    return disposer


def _partial_get(origin: str, target: str, config: PerchConfig) -> httpx.Request:
    url = httpx.URL(origin).join(target).copy_set_param(config.partial_query_param, "true")
    request = httpx.Request("GET", url)
    request.extensions[_INTENT_EXTENSION] = NavigationIntent(trigger="click", method="GET", target=str(url))
    return request


def _form_request(
    origin: str,
    action: str,
    method: str,
    pairs: list[tuple[str, str]],
    config: PerchConfig,
) -> httpx.Request:
    url = httpx.URL(origin).join(action)
    if method == "get":
        url = url.copy_with(params=pairs).copy_set_param(config.partial_query_param, "true")
        request = httpx.Request("GET", url)
    else:
        request = httpx.Request(
            "POST",
            url,
            content=str(httpx.QueryParams(pairs)).encode("utf-8"),
            headers={"content-type": "application/x-www-form-urlencoded"},
        )
    request.extensions[_INTENT_EXTENSION] = NavigationIntent(
        trigger="submit",
        method=request.method,
        target=str(url),
        payload=tuple(pairs),
    )
    return request


def _first_attr(*candidates: tuple[str, Tag | None]) -> str | None:
    """Value of the first present, non-empty attribute among candidates."""
    for name, element in candidates:
        if element is None:
            continue
        value = element.get(name)
        if value:
            return str(value)
    return None


def _client_nav_enabled(element: Tag, config: PerchConfig) -> bool:
    """Nearest ``f-client-nav`` carrier (the element itself included) decides.

    ``"false"`` disables; any other value, or no carrier at all, enables.
    """
    attribute = config.client_nav_attribute
    carrier = element if element.has_attr(attribute) else element.find_parent(attrs={attribute: True})
    if carrier is None:
        return True
    return carrier.get(attribute) != "false"


def _is_rooted(href: str) -> bool:
    """Same-origin, absolute-path hrefs only (``//host`` is another origin)."""
    return href.startswith("/") and not href.startswith("//")
