"""A scriptable document for exercising partial navigation without a browser.

BeautifulSoup owns the tree: parsing, node kinds, traversal, and CSS
selection. This module adds the small part of the browser event model
partial navigation relies on:

- listener registration per node (``add_event_listener``)
- synchronous dispatch that bubbles from the target up to the document
- ``click()`` activation, which submits the owning form when the clicked
  element is a submit button
- form data collection in document order

Usage::

    doc = create_document('<div id="nav"><a href="/about">About</a></div>')
    anchor = doc.query_selector("a")
    doc.add_event_listener(anchor, "click", lambda event: ...)
    doc.click(anchor)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from bs4 import BeautifulSoup, Comment, NavigableString, Tag
from bs4.element import PageElement, PreformattedString

type Listener = Callable[[Event], Any]

_PARSER = "html.parser"
_FORM_CONTROLS = ("input", "select", "textarea", "button")


class NodeKind(Enum):
    """The kind of a tree node, decided once from its bs4 class."""

    ELEMENT = "element"
    COMMENT = "comment"
    TEXT = "text"
    OTHER = "other"  # doctype, CDATA, processing instructions


def node_kind(node: PageElement) -> NodeKind:
    """Classify *node*.

    Comments are checked before other preformatted strings because bs4
    models them as a subclass of ``PreformattedString``.
    """
    match node:
        case Comment():
            return NodeKind.COMMENT
        case PreformattedString():
            return NodeKind.OTHER
        case NavigableString():
            return NodeKind.TEXT
        case Tag():
            return NodeKind.ELEMENT
        case _:
            return NodeKind.OTHER


def parse_html(html: str) -> BeautifulSoup:
    """Parse markup into a detached tree."""
    return BeautifulSoup(html, _PARSER)


@dataclass(slots=True)
class Event:
    """A dispatched DOM event.

    ``submitter`` is only set on ``submit`` events triggered by a
    button. Listeners call :meth:`prevent_default` to claim the event.
    """

    type: str
    target: Tag | None = None
    submitter: Tag | None = None
    bubbles: bool = True
    cancelable: bool = True
    default_prevented: bool = False
    current_target: PageElement | None = field(default=None, repr=False)
    _stopped: bool = field(default=False, repr=False)

    def prevent_default(self) -> None:
        """Cancel the default action (navigation, form submission)."""
        if self.cancelable:
            self.default_prevented = True

    def stop_propagation(self) -> None:
        """Stop the event from reaching ancestors of the current node."""
        self._stopped = True


class Document:
    """A parsed HTML document with an event-listener registry.

    Nodes are compared by identity, never by ``==``: bs4 tags compare
    equal when their markup is equal.
    """

    __slots__ = ("_listeners", "soup", "url")

    def __init__(self, html: str | BeautifulSoup = "", *, url: str = "http://localhost/") -> None:
        self.soup = html if isinstance(html, BeautifulSoup) else parse_html(html)
        self.url = url
        self._listeners: dict[int, tuple[PageElement, dict[str, list[Listener]]]] = {}

    def __str__(self) -> str:
        return str(self.soup)

    def __repr__(self) -> str:
        return f"Document(url={self.url!r})"

    # -- Queries --

    @property
    def body(self) -> Tag:
        """The ``<body>`` element, or the document root for fragments."""
        return self.soup.body or self.soup

    def get_element_by_id(self, element_id: str) -> Tag | None:
        """First element whose ``id`` attribute equals *element_id*."""
        return self.soup.find(id=element_id)

    def query_selector(self, selector: str, root: Tag | None = None) -> Tag | None:
        """First element under *root* (default: document) matching a CSS selector."""
        return (root or self.soup).select_one(selector)

    def query_selector_all(self, selector: str, root: Tag | None = None) -> list[Tag]:
        """All elements under *root* (default: document) matching a CSS selector."""
        return list((root or self.soup).select(selector))

    # -- Listeners --

    def add_event_listener(self, node: PageElement, event_type: str, listener: Listener) -> None:
        """Register *listener* for *event_type* on *node*.

        Registering the same listener twice for the same node and type
        has no effect.
        """
        _, by_type = self._listeners.setdefault(id(node), (node, {}))
        listeners = by_type.setdefault(event_type, [])
        if not any(existing is listener for existing in listeners):
            listeners.append(listener)

    def remove_event_listener(self, node: PageElement, event_type: str, listener: Listener) -> None:
        """Unregister *listener*; unknown listeners are ignored."""
        entry = self._listeners.get(id(node))
        if entry is None:
            return
        _, by_type = entry
        listeners = by_type.get(event_type, [])
        by_type[event_type] = [existing for existing in listeners if existing is not listener]
        if not any(by_type.values()):
            del self._listeners[id(node)]

    def listener_count(self, node: PageElement | None = None) -> int:
        """Number of registered listeners, on *node* or in the whole document."""
        if node is not None:
            entry = self._listeners.get(id(node))
            return sum(len(v) for v in entry[1].values()) if entry else 0
        return sum(len(v) for _, by_type in self._listeners.values() for v in by_type.values())

    # -- Dispatch --

    def dispatch_event(self, target: Tag, event: Event) -> bool:
        """Dispatch *event* at *target*, bubbling up to the document.

        Returns ``False`` if a listener called ``prevent_default()``.
        Listener exceptions propagate to the caller.
        """
        event.target = target
        path: list[PageElement] = [target]
        if event.bubbles:
            path.extend(target.parents)

        for node in path:
            entry = self._listeners.get(id(node))
            if entry is None or entry[0] is not node:
                continue
            event.current_target = node
            for listener in list(entry[1].get(event.type, ())):
                listener(event)
            if event._stopped:
                break

        event.current_target = None
        return not event.default_prevented

    def click(self, element: Tag) -> Event:
        """Simulate a user click on *element*.

        When the click is not cancelled and *element* is a submit button
        with a form owner, the form receives a ``submit`` event with the
        button as submitter.
        """
        event = Event("click")
        self.dispatch_event(element, event)
        if not event.default_prevented and is_submit_button(element):
            form = self.form_owner(element)
            if form is not None:
                self.request_submit(form, element)
        return event

    def request_submit(self, form: Tag, submitter: Tag | None = None) -> Event:
        """Fire a ``submit`` event at *form*, as a submit button would."""
        event = Event("submit", submitter=submitter)
        self.dispatch_event(form, event)
        return event

    # -- Forms --

    def form_owner(self, element: Tag) -> Tag | None:
        """The form *element* belongs to (``form`` attribute or ancestor)."""
        form_id = element.get("form")
        if form_id is not None:
            owner = self.get_element_by_id(str(form_id))
            return owner if owner is not None and owner.name == "form" else None
        return element.find_parent("form")

    def form_data(self, form: Tag, submitter: Tag | None = None) -> list[tuple[str, str]]:
        """Collect the successful controls of *form* in document order.

        Disabled controls, file inputs, unchecked checkboxes and radios,
        and buttons other than *submitter* are left out.
        """
        pairs: list[tuple[str, str]] = []
        for control in self.soup.find_all(_FORM_CONTROLS):
            if self.form_owner(control) is not form:
                continue
            name = control.get("name")
            if not name or control.has_attr("disabled"):
                continue
            pairs.extend((str(name), value) for value in _control_values(control, submitter))
        return pairs


def create_document(html: str = "", *, url: str = "http://localhost/") -> Document:
    """Parse *html* into a new :class:`Document`."""
    return Document(html, url=url)


def is_submit_button(element: Tag) -> bool:
    """True for ``<button>`` (default type) and submit/image inputs."""
    kind = str(element.get("type") or "").lower()
    if element.name == "button":
        return kind in ("", "submit")
    if element.name == "input":
        return kind in ("submit", "image")
    return False


def _control_values(control: Tag, submitter: Tag | None) -> list[str]:
    """Values a single control contributes to the form data set."""
    match control.name:
        case "button":
            return [str(control.get("value", ""))] if control is submitter else []
        case "textarea":
            return [control.get_text()]
        case "select":
            options = control.find_all("option")
            selected = [option for option in options if option.has_attr("selected")]
            if not selected and options and not control.has_attr("multiple"):
                selected = options[:1]
            return [str(option.get("value", option.get_text())) for option in selected]
        case _:
            kind = str(control.get("type") or "text").lower()
            if kind in ("submit", "image"):
                return [str(control.get("value", ""))] if control is submitter else []
            if kind in ("button", "reset", "file"):
                return []
            if kind in ("checkbox", "radio"):
                return [str(control.get("value", "on"))] if control.has_attr("checked") else []
            return [str(control.get("value", ""))]
