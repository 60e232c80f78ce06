"""
Low level helpers for walking the running order document.

- attribute matching on bs4 attribute dicts
- Node: a null-safe wrapper around a bs4 element that skips whitespace-only
  text when moving to a child or sibling
- run_pass: runs a traversal in a background thread and collects what it
  emits
"""

from __future__ import annotations

import queue
import threading
from typing import Any, Callable, Mapping, Optional

from bs4.element import PageElement, Tag


Emit = Callable[[Any], None]


# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------


def attribute_value(attrs: Mapping[str, Any], key: str) -> str:
    """
    Return the raw value of attribute `key` or "" if it is missing.

    bs4 stores multi-valued attributes (like class) as lists unless the
    document was parsed with multi_valued_attributes=None; both forms give
    the same string here.
    """
    value = attrs.get(key)
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return str(value)


def has_attribute_value(attrs: Mapping[str, Any], key: str, value: str) -> bool:
    """
    True if the space separated values of attribute `key` contain `value`.
    """
    raw = attribute_value(attrs, key)
    if not raw:
        return False

    return value in raw.split(" ")


def has_class_value(attrs: Mapping[str, Any], class_name: str) -> bool:
    return has_attribute_value(attrs, "class", class_name)


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


def _is_separator(ch: str) -> bool:
    if ch.isascii():
        return not (ch.isalnum() or ch == "_")
    if ch.isalpha() or ch.isdigit():
        return False
    return ch.isspace()


def title_case(text: str) -> str:
    """
    Upper-case every letter that starts a word and leave the rest alone.

    Unlike str.title() this never lower-cases ("AC/DC" stays "AC/DC") and does
    not treat digits or non-ASCII punctuation as word boundaries.
    """
    out: list[str] = []
    prev = " "
    for ch in text:
        if _is_separator(prev):
            upper = ch.upper()
            out.append(upper if len(upper) == 1 else ch)
        else:
            out.append(ch)
        prev = ch
    return "".join(out)


# ---------------------------------------------------------------------------
# Node navigation
# ---------------------------------------------------------------------------


def _data(element: PageElement) -> str:
    # Element nodes are identified by their tag name, text nodes by their text.
    if isinstance(element, Tag):
        return element.name or ""
    return str(element)


def _is_empty(element: PageElement) -> bool:
    return not _data(element).strip()


class Node:
    """
    Wraps a bs4 element (or nothing) and offers navigation that ignores
    whitespace-only text nodes. Navigating from an empty Node gives an empty
    Node, so lookups can be chained and checked once at the end.
    """

    __slots__ = ("element",)

    def __init__(self, element: Optional[PageElement] = None) -> None:
        self.element = element

    def __bool__(self) -> bool:
        return self.element is not None

    def __repr__(self) -> str:
        return f"Node({self.element!r})"

    @property
    def data(self) -> str:
        if self.element is None:
            return ""
        return _data(self.element)

    @property
    def attrs(self) -> Mapping[str, Any]:
        if isinstance(self.element, Tag):
            return self.element.attrs
        return {}

    def has_class(self, class_name: str) -> bool:
        return has_class_value(self.attrs, class_name)

    def first_non_empty_child(self) -> "Node":
        if not isinstance(self.element, Tag):
            return Node()

        for child in self.element.children:
            if not _is_empty(child):
                return Node(child)

        return Node()

    def next_non_empty_sibling(self) -> "Node":
        if self.element is None:
            return Node()

        sibling = self.element.next_sibling
        while sibling is not None:
            if not _is_empty(sibling):
                return Node(sibling)
            sibling = sibling.next_sibling

        return Node()


# ---------------------------------------------------------------------------
# Background passes
# ---------------------------------------------------------------------------

_ITEM = "item"
_DONE = "done"
_FAILED = "failed"


def protect(messages: "queue.Queue[tuple[str, Any]]", walk: Callable[[Emit], None]) -> None:
    """
    Run `walk` to completion and report how it ended on `messages`.

    Every item `walk` emits is put on the queue first, followed by exactly one
    final message: done, or failed carrying the exception. ParseErrors are the
    expected failures; anything else, including BaseExceptions, is handed over
    as well so the consumer re-raises it instead of waiting forever.
    """

    def emit(item: Any) -> None:
        messages.put((_ITEM, item))

    try:
        walk(emit)
    except BaseException as exc:  # re-raised by run_pass
        messages.put((_FAILED, exc))
    else:
        messages.put((_DONE, None))


def run_pass(walk: Callable[[Emit], None], name: str = "pass") -> list:
    """
    Run a traversal in a background thread and return the emitted items in
    emission order. The first failure is raised; later items are ignored.
    """
    messages: "queue.Queue[tuple[str, Any]]" = queue.Queue()
    worker = threading.Thread(target=protect, args=(messages, walk), name=name, daemon=True)
    worker.start()

    items: list = []
    while True:
        kind, payload = messages.get()
        if kind == _ITEM:
            items.append(payload)
        elif kind == _DONE:
            worker.join()
            return items
        else:
            raise payload
