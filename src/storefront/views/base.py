"""Headless rendering primitives shared by the view stubs.

Views own a small ``Element`` tree as their root handle and expose explicit
``set_<field>`` methods. ``render_fields`` is the shared render contract: it
applies a partial view-model by calling the matching setter for every key
and returns the root handle.
"""

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

PRICELESS_LABEL = "Priceless"


@dataclass(eq=False)
class Element:
    """A node in a headless render tree."""

    name: str
    text: str = ""
    disabled: bool = False
    visible: bool = True
    classes: set[str] = field(default_factory=set)
    attrs: dict[str, str] = field(default_factory=dict)
    children: list["Element"] = field(default_factory=list)
    listeners: dict[str, list[Callable[[], None]]] = field(default_factory=dict, repr=False)

    def add_listener(self, event: str, callback: Callable[[], None]) -> None:
        self.listeners.setdefault(event, []).append(callback)

    def dispatch(self, event: str) -> None:
        """Fire ``event`` on this node. Disabled nodes swallow clicks and submits."""
        if self.disabled and event in ("click", "submit"):
            return
        for callback in list(self.listeners.get(event, [])):
            callback()

    def replace_children(self, *children: "Element") -> None:
        self.children = list(children)

    def toggle_class(self, name: str, enabled: bool) -> None:
        if enabled:
            self.classes.add(name)
        else:
            self.classes.discard(name)

    def walk(self) -> Iterator["Element"]:
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, name: str) -> "Element | None":
        """First descendant (or self) with the given name, depth-first."""
        return next((node for node in self.walk() if node.name == name), None)

    def find_all(self, name: str) -> list["Element"]:
        return [node for node in self.walk() if node.name == name]


def render_fields(view: Any, fields: Mapping[str, Any]) -> Element:
    """Apply each display field through ``view.set_<field>`` and return the root."""
    for key, value in fields.items():
        setter = getattr(view, f"set_{key}", None)
        if setter is None:
            raise AttributeError(f"{type(view).__name__} has no display field {key!r}")
        setter(value)
    return view.container


def format_amount(value: float) -> str:
    """Render whole amounts without a trailing ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"


def format_price(value: float | None, currency: str) -> str:
    if value is None:
        return PRICELESS_LABEL
    return f"{format_amount(value)} {currency}"
