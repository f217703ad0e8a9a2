"""In-process event bus connecting stores, the presenter and view stubs.

Dispatch is a direct call-stack fan-out: ``emit`` invokes every matching
handler synchronously, in registration order, before returning. There is no
queueing and no isolation between handlers, so an exception raised by a
handler propagates to the ``emit`` call site. A handler may emit again; the
nested emit runs inline, depth-first.

Patterns:
    - an exact event name, e.g. ``"cart:changed"``
    - ``"*"``, matching every event (handlers receive an ``EventEnvelope``)
    - a compiled regular expression, searched against the event name
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import structlog
from pydantic import BaseModel

logger = structlog.get_logger(__name__)

WILDCARD = "*"

Pattern = str | re.Pattern
Handler = Callable[[Any], None]


@dataclass(frozen=True)
class EventEnvelope:
    """What a wildcard subscriber receives: the event name and its payload."""

    name: str
    payload: Any = None


class _Subscription:
    __slots__ = ("pattern", "handler", "active")

    def __init__(self, pattern: Pattern, handler: Handler) -> None:
        self.pattern = pattern
        self.handler = handler
        self.active = True

    def matches(self, name: str) -> bool:
        if isinstance(self.pattern, re.Pattern):
            return self.pattern.search(name) is not None
        return self.pattern == WILDCARD or self.pattern == name


class EventBus:
    """Synchronous publish/subscribe hub.

    One instance is created at the application root and injected into every
    store and the presenter.
    """

    def __init__(self) -> None:
        self._subscriptions: list[_Subscription] = []

    def on(self, pattern: Pattern, handler: Handler) -> None:
        """Register ``handler`` for an exact name, ``"*"`` or a regex."""
        self._subscriptions.append(_Subscription(pattern, handler))

    def off(self, pattern: Pattern, handler: Handler) -> None:
        """Deregister every subscription of ``handler`` under ``pattern``."""
        remaining = []
        for subscription in self._subscriptions:
            if subscription.pattern == pattern and subscription.handler == handler:
                subscription.active = False
            else:
                remaining.append(subscription)
        self._subscriptions = remaining

    def on_all(self, handler: Handler) -> None:
        self.on(WILDCARD, handler)

    def off_all(self) -> None:
        """Remove every subscription."""
        for subscription in self._subscriptions:
            subscription.active = False
        self._subscriptions = []

    def emit(self, name: str, payload: Any = None) -> None:
        """Invoke every handler matching ``name``, in registration order."""
        logger.debug("event_emitted", event_name=name, payload_type=type(payload).__name__)

        # Subscriptions added while dispatching are not part of this emit
        for subscription in list(self._subscriptions):
            if not subscription.active or not subscription.matches(name):
                continue
            if subscription.pattern == WILDCARD:
                subscription.handler(EventEnvelope(name=name, payload=payload))
            else:
                subscription.handler(payload)

    def publish(self, event: BaseModel) -> None:
        """Emit a payload model under the event name it carries."""
        self.emit(event.name, event)

    def trigger(self, name: str, context: dict | None = None) -> Callable[..., None]:
        """Return a callback that emits ``name`` with whatever it receives.

        Used to attach the bus to imperative callback sites. When ``context``
        is given, its keys are merged over the received argument.
        """

        def _emit(data: Any = None) -> None:
            self.emit(name, _merge(data, context))

        return _emit

    def subscriber_count(self, name: str | None = None) -> int:
        if name is None:
            return len(self._subscriptions)
        return sum(1 for s in self._subscriptions if s.matches(name))


def _merge(data: Any, context: dict | None) -> Any:
    if not context:
        return data
    if data is None:
        return dict(context)
    if isinstance(data, BaseModel):
        return data.model_copy(update=context)
    return {**data, **context}
