"""
Listener registry: which callables to notify for each event, and firing events to them.
"""

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Optional

from blitztime.core.shared_types import EventName

logger = logging.getLogger(__name__)

# A listener receives the event payload (None for connect / connect_error / disconnect).
# It may be a plain function or a coroutine function.
Listener = Callable[[Any], Optional[Awaitable[None]]]


class EventDispatcher:
    """Per-event ordered lists of listeners."""

    def __init__(self) -> None:
        self._listeners: dict[EventName, list[Listener]] = {}

    def add_listener(self, name: EventName, listener: Listener) -> None:
        """Append a listener. Registering the same one twice means it gets called twice."""
        self._listeners.setdefault(EventName(name), []).append(listener)

    def remove_listener(self, name: EventName, listener: Listener) -> None:
        """Remove every registration of this listener for the event. No-op if it was never added."""
        name = EventName(name)
        if name not in self._listeners:
            return
        # Rebind instead of mutating: a fire() in progress keeps iterating its own copy
        self._listeners[name] = [item for item in self._listeners[name] if item != listener]

    def listeners(self, name: EventName) -> list[Listener]:
        return list(self._listeners.get(EventName(name), []))

    def clear(self, name: Optional[EventName] = None) -> None:
        """Drop the listeners of one event, or of all events."""
        if name is None:
            self._listeners.clear()
        else:
            self._listeners.pop(EventName(name), None)

    async def fire(self, name: EventName, payload: Any = None) -> list[BaseException]:
        """
        Call every listener currently registered for the event, in registration order.
        ----
        Coroutine listeners run concurrently; this returns once all of them are done.
        A failing listener does not stop the others. Failures are logged and returned (empty list: all went fine).
        """
        name = EventName(name)
        listeners = self.listeners(name)
        if not listeners:
            return []

        logger.debug("Firing %r to %d listener(s)", name.value, len(listeners))
        results = await asyncio.gather(
            *(self._invoke(listener, payload) for listener in listeners),
            return_exceptions=True,
        )
        failures = [result for result in results if isinstance(result, BaseException)]
        for failure in failures:
            logger.error(
                "Listener for %r raised %r", name.value, failure, exc_info=failure
            )
        return failures

    @staticmethod
    async def _invoke(listener: Listener, payload: Any) -> None:
        result = listener(payload)
        if inspect.isawaitable(result):
            await result
