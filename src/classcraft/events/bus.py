"""Synchronous event bus for compiler events.

The compiler emits CacheHit/CacheMiss per raw class string,
TokenUnresolved per token no rule claims, and one CSSGenerated per
compile() call. Global listeners run before typed ones.
"""

from __future__ import annotations

from typing import Any, Callable

Listener = Callable[[Any], None]


class EventBus:
    """Dispatches compiler events to listeners in registration order."""

    def __init__(self) -> None:
        self._typed: dict[type, list[Listener]] = {}
        self._global: list[Listener] = []

    def subscribe(self, event_type: type, callback: Listener) -> Callable[[], None]:
        """Listen for *event_type*; returns a callable that unsubscribes.

        Calling the returned function more than once is harmless.
        """
        self._typed.setdefault(event_type, []).append(callback)
        return lambda: self.unsubscribe(event_type, callback)

    def unsubscribe(self, event_type: type, callback: Listener) -> bool:
        listeners = self._typed.get(event_type)
        if not listeners or callback not in listeners:
            return False
        listeners.remove(callback)
        if not listeners:
            del self._typed[event_type]
        return True

    def on_all(self, callback: Listener) -> Callable[[], None]:
        """Listen for every event; returns a callable that unsubscribes."""
        self._global.append(callback)

        def off() -> None:
            if callback in self._global:
                self._global.remove(callback)

        return off

    def has_listeners(self, event_type: type) -> bool:
        return bool(self._global or self._typed.get(event_type))

    def emit(self, event: Any) -> None:
        # Copies let a listener unsubscribe itself mid-dispatch
        for cb in list(self._global):
            cb(event)
        for cb in list(self._typed.get(type(event), ())):
            cb(event)
