"""Registry for listener management.

This module provides Registry, the event type to listener table shared by a
dispatcher.  Every operation runs under one reentrant lock that the
dispatcher also holds for the duration of a fire() call.
"""

import threading

from loguru import logger

from eventry._types import EventType, Listener
from eventry.utils import qualified_name

log = logger.bind(source=__name__)


class Registry:
    """Registry table for event listeners.

    Maps each event type to the listeners subscribed to it, in
    registration order.  Listeners are compared by identity, so two equal
    but distinct objects are two entries.

    Only listeners registered for the exact event type are returned;
    listeners of parent event types are NOT inherited.
    """

    def __init__(self) -> None:
        """Initialize empty registry.

        Post:
            _entries is empty dict mapping event types to listener lists.
        """
        self._lock = threading.RLock()
        self._entries: dict[EventType, list[Listener]] = {}

    @property
    def lock(self) -> threading.RLock:
        """Reentrant lock guarding every registry operation."""
        return self._lock

    def add(self, event_type: EventType, listener: Listener) -> None:
        """Register a listener for an event type.

        Idempotent: a listener already present (by identity) is left where
        it is.

        Args:
            event_type: Event type to register for.
            listener: Listener object.

        Post:
            listener appears exactly once in event_type's entry.
        """
        with self._lock:
            entry = self._entries.setdefault(event_type, [])
            if any(existing is listener for existing in entry):
                return
            entry.append(listener)
            log.debug(
                "Registered {} for {}",
                qualified_name(type(listener)),
                event_type.__qualname__,
            )

    def remove(self, event_type: EventType, listener: Listener) -> None:
        """Remove one listener from an event type.

        The entry itself stays, even when it becomes empty.  No-op when the
        listener is not registered.

        Args:
            event_type: Event type to remove from.
            listener: Listener object.
        """
        with self._lock:
            entry = self._entries.get(event_type)
            if entry is None:
                return
            for index, existing in enumerate(entry):
                if existing is listener:
                    del entry[index]
                    return

    def remove_all(self, event_type: EventType) -> None:
        """Remove every listener of an event type and drop its entry.

        Args:
            event_type: Event type to clear.
        """
        with self._lock:
            if self._entries.pop(event_type, None) is not None:
                log.debug("Forgot all listeners for {}", event_type.__qualname__)

    def remove_everywhere(self, listener: Listener) -> None:
        """Remove a listener from every event type it is registered for.

        Args:
            listener: Listener object.
        """
        with self._lock:
            for event_type in list(self._entries):
                self.remove(event_type, listener)

    def snapshot(self, event_type: EventType) -> tuple[Listener, ...]:
        """Return the listeners of an event type in dispatch order.

        Args:
            event_type: Event type to look up.

        Returns:
            Point-in-time copy of the entry; empty if there is none.
        """
        with self._lock:
            return tuple(self._entries.get(event_type, ()))

    def event_types(self) -> list[EventType]:
        """Return the event types that currently have an entry."""
        with self._lock:
            return list(self._entries)

    def __contains__(self, item: tuple[EventType, Listener]) -> bool:
        event_type, listener = item
        with self._lock:
            return any(
                existing is listener for existing in self._entries.get(event_type, ())
            )
