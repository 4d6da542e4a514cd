"""Shared type definitions for eventry.

All type aliases use ``typing.TypeAlias`` annotations.
"""

from typing import Any, TypeAlias

from eventry.events import Event

EventType: TypeAlias = type[Event]
"""Registry key: the exact runtime class of an event."""

Listener: TypeAlias = Any
"""Any object exposing handler methods.  Compared by identity."""

EventTypes: TypeAlias = EventType | list[EventType]
"""One event type, or a list of them, as accepted by ``register``."""
