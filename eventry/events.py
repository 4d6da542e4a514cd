"""Event model for eventry.

This module provides the Event base class and the built-in FailureEvent
used to report dispatch failures through the dispatcher itself.
"""

from typing import Any, ClassVar, Protocol

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from eventry.exceptions import EventValidationError


class Event(BaseModel):
    """Base class for all events.

    Users should inherit from this class to define custom events with
    additional fields.  Instances are immutable (frozen).  Listeners are
    looked up by the exact runtime class of the event, so a subclass has
    its own listener set.

    Example:
        >>> class Ping(Event):
        ...     handler_name: ClassVar[str | None] = "on_ping"
        ...     msg: str = ""
        >>> event = Ping(msg="hello")

    Attributes:
        source: Object the event originated from, if any.
        handler_name: Class-level default handler name used by
            ``Dispatcher.fire`` when no name is passed explicitly.

    Raises:
        EventValidationError: If fields fail pydantic validation.
    """

    model_config = ConfigDict(
        frozen=True, extra="forbid", strict=True, arbitrary_types_allowed=True
    )

    handler_name: ClassVar[str | None] = None

    source: Any = None

    def __init__(self, **data: Any) -> None:
        """Wrap pydantic ValidationError into EventValidationError."""
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise EventValidationError(str(exc)) from exc


class FailureEvent(Event):
    """Event fired when dispatching another event to a listener failed.

    The dispatcher fires it through itself, so anything subscribed to
    ``FailureEvent`` (by default a :class:`FailureLogger`) sees every
    failure.  ``source`` defaults to the offending listener.

    Attributes:
        listener: Listener whose handler failed or could not be resolved.
        cause: The exception raised.
        origin_class: Fully qualified class name of the listener.
        origin_method: Name of the handler that was being invoked.
    """

    handler_name: ClassVar[str | None] = "on_failure"

    listener: Any
    cause: BaseException
    origin_class: str
    origin_method: str

    @model_validator(mode="before")
    @classmethod
    def _default_source(cls, data: Any) -> Any:
        if isinstance(data, dict) and "source" not in data and "listener" in data:
            return {**data, "source": data["listener"]}
        return data


class FailureListener(Protocol):
    """Shape of a listener subscribed to :class:`FailureEvent`."""

    def on_failure(self, event: FailureEvent) -> None: ...
