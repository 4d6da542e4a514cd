"""Exception hierarchy for eventry.

All custom exceptions inherit from EventryError base class.
"""


class EventryError(Exception):
    """Base exception for all eventry errors.

    All custom exceptions in eventry inherit from this class, allowing users
    to catch all library-specific errors with a single except clause.
    """


class EventValidationError(EventryError, ValueError):
    """Event or config validation failed.

    Raised when user-provided event fields or ``[tool.eventry]`` settings
    fail pydantic validation.

    This wraps pydantic.ValidationError to provide a library-specific exception type.
    """


class DispatchError(EventryError, RuntimeError):
    """A fire() call was aborted.

    Raised directly when an unexpected error occurs while resolving a
    listener's handler.  The underlying error is chained via ``__cause__``
    and has already been reported as a :class:`FailureEvent` by the time
    this propagates.
    """


class HandlerResolutionError(DispatchError):
    """The named handler could not be resolved on a listener.

    Signals a wiring defect (a listener registered for an event type it
    cannot handle) rather than a runtime condition.
    """


class HandlerNotFoundError(HandlerResolutionError, AttributeError):
    """Listener has no attribute with the requested handler name."""


class HandlerNotCallableError(HandlerResolutionError, TypeError):
    """Listener attribute with the handler name is not callable."""


class HandlerSignatureError(HandlerResolutionError, TypeError):
    """Handler cannot be called with the event as its sole argument."""
