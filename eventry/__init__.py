"""eventry - Type-keyed event dispatch for Python.

Listeners subscribe to event classes; firing an event invokes a handler
method, looked up by name, on every listener of the event's exact type.
Dispatch failures are themselves fired as FailureEvent.
"""

__version__ = "0.1.0"

from loguru import logger

# Disable all eventry logging by default.  Users opt in with:
#     from loguru import logger
#     logger.enable("eventry")
logger.disable("eventry")

from eventry.config import DispatcherConfig, load_config
from eventry.dispatcher import Dispatcher, FailureLogger
from eventry.events import Event, FailureEvent, FailureListener
from eventry.exceptions import (
    DispatchError,
    EventryError,
    EventValidationError,
    HandlerNotCallableError,
    HandlerNotFoundError,
    HandlerResolutionError,
    HandlerSignatureError,
)
from eventry.registry import Registry

# Module-level default dispatcher instance
default_dispatcher = Dispatcher()

__all__ = [
    # Version
    "__version__",
    # Event classes
    "Event",
    "FailureEvent",
    "FailureListener",
    # Dispatch
    "Registry",
    "Dispatcher",
    "FailureLogger",
    "default_dispatcher",
    # Config
    "DispatcherConfig",
    "load_config",
    # Exception classes
    "EventryError",
    "EventValidationError",
    "DispatchError",
    "HandlerResolutionError",
    "HandlerNotFoundError",
    "HandlerNotCallableError",
    "HandlerSignatureError",
]
