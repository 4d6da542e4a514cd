"""Synchronous dispatcher for event handling."""

import inspect
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger

from eventry._types import EventType, EventTypes, Listener
from eventry.config import DispatcherConfig
from eventry.events import Event, FailureEvent
from eventry.exceptions import (
    DispatchError,
    HandlerNotCallableError,
    HandlerNotFoundError,
    HandlerResolutionError,
    HandlerSignatureError,
)
from eventry.registry import Registry
from eventry.utils import qualified_name

log = logger.bind(source=__name__)


class FailureLogger:
    """Default FailureEvent listener.

    Logs every reported failure at ERROR with the cause's traceback.
    """

    def on_failure(self, event: FailureEvent) -> None:
        log.opt(exception=event.cause).error(
            "{}.{} failed: {!r}",
            event.origin_class,
            event.origin_method,
            event.cause,
        )


class Dispatcher:
    """Synchronous event dispatcher.

    Invokes a handler method, looked up by name, on every listener
    registered for the event's exact type, in registration order.

    The registry lock is held for the whole of ``fire()``, including every
    handler call.  The lock is reentrant: handlers may register, unregister
    or fire on the same thread; other threads wait until the outermost
    ``fire()`` returns.

    Failures are reported by firing a :class:`FailureEvent` through this
    same dispatcher.  Unless disabled in the config, a
    :class:`FailureLogger` is subscribed to ``FailureEvent`` on creation.
    """

    def __init__(
        self,
        registry: Registry | None = None,
        *,
        config: DispatcherConfig | None = None,
    ) -> None:
        """Initialize dispatcher.

        Args:
            registry: Registry to dispatch from.  A fresh one is created
                when omitted.
            config: Behaviour switches (defaults to ``DispatcherConfig()``).

        Post:
            failure_logger registered for FailureEvent, unless
            ``config.install_default_failure_logger`` is False.
        """
        self._registry = registry if registry is not None else Registry()
        self._config = config or DispatcherConfig()
        self._local = threading.local()
        self.failure_logger: FailureLogger | None = None
        if self._config.install_default_failure_logger:
            self.failure_logger = FailureLogger()
            self.register(FailureEvent, self.failure_logger)

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def config(self) -> DispatcherConfig:
        return self._config

    def register(self, event_types: EventTypes, listener: Listener) -> None:
        """Register listener for one or more event types.

        Registering the same listener twice for a type has no effect.

        Args:
            event_types: Event type(s) to listen for.
            listener: Object exposing the handler method(s) that ``fire()``
                will look up by name.

        Post:
            Listener registered to all specified event types.
        """
        for event_type in self._normalize(event_types):
            self._registry.add(event_type, listener)

    def unregister(
        self,
        *event_types: EventType,
        listener: Listener | None = None,
    ) -> None:
        """Unregister listeners.

        Supports three modes:
        - (*event_types, listener=obj): Remove obj from specified types.
        - (*event_types): Remove all listeners from specified types.
        - (listener=obj): Remove obj from all event types.

        Args:
            *event_types: Event types to remove from (variadic).
            listener: Listener object, or None for all.

        Post:
            Matching listeners removed.

        Raises:
            ValueError: If no args provided.
        """
        if not event_types and listener is None:
            raise ValueError("must provide event_types or listener")

        if not event_types:
            self._registry.remove_everywhere(listener)
        elif listener is None:
            for event_type in event_types:
                self._registry.remove_all(event_type)
        else:
            for event_type in event_types:
                self._registry.remove(event_type, listener)

    def listeners(self, event_type: EventType) -> tuple[Listener, ...]:
        """Return the listeners of an event type in dispatch order."""
        return self._registry.snapshot(event_type)

    @contextmanager
    def listening(
        self, event_types: EventTypes, listener: Listener
    ) -> Iterator[Listener]:
        """Subscribe a listener for the duration of a ``with`` block.

        Example::

            with dispatcher.listening(Ping, recorder):
                dispatcher.fire(Ping(), "on_ping")
            # recorder unregistered here

        Args:
            event_types: Event type(s) to listen for.
            listener: Listener object.

        Yields:
            The listener.
        """
        normalized_types = self._normalize(event_types)
        self.register(normalized_types, listener)
        try:
            yield listener
        finally:
            self.unregister(*normalized_types, listener=listener)

    def fire(self, event: Event, handler_name: str | None = None) -> None:
        """Synchronously dispatch event.

        Each listener's handler is resolved by name and called with the
        event as its sole argument.

        A handler that raises is reported as a FailureEvent and dispatch
        continues with the next listener (unless
        ``config.propagate_handler_errors`` is set, in which case the error
        is re-raised after reporting).  A handler that cannot be resolved
        is reported and then aborts the whole call.

        Warning:
            Listeners can recursively call fire().  Cycles between ordinary
            events are not detected; nested failure reports are cut off at
            ``config.max_failure_depth``.

        Args:
            event: Event to dispatch.
            handler_name: Handler method to invoke on every listener.
                Defaults to ``type(event).handler_name``.

        Post:
            Every listener registered for ``type(event)`` when the call
            started has been attempted, in registration order.

        Raises:
            ValueError: If no handler name is given and the event class
                declares none.
            HandlerResolutionError: If a listener lacks a usable handler.
            DispatchError: If resolving a handler failed unexpectedly.
        """
        event_type = type(event)
        name = handler_name or event_type.handler_name
        if not name:
            raise ValueError(
                f"no handler name given and {event_type.__qualname__} "
                "declares no default handler_name"
            )

        with self._registry.lock:
            listeners = self._registry.snapshot(event_type)
            if not listeners:
                return
            log.debug(
                "Fire {} -> {} listener(s) via {}",
                event_type.__qualname__,
                len(listeners),
                name,
            )
            for listener in listeners:
                self._deliver(listener, event, name)

    def _deliver(self, listener: Listener, event: Event, handler_name: str) -> None:
        """Resolve and invoke one listener's handler, classifying failures.

        Raises:
            HandlerResolutionError: Reported, then propagated.
            DispatchError: Unexpected resolution failure, reported first.
        """
        try:
            handler = self._resolve_handler(listener, event, handler_name)
        except HandlerResolutionError as exc:
            self._report(listener, exc, handler_name)
            raise
        except Exception as exc:
            self._report(listener, exc, handler_name)
            raise DispatchError(
                f"{qualified_name(type(listener))}.{handler_name}"
                f"({type(event).__qualname__}) could not be resolved"
            ) from exc

        try:
            handler(event)
        except Exception as exc:
            self._report(listener, exc, handler_name)
            if self._config.propagate_handler_errors:
                raise

    @staticmethod
    def _resolve_handler(
        listener: Listener, event: Event, handler_name: str
    ) -> Callable[[Event], Any]:
        """Look up ``handler_name`` on listener and check it accepts event.

        Args:
            listener: Listener object.
            event: Event about to be delivered.
            handler_name: Attribute name of the handler.

        Returns:
            The bound handler.

        Raises:
            HandlerNotFoundError: Attribute missing.
            HandlerNotCallableError: Attribute is not callable.
            HandlerSignatureError: Handler cannot take the event as its
                sole argument.
        """
        target = (
            f"{qualified_name(type(listener))}.{handler_name}"
            f"({type(event).__qualname__})"
        )
        try:
            handler = getattr(listener, handler_name)
        except AttributeError as exc:
            raise HandlerNotFoundError(f"{target} no method") from exc
        if not callable(handler):
            raise HandlerNotCallableError(f"{target} is not callable")

        try:
            signature = inspect.signature(handler)
        except (TypeError, ValueError):
            # No introspectable signature (some builtins); the call decides.
            return handler
        try:
            signature.bind(event)
        except TypeError as exc:
            raise HandlerSignatureError(
                f"{target} wrong event, handler signature is {signature}"
            ) from exc
        return handler

    def _report(
        self, listener: Listener, cause: BaseException, handler_name: str
    ) -> None:
        """Fire a FailureEvent describing ``cause``.

        Nesting is tracked per thread; once ``config.max_failure_depth``
        reports are in flight, the failure is logged at CRITICAL instead of
        being fired again.
        """
        origin_class = qualified_name(type(listener))
        depth = getattr(self._local, "failure_depth", 0)
        if depth >= self._config.max_failure_depth:
            log.opt(exception=cause).critical(
                "Failure reports nested {} deep, dropping {}.{}: {!r}",
                depth,
                origin_class,
                handler_name,
                cause,
            )
            return

        failure = FailureEvent(
            listener=listener,
            cause=cause,
            origin_class=origin_class,
            origin_method=handler_name,
        )
        self._local.failure_depth = depth + 1
        try:
            self.fire(failure, FailureEvent.handler_name)
        finally:
            self._local.failure_depth = depth

    @staticmethod
    def _normalize(event_types: EventTypes) -> list[EventType]:
        return event_types if isinstance(event_types, list) else [event_types]
