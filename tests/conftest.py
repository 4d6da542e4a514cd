"""Shared test fixtures for all eventry tests."""

from typing import Any, ClassVar

import pytest
from loguru import logger

from eventry import Event, FailureEvent


class Ping(Event):
    handler_name: ClassVar[str | None] = "on_ping"

    msg: str = ""


class Pong(Event):
    msg: str = ""


class ChildPing(Ping):
    pass


class Recorder:
    """Listener that appends its name to a shared journal."""

    def __init__(self, name: str, journal: list[Any]) -> None:
        self.name = name
        self.journal = journal

    def on_ping(self, event: Ping) -> None:
        self.journal.append(self.name)

    def on_pong(self, event: Pong) -> None:
        self.journal.append((self.name, "pong"))


class Exploding:
    """Listener whose handler body always raises."""

    def __init__(self, exc: Exception) -> None:
        self.exc = exc
        self.calls = 0

    def on_ping(self, event: Ping) -> None:
        self.calls += 1
        raise self.exc


class FailureSink:
    """Collects every FailureEvent it receives."""

    def __init__(self) -> None:
        self.events: list[FailureEvent] = []

    def on_failure(self, event: FailureEvent) -> None:
        self.events.append(event)


@pytest.fixture
def journal() -> list[Any]:
    return []


@pytest.fixture
def failures():
    """FailureSink to register on a dispatcher under test."""
    return FailureSink()


@pytest.fixture
def log_records():
    """Capture eventry loguru records for the duration of a test."""
    records: list[dict[str, Any]] = []
    logger.enable("eventry")
    handler_id = logger.add(
        lambda message: records.append(message.record), level="DEBUG"
    )
    yield records
    logger.remove(handler_id)
    logger.disable("eventry")
