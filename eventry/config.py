"""Dispatcher configuration.

Settings can be given programmatically or declared in the ``[tool.eventry]``
table of a project's ``pyproject.toml``::

    [tool.eventry]
    max_failure_depth = 4
    propagate_handler_errors = false
    install_default_failure_logger = true
"""

import tomllib
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from eventry.exceptions import EventValidationError

log = logger.bind(source=__name__)


class DispatcherConfig(BaseModel):
    """Behaviour switches for a :class:`~eventry.dispatcher.Dispatcher`.

    Attributes:
        max_failure_depth: How many failure reports may be nested on one
            thread before the dispatcher stops redispatching and logs the
            failure directly.
        propagate_handler_errors: Re-raise handler body errors after
            reporting them instead of continuing with the next listener.
        install_default_failure_logger: Subscribe a FailureLogger to
            FailureEvent when the dispatcher is created.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

    max_failure_depth: int = Field(default=8, ge=1)
    propagate_handler_errors: bool = False
    install_default_failure_logger: bool = True

    def __init__(self, **data: Any) -> None:
        """Wrap pydantic ValidationError into EventValidationError."""
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise EventValidationError(str(exc)) from exc


def load_config(pyproject_path: Path) -> DispatcherConfig:
    """Read dispatcher settings from a ``pyproject.toml`` file.

    Args:
        pyproject_path: Path to the ``pyproject.toml`` file.

    Returns:
        Config built from ``[tool.eventry]``, or defaults when the table
        is absent.

    Raises:
        EventValidationError: If the table holds unknown keys or values of
            the wrong type.
    """
    with open(pyproject_path, "rb") as fh:
        config = tomllib.load(fh)

    settings = config.get("tool", {}).get("eventry", {})
    if not settings:
        log.debug("No [tool.eventry] table in {}", pyproject_path)
    return DispatcherConfig(**settings)
