"""
Explicit results, store error taxonomy and structured logging.

Key patterns:
- Expected failures (missing entity, unknown route, corrupt blob) travel as
  values inside a Result instead of being raised
- Every store error can render itself as the `{"error": ...}` payload a
  remote backend would have returned
- One structlog configuration shared by every component
"""

import logging
from typing import Any, Generic, Literal, TypeVar

import structlog

_SHARED_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def configure_logging(
    log_format: Literal["json", "console"] = "json", level: str = "INFO"
) -> None:
    """Configure structlog with JSON output (production) or console output (development)."""
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger().setLevel(level)
    renderer = (
        structlog.dev.ConsoleRenderer()
        if log_format == "console"
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[*_SHARED_PROCESSORS, renderer],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging()

logger = structlog.get_logger("healthstore")

# Generic Result type for explicit error handling
ValueT = TypeVar("ValueT")
ErrorT = TypeVar("ErrorT", bound=BaseException)


class Result(Generic[ValueT, ErrorT]):
    """
    Explicit error handling without exceptions for expected failures.

    Callers branch on is_ok()/is_err() or degrade with unwrap_or(); the store
    layer never raises for a missing entity or an unknown endpoint.
    """

    def __init__(self, value: ValueT | None = None, error: ErrorT | None = None) -> None:
        if value is not None and error is not None:
            raise ValueError("Result cannot have both value and error")
        if value is None and error is None:
            raise ValueError("Result must have either value or error")
        self._value: ValueT | None = value
        self._error: ErrorT | None = error

    @classmethod
    def ok(cls, value: ValueT) -> "Result[ValueT, ErrorT]":
        return cls(value=value)

    @classmethod
    def err(cls, error: ErrorT) -> "Result[ValueT, ErrorT]":
        return cls(error=error)

    def is_ok(self) -> bool:
        return self._error is None

    def is_err(self) -> bool:
        return self._error is not None

    def unwrap(self) -> ValueT:
        if self._error:
            raise self._error
        return self._value  # type: ignore

    def unwrap_or(self, default: Any) -> Any:
        return self._value if self._error is None else default

    def unwrap_err(self) -> ErrorT:
        if self._error is None:
            raise ValueError("Called unwrap_err() on an Ok value")
        return self._error

    def __repr__(self) -> str:
        if self._error is None:
            return f"Result.ok({self._value!r})"
        return f"Result.err({self._error!r})"


class StoreError(Exception):
    """Base class for every error the store layer reports as a value."""

    def to_payload(self) -> dict[str, str]:
        return {"error": str(self)}


class NotFoundError(StoreError):
    """No route matches the request, or no entity has the requested id."""


class MalformedStateError(StoreError):
    """A persisted collection blob could not be parsed."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Collection '{key}' is malformed: {reason}")
        self.key = key
        self.reason = reason


class InvalidRecordError(StoreError):
    """A stored record does not fit its typed model."""


class InvalidTransitionError(StoreError):
    """A status change that the entity's state machine does not allow."""


class PreconditionFailedError(StoreError):
    """A conditional update found the entity in a state it did not expect."""

    def __init__(self, entity_id: str, field: str, actual: Any) -> None:
        super().__init__(f"'{entity_id}' has {field}={actual!r}; update not applied")
        self.entity_id = entity_id
        self.field = field
        self.actual = actual
