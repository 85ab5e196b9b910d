"""Shared error taxonomy for resource-watch."""

from __future__ import annotations

from typing import Any, Mapping, TypeVar


def _normalize_context_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return normalize_context(value)
    if isinstance(value, (list, tuple)):
        return [_normalize_context_value(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON-friendly copy of an error context mapping."""
    return {key: _normalize_context_value(val) for key, val in context.items()}


class RWError(Exception):
    """Base error type for typed failure handling."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.error_type, "message": str(self), "context": self.context}


class TransientFetchError(RWError):
    """A single accessor call failed; callers may retry."""


class ExhaustedRetryError(RWError):
    """The retry budget was spent without a successful reconciliation."""


class UnsupportedOperationError(RWError):
    """The resource kind does not provide the requested capability."""


class ConfigurationError(RWError):
    """Failure due to missing or invalid configuration."""


class RenderError(RWError):
    """A renderer produced a row that does not fit the table header."""


T = TypeVar("T", bound=RWError)


def wrap_error(
    error_cls: type[T],
    message: str,
    *,
    context: Mapping[str, Any] | None = None,
    cause: Exception | None = None,
) -> T:
    """Create a typed RWError with optional context and cause."""
    return error_cls(message, context=context, cause=cause)


def error_to_payload(error: RWError) -> dict[str, Any]:
    """Convert an RWError to a listener/log payload."""
    return {
        "error_type": error.error_type,
        "error": str(error),
        "error_context": error.context,
    }
