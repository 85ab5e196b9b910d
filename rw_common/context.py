"""Cancellable value context handed down to accessors and renderers."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Mapping


class ContextKey(str, Enum):
    """Well-known context values."""

    FACTORY = "factory"
    LABELS = "labels"


@dataclass(frozen=True)
class Context:
    """Immutable value bag sharing one cancellation token with its children."""

    values: Mapping[Any, Any] = field(default_factory=dict)
    token: threading.Event = field(default_factory=threading.Event, compare=False)

    def with_value(self, key: Any, value: Any) -> "Context":
        """Return a child context with ``key`` bound; cancellation is shared."""
        merged = dict(self.values)
        merged[key] = value
        return replace(self, values=merged)

    def value(self, key: Any, default: Any = None) -> Any:
        return self.values.get(key, default)

    def cancel(self) -> None:
        self.token.set()

    @property
    def cancelled(self) -> bool:
        return self.token.is_set()

    def wait(self, timeout: float | None) -> bool:
        """Sleep up to ``timeout`` seconds; True means the context was cancelled."""
        return self.token.wait(timeout)


def background(**values: Any) -> Context:
    """Create a fresh root context, optionally seeded with values."""
    return Context(values=dict(values))
