"""Public API surface for rw_common."""

from rw_common.backoff import ExponentialBackoff, retry
from rw_common.config import TableSettings, ViewSetting
from rw_common.context import Context, ContextKey, background
from rw_common.errors import (
    ConfigurationError,
    ExhaustedRetryError,
    RenderError,
    RWError,
    TransientFetchError,
    UnsupportedOperationError,
    error_to_payload,
    wrap_error,
)
from rw_common.gvr import ResourceKind
from rw_common.labels import LabelSelector
from rw_common.logging import configure_logging

__all__ = [
    "ConfigurationError",
    "Context",
    "ContextKey",
    "ExhaustedRetryError",
    "ExponentialBackoff",
    "LabelSelector",
    "RWError",
    "RenderError",
    "ResourceKind",
    "TableSettings",
    "TransientFetchError",
    "UnsupportedOperationError",
    "ViewSetting",
    "background",
    "configure_logging",
    "error_to_payload",
    "retry",
    "wrap_error",
]
