"""Shared helpers for resource-watch."""

from rw_common.api import Context, ResourceKind, TableSettings, configure_logging

__all__ = ["configure_logging", "Context", "ResourceKind", "TableSettings"]
