"""Listener contract consumed by the presentation layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from rw_model.table_data import TableData


class TableListener(Protocol):
    """Receives snapshots from a table model.

    Callbacks run on the model's reconciler thread and must return promptly.
    Every snapshot is a private copy owned by the listener.
    """

    def table_data_changed(self, data: "TableData") -> None: ...

    def table_no_data(self, data: "TableData") -> None: ...

    def table_load_failed(self, error: Exception) -> None: ...
