"""Live table engine for resource-watch."""

from rw_model.api import TableData, TableListener, TableModel

__all__ = ["TableData", "TableListener", "TableModel"]
