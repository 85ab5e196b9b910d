"""Public API surface for rw_model."""

from rw_model.age import age_decorator, parse_age, to_age
from rw_model.header import Align, Header, HeaderColumn
from rw_model.listener import TableListener
from rw_model.row import Row, RowEvent, RowEventKind, RowEvents
from rw_model.table import TableModel
from rw_model.table_data import TableData

__all__ = [
    "Align",
    "Header",
    "HeaderColumn",
    "Row",
    "RowEvent",
    "RowEventKind",
    "RowEvents",
    "TableData",
    "TableListener",
    "TableModel",
    "age_decorator",
    "parse_age",
    "to_age",
]
