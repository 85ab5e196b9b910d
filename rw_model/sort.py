"""Ordering and filtering of row events for display."""

from __future__ import annotations

import re
from functools import cmp_to_key
from typing import Callable, Sequence

from rw_model.age import parse_age
from rw_model.row import RowEvent

_NUMBER_RX = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")

Matcher = Callable[[RowEvent], bool]


def to_number(text: str) -> float | None:
    value = text.strip()
    if not _NUMBER_RX.fullmatch(value):
        return None
    return float(value)


def compare_cells(lhs: str, rhs: str) -> int:
    """Numeric comparison when both cells are numbers, string comparison otherwise."""
    left, right = to_number(lhs), to_number(rhs)
    if left is not None and right is not None:
        return (left > right) - (left < right)
    return (lhs > rhs) - (lhs < rhs)


def _cell(evt: RowEvent, index: int) -> str:
    fields = evt.row.fields
    return fields[index] if index < len(fields) else ""


def sort_events(
    events: Sequence[RowEvent],
    index: int,
    *,
    time_column: bool = False,
    ascending: bool = True,
) -> list[RowEvent]:
    """Stable sort of ``events`` on column ``index``."""
    if time_column:
        return sorted(
            events,
            key=lambda evt: (parse_age(_cell(evt, index)), evt.id),
            reverse=not ascending,
        )

    def _compare(lhs: RowEvent, rhs: RowEvent) -> int:
        return compare_cells(_cell(lhs, index), _cell(rhs, index))

    return sorted(events, key=cmp_to_key(_compare), reverse=not ascending)


def build_matcher(query: str) -> Matcher | None:
    """Compile a filter query; None means every row matches.

    A leading ``!`` inverts the match. The remainder is a case-insensitive
    regular expression over the space-joined fields, falling back to a
    literal substring when it does not compile.
    """
    text = query.strip()
    inverse = text.startswith("!")
    if inverse:
        text = text[1:].strip()
    if not text:
        return None
    try:
        rx = re.compile(text, re.IGNORECASE)
    except re.error:
        rx = re.compile(re.escape(text), re.IGNORECASE)

    def _match(evt: RowEvent) -> bool:
        return (rx.search(" ".join(evt.row.fields)) is not None) != inverse

    return _match
