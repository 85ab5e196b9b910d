"""Rows, row events and the keyed row collection."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Iterator, Sequence

from rw_model.header import Header


class RowEventKind(str, Enum):
    ADD = "add"
    UPDATE = "update"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class Row:
    id: str
    fields: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))


def row_changed(old: Row, new: Row, header: Header) -> bool:
    """True when any non-time cell of ``new`` differs from ``old``.

    Ages advance on every tick, so time columns never count as a change.
    """
    if len(old.fields) != len(new.fields):
        return True
    for i, (previous, value) in enumerate(zip(old.fields, new.fields)):
        if header.is_time_column(i):
            continue
        if previous != value:
            return True
    return False


def compute_deltas(old: Row, new: Row, header: Header) -> tuple[str, ...]:
    """Return the old value for every changed cell and "" for the others."""
    deltas = []
    for i, value in enumerate(new.fields):
        previous = old.fields[i] if i < len(old.fields) else ""
        if header.is_time_column(i) or previous == value:
            deltas.append("")
        else:
            deltas.append(previous)
    return tuple(deltas)


@dataclass
class RowEvent:
    """A row together with how it changed since the previous render."""

    row: Row
    kind: RowEventKind = RowEventKind.ADD
    deltas: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        self.deltas = tuple(self.deltas)

    @property
    def id(self) -> str:
        return self.row.id

    def clone(self) -> "RowEvent":
        return RowEvent(row=self.row, kind=self.kind, deltas=self.deltas)


class RowEvents:
    """Row events kept in display order and indexed by row id."""

    def __init__(self, events: Iterable[RowEvent] = ()) -> None:
        self._events: list[RowEvent] = []
        self._index: dict[str, int] = {}
        for evt in events:
            self.upsert(evt)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[RowEvent]:
        return iter(self._events)

    def __getitem__(self, index: int) -> RowEvent:
        return self._events[index]

    def upsert(self, evt: RowEvent) -> None:
        """Append ``evt`` or replace the event sharing its id in place."""
        index = self._index.get(evt.id)
        if index is None:
            self._index[evt.id] = len(self._events)
            self._events.append(evt)
            return
        self._events[index] = evt

    def find(self, row_id: str) -> RowEvent | None:
        index = self._index.get(row_id)
        return None if index is None else self._events[index]

    def ids(self) -> list[str]:
        return [evt.id for evt in self._events]

    def keep(self, ids: set[str]) -> None:
        """Drop every event whose id is not in ``ids``."""
        self._replace([evt for evt in self._events if evt.id in ids])

    def reorder(self, events: Sequence[RowEvent]) -> None:
        self._replace(list(events))

    def reverse(self) -> None:
        self._events.reverse()
        self._reindex()

    def select(self, predicate: Callable[[RowEvent], bool]) -> "RowEvents":
        return RowEvents(evt.clone() for evt in self._events if predicate(evt))

    def clone(self) -> "RowEvents":
        return RowEvents(evt.clone() for evt in self._events)

    def _replace(self, events: list[RowEvent]) -> None:
        self._events = events
        self._reindex()

    def _reindex(self) -> None:
        self._index = {evt.id: i for i, evt in enumerate(self._events)}
