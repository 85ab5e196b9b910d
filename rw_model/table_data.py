"""Thread-safe tabular storage with per-render diffing."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Iterable, Sequence

from rw_common.config.view import ViewSetting
from rw_common.context import Context
from rw_common.errors import RenderError, RWError, wrap_error
from rw_common.gvr import ResourceKind
from rw_dao.interfaces import Renderer
from rw_model.header import Header
from rw_model.row import (
    Row,
    RowEvent,
    RowEventKind,
    RowEvents,
    compute_deltas,
    row_changed,
)
from rw_model.sort import build_matcher, sort_events

logger = logging.getLogger(__name__)


class TableData:
    """Current rows of one resource kind plus what changed on the last render.

    All public methods are safe to call from any thread. ``clone`` is the only
    way data should leave the owning model; the copy belongs to its receiver.
    """

    def __init__(
        self,
        kind: ResourceKind,
        *,
        namespace: str = "",
        header: Header | None = None,
        events: RowEvents | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._kind = kind
        self._namespace = namespace
        self._header = header if header is not None else Header()
        self._events = events if events is not None else RowEvents()
        self._updated_at: datetime | None = None
        self._sort_column = ""
        self._sort_ascending = True
        self._inverted = False

    @classmethod
    def with_rows(
        cls,
        kind: ResourceKind,
        header: Header,
        events: Iterable[RowEvent],
        *,
        namespace: str = "",
    ) -> "TableData":
        return cls(kind, namespace=namespace, header=header, events=RowEvents(events))

    @property
    def kind(self) -> ResourceKind:
        return self._kind

    @property
    def header(self) -> Header:
        with self._lock:
            return self._header

    @property
    def namespace(self) -> str:
        with self._lock:
            return self._namespace

    def get_namespace(self) -> str:
        return self.namespace

    @property
    def updated_at(self) -> datetime | None:
        with self._lock:
            return self._updated_at

    @property
    def sort_state(self) -> tuple[str, bool]:
        """Current sort column (blank when unsorted) and displayed direction."""
        with self._lock:
            return self._sort_column, self._sort_ascending != self._inverted

    def row_count(self) -> int:
        with self._lock:
            return len(self._events)

    def empty(self) -> bool:
        return self.row_count() == 0

    def events(self) -> list[RowEvent]:
        """Return copies of the row events in display order."""
        with self._lock:
            return [evt.clone() for evt in self._events]

    def row_ids(self) -> list[str]:
        with self._lock:
            return self._events.ids()

    def find(self, row_id: str) -> RowEvent | None:
        with self._lock:
            evt = self._events.find(row_id)
            return None if evt is None else evt.clone()

    def reset(self, namespace: str) -> None:
        """Drop every row and switch to ``namespace``."""
        with self._lock:
            self._namespace = namespace
            self._events = RowEvents()
            self._updated_at = None

    def delete(self, keep_ids: set[str]) -> None:
        """Remove rows whose id is not in ``keep_ids``."""
        with self._lock:
            self._events.keep(keep_ids)

    def render(
        self,
        ctx: Context,
        renderer: Renderer,
        objects: Sequence[Any],
        *,
        view_setting: ViewSetting | None = None,
    ) -> None:
        """Convert ``objects`` to rows and diff them against the current rows.

        Rendering happens outside the lock; the row collection is swapped in
        one step so concurrent readers never see a partial table.
        """
        namespace = self.namespace
        header = renderer.header(namespace)
        rows: list[Row] = []
        for obj in objects:
            try:
                row = renderer.render(ctx, header, view_setting, obj)
            except RWError:
                raise
            except Exception as exc:
                raise wrap_error(
                    RenderError,
                    f"Renderer failed on {self._kind}",
                    context={"kind": str(self._kind), "namespace": namespace},
                    cause=exc,
                ) from exc
            if len(row.fields) != len(header):
                raise RenderError(
                    f"Row {row.id!r} has {len(row.fields)} fields, header has {len(header)}",
                    context={"kind": str(self._kind), "row": row.id},
                )
            rows.append(row)
        self.update(header, rows)

    def update(self, header: Header, rows: Iterable[Row]) -> None:
        """Replace the stored rows with ``rows``, tagging each with its change."""
        with self._lock:
            previous = self._events if header == self._header else RowEvents()
            fresh = RowEvents()
            for row in rows:
                if fresh.find(row.id) is not None:
                    logger.warning("Skipping duplicate row %s in %s", row.id, self._kind)
                    continue
                fresh.upsert(self._diff(previous.find(row.id), row, header))
            self._header = header
            self._events = fresh
            self._updated_at = datetime.now(timezone.utc)
            if self._sort_column:
                self._apply_sort()

    @staticmethod
    def _diff(old: RowEvent | None, row: Row, header: Header) -> RowEvent:
        if old is None:
            return RowEvent(row=row, kind=RowEventKind.ADD)
        if not row_changed(old.row, row, header):
            return RowEvent(row=row, kind=RowEventKind.UNCHANGED)
        return RowEvent(
            row=row,
            kind=RowEventKind.UPDATE,
            deltas=compute_deltas(old.row, row, header),
        )

    def clone(self) -> "TableData":
        with self._lock:
            data = TableData(
                self._kind,
                namespace=self._namespace,
                header=self._header,
                events=self._events.clone(),
            )
            data._updated_at = self._updated_at
            data._sort_column = self._sort_column
            data._sort_ascending = self._sort_ascending
            data._inverted = self._inverted
            return data

    def sort_column(self, name: str, ascending: bool = True) -> None:
        """Stable sort on column ``name``; unknown columns are ignored."""
        with self._lock:
            if not self._header.has_column(name):
                logger.debug("Unknown sort column %s", name)
                return
            self._sort_column = name
            self._sort_ascending = ascending
            self._inverted = False
            self._apply_sort()

    def invert(self) -> None:
        """Reverse the current order in place.

        The inversion is kept apart from the sort direction so a later update
        re-sorts and reverses again, yielding the exact mirror of the sort.
        """
        with self._lock:
            self._events.reverse()
            self._inverted = not self._inverted

    def filter(self, query: str) -> "TableData":
        """Return a copy holding only the rows matching ``query``."""
        data = self.clone()
        matcher = build_matcher(query)
        if matcher is None:
            return data
        with data._lock:
            data._events = data._events.select(matcher)
        return data

    def _apply_sort(self) -> None:
        index = self._header.index_of(self._sort_column)
        if index < 0 or not len(self._events):
            return
        ordered = sort_events(
            list(self._events),
            index,
            time_column=self._header.is_time_column(index),
            ascending=self._sort_ascending,
        )
        if self._inverted:
            ordered.reverse()
        self._events.reorder(ordered)
