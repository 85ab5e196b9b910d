"""Tests for TableData storage and diffing."""

from __future__ import annotations

import threading

import pytest

from rw_common.context import Context
from rw_common.errors import RenderError
from rw_model.row import Row, RowEvent, RowEventKind
from rw_model.table_data import TableData
from tests.helpers.table_fakes import POD_HEADER, FakeRenderer, pod


pytestmark = pytest.mark.unit_model


def _render(data: TableData, objects) -> None:
    data.render(Context(), FakeRenderer(), objects)


def test_first_render_adds_every_row(pods_kind) -> None:
    data = TableData(pods_kind)
    _render(data, [pod("a"), pod("b")])

    assert data.row_count() == 2
    assert data.header == POD_HEADER
    assert data.updated_at is not None
    assert [evt.kind for evt in data.events()] == [RowEventKind.ADD, RowEventKind.ADD]
    assert all(evt.deltas == () for evt in data.events())


def test_render_is_idempotent(pods_kind) -> None:
    data = TableData(pods_kind)
    objects = [pod("a"), pod("b", restarts=2)]
    _render(data, objects)
    _render(data, objects)

    for evt in data.events():
        assert evt.kind is RowEventKind.UNCHANGED
        assert evt.deltas == ()


def test_changed_fields_carry_old_values(pods_kind) -> None:
    data = TableData(pods_kind)
    _render(data, [pod("a", status="Pending", restarts=0)])
    _render(data, [pod("a", status="Running", restarts=1)])

    evt = data.find("default/a")
    assert evt is not None
    assert evt.kind is RowEventKind.UPDATE
    assert evt.deltas == ("", "", "Pending", "0", "")
    assert evt.row.fields[2] == "Running"


def test_advancing_age_is_not_a_change(pods_kind) -> None:
    data = TableData(pods_kind)
    _render(data, [pod("a", age="3m")])
    _render(data, [pod("a", age="4m")])
    assert data.find("default/a").kind is RowEventKind.UNCHANGED


def test_time_columns_never_produce_deltas(pods_kind) -> None:
    data = TableData(pods_kind)
    _render(data, [pod("a", age="3h"), pod("b", status="Pending", age="3h")])
    _render(data, [pod("a", age="5s"), pod("b", status="Running", age="5s")])

    recreated = data.find("default/a")
    assert recreated.kind is RowEventKind.UNCHANGED
    assert recreated.deltas == ()

    changed = data.find("default/b")
    assert changed.kind is RowEventKind.UPDATE
    assert changed.deltas == ("", "", "Pending", "", "")


def test_missing_rows_are_dropped(pods_kind) -> None:
    data = TableData(pods_kind)
    _render(data, [pod("a"), pod("b"), pod("c")])
    _render(data, [pod("c"), pod("d")])

    assert data.row_ids() == ["default/c", "default/d"]
    assert data.find("default/c").kind is RowEventKind.UNCHANGED
    assert data.find("default/d").kind is RowEventKind.ADD


def test_duplicate_ids_keep_first(pods_kind) -> None:
    data = TableData(pods_kind)
    _render(data, [pod("a", status="Running"), pod("a", status="Failed")])
    assert data.row_count() == 1
    assert data.find("default/a").row.fields[2] == "Running"


def test_field_count_mismatch_raises(pods_kind) -> None:
    class ShortRenderer(FakeRenderer):
        def render(self, ctx, header, view_setting, obj):
            return Row(id="x", fields=("only-one",))

    data = TableData(pods_kind)
    with pytest.raises(RenderError):
        data.render(Context(), ShortRenderer(), [pod("a")])
    assert data.empty()


def test_renderer_exceptions_become_render_errors(pods_kind) -> None:
    class BrokenRenderer(FakeRenderer):
        def render(self, ctx, header, view_setting, obj):
            return obj["missing"]

    data = TableData(pods_kind)
    with pytest.raises(RenderError) as excinfo:
        data.render(Context(), BrokenRenderer(), [pod("a")])
    assert isinstance(excinfo.value.__cause__, KeyError)
    assert data.empty()


def test_reset_clears_rows_and_sets_namespace(pods_kind) -> None:
    data = TableData(pods_kind, namespace="default")
    _render(data, [pod("a")])
    data.reset("kube-system")

    assert data.empty()
    assert data.get_namespace() == "kube-system"


def test_clone_is_independent(pods_kind) -> None:
    data = TableData(pods_kind, namespace="default")
    _render(data, [pod("a"), pod("b")])
    snapshot = data.clone()

    snapshot.delete({"default/a"})
    snapshot.reset("other")
    _render(data, [pod("a", status="Failed"), pod("b"), pod("c")])

    assert snapshot.row_count() == 0
    assert data.row_count() == 3
    assert data.get_namespace() == "default"
    assert data.clone().find("default/a").kind is RowEventKind.UPDATE


def test_with_rows_keeps_given_order(pods_kind) -> None:
    events = [
        RowEvent(row=Row(id="default/z", fields=("default", "z", "Running", "0", "1m"))),
        RowEvent(row=Row(id="default/y", fields=("default", "y", "Running", "0", "2m"))),
    ]
    data = TableData.with_rows(pods_kind, POD_HEADER, events, namespace="default")
    assert data.row_ids() == ["default/z", "default/y"]


def test_concurrent_clones_never_see_partial_tables(pods_kind) -> None:
    data = TableData(pods_kind)
    small = [pod(f"s{i}") for i in range(5)]
    large = [pod(f"l{i}") for i in range(50)]
    stop = threading.Event()
    bad: list[int] = []

    def reader() -> None:
        while not stop.is_set():
            snapshot = data.clone()
            ids = snapshot.row_ids()
            if len(ids) not in (0, 5, 50) or len(set(ids)) != len(ids):
                bad.append(len(ids))

    thread = threading.Thread(target=reader)
    thread.start()
    try:
        for i in range(200):
            _render(data, small if i % 2 else large)
    finally:
        stop.set()
        thread.join()
    assert bad == []
