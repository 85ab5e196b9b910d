"""In-memory collaborators for table model tests."""

from __future__ import annotations

import threading
from typing import Any

from rw_common.config.settings import TableSettings
from rw_common.context import ContextKey
from rw_dao.registry import MetaRegistry, ResourceMeta
from rw_model.age import age_decorator
from rw_model.header import Align, Header, HeaderColumn
from rw_model.row import Row

POD_HEADER = Header(
    [
        HeaderColumn("NAMESPACE"),
        HeaderColumn("NAME"),
        HeaderColumn("STATUS"),
        HeaderColumn("RESTARTS", align=Align.RIGHT),
        HeaderColumn("AGE", time=True, decorator=age_decorator),
    ]
)


def fast_settings(**overrides: Any) -> TableSettings:
    values: dict[str, Any] = {
        "refresh_rate": 0.01,
        "init_refresh_rate": 0.01,
        "max_retry_elapsed": 0.2,
        "max_backoff_interval": 0.05,
        "backoff_jitter": 0.0,
    }
    values.update(overrides)
    return TableSettings(**values)


def pod(name: str, ns: str = "default", status: str = "Running", restarts: int = 0, age: str = "3m") -> dict:
    return {
        "metadata": {"namespace": ns, "name": name},
        "status": status,
        "restarts": str(restarts),
        "age": age,
    }


class FakeAccessor:
    def __init__(self, objects: list[dict] | None = None) -> None:
        self.objects = list(objects or [])
        self.errors: list[Exception] = []
        self.fail_with: Exception | None = None
        self.gate: threading.Event | None = None
        self.entered = threading.Event()
        self.factory: Any = None
        self.kind: Any = None
        self.include_object = False
        self.namespaces: list[str] = []
        self.selectors: list[Any] = []
        self.list_calls = 0
        self.max_active = 0
        self._active = 0
        self._lock = threading.Lock()

    def init(self, factory: Any, kind: Any) -> None:
        self.factory, self.kind = factory, kind

    def list(self, ctx, namespace: str) -> list[dict]:
        with self._lock:
            self.list_calls += 1
            self._active += 1
            self.max_active = max(self.max_active, self._active)
        try:
            self.namespaces.append(namespace)
            self.selectors.append(ctx.value(ContextKey.LABELS))
            self.entered.set()
            if self.gate is not None:
                self.gate.wait(5)
            if self.fail_with is not None:
                raise self.fail_with
            if self.errors:
                raise self.errors.pop(0)
            return [dict(obj) for obj in self.objects]
        finally:
            with self._lock:
                self._active -= 1

    def get(self, ctx, path: str) -> dict:
        for obj in self.objects:
            meta = obj["metadata"]
            if f"{meta['namespace']}/{meta['name']}" == path:
                return dict(obj)
        raise KeyError(path)

    def set_include_object(self, include: bool) -> None:
        self.include_object = include


class FakeRenderer:
    def __init__(self) -> None:
        self.view_settings: list[Any] = []

    def header(self, namespace: str) -> Header:
        return POD_HEADER

    def render(self, ctx, header: Header, view_setting, obj: dict) -> Row:
        meta = obj["metadata"]
        return Row(
            id=f"{meta['namespace']}/{meta['name']}",
            fields=(meta["namespace"], meta["name"], obj["status"], obj["restarts"], obj["age"]),
        )

    def set_view_setting(self, view_setting) -> None:
        self.view_settings.append(view_setting)


class FakeNuker:
    def __init__(self) -> None:
        self.deleted: list[tuple[str, Any, int]] = []

    def delete(self, ctx, path: str, propagation, grace: int) -> None:
        self.deleted.append((path, propagation, grace))


class FakeDescriber:
    def describe(self, ctx, path: str) -> str:
        return f"Name: {path}"

    def to_yaml(self, ctx, path: str) -> str:
        return f"name: {path}\n"


class RecordingListener:
    def __init__(self) -> None:
        self.changed: list[Any] = []
        self.no_data: list[Any] = []
        self.failed: list[Exception] = []
        self.changed_event = threading.Event()
        self.failed_event = threading.Event()

    def table_data_changed(self, data) -> None:
        self.changed.append(data)
        self.changed_event.set()

    def table_no_data(self, data) -> None:
        self.no_data.append(data)

    def table_load_failed(self, error: Exception) -> None:
        self.failed.append(error)
        self.failed_event.set()


def make_registry(kind, accessor, renderer, *, nuker=None, describer=None) -> MetaRegistry:
    registry = MetaRegistry()
    registry.register(
        kind,
        ResourceMeta(accessor=accessor, renderer=renderer, nuker=nuker, describer=describer),
    )
    return registry
