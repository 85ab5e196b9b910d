"""Live table model: polls an accessor and publishes diffed snapshots."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Mapping

import yaml

from rw_common.backoff import ExponentialBackoff, retry
from rw_common.config.settings import TableSettings
from rw_common.config.view import ViewSetting
from rw_common.context import Context, ContextKey
from rw_common.errors import (
    ConfigurationError,
    ExhaustedRetryError,
    RWError,
    TransientFetchError,
    UnsupportedOperationError,
    error_to_payload,
    wrap_error,
)
from rw_common.gvr import ResourceKind
from rw_common.labels import LabelSelector
from rw_common.namespaces import (
    BLANK_NAMESPACE,
    cleanse_namespace,
    is_cluster_scoped,
    is_cluster_wide,
)
from rw_dao.interfaces import DEFAULT_GRACE, Accessor, Propagation
from rw_dao.registry import MetaRegistry, ResourceMeta
from rw_model.listener import TableListener
from rw_model.table_data import TableData

logger = logging.getLogger(__name__)


class TableModel:
    """Owns the table data of one resource kind and keeps it current.

    ``watch`` reconciles once synchronously, then a daemon thread reconciles
    every ``refresh_rate`` seconds until the context is cancelled. At most
    one reconciliation runs at a time; overlapping attempts are dropped.
    """

    def __init__(
        self,
        kind: ResourceKind,
        registry: MetaRegistry,
        settings: TableSettings | None = None,
    ) -> None:
        self._kind = kind
        self._registry = registry
        self._settings = settings or TableSettings()
        self._data = TableData(kind)
        self._listeners: list[TableListener] = []
        self._in_update = threading.Lock()
        self._refresh_rate = self._settings.refresh_rate
        self._instance = ""
        self._label_selector: LabelSelector | None = None
        self._view_setting: ViewSetting | None = None
        self._lock = threading.RLock()
        self._listeners_lock = threading.RLock()
        self._thread: threading.Thread | None = None

    @property
    def kind(self) -> ResourceKind:
        return self._kind

    def set_view_setting(self, view_setting: ViewSetting | None, ctx: Context | None = None) -> None:
        """Store the column preferences; reconcile right away when ``ctx`` is given."""
        with self._lock:
            self._view_setting = view_setting
        if ctx is None:
            return
        try:
            self._refresh(ctx)
        except RWError as exc:
            logger.error("Refresh failed for %s: %s", self._kind, exc)

    def set_label_selector(self, selector: LabelSelector | None) -> None:
        with self._lock:
            self._label_selector = selector

    def get_label_selector(self) -> LabelSelector | None:
        with self._lock:
            return self._label_selector

    def set_instance(self, path: str) -> None:
        """Track a single resource instead of listing the namespace."""
        with self._lock:
            self._instance = path

    def add_listener(self, listener: TableListener) -> None:
        with self._listeners_lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: TableListener) -> None:
        with self._listeners_lock:
            for i, registered in enumerate(self._listeners):
                if registered is listener:
                    del self._listeners[i]
                    return

    def watch(self, ctx: Context) -> None:
        """Reconcile once, then keep polling in the background until cancelled."""
        self._refresh(ctx)
        thread = threading.Thread(
            target=self._updater,
            args=(ctx,),
            name=f"rw-table-{self._kind}",
            daemon=True,
        )
        with self._lock:
            self._thread = thread
        thread.start()

    def is_watching(self) -> bool:
        with self._lock:
            return self._thread is not None and self._thread.is_alive()

    def wait_stopped(self, timeout: float | None = None) -> bool:
        """Join the background reconciler; True once it has exited."""
        with self._lock:
            thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def refresh(self, ctx: Context) -> None:
        """Reconcile now, outside the polling schedule."""
        self._refresh(ctx)

    def get(self, ctx: Context, path: str) -> Any:
        return self._meta(ctx).accessor.get(ctx, path)

    def delete(
        self,
        ctx: Context,
        path: str,
        propagation: Propagation | None = None,
        grace: int = DEFAULT_GRACE,
    ) -> None:
        meta = self._meta(ctx)
        if meta.nuker is None:
            raise UnsupportedOperationError(
                f"No nuker for {self._kind}",
                context={"kind": str(self._kind), "path": path},
            )
        meta.nuker.delete(ctx, path, propagation, grace)

    def describe(self, ctx: Context, path: str) -> str:
        meta = self._meta(ctx)
        if meta.describer is None:
            raise UnsupportedOperationError(
                f"No describer for {self._kind}",
                context={"kind": str(self._kind), "path": path},
            )
        return meta.describer.describe(ctx, path)

    def to_yaml(self, ctx: Context, path: str) -> str:
        """Return the resource manifest, dumping the raw object when no describer exists."""
        meta = self._meta(ctx)
        if meta.describer is not None:
            return meta.describer.to_yaml(ctx, path)
        obj = meta.accessor.get(ctx, path)
        if not isinstance(obj, Mapping):
            raise UnsupportedOperationError(
                f"Cannot convert {type(obj).__name__} to YAML",
                context={"kind": str(self._kind), "path": path},
            )
        return yaml.safe_dump(dict(obj), sort_keys=False)

    def get_namespace(self) -> str:
        return self._data.get_namespace()

    def set_namespace(self, namespace: str) -> None:
        """Switch namespace; current rows are discarded."""
        self._data.reset(namespace)

    def in_namespace(self, namespace: str) -> bool:
        return self._data.get_namespace() == namespace and not self._data.empty()

    @property
    def refresh_rate(self) -> float:
        with self._lock:
            return self._refresh_rate

    def set_refresh_rate(self, seconds: float) -> None:
        if seconds <= 0:
            raise ConfigurationError(
                "Refresh rate must be positive", context={"refresh_rate": seconds}
            )
        with self._lock:
            self._refresh_rate = seconds

    def cluster_wide(self) -> bool:
        return is_cluster_wide(self._data.get_namespace())

    def empty(self) -> bool:
        return self._data.empty()

    def row_count(self) -> int:
        return self._data.row_count()

    def peek(self) -> TableData:
        """Return a private snapshot of the current data."""
        with self._lock:
            return self._data.clone()

    def _backoff(self) -> ExponentialBackoff:
        return ExponentialBackoff(
            initial_interval=self._settings.init_refresh_rate,
            multiplier=self._settings.backoff_multiplier,
            max_interval=self._settings.max_backoff_interval,
            max_elapsed=self._settings.max_retry_elapsed,
            jitter=self._settings.backoff_jitter,
        )

    def _updater(self, ctx: Context) -> None:
        policy = self._backoff()
        rate = self._settings.init_refresh_rate
        while not ctx.wait(rate):
            rate = self.refresh_rate
            try:
                completed, _ = retry(
                    lambda: self._refresh(ctx),
                    policy,
                    ctx,
                    on_error=self._log_refresh_failure,
                )
            except ExhaustedRetryError as exc:
                logger.warning(
                    "Reconciler exited for %s: %s", self._kind, error_to_payload(exc)
                )
                self._fire_table_load_failed(exc)
                return
            if not completed:
                break
        logger.debug("Reconciler cancelled for %s", self._kind)

    def _log_refresh_failure(self, exc: Exception) -> None:
        logger.error("Refresh failed for %s: %s", self._kind, exc)

    def _refresh(self, ctx: Context) -> None:
        if not self._in_update.acquire(blocking=False):
            logger.debug("Dropping update for %s", self._kind)
            return
        try:
            self._reconcile(ctx)
            data = self.peek()
            if data.row_count() == 0:
                self._fire_no_data(data)
            else:
                self._fire_table_changed(data)
        finally:
            self._in_update.release()

    def _meta(self, ctx: Context) -> ResourceMeta:
        meta = self._registry.resolve(self._kind)
        factory = ctx.value(ContextKey.FACTORY)
        if factory is None:
            raise ConfigurationError(
                "Expected a factory in context",
                context={"kind": str(self._kind)},
            )
        meta.accessor.init(factory, self._kind)
        return meta

    def _list_namespace(self) -> str:
        ns = cleanse_namespace(self._data.get_namespace())
        if is_cluster_scoped(ns):
            return BLANK_NAMESPACE
        return ns

    def _fetch(self, ctx: Context, accessor: Accessor, instance: str) -> list[Any]:
        namespace = self._list_namespace()
        try:
            if instance:
                return [accessor.get(ctx, instance)]
            return list(accessor.list(ctx, namespace))
        except RWError:
            raise
        except Exception as exc:
            raise wrap_error(
                TransientFetchError,
                f"Failed to fetch {self._kind}",
                context={
                    "kind": str(self._kind),
                    "namespace": namespace,
                    "path": instance,
                },
                cause=exc,
            ) from exc

    def _reconcile(self, ctx: Context) -> None:
        meta = self._meta(ctx)
        with self._lock:
            view_setting = self._view_setting
            selector = self._label_selector
            instance = self._instance
        if view_setting is not None:
            meta.accessor.set_include_object(True)
        ctx = ctx.with_value(ContextKey.LABELS, selector)
        objects = self._fetch(ctx, meta.accessor, instance)
        meta.renderer.set_view_setting(view_setting)
        self._data.render(ctx, meta.renderer, objects, view_setting=view_setting)

    def _listeners_snapshot(self) -> list[TableListener]:
        with self._listeners_lock:
            return list(self._listeners)

    def _is_registered(self, listener: TableListener) -> bool:
        with self._listeners_lock:
            return any(registered is listener for registered in self._listeners)

    def _fanout(self, notify: Callable[[TableListener], None]) -> None:
        for listener in self._listeners_snapshot():
            if not self._is_registered(listener):
                continue
            try:
                notify(listener)
            except Exception:
                logger.exception("Listener %r failed on %s", listener, self._kind)

    def _fire_table_changed(self, data: TableData) -> None:
        self._fanout(lambda listener: listener.table_data_changed(data))

    def _fire_no_data(self, data: TableData) -> None:
        self._fanout(lambda listener: listener.table_no_data(data))

    def _fire_table_load_failed(self, error: Exception) -> None:
        self._fanout(lambda listener: listener.table_load_failed(error))
