"""Explicit resource kind to collaborator registry."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Iterable

from rw_common.errors import ConfigurationError
from rw_common.gvr import ResourceKind
from rw_dao.interfaces import Accessor, Describer, Nuker, Renderer


@dataclass
class ResourceMeta:
    """Accessor/renderer pair plus the optional capabilities of a kind."""

    accessor: Accessor
    renderer: Renderer
    nuker: Nuker | None = None
    describer: Describer | None = None


class MetaRegistry:
    """Thread-safe lookup used by table models to resolve their collaborators."""

    def __init__(self, entries: dict[ResourceKind, ResourceMeta] | None = None) -> None:
        self._lock = threading.Lock()
        self._entries: dict[ResourceKind, ResourceMeta] = dict(entries or {})

    def register(self, kind: ResourceKind, meta: ResourceMeta) -> None:
        with self._lock:
            self._entries[kind] = meta

    def unregister(self, kind: ResourceKind) -> None:
        with self._lock:
            self._entries.pop(kind, None)

    def resolve(self, kind: ResourceKind) -> ResourceMeta:
        with self._lock:
            meta = self._entries.get(kind)
        if meta is None:
            raise ConfigurationError(
                f"No accessor registered for {kind}",
                context={"kind": str(kind)},
            )
        return meta

    def kinds(self) -> Iterable[ResourceKind]:
        with self._lock:
            return sorted(self._entries)
