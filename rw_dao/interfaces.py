"""Contracts for the collaborators a table model drives."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol, Sequence

from rw_common.config.view import ViewSetting
from rw_common.context import Context
from rw_common.gvr import ResourceKind

if TYPE_CHECKING:
    from rw_model.header import Header
    from rw_model.row import Row

DEFAULT_GRACE = -1
FORCE_GRACE = 0


class Propagation(str, Enum):
    """How dependents of a deleted resource are handled."""

    BACKGROUND = "Background"
    FOREGROUND = "Foreground"
    ORPHAN = "Orphan"


class Factory(Protocol):
    """Opaque client factory handed to accessors; the engine never calls it."""


class Accessor(Protocol):
    def init(self, factory: Factory, kind: ResourceKind) -> None: ...

    def list(self, ctx: Context, namespace: str) -> Sequence[Any]: ...

    def get(self, ctx: Context, path: str) -> Any: ...

    def set_include_object(self, include: bool) -> None: ...


class Nuker(Protocol):
    def delete(
        self,
        ctx: Context,
        path: str,
        propagation: Propagation | None,
        grace: int,
    ) -> None: ...


class Describer(Protocol):
    def describe(self, ctx: Context, path: str) -> str: ...

    def to_yaml(self, ctx: Context, path: str) -> str: ...


class Renderer(Protocol):
    def header(self, namespace: str) -> "Header": ...

    def render(
        self,
        ctx: Context,
        header: "Header",
        view_setting: ViewSetting | None,
        obj: Any,
    ) -> "Row": ...

    def set_view_setting(self, view_setting: ViewSetting | None) -> None: ...
