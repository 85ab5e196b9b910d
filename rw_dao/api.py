"""Public API surface for rw_dao."""

from rw_dao.interfaces import (
    DEFAULT_GRACE,
    FORCE_GRACE,
    Accessor,
    Describer,
    Factory,
    Nuker,
    Propagation,
    Renderer,
)
from rw_dao.registry import MetaRegistry, ResourceMeta

__all__ = [
    "Accessor",
    "DEFAULT_GRACE",
    "Describer",
    "FORCE_GRACE",
    "Factory",
    "MetaRegistry",
    "Nuker",
    "Propagation",
    "Renderer",
    "ResourceMeta",
]
