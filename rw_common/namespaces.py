"""Namespace sentinels and predicates."""

from __future__ import annotations

NAMESPACE_ALL = "all"
BLANK_NAMESPACE = ""
CLUSTER_SCOPE = "-"


def is_cluster_wide(ns: str) -> bool:
    """True when ``ns`` spans every namespace."""
    return ns in (NAMESPACE_ALL, BLANK_NAMESPACE)


def is_cluster_scoped(ns: str) -> bool:
    return ns == CLUSTER_SCOPE


def is_namespaced(ns: str) -> bool:
    return not is_cluster_wide(ns) and not is_cluster_scoped(ns)


def cleanse_namespace(ns: str) -> str:
    """Map the all-namespaces alias onto the blank sentinel accessors expect."""
    if ns == NAMESPACE_ALL:
        return BLANK_NAMESPACE
    return ns
