"""Collaborator contracts and registry for resource-watch."""

from rw_dao.api import MetaRegistry, ResourceMeta

__all__ = ["MetaRegistry", "ResourceMeta"]
