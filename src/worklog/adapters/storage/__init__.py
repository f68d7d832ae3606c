"""Filesystem storage adapters."""

from worklog.adapters.storage.workspace_store import WorkspaceStore, slugify

__all__ = ["WorkspaceStore", "slugify"]
