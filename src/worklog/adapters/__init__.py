"""Adapters for external storage."""
