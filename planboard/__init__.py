"""Ordering and consistency engine for a kanban-style planning board."""

__version__ = "1.0.0"
