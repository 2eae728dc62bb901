"""Adapters for external systems and persistence."""
