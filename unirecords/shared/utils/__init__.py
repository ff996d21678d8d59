"""Shared utilities: datetime, generators."""
