"""Shared utilities: errors, logging, ids, types."""
