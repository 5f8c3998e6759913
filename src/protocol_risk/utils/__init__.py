"""Shared schema, configuration, logging and HTTP helpers."""
