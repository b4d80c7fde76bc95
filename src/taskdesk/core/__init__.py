"""Shared core: ports (Protocols), app state, error types."""
