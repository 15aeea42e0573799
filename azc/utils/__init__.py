"""Shared helpers: error-handling patterns and timestamp parsing."""
