"""Versioned release pipeline for registry-published packages."""

__version__ = "0.3.0"
