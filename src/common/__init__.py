"""Shared helpers (logging) used by the manifest package and the CLI."""
