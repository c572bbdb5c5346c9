"""Adapters: HTTP calls and exporters (I/O)."""
