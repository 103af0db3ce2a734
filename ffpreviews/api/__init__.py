"""Sleeper API access: session setup, retrying reads and endpoint helpers."""
