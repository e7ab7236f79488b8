"""Request validation and password helpers."""
