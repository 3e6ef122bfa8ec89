"""Shared helpers for argument resolution, logging and errors."""
