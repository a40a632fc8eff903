"""Shared utilities: exception hierarchy."""
