"""Core configuration, dependencies and security helpers."""
