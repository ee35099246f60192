"""Request and user agent helpers."""
