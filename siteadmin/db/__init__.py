"""Database base and session management."""
