"""Fixed-width customer file loader for PostgreSQL."""

__version__ = "0.1.0"
