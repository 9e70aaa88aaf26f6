"""Development event ingestion and retrieval service."""

__version__ = "1.0.0"
