"""Rate-limited client for the document registry API."""

__version__ = "0.1.0"
