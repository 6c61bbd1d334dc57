"""Bookmark API - multi-tenant bookmark management service."""

__version__ = "0.1.0"
