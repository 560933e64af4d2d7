"""Adapter clients for external services."""
from .clients import http_session

__all__ = ["http_session"]
