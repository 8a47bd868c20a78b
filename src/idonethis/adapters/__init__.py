"""Adapters - I/O implementations of ports."""

from .cookie_store import FileSessionStore
from .http_transport import RequestsTransport

__all__ = [
    "FileSessionStore",
    "RequestsTransport",
]
