"""Ports - interfaces/protocols for external dependencies."""

from .session_store import SessionStore
from .transport import Response, Transport

__all__ = [
    "Response",
    "SessionStore",
    "Transport",
]
