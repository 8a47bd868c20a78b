"""iDoneThis - web-scraping client for idonethis.com."""

__version__ = "0.1.0"

from .client import IdonethisClient
from .core.entries import Entry, EntryCalendar
from .errors import (
    AuthenticationError,
    DecodeError,
    IdonethisError,
    InvalidArgument,
    StorageUnavailable,
    SubmissionError,
    TransportError,
)

__all__ = [
    "IdonethisClient",
    "Entry",
    "EntryCalendar",
    "AuthenticationError",
    "DecodeError",
    "IdonethisError",
    "InvalidArgument",
    "StorageUnavailable",
    "SubmissionError",
    "TransportError",
]
