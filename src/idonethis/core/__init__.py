"""Functional core - pure entry and login logic with no I/O."""

from .entries import Entry, EntryCalendar, decode_entries, encode_entry, format_date
from .memories import memory_dates, same_day_years_ago
from .login import (
    LoginOutcome,
    LoginState,
    calendar_link_pattern,
    calendar_root,
    classify_login_url,
)

__all__ = [
    # Entries
    "Entry",
    "EntryCalendar",
    "decode_entries",
    "encode_entry",
    "format_date",
    # Memories
    "memory_dates",
    "same_day_years_ago",
    # Login
    "LoginOutcome",
    "LoginState",
    "calendar_link_pattern",
    "calendar_root",
    "classify_login_url",
]
