"""Pure entry domain logic - decoding and encoding the dailydone JSON."""

import html
import json
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any

from idonethis.errors import DecodeError


@dataclass
class EntryCalendar:
    """The calendar an entry belongs to."""

    short_name: str = ""
    name: str = ""
    type: str = ""

    @classmethod
    def from_api(cls, data: dict | None) -> "EntryCalendar":
        data = data or {}
        return cls(
            short_name=data.get("short_name", ""),
            name=data.get("name", ""),
            type=data.get("type", ""),
        )


@dataclass
class Entry:
    """A single done item."""

    id: int | None
    owner: str
    done_date: str
    text: str | None = None
    created: str = ""
    modified: str = ""
    avatar_url: str = ""
    nicest_name: str = ""
    type: str = ""
    calendar: EntryCalendar = field(default_factory=EntryCalendar)

    @classmethod
    def from_api(cls, data: dict) -> "Entry":
        text = data.get("text")
        if text:
            text = html.unescape(text)
        return cls(
            id=data.get("id"),
            owner=data.get("owner", ""),
            done_date=data.get("done_date", ""),
            text=text,
            created=data.get("created", ""),
            modified=data.get("modified", ""),
            avatar_url=data.get("avatar_url", ""),
            nicest_name=data.get("nicest_name", ""),
            type=data.get("type", ""),
            calendar=EntryCalendar.from_api(data.get("calendar")),
        )


def format_date(value: date | str) -> str:
    """Render a date the way the dailydone endpoint expects (YYYY-MM-DD)."""
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    return value


def decode_entries(payload: str | bytes) -> list[Entry]:
    """Decode a dailydone JSON array into entries."""
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"Malformed JSON in dailydone response: {e}") from e

    if not isinstance(data, list):
        raise DecodeError(f"Expected a JSON array, got {type(data).__name__}")

    entries = []
    for item in data:
        if not isinstance(item, dict):
            raise DecodeError(f"Expected a JSON object, got {type(item).__name__}")
        entries.append(Entry.from_api(item))
    return entries


def encode_entry(
    text: str,
    done_date: date | str,
    calendar: str,
    owner: str,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Build the write payload for a new entry.

    `created` and `modified` are stamped with `now` in UTC. The counters and
    url are always sent as null; the server fills them in.
    """
    now = now or datetime.now(timezone.utc)
    timestamp = now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    return {
        "calendar": calendar,
        "owner": owner,
        "created": timestamp,
        "modified": timestamp,
        "done_date": format_date(done_date),
        "text": text,
        "total_comments": None,
        "total_likes": None,
        "url": None,
    }
