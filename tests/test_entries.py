"""Tests for entry decoding and encoding."""

import json
from datetime import date, datetime, timedelta, timezone

import pytest

from idonethis.core.entries import (
    Entry,
    EntryCalendar,
    decode_entries,
    encode_entry,
    format_date,
)
from idonethis.errors import DecodeError


@pytest.fixture
def api_entry():
    """An entry as the dailydone endpoint returns it."""
    return {
        "owner": "some_user",
        "avatar_url": "/site_media/blahblah/foo.png",
        "modified": "2012-01-01T15:22:33.12345",
        "calendar": {
            "short_name": "some_short_name",
            "name": "personal",
            "type": "PERSONAL",
        },
        "created": "2012-01-01T15:22:33.12345",
        "done_date": "2012-01-01",
        "text": "Wrote code to frobinate the foobar",
        "nicest_name": "some_user",
        "type": "dailydone",
        "id": 12345,
    }


class TestDecodeEntries:
    def test_decodes_all_fields(self, api_entry):
        entries = decode_entries(json.dumps([api_entry]))

        assert len(entries) == 1
        entry = entries[0]
        assert entry.id == 12345
        assert entry.owner == "some_user"
        assert entry.done_date == "2012-01-01"
        assert entry.text == "Wrote code to frobinate the foobar"
        assert entry.avatar_url == "/site_media/blahblah/foo.png"
        assert entry.nicest_name == "some_user"
        assert entry.type == "dailydone"
        assert entry.calendar == EntryCalendar("some_short_name", "personal", "PERSONAL")

    def test_unescapes_html_in_text(self, api_entry):
        api_entry["text"] = "a &amp; b &gt; c &lt;3 &quot;quoted&quot;"
        entry = decode_entries(json.dumps([api_entry]))[0]
        assert entry.text == 'a & b > c <3 "quoted"'

    def test_absent_text_stays_absent(self, api_entry):
        del api_entry["text"]
        entry = decode_entries(json.dumps([api_entry]))[0]
        assert entry.text is None

    def test_null_text_stays_null(self, api_entry):
        api_entry["text"] = None
        entry = decode_entries(json.dumps([api_entry]))[0]
        assert entry.text is None

    def test_empty_array(self):
        assert decode_entries("[]") == []

    def test_accepts_bytes(self, api_entry):
        entries = decode_entries(json.dumps([api_entry]).encode())
        assert entries[0].id == 12345

    def test_missing_calendar_defaults(self):
        entry = decode_entries('[{"owner": "bob", "done_date": "2013-01-01"}]')[0]
        assert entry.calendar == EntryCalendar()
        assert entry.id is None

    def test_malformed_json_raises(self):
        with pytest.raises(DecodeError):
            decode_entries("<html>Please log in</html>")

    def test_non_array_raises(self):
        with pytest.raises(DecodeError, match="JSON array"):
            decode_entries('{"detail": "Authentication credentials were not provided."}')

    def test_non_object_item_raises(self):
        with pytest.raises(DecodeError, match="JSON object"):
            decode_entries('["just a string"]')


class TestEncodeEntry:
    def test_write_subset(self):
        now = datetime(2013, 1, 1, 22, 15, 30, tzinfo=timezone.utc)
        payload = encode_entry("Drank coffee.", date(2013, 1, 2), calendar="bob", owner="bob", now=now)

        assert payload == {
            "calendar": "bob",
            "owner": "bob",
            "created": "2013-01-01T22:15:30Z",
            "modified": "2013-01-01T22:15:30Z",
            "done_date": "2013-01-02",
            "text": "Drank coffee.",
            "total_comments": None,
            "total_likes": None,
            "url": None,
        }

    def test_timestamps_converted_to_utc(self):
        now = datetime(2013, 1, 2, 9, 0, 0, tzinfo=timezone(timedelta(hours=11)))
        payload = encode_entry("x", "2013-01-02", calendar="bob", owner="bob", now=now)
        assert payload["created"] == "2013-01-01T22:00:00Z"

    def test_string_date_passed_through(self):
        payload = encode_entry("x", "2013-01-01", calendar="team", owner="bob")
        assert payload["done_date"] == "2013-01-01"
        assert payload["calendar"] == "team"
        assert payload["owner"] == "bob"

    def test_serializes_nulls(self):
        payload = encode_entry("hello", date(2013, 1, 1), calendar="bob", owner="bob")
        body = json.dumps(payload)
        assert '"total_comments": null' in body
        assert '"total_likes": null' in body
        assert '"url": null' in body


class TestFormatDate:
    def test_date(self):
        assert format_date(date(2012, 1, 5)) == "2012-01-05"

    def test_string(self):
        assert format_date("2012-01-05") == "2012-01-05"


class TestEntry:
    def test_equal_when_fields_equal(self, api_entry):
        assert Entry.from_api(api_entry) == Entry.from_api(dict(api_entry))
