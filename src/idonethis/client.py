"""iDoneThis client with session bootstrap and entry operations."""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Callable

from idonethis.adapters import FileSessionStore, RequestsTransport
from idonethis.config import (
    COOKIE_DOMAIN,
    CSRF_COOKIE,
    LOGIN_FORM_ID,
    LOGIN_URL,
    default_cache_dir,
)
from idonethis.core.entries import Entry, decode_entries, encode_entry, format_date
from idonethis.core.login import (
    LoginOutcome,
    LoginState,
    calendar_link_pattern,
    calendar_root,
    classify_login_url,
)
from idonethis.errors import (
    AuthenticationError,
    IdonethisError,
    InvalidArgument,
    SubmissionError,
    TransportError,
)
from idonethis.ports import SessionStore, Transport

logger = logging.getLogger(__name__)

JSON_ACCEPT = "application/json, text/javascript, */*; q=0.01"


class IdonethisClient:
    """
    Web-scraping client for idonethis.com.

    Construction reuses the cached session when it still works and logs in
    otherwise. One instance holds one account's session; it is not safe to
    share between threads.
    """

    def __init__(
        self,
        user: str,
        password: str | Callable[[], str] | None = None,
        calendar: str | None = None,
        transport: Transport | None = None,
        store: SessionStore | None = None,
        cache_dir: Path | str | None = None,
    ):
        if not user:
            raise InvalidArgument("A username is required")

        # Guesses until a login redirect tells us the real calendar
        self.user = user
        self.calendar = calendar or user
        self.root_url = calendar_root(self.calendar)
        self._explicit_calendar = bool(calendar)
        self._session_key = user

        self._store = store if store is not None else FileSessionStore(cache_dir or default_cache_dir())
        if transport is None:
            transport = RequestsTransport(cookies=self._store.load(user))
        self._transport = transport

        self._bootstrap(password)

    def _bootstrap(self, password: str | Callable[[], str] | None) -> None:
        """Check the cached session with a real read, logging in if it fails."""
        try:
            self.get_today()
        except IdonethisError as e:
            logger.info(f"Session for {self.user} not usable ({e}), logging in")
            self._login(password)
            self.save_session()
        else:
            logger.debug(f"Reusing cached session for {self.user}")

    def _login(self, password: str | Callable[[], str] | None) -> None:
        """Submit the login form and work out the calendar root from where we land."""
        if callable(password):
            password = password()
        if not password:
            raise AuthenticationError(f"No usable session for {self.user} and no password given")

        self._transport.get(LOGIN_URL)
        response = self._transport.submit_form(
            LOGIN_FORM_ID,
            {"username": self.user, "password": password},
        )

        outcome = classify_login_url(response.url)
        logger.debug(f"Login landed on {outcome.url} ({outcome.state.value})")

        if outcome.state is LoginState.AT_LOGIN_PAGE:
            raise AuthenticationError("Login to idonethis failed (wrong username/password?)")

        if outcome.state is LoginState.AT_HOME:
            outcome = self._follow_calendar_link(outcome)

        if outcome.state is not LoginState.AT_CALENDAR_ROOT:
            raise AuthenticationError(f"Login to idonethis failed (unexpected URL {outcome.url})")

        self._set_calendar(outcome.calendar_id)

    def _follow_calendar_link(self, outcome: LoginOutcome) -> LoginOutcome:
        """From the dashboard, follow the link naming our calendar."""
        response = self._transport.follow_link(calendar_link_pattern(self.calendar))
        if response is None:
            raise AuthenticationError(
                f"Login to idonethis failed (no link to calendar {self.calendar} on {outcome.url})"
            )
        return classify_login_url(response.url)

    def _set_calendar(self, calendar_id: str) -> None:
        """Adopt the calendar the login redirect pointed at."""
        if calendar_id != self.calendar:
            logger.info(f"Calendar for {self.user} is {calendar_id}")
        self.calendar = calendar_id
        if not self._explicit_calendar:
            self.user = calendar_id
        self.root_url = calendar_root(calendar_id)

    def save_session(self) -> None:
        """Flush the session cookies to the store."""
        self._store.save(self._session_key, self._transport.cookies)

    def close(self) -> None:
        """Save the session and release the transport."""
        try:
            self.save_session()
        finally:
            self._transport.close()

    def __enter__(self) -> "IdonethisClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def get_range(self, start: date | str, end: date | str) -> list[Entry]:
        """Get entries done between two dates, inclusive."""
        url = f"{self.root_url}dailydone?start={format_date(start)}&end={format_date(end)}"
        response = self._transport.get(url)
        if not response.ok:
            raise TransportError(f"GET {url} returned HTTP {response.status}", response.status)
        return decode_entries(response.body)

    def get_day(self, day: date | str) -> list[Entry]:
        """Get entries done on a single day."""
        return self.get_range(day, day)

    def get_today(self) -> list[Entry]:
        """Get entries done today (local time)."""
        return self.get_day(date.today())

    def submit_entry(self, text: str | None, done_date: date | str | None = None) -> None:
        """Submit a done item. The date defaults to today (local time)."""
        if not text:
            raise InvalidArgument("Text is required to submit an entry")

        payload = encode_entry(
            text,
            done_date or date.today(),
            calendar=self.calendar,
            owner=self.user,
        )
        headers = {
            "Content-Type": "application/json",
            "Accept": JSON_ACCEPT,
        }

        # The service rejects JSON posts unless the CSRF cookie is echoed as a header
        token = self._transport.cookie_value(CSRF_COOKIE, COOKIE_DOMAIN, "/")
        if token is None:
            logger.warning(f"No {CSRF_COOKIE} cookie for {COOKIE_DOMAIN}, submission may be refused")
        else:
            headers["X-CSRFToken"] = token

        url = f"{self.root_url}dailydone?"
        logger.info(f"Submitting entry for {payload['done_date']} to {self.calendar}")
        response = self._transport.post(url, json.dumps(payload), headers)
        if not response.ok:
            raise SubmissionError(f"Submitting entry failed with HTTP {response.status}", response.status)
