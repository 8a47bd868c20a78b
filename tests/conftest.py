"""Shared test fixtures for idonethis."""

import json
import re
from datetime import date
from http.cookiejar import CookieJar
from urllib.parse import parse_qs, urlsplit

import pytest
from requests.cookies import create_cookie

from idonethis.adapters import FileSessionStore
from idonethis.config import LOGIN_URL
from idonethis.core.login import calendar_root
from idonethis.ports import Response

LOGIN_PAGE = '<form id="register" method="post"><input name="username"><input name="password"></form>'


def dailydone_url(root: str, start: date | str, end: date | str | None = None) -> str:
    return f"{root}dailydone?start={start}&end={end or start}"


class FakeIdonethis:
    """
    In-memory stand-in for idonethis.com behind the Transport protocol.

    Logged-out reads of a calendar get bounced to the login page, like the
    real site. `overrides` maps URLs to a Response or an exception to raise.
    """

    def __init__(
        self,
        calendar: str = "bob",
        password: str = "secret",
        logged_in: bool = False,
        landing: str | None = None,
        links: dict[str, str] | None = None,
        csrf_token: str = "tok123",
        post_status: int = 201,
    ):
        self.calendar = calendar
        self.password = password
        self.logged_in = logged_in
        self.landing = landing or calendar_root(calendar)
        self.links = links or {}
        self.csrf_token = csrf_token
        self.post_status = post_status
        self.overrides: dict[str, Response | Exception] = {}
        self.entries: list[dict] = []
        self.cookies = CookieJar()
        self.requests: list[tuple] = []
        self.closed = False
        self._page: Response | None = None
        if logged_in:
            self._set_session_cookies()

    def _set_session_cookies(self) -> None:
        self.cookies.set_cookie(create_cookie("sessionid", "sess456", domain="idonethis.com", path="/"))
        self.cookies.set_cookie(create_cookie("csrftoken", self.csrf_token, domain="idonethis.com", path="/"))

    def _load(self, response: Response) -> Response:
        self._page = response
        return response

    @property
    def url(self) -> str:
        return self._page.url if self._page else ""

    def get(self, url: str) -> Response:
        self.requests.append(("GET", url))
        override = self.overrides.get(url)
        if isinstance(override, Exception):
            raise override
        if override is not None:
            return self._load(override)

        if url == LOGIN_URL:
            return self._load(Response(200, LOGIN_PAGE, LOGIN_URL))

        parts = urlsplit(url)
        if parts.path == f"/cal/{self.calendar}/dailydone":
            if not self.logged_in:
                return self._load(Response(200, LOGIN_PAGE, f"{LOGIN_URL}?next={parts.path}"))
            query = parse_qs(parts.query)
            start, end = query["start"][0], query["end"][0]
            found = [e for e in self.entries if start <= e["done_date"] <= end]
            return self._load(Response(200, json.dumps(found), url))

        return self._load(Response(200, "<html>page</html>", url))

    def post(self, url: str, body: str, headers: dict[str, str] | None = None) -> Response:
        headers = headers or {}
        self.requests.append(("POST", url, body, headers))
        if not self.logged_in or headers.get("X-CSRFToken") != self.csrf_token:
            return self._load(Response(403, "CSRF verification failed", url))
        if self.post_status < 300:
            item = json.loads(body)
            item["id"] = len(self.entries) + 1
            self.entries.append(item)
        return self._load(Response(self.post_status, body, url))

    def submit_form(self, form_id: str, fields: dict[str, str]) -> Response:
        self.requests.append(("FORM", form_id, dict(fields)))
        if fields.get("password") == self.password:
            self.logged_in = True
            self._set_session_cookies()
            return self._load(Response(200, "<html>welcome</html>", self.landing))
        return self._load(Response(200, LOGIN_PAGE, LOGIN_URL))

    def follow_link(self, text: re.Pattern) -> Response | None:
        for link_text, href in self.links.items():
            if text.search(link_text):
                return self.get(href)
        return None

    def cookie_value(self, name: str, domain: str, path: str = "/") -> str | None:
        for cookie in self.cookies:
            if cookie.name == name and cookie.domain.lstrip(".") == domain and cookie.path == path:
                return cookie.value
        return None

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def store(tmp_path):
    return FileSessionStore(tmp_path / "cache")


@pytest.fixture
def service():
    return FakeIdonethis()
