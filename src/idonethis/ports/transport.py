"""HTTP transport interface."""

import re
from dataclasses import dataclass
from http.cookiejar import CookieJar
from typing import Protocol


@dataclass
class Response:
    """What a transport hands back for a request."""

    status: int
    body: str
    url: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Transport(Protocol):
    """Interface for a cookie-carrying, page-aware HTTP agent."""

    cookies: CookieJar

    @property
    def url(self) -> str:
        """Final URL of the last page fetched, after redirects."""
        ...

    def get(self, url: str) -> Response:
        """Fetch a URL, following redirects."""
        ...

    def post(self, url: str, body: str, headers: dict[str, str] | None = None) -> Response:
        """Send a raw request body to a URL."""
        ...

    def submit_form(self, form_id: str, fields: dict[str, str]) -> Response:
        """Fill in and submit a form on the current page."""
        ...

    def follow_link(self, text: re.Pattern) -> Response | None:
        """Follow the first link on the current page whose text matches. None if absent."""
        ...

    def cookie_value(self, name: str, domain: str, path: str = "/") -> str | None:
        """Read a raw cookie value out of the jar."""
        ...

    def close(self) -> None:
        """Release network resources."""
        ...
