"""requests-based HTTP transport adapter with form and link handling."""

import logging
import re
from http.cookiejar import CookieJar
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup

from idonethis import __version__
from idonethis.config import HTTP_TIMEOUT
from idonethis.errors import TransportError
from idonethis.ports.transport import Response

logger = logging.getLogger(__name__)

USER_AGENT = f"python-requests/{requests.__version__} idonethis/{__version__}"

# Input types that never carry a value when a form is submitted
_SKIPPED_INPUT_TYPES = {"submit", "button", "image", "reset", "file"}


def _form_values(form) -> dict[str, str]:
    """Collect the default values a browser would submit for a form."""
    values = {}
    for tag in form.find_all(["input", "textarea", "select"]):
        name = tag.get("name")
        if not name:
            continue

        if tag.name == "textarea":
            values[name] = tag.get_text()
        elif tag.name == "select":
            option = tag.find("option", selected=True) or tag.find("option")
            if option is not None:
                values[name] = option.get("value", option.get_text())
        else:
            kind = (tag.get("type") or "text").lower()
            if kind in _SKIPPED_INPUT_TYPES:
                continue
            if kind in ("checkbox", "radio") and not tag.has_attr("checked"):
                continue
            values[name] = tag.get("value", "")
    return values


class RequestsTransport:
    """
    HTTP transport over a requests.Session.

    Implements Transport protocol. Remembers the last page fetched so forms
    and links on it can be used, like a small browser. No retries.
    """

    def __init__(
        self,
        cookies: CookieJar | None = None,
        timeout: float = HTTP_TIMEOUT,
        session: requests.Session | None = None,
    ):
        self._session = session or requests.Session()
        self._session.headers["User-Agent"] = USER_AGENT
        if cookies is not None:
            self._session.cookies.update(cookies)
        self.timeout = timeout
        self._page: Response | None = None

    @property
    def cookies(self) -> CookieJar:
        return self._session.cookies

    @property
    def url(self) -> str:
        return self._page.url if self._page else ""

    def _request(self, method: str, url: str, **kwargs) -> Response:
        """Make a request and remember the resulting page."""
        logger.debug(f"{method} {url}")
        try:
            resp = self._session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        self._page = Response(status=resp.status_code, body=resp.text, url=resp.url)
        return self._page

    def get(self, url: str) -> Response:
        return self._request("GET", url)

    def post(self, url: str, body: str, headers: dict[str, str] | None = None) -> Response:
        return self._request("POST", url, data=body, headers=headers)

    def _soup(self) -> BeautifulSoup:
        if self._page is None:
            raise TransportError("No page has been loaded yet")
        return BeautifulSoup(self._page.body, "html.parser")

    def submit_form(self, form_id: str, fields: dict[str, str]) -> Response:
        """Fill in and submit a form on the current page."""
        form = self._soup().find("form", id=form_id)
        if form is None:
            raise TransportError(f"No form with id '{form_id}' on {self.url}")

        data = _form_values(form)
        data.update(fields)
        action = urljoin(self.url, form.get("action") or self.url)
        method = (form.get("method") or "get").upper()

        # Django checks the Referer on HTTPS form posts
        headers = {"Referer": self.url}
        if method == "POST":
            return self._request("POST", action, data=data, headers=headers)
        return self._request("GET", action, params=data, headers=headers)

    def follow_link(self, text: re.Pattern) -> Response | None:
        """Follow the first link on the current page whose text matches."""
        for link in self._soup().find_all("a", href=True):
            if text.search(link.get_text(" ", strip=True)):
                return self.get(urljoin(self.url, link["href"]))
        return None

    def cookie_value(self, name: str, domain: str, path: str = "/") -> str | None:
        """Read a raw cookie value out of the jar."""
        for cookie in self._session.cookies:
            if cookie.name == name and cookie.domain.lstrip(".") == domain and cookie.path == path:
                return cookie.value
        return None

    def close(self) -> None:
        self._session.close()
