"""Pure login outcome classification - decides where a login attempt landed."""

import re
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlsplit

from idonethis.config import BASE_URL

LOGIN_PAGE_RE = re.compile(r"/login/?$")
HOME_RE = re.compile(r"/home/?$")
CALENDAR_ROOT_RE = re.compile(r"/cal/(?P<id>[\w-]+)/?$")


class LoginState(Enum):
    """Where the browser ended up after submitting the login form."""

    AT_LOGIN_PAGE = "login_page"
    AT_HOME = "home"
    AT_CALENDAR_ROOT = "calendar_root"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class LoginOutcome:
    """Classified final URL of a login attempt."""

    state: LoginState
    url: str
    calendar_id: str | None = None


def classify_login_url(url: str) -> LoginOutcome:
    """
    Classify a post-login URL.

    Checks run in order and the first match wins: the login page, then the
    dashboard, then a calendar root. Anything else is unrecognized.
    """
    path = urlsplit(url).path

    if LOGIN_PAGE_RE.search(path):
        return LoginOutcome(LoginState.AT_LOGIN_PAGE, url)

    if HOME_RE.search(path):
        return LoginOutcome(LoginState.AT_HOME, url)

    match = CALENDAR_ROOT_RE.search(path)
    if match:
        return LoginOutcome(LoginState.AT_CALENDAR_ROOT, url, match.group("id"))

    return LoginOutcome(LoginState.UNRECOGNIZED, url)


def calendar_root(calendar_id: str) -> str:
    """Resource root URL for a calendar."""
    return f"{BASE_URL}/cal/{calendar_id}/"


def calendar_link_pattern(calendar_id: str) -> re.Pattern:
    """Match link text naming the calendar, not as part of a longer identifier."""
    return re.compile(rf"(?<![\w-]){re.escape(calendar_id)}(?![\w-])")
