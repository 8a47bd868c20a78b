"""Session persistence interface."""

from http.cookiejar import CookieJar
from typing import Protocol


class SessionStore(Protocol):
    """Interface for persisting an account's cookie jar between runs."""

    def load(self, username: str) -> CookieJar | None:
        """Restore the saved session for a user. Returns None if there is none."""
        ...

    def save(self, username: str, cookies: CookieJar) -> None:
        """Persist the session for a user."""
        ...
