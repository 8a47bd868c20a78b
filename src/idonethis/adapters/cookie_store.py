"""File-based session store adapter."""

import logging
import os
import tempfile
from http.cookiejar import CookieJar, LoadError, LWPCookieJar
from pathlib import Path

from idonethis.config import COOKIE_FILE
from idonethis.errors import StorageUnavailable

logger = logging.getLogger(__name__)


class FileSessionStore:
    """
    File-based cookie storage.

    Implements SessionStore protocol. Each user gets a directory under the
    cache root holding a libwww-perl style `cookies` file.
    """

    def __init__(self, cache_dir: Path | str):
        self.cache_dir = Path(cache_dir).expanduser()

    def _user_dir(self, username: str) -> Path:
        """Get (creating it if needed) the cache directory for a user."""
        user_dir = self.cache_dir / username
        try:
            user_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageUnavailable(f"Cannot create session cache {user_dir}: {e}") from e
        return user_dir

    def path_for(self, username: str) -> Path:
        """Get the cookie file path for a user."""
        return self._user_dir(username) / COOKIE_FILE

    def load(self, username: str) -> CookieJar | None:
        """Restore the saved session for a user. Returns None if there is none."""
        path = self.path_for(username)
        if not path.exists():
            return None

        jar = LWPCookieJar(str(path))
        try:
            jar.load(ignore_discard=True)
        except (LoadError, OSError) as e:
            logger.warning(f"Ignoring unreadable session file {path}: {e}")
            return None
        logger.debug(f"Loaded {len(jar)} cookies from {path}")
        return jar

    def save(self, username: str, cookies: CookieJar) -> None:
        """Persist the session for a user, replacing the old file atomically."""
        path = self.path_for(username)

        jar = LWPCookieJar()
        for cookie in cookies:
            jar.set_cookie(cookie)

        try:
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".cookies-")
        except OSError as e:
            raise StorageUnavailable(f"Cannot write session file {path}: {e}") from e
        os.close(fd)

        try:
            jar.save(tmp_name, ignore_discard=True)
            os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise StorageUnavailable(f"Cannot write session file {path}: {e}") from e
        logger.debug(f"Saved {len(jar)} cookies to {path}")
