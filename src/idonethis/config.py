"""Configuration management for the iDoneThis client."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

BASE_URL = "https://idonethis.com"
LOGIN_URL = f"{BASE_URL}/accounts/login/"
LOGIN_FORM_ID = "register"
COOKIE_DOMAIN = "idonethis.com"
CSRF_COOKIE = "csrftoken"
CACHE_NAME = "webservice-idonethis-perl"
COOKIE_FILE = "cookies"
HTTP_TIMEOUT = 30


def config_file() -> Path:
    """Location of the config file, honouring IDONETHIS_CONFIG and XDG_CONFIG_HOME."""
    explicit = os.environ.get("IDONETHIS_CONFIG")
    if explicit:
        return Path(explicit).expanduser()
    config_home = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(config_home) / "idonethis" / "idonethis.conf"


def default_cache_dir() -> Path:
    """Cache root for persisted sessions."""
    cache_home = os.environ.get("XDG_CACHE_HOME") or Path.home() / ".cache"
    return Path(cache_home) / CACHE_NAME


@dataclass
class Config:
    """iDoneThis configuration."""

    user: str = ""
    password: str = ""
    # Calendar short name, when it differs from the username
    calendar: str = ""
    cache_dir: str = ""

    @property
    def cache_path(self) -> Path:
        if self.cache_dir:
            return Path(self.cache_dir).expanduser()
        return default_cache_dir()


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from idonethis.conf."""
    config = Config()
    path = path or config_file()

    if not path.exists():
        logger.debug(f"No config file at {path}, using defaults")
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            logger.warning(f"Ignoring malformed config line: {line}")
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "user" | "username":
                config.user = value
            case "password" | "pass":
                config.password = value
            case "calendar":
                config.calendar = value
            case "cache_dir":
                config.cache_dir = value
            case _:
                logger.warning(f"Unknown config key: {key}")

    return config
