"""Runtime configuration helpers for the Snapchat adapter."""

from __future__ import annotations
from functools import lru_cache
from dynaconf import Dynaconf


SNAP_ACCOUNTS_AUTH_URL = "https://accounts.snapchat.com/accounts/oauth2/auth"
"""Endpoint used to obtain an authorization grant."""

SNAP_ACCOUNTS_TOKEN_URL = "https://accounts.snapchat.com/accounts/oauth2/token"
"""Endpoint used to exchange an authorization code for an access token."""

SNAP_KIT_API_URL = "https://kit.snapchat.com/v1"
"""Base URL of the Snap Kit API."""

SNAP_KIT_PROFILE_URL = f"{SNAP_KIT_API_URL}/me"
"""Default user profile endpoint."""

OAUTH_SCOPE_URL_PREFIX = "https://auth.snapchat.com/oauth2/api/"
"""Prefix turning a short scope name into a fully qualified scope URI."""

_DEFAULTS: dict[str, object] = {
    "CLIENT_ID": None,
    "CLIENT_SECRET": None,
    "CALLBACK_URL": None,
    "AUTHORIZATION_URL": SNAP_ACCOUNTS_AUTH_URL,
    "TOKEN_URL": SNAP_ACCOUNTS_TOKEN_URL,
    "PROFILE_URL": SNAP_KIT_PROFILE_URL,
    "SCOPE": [],
    "SCOPE_SEPARATOR": " ",
    "PROFILE_FIELDS": [],
    "HTTP_TIMEOUT_SECONDS": 30.0,
}


def _build_loader() -> Dynaconf:
    """Create a Dynaconf loader wired to environment variables only."""
    return Dynaconf(
        envvar_prefix="SNAPCHAT",
        settings_files=[],
        load_dotenv=True,
        environments=False,
    )


def _optional_str(value: object) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _str_list(value: object, name: str) -> list[str] | str:
    if value is None:
        return []
    if isinstance(value, str):
        return value
    if isinstance(value, list | tuple):
        return [str(item) for item in value]
    msg = f"SNAPCHAT_{name} must be a string or a list of strings."
    raise ValueError(msg)


def _normalize_settings(source: Dynaconf) -> Dynaconf:
    """Validate and fill defaults on the raw Dynaconf settings."""
    normalized = Dynaconf(
        envvar_prefix="SNAPCHAT",
        settings_files=[],
        load_dotenv=False,
        environments=False,
    )

    for key in ("CLIENT_ID", "CLIENT_SECRET", "CALLBACK_URL"):
        normalized.set(key, _optional_str(source.get(key)))

    for key in ("AUTHORIZATION_URL", "TOKEN_URL", "PROFILE_URL"):
        value = _optional_str(source.get(key)) or _DEFAULTS[key]
        normalized.set(key, value)

    separator = _optional_str(source.get("SCOPE_SEPARATOR"))
    normalized.set("SCOPE_SEPARATOR", separator or _DEFAULTS["SCOPE_SEPARATOR"])

    normalized.set("SCOPE", _str_list(source.get("SCOPE"), "SCOPE"))
    profile_fields = _str_list(source.get("PROFILE_FIELDS"), "PROFILE_FIELDS")
    if isinstance(profile_fields, str):
        profile_fields = [
            field.strip() for field in profile_fields.split(",") if field.strip()
        ]
    normalized.set("PROFILE_FIELDS", profile_fields)

    timeout_raw = source.get("HTTP_TIMEOUT_SECONDS", _DEFAULTS["HTTP_TIMEOUT_SECONDS"])
    try:
        timeout = float(timeout_raw)
    except (TypeError, ValueError) as exc:
        msg = "SNAPCHAT_HTTP_TIMEOUT_SECONDS must be a number."
        raise ValueError(msg) from exc
    if timeout <= 0:
        msg = "SNAPCHAT_HTTP_TIMEOUT_SECONDS must be greater than zero."
        raise ValueError(msg)
    normalized.set("HTTP_TIMEOUT_SECONDS", timeout)

    return normalized


@lru_cache(maxsize=1)
def _load_settings() -> Dynaconf:
    """Load settings once and cache the normalized Dynaconf instance."""
    return _normalize_settings(_build_loader())


def get_settings(*, refresh: bool = False) -> Dynaconf:
    """Return the cached Dynaconf settings, reloading them if requested."""
    if refresh:
        _load_settings.cache_clear()
    return _load_settings()


__all__ = [
    "OAUTH_SCOPE_URL_PREFIX",
    "SNAP_ACCOUNTS_AUTH_URL",
    "SNAP_ACCOUNTS_TOKEN_URL",
    "SNAP_KIT_API_URL",
    "SNAP_KIT_PROFILE_URL",
    "get_settings",
]
