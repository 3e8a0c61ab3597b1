"""Validated configuration for the Snapchat strategy."""

from __future__ import annotations
from collections.abc import Iterable, Mapping
from typing import Any
from dynaconf import Dynaconf
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from snapchat_auth.config import (
    SNAP_ACCOUNTS_AUTH_URL,
    SNAP_ACCOUNTS_TOKEN_URL,
    SNAP_KIT_PROFILE_URL,
)
from snapchat_auth.errors import StrategyConfigurationError
from snapchat_auth.query import map_profile_fields
from snapchat_auth.scopes import normalize_scopes, split_scopes


_URL_DEFAULTS = {
    "authorization_url": SNAP_ACCOUNTS_AUTH_URL,
    "token_url": SNAP_ACCOUNTS_TOKEN_URL,
    "profile_url": SNAP_KIT_PROFILE_URL,
}


def _string_items(value: Any, name: str) -> list[str]:
    """Return the entries of an optional list option, rejecting non-strings."""
    if not value:
        return []
    if isinstance(value, Mapping) or not isinstance(value, Iterable):
        msg = f"{name} must be a string or a list of strings"
        raise ValueError(msg)
    items = list(value)
    if not all(isinstance(item, str) for item in items):
        msg = f"{name} entries must be strings"
        raise ValueError(msg)
    return items


class StrategyConfig(BaseModel):
    """Immutable options of a :class:`~snapchat_auth.strategy.SnapchatStrategy`.

    ``profile_fields`` holds the mapped query tokens and ``scope`` the fully
    qualified scope URIs; both are derived from the raw options on
    construction.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    client_id: str = Field(min_length=1)
    client_secret: str = Field(min_length=1, repr=False)
    callback_url: str = Field(min_length=1)
    authorization_url: str = SNAP_ACCOUNTS_AUTH_URL
    token_url: str = SNAP_ACCOUNTS_TOKEN_URL
    profile_url: str = SNAP_KIT_PROFILE_URL
    profile_fields: tuple[str, ...] = ()
    scope: tuple[str, ...] = ()
    scope_separator: str = Field(default=" ", min_length=1)
    pass_caller_context: bool = False

    @model_validator(mode="before")
    @classmethod
    def _fill_defaults(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        values = dict(data)
        for key, default in _URL_DEFAULTS.items():
            values[key] = values.get(key) or default
        separator = values.get("scope_separator") or " "
        if not isinstance(separator, str):
            msg = "scope_separator must be a string"
            raise ValueError(msg)
        values["scope_separator"] = separator
        scope = values.get("scope")
        if not isinstance(scope, str):
            scope = _string_items(scope, "scope")
        values["scope"] = normalize_scopes(split_scopes(scope, separator))
        profile_fields = values.get("profile_fields")
        if isinstance(profile_fields, str):
            profile_fields = [profile_fields]
        values["profile_fields"] = map_profile_fields(
            _string_items(profile_fields, "profile_fields")
        )
        if values.get("pass_caller_context") is None:
            values["pass_caller_context"] = False
        return values

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None) -> StrategyConfig:
        """Validate raw strategy options, raising on missing credentials."""
        if options is None:
            msg = "Snapchat strategy requires an options mapping"
            raise StrategyConfigurationError(msg)
        try:
            return cls.model_validate(dict(options))
        except ValidationError as exc:
            problems = sorted(
                {
                    ".".join(str(part) for part in error["loc"]) or error["msg"]
                    for error in exc.errors()
                }
            )
            msg = f"Invalid Snapchat strategy options: {', '.join(problems)}"
            raise StrategyConfigurationError(msg) from exc

    @classmethod
    def from_settings(
        cls, settings: Dynaconf, **overrides: Any
    ) -> StrategyConfig:
        """Build the configuration from ``SNAPCHAT_*`` settings."""
        options: dict[str, Any] = {
            "client_id": settings.get("CLIENT_ID"),
            "client_secret": settings.get("CLIENT_SECRET"),
            "callback_url": settings.get("CALLBACK_URL"),
            "authorization_url": settings.get("AUTHORIZATION_URL"),
            "token_url": settings.get("TOKEN_URL"),
            "profile_url": settings.get("PROFILE_URL"),
            "profile_fields": settings.get("PROFILE_FIELDS"),
            "scope": settings.get("SCOPE"),
            "scope_separator": settings.get("SCOPE_SEPARATOR"),
        }
        options.update(overrides)
        return cls.from_options(options)


__all__ = ["StrategyConfig"]
