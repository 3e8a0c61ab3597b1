"""Scope helpers turning short Snapchat scope names into scope URIs."""

from __future__ import annotations
from collections.abc import Iterable
from snapchat_auth.config import OAUTH_SCOPE_URL_PREFIX


_QUALIFIED_PREFIX = "https:"


def normalize_scope(scope: str) -> str:
    """Return ``scope`` as a fully qualified Snapchat scope URI."""
    if scope.startswith(_QUALIFIED_PREFIX):
        return scope
    return OAUTH_SCOPE_URL_PREFIX + scope


def split_scopes(value: str | Iterable[str] | None, separator: str = " ") -> list[str]:
    """Return the scopes given either as a delimited string or an iterable."""
    if not value:
        return []
    if isinstance(value, str):
        return value.split(separator)
    return list(value)


def normalize_scopes(scopes: Iterable[str]) -> list[str]:
    """Normalize every scope, dropping empty entries and keeping order."""
    return [normalize_scope(scope) for scope in scopes if scope]


__all__ = ["normalize_scope", "normalize_scopes", "split_scopes"]
