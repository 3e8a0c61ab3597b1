"""Profile field mapping and Snap Kit query construction."""

from __future__ import annotations
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from urllib.parse import quote, urlsplit, urlunsplit


PROFILE_FIELD_TOKENS: Mapping[str, str] = MappingProxyType(
    {
        "bitmoji": "bitmoji{avatar id}",
        "displayName": "displayName",
        "id": "externalId",
    }
)
"""Canonical profile field names and the query tokens they expand to."""

# Characters left untouched by JavaScript's encodeURIComponent.
_UNRESERVED = "-_.!~*'()"


def map_profile_field(field: str) -> str:
    """Return the query token for ``field``.

    Names missing from :data:`PROFILE_FIELD_TOKENS` are returned unchanged so
    callers can pass raw query fragments such as ``bitmoji{avatar}``.
    """
    return PROFILE_FIELD_TOKENS.get(field, field)


def map_profile_fields(fields: Iterable[str]) -> list[str]:
    """Map each field to its query token, dropping empty entries."""
    tokens = (map_profile_field(field) for field in fields if field)
    return [token for token in tokens if token]


def build_profile_query(tokens: Iterable[str]) -> str:
    """Return the field selection query for the ``me`` resource."""
    return "{me{" + " ".join(tokens) + "}}"


def build_profile_url(profile_url: str, tokens: Iterable[str]) -> str:
    """Attach the percent-encoded field selection query to ``profile_url``.

    Existing query parameters and fragments are preserved verbatim.
    """
    parts = urlsplit(profile_url)
    query = "query=" + quote(build_profile_query(tokens), safe=_UNRESERVED)
    search = f"{parts.query}&{query}" if parts.query else query
    return urlunsplit(
        (parts.scheme, parts.netloc, parts.path, search, parts.fragment)
    )


__all__ = [
    "PROFILE_FIELD_TOKENS",
    "build_profile_query",
    "build_profile_url",
    "map_profile_field",
    "map_profile_fields",
]
