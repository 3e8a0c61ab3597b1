"""Normalized Snapchat user profile."""

from __future__ import annotations
import json as jsonlib
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Literal


PROVIDER_NAME: Literal["snapchat"] = "snapchat"


@dataclass(slots=True, frozen=True)
class BitmojiData:
    """The user's Bitmoji avatar."""

    avatar_id: str | None = None
    """The user's unique Bitmoji avatar id."""
    avatar_url: str | None = None
    """URL rendering the user's Bitmoji avatar."""


@dataclass(slots=True, frozen=True)
class SnapchatProfile:
    """Provider agnostic profile produced from a Snap Kit ``me`` query.

    ``raw`` and ``json`` carry the original response and are only set on
    profiles returned by a fetch.
    """

    id: str | None = None
    display_name: str | None = None
    bitmoji: BitmojiData = field(default_factory=BitmojiData)
    provider: Literal["snapchat"] = PROVIDER_NAME
    raw: str | None = field(default=None, repr=False, compare=False)
    json: Any = field(default=None, repr=False, compare=False)

    def with_source(self, raw: str, json: Any) -> SnapchatProfile:
        """Return a copy carrying the response text and parsed document."""
        return replace(self, raw=raw, json=json)


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def profile_from_me(me: Mapping[str, Any] | None) -> SnapchatProfile:
    """Normalize the ``me`` object of a Snap Kit response."""
    me = _mapping(me)
    bitmoji = _mapping(me.get("bitmoji"))
    return SnapchatProfile(
        id=me.get("externalId"),
        display_name=me.get("displayName"),
        bitmoji=BitmojiData(
            avatar_id=bitmoji.get("id"),
            avatar_url=bitmoji.get("avatar"),
        ),
    )


def parse_profile(document: str | Mapping[str, Any] | None) -> SnapchatProfile:
    """Parse a ``{"data": {"me": {...}}}`` document into a profile.

    Missing levels are treated as empty objects. Text input is decoded first
    and may raise :class:`json.JSONDecodeError`.
    """
    if isinstance(document, str):
        document = jsonlib.loads(document)
    data = _mapping(_mapping(document).get("data"))
    return profile_from_me(_mapping(data.get("me")))


__all__ = [
    "PROVIDER_NAME",
    "BitmojiData",
    "SnapchatProfile",
    "parse_profile",
    "profile_from_me",
]
