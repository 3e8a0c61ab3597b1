"""Classification of profile endpoint outcomes.

The authenticated GET either fails with an error or returns a body. The
outcome maps to exactly one of:

- :class:`SnapchatAPIError` when Snapchat answered with an error, either the
  structured ``{"error", "error_description"}`` pair or an opaque body with a
  status code;
- :class:`InternalOAuthError` when the transport failed without a usable
  answer;
- :class:`SnapchatProfileParseError` when the body is not valid JSON;
- :class:`ProfilePayload` otherwise.
"""

from __future__ import annotations
import json
from dataclasses import dataclass
from typing import Any
from snapchat_auth.errors import (
    InternalOAuthError,
    ProfileFetchError,
    SnapchatAPIError,
    SnapchatProfileParseError,
)


FETCH_FAILED_MESSAGE = "Failed to fetch user profile"
PARSE_FAILED_MESSAGE = "Failed to parse user profile with error: {error}"


@dataclass(slots=True, frozen=True)
class ProfilePayload:
    """A successfully decoded profile response."""

    raw: str
    json: Any


def _structured_api_error(data: Any) -> SnapchatAPIError | None:
    try:
        payload = json.loads(data)
    except (TypeError, ValueError):
        return None
    if not isinstance(payload, dict):
        return None
    code = payload.get("error")
    description = payload.get("error_description")
    if code and description:
        return SnapchatAPIError(description, code)
    return None


def classify_error(error: BaseException) -> ProfileFetchError:
    """Map a failed GET to the matching error kind."""
    data = getattr(error, "data", None)
    if data:
        structured = _structured_api_error(data)
        if structured is not None:
            return structured
        status_code = getattr(error, "status_code", None)
        if status_code:
            return SnapchatAPIError(data, status_code)
    return InternalOAuthError(FETCH_FAILED_MESSAGE, error)


def classify_body(body: Any) -> ProfilePayload | SnapchatProfileParseError:
    """Decode a successful GET body."""
    try:
        document = json.loads(body)
    except (TypeError, ValueError) as exc:
        return SnapchatProfileParseError(
            PARSE_FAILED_MESSAGE.format(error=exc), exc
        )
    return ProfilePayload(raw=body, json=document)


def classify_response(
    error: BaseException | None, body: Any = None
) -> ProfilePayload | ProfileFetchError:
    """Return the payload or the classified error for a GET outcome."""
    if error is not None:
        return classify_error(error)
    return classify_body(body)


__all__ = [
    "FETCH_FAILED_MESSAGE",
    "PARSE_FAILED_MESSAGE",
    "ProfilePayload",
    "classify_body",
    "classify_error",
    "classify_response",
]
