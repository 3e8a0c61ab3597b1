"""Profile retrieval pipeline for the Snap Kit ``me`` endpoint."""

from __future__ import annotations
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol
from snapchat_auth.classifier import ProfilePayload, classify_response
from snapchat_auth.errors import ProfileFetchError
from snapchat_auth.profile import SnapchatProfile, parse_profile
from snapchat_auth.query import build_profile_url


logger = logging.getLogger(__name__)


class AuthenticatedGet(Protocol):
    """Transport performing a GET request authorized by an access token."""

    async def get(self, url: str, access_token: str) -> str:
        """Return the response body or raise on failure.

        Raised errors may expose ``data`` (the response body) and
        ``status_code`` when the provider answered.
        """


@dataclass(slots=True, frozen=True)
class ProfileResult:
    """Outcome of a single profile fetch: a profile or a classified error."""

    profile: SnapchatProfile | None = None
    error: ProfileFetchError | None = None

    def __post_init__(self) -> None:
        """Ensure exactly one of ``profile`` and ``error`` is set."""
        if (self.profile is None) == (self.error is None):
            msg = "ProfileResult requires exactly one of profile or error"
            raise ValueError(msg)

    @classmethod
    def success(cls, profile: SnapchatProfile) -> ProfileResult:
        """Wrap a fetched profile."""
        return cls(profile=profile)

    @classmethod
    def failure(cls, error: ProfileFetchError) -> ProfileResult:
        """Wrap a classified error."""
        return cls(error=error)

    @property
    def ok(self) -> bool:
        """Return True when the fetch produced a profile."""
        return self.error is None

    def unwrap(self) -> SnapchatProfile:
        """Return the profile or raise the classified error."""
        if self.error is not None:
            raise self.error
        assert self.profile is not None
        return self.profile


ProfileCompletion = Callable[[ProfileResult], object]


class ProfileFetcher:
    """Fetch and normalize the profile of the user owning an access token."""

    def __init__(
        self,
        transport: AuthenticatedGet,
        *,
        profile_url: str,
        profile_fields: Sequence[str] = (),
    ) -> None:
        """Bind the transport and the query configuration.

        ``profile_fields`` holds query tokens that are already mapped.
        """
        self._transport = transport
        self._profile_url = profile_url
        self._profile_fields = tuple(profile_fields)

    @property
    def profile_request_url(self) -> str:
        """Return the URL requested for every fetch."""
        return build_profile_url(self._profile_url, self._profile_fields)

    async def fetch(
        self,
        access_token: str,
        completion: ProfileCompletion | None = None,
    ) -> ProfileResult:
        """Fetch the profile once and report the outcome.

        ``completion`` is invoked exactly once with the returned result.
        """
        url = self.profile_request_url
        error: Exception | None = None
        body: str | None = None
        try:
            body = await self._transport.get(url, access_token)
        except Exception as exc:
            error = exc

        outcome = classify_response(error, body)
        if isinstance(outcome, ProfilePayload):
            profile = parse_profile(outcome.json).with_source(
                outcome.raw, outcome.json
            )
            logger.debug(
                "Fetched Snapchat profile",
                extra={"event": "snapchat_profile_fetch", "status": "success"},
            )
            result = ProfileResult.success(profile)
        else:
            logger.warning(
                "Snapchat profile fetch failed: %s",
                outcome.message,
                extra={
                    "event": "snapchat_profile_fetch",
                    "status": "failed",
                    "error_kind": outcome.kind,
                },
            )
            result = ProfileResult.failure(outcome)

        if completion is not None:
            completion(result)
        return result


__all__ = [
    "AuthenticatedGet",
    "ProfileCompletion",
    "ProfileFetcher",
    "ProfileResult",
]
