"""Error types raised by the Snapchat authentication adapter."""

from __future__ import annotations
from typing import Any, ClassVar, Literal


ErrorKind = Literal["api", "parse", "transport"]


class SnapchatAuthError(RuntimeError):
    """Base class for all adapter errors."""


class StrategyConfigurationError(SnapchatAuthError, ValueError):
    """Raised when the strategy options are absent or invalid."""


class OAuth2RequestError(SnapchatAuthError):
    """Raised by the OAuth2 client when an HTTP exchange fails.

    ``status_code`` and ``data`` are populated when the provider answered with
    a non-success response; both stay ``None`` for network level failures.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        data: str | None = None,
    ) -> None:
        """Initialise the error with optional response context."""
        super().__init__(message)
        self.status_code = status_code
        self.data = data


class ProfileFetchError(SnapchatAuthError):
    """Base class for the classified profile fetch failures."""

    kind: ClassVar[ErrorKind]

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        """Store the message and chain the underlying cause."""
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.__cause__ = cause


class SnapchatAPIError(ProfileFetchError):
    """Snapchat explicitly rejected the request."""

    kind: ClassVar[ErrorKind] = "api"

    def __init__(self, message: str, code: str | int) -> None:
        """Keep the provider message and error code for display."""
        super().__init__(message)
        self.code = code


class SnapchatProfileParseError(ProfileFetchError):
    """The profile endpoint answered with a body that is not valid JSON."""

    kind: ClassVar[ErrorKind] = "parse"

    @property
    def parse_error(self) -> BaseException | None:
        """Return the underlying JSON decoding failure."""
        return self.cause


class InternalOAuthError(ProfileFetchError):
    """The transport failed before Snapchat produced a usable answer."""

    kind: ClassVar[ErrorKind] = "transport"

    @property
    def oauth_error(self) -> BaseException | None:
        """Return the low level error reported by the transport."""
        return self.cause


class TokenError(SnapchatAuthError):
    """The token endpoint rejected the authorization code exchange."""

    def __init__(self, message: str, code: Any) -> None:
        """Keep the provider message and error code."""
        super().__init__(message)
        self.message = message
        self.code = code


__all__ = [
    "ErrorKind",
    "InternalOAuthError",
    "OAuth2RequestError",
    "ProfileFetchError",
    "SnapchatAPIError",
    "SnapchatAuthError",
    "SnapchatProfileParseError",
    "StrategyConfigurationError",
    "TokenError",
]
