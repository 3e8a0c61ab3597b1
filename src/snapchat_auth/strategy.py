"""Snapchat OAuth 2.0 authentication strategy."""

from __future__ import annotations
import inspect
import json
import logging
from collections.abc import Callable, Mapping
from typing import Any
import httpx
from snapchat_auth.config import get_settings
from snapchat_auth.errors import InternalOAuthError, OAuth2RequestError, TokenError
from snapchat_auth.fetcher import ProfileCompletion, ProfileFetcher, ProfileResult
from snapchat_auth.oauth2 import DEFAULT_TIMEOUT_SECONDS, OAuth2Client
from snapchat_auth.options import StrategyConfig
from snapchat_auth.profile import PROVIDER_NAME, SnapchatProfile


logger = logging.getLogger(__name__)

TOKEN_FAILED_MESSAGE = "Failed to obtain access token"

VerifyCallback = Callable[..., Any]


class SnapchatStrategy:
    """Authenticate users by delegating to Snapchat over OAuth 2.0.

    ``verify`` receives ``(access_token, refresh_token, profile)`` once the
    user granted access, or ``(context, access_token, refresh_token, profile)``
    when ``pass_caller_context`` is enabled, and returns the application's
    user. It may be a coroutine function.

    Example::

        strategy = SnapchatStrategy(
            {
                "client_id": "123-456-789",
                "client_secret": "shhh-its-a-secret",
                "callback_url": "https://www.example.net/auth/snapchat/callback",
                "profile_fields": ["id", "displayName", "bitmoji"],
                "scope": ["user.display_name", "user.bitmoji.avatar"],
            },
            find_or_create_user,
        )
    """

    name = PROVIDER_NAME

    def __init__(
        self,
        options: Mapping[str, Any] | StrategyConfig | None,
        verify: VerifyCallback,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: httpx.AsyncClient | None = None,
        oauth2: OAuth2Client | None = None,
    ) -> None:
        """Validate ``options`` and wire the OAuth2 client and profile fetcher."""
        if isinstance(options, StrategyConfig):
            self._config = options
        else:
            self._config = StrategyConfig.from_options(options)
        self._verify = verify
        self._oauth2 = oauth2 or OAuth2Client(
            client_id=self._config.client_id,
            client_secret=self._config.client_secret,
            authorization_url=self._config.authorization_url,
            token_url=self._config.token_url,
            timeout=timeout,
            http_client=http_client,
        )
        self._fetcher = ProfileFetcher(
            self._oauth2,
            profile_url=self._config.profile_url,
            profile_fields=self._config.profile_fields,
        )

    @classmethod
    def from_settings(
        cls, verify: VerifyCallback, **overrides: Any
    ) -> SnapchatStrategy:
        """Create a strategy configured from ``SNAPCHAT_*`` settings."""
        settings = get_settings()
        config = StrategyConfig.from_settings(settings, **overrides)
        return cls(
            config, verify, timeout=float(settings.get("HTTP_TIMEOUT_SECONDS"))
        )

    @property
    def config(self) -> StrategyConfig:
        """Return the validated strategy configuration."""
        return self._config

    @property
    def scope(self) -> tuple[str, ...]:
        """Return the fully qualified scopes requested at authorization."""
        return self._config.scope

    def authorization_url(self, state: str | None = None) -> str:
        """Return the URL the user agent is redirected to for consent."""
        scope = self._config.scope_separator.join(self._config.scope)
        return self._oauth2.get_authorize_url(
            {
                "redirect_uri": self._config.callback_url,
                "scope": scope,
                "state": state,
            }
        )

    async def fetch_profile(
        self,
        access_token: str,
        completion: ProfileCompletion | None = None,
    ) -> ProfileResult:
        """Retrieve the user profile from Snapchat.

        The normalized profile carries ``provider`` (always ``snapchat``),
        ``id``, ``display_name``, ``bitmoji.avatar_id`` and
        ``bitmoji.avatar_url``; absent fields stay ``None``.
        """
        return await self._fetcher.fetch(access_token, completion)

    async def user_profile(self, access_token: str) -> SnapchatProfile:
        """Return the user profile or raise the classified fetch error."""
        result = await self.fetch_profile(access_token)
        return result.unwrap()

    async def authenticate(self, code: str, *, context: Any = None) -> Any:
        """Complete the authorization code flow and return the verified user."""
        try:
            token = await self._oauth2.exchange_code_for_token(
                code, redirect_uri=self._config.callback_url
            )
        except OAuth2RequestError as exc:
            error = _token_error(exc)
            logger.warning(
                "Snapchat token exchange failed: %s",
                error,
                extra={"event": "oauth2_token_exchange", "status": "failed"},
            )
            raise error from exc

        profile = await self.user_profile(token.access_token)
        if self._config.pass_caller_context:
            user = self._verify(
                context, token.access_token, token.refresh_token, profile
            )
        else:
            user = self._verify(token.access_token, token.refresh_token, profile)
        if inspect.isawaitable(user):
            user = await user
        return user


def _token_error(exc: OAuth2RequestError) -> TokenError | InternalOAuthError:
    if exc.data:
        try:
            payload = json.loads(exc.data)
        except ValueError:
            payload = None
        if isinstance(payload, dict) and payload.get("error"):
            message = payload.get("error_description") or payload["error"]
            return TokenError(message, payload["error"])
    return InternalOAuthError(TOKEN_FAILED_MESSAGE, exc)


Strategy = SnapchatStrategy


__all__ = ["SnapchatStrategy", "Strategy", "VerifyCallback"]
