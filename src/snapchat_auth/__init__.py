"""Snapchat (Snap Kit) OAuth 2.0 authentication adapter."""

from snapchat_auth.errors import (
    InternalOAuthError,
    OAuth2RequestError,
    ProfileFetchError,
    SnapchatAPIError,
    SnapchatAuthError,
    SnapchatProfileParseError,
    StrategyConfigurationError,
    TokenError,
)
from snapchat_auth.fetcher import AuthenticatedGet, ProfileFetcher, ProfileResult
from snapchat_auth.oauth2 import OAuth2Client, OAuth2Token
from snapchat_auth.options import StrategyConfig
from snapchat_auth.profile import BitmojiData, SnapchatProfile, parse_profile
from snapchat_auth.strategy import SnapchatStrategy, Strategy


__all__ = [
    "AuthenticatedGet",
    "BitmojiData",
    "InternalOAuthError",
    "OAuth2Client",
    "OAuth2RequestError",
    "OAuth2Token",
    "ProfileFetchError",
    "ProfileFetcher",
    "ProfileResult",
    "SnapchatAPIError",
    "SnapchatAuthError",
    "SnapchatProfile",
    "SnapchatProfileParseError",
    "SnapchatStrategy",
    "Strategy",
    "StrategyConfig",
    "StrategyConfigurationError",
    "TokenError",
    "parse_profile",
]
