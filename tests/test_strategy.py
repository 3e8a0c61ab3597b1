"""Tests for the Snapchat strategy."""

from __future__ import annotations
from collections.abc import Callable
from typing import Any
from urllib.parse import quote
import httpx
import pytest
import respx
import snapchat_auth
from snapchat_auth.config import (
    OAUTH_SCOPE_URL_PREFIX,
    SNAP_ACCOUNTS_AUTH_URL,
    SNAP_ACCOUNTS_TOKEN_URL,
    SNAP_KIT_PROFILE_URL,
)
from snapchat_auth.errors import (
    InternalOAuthError,
    SnapchatAPIError,
    StrategyConfigurationError,
    TokenError,
)
from snapchat_auth.profile import SnapchatProfile
from snapchat_auth.strategy import SnapchatStrategy


FixtureLoader = Callable[[str], str]

CALLBACK_URL = "https://www.example.net/auth/snapchat/callback"


def _verify(*args: Any) -> Any:
    return args


def _strategy(**options: Any) -> SnapchatStrategy:
    return SnapchatStrategy(
        {
            "client_id": "ABC123",
            "client_secret": "secret",
            "callback_url": CALLBACK_URL,
            **options,
        },
        _verify,
    )


def _encode(value: str) -> str:
    return quote(value, safe="-_.!~*'()")


def test_package_exports_strategy() -> None:
    assert snapchat_auth.Strategy is SnapchatStrategy
    assert snapchat_auth.SnapchatStrategy is SnapchatStrategy


def test_strategy_is_named_snapchat() -> None:
    assert _strategy().name == "snapchat"


def test_strategy_has_fully_qualified_scopes() -> None:
    strategy = _strategy(scope=["user.display_name", "user.bitmoji.avatar"])

    assert strategy.scope == (
        OAUTH_SCOPE_URL_PREFIX + "user.display_name",
        OAUTH_SCOPE_URL_PREFIX + "user.bitmoji.avatar",
    )


def test_constructed_without_options_raises() -> None:
    with pytest.raises(StrategyConfigurationError):
        SnapchatStrategy(None, _verify)


def test_authorization_url_with_documented_parameters() -> None:
    strategy = _strategy(scope=["user.display_name", "user.bitmoji.avatar"])

    url = strategy.authorization_url(state="xyz")

    assert url == (
        f"{SNAP_ACCOUNTS_AUTH_URL}?response_type=code"
        f"&redirect_uri={_encode(CALLBACK_URL)}"
        "&scope="
        + _encode(OAUTH_SCOPE_URL_PREFIX + "user.display_name ")
        + _encode(OAUTH_SCOPE_URL_PREFIX + "user.bitmoji.avatar")
        + "&state=xyz&client_id=ABC123"
    )


def test_authorization_url_joins_scopes_with_separator() -> None:
    strategy = _strategy(scope="a,b", scope_separator=",")

    url = strategy.authorization_url()

    scope = OAUTH_SCOPE_URL_PREFIX + "a," + OAUTH_SCOPE_URL_PREFIX + "b"
    assert f"&scope={_encode(scope)}&" in url
    assert "state=" not in url


@pytest.mark.asyncio
async def test_user_profile_over_http(load_fixture: FixtureLoader) -> None:
    strategy = _strategy(profile_fields=["id", "displayName", "bitmoji"])
    body = load_fixture("me.json")
    expected_url = (
        f"{SNAP_KIT_PROFILE_URL}?query="
        + _encode("{me{externalId displayName bitmoji{avatar id}}}")
    )

    with respx.mock(assert_all_called=True) as router:
        route = router.get(expected_url).mock(
            return_value=httpx.Response(200, text=body)
        )
        profile = await strategy.user_profile("token")

    assert route.calls.last.request.url.params["query"] == (
        "{me{externalId displayName bitmoji{avatar id}}}"
    )
    assert route.calls.last.request.headers["Authorization"] == "Bearer token"
    assert profile.provider == "snapchat"
    assert profile.id == "my-external-id"
    assert profile.display_name == "Ghostface Chillah"
    assert profile.bitmoji.avatar_id == "my-bitmoji-id"
    assert profile.raw == body
    assert profile.json["data"]["me"]["externalId"] == "my-external-id"


@pytest.mark.asyncio
async def test_user_profile_invalid_token() -> None:
    strategy = _strategy()

    with respx.mock() as router:
        router.get(url__startswith=SNAP_KIT_PROFILE_URL).mock(
            return_value=httpx.Response(401, text="Message")
        )
        with pytest.raises(SnapchatAPIError) as excinfo:
            await strategy.user_profile("invalid-token")

    assert excinfo.value.message == "Message"
    assert excinfo.value.code == 401


@pytest.mark.asyncio
async def test_user_profile_network_failure() -> None:
    strategy = _strategy()

    with respx.mock() as router:
        router.get(url__startswith=SNAP_KIT_PROFILE_URL).mock(
            side_effect=httpx.ConnectError("connection refused")
        )
        result = await strategy.fetch_profile("token")

    assert result.profile is None
    assert isinstance(result.error, InternalOAuthError)
    assert str(result.error) == "Failed to fetch user profile"


@pytest.mark.asyncio
async def test_authenticate_calls_verify(load_fixture: FixtureLoader) -> None:
    strategy = _strategy(profile_fields=["id"])

    with respx.mock(assert_all_called=True) as router:
        router.post(SNAP_ACCOUNTS_TOKEN_URL).mock(
            return_value=httpx.Response(
                200, json={"access_token": "access", "refresh_token": "refresh"}
            )
        )
        router.get(url__startswith=SNAP_KIT_PROFILE_URL).mock(
            return_value=httpx.Response(
                200, text=load_fixture("me_only_display_name_scope.json")
            )
        )
        access_token, refresh_token, profile = await strategy.authenticate("code")

    assert access_token == "access"
    assert refresh_token == "refresh"
    assert isinstance(profile, SnapchatProfile)
    assert profile.id == "my-external-id"


@pytest.mark.asyncio
async def test_authenticate_passes_context_to_async_verify(
    load_fixture: FixtureLoader,
) -> None:
    calls: list[tuple[Any, ...]] = []

    async def verify(*args: Any) -> str:
        calls.append(args)
        return "user-1"

    strategy = SnapchatStrategy(
        {
            "client_id": "ABC123",
            "client_secret": "secret",
            "callback_url": CALLBACK_URL,
            "pass_caller_context": True,
        },
        verify,
    )

    with respx.mock() as router:
        router.post(SNAP_ACCOUNTS_TOKEN_URL).mock(
            return_value=httpx.Response(200, json={"access_token": "access"})
        )
        router.get(url__startswith=SNAP_KIT_PROFILE_URL).mock(
            return_value=httpx.Response(200, text=load_fixture("me_no_scopes.json"))
        )
        user = await strategy.authenticate("code", context={"request": "req"})

    assert user == "user-1"
    context, access_token, refresh_token, profile = calls[0]
    assert context == {"request": "req"}
    assert access_token == "access"
    assert refresh_token is None
    assert profile.id is None


@pytest.mark.asyncio
async def test_authenticate_reports_token_error() -> None:
    strategy = _strategy()

    with respx.mock() as router:
        router.post(SNAP_ACCOUNTS_TOKEN_URL).mock(
            return_value=httpx.Response(
                400,
                json={"error": "invalid_grant", "error_description": "Code expired"},
            )
        )
        with pytest.raises(TokenError) as excinfo:
            await strategy.authenticate("code")

    assert excinfo.value.message == "Code expired"
    assert excinfo.value.code == "invalid_grant"


@pytest.mark.asyncio
async def test_authenticate_reports_token_transport_error() -> None:
    strategy = _strategy()

    with respx.mock() as router:
        router.post(SNAP_ACCOUNTS_TOKEN_URL).mock(
            side_effect=httpx.ConnectError("connection refused")
        )
        with pytest.raises(InternalOAuthError, match="Failed to obtain access token"):
            await strategy.authenticate("code")


def test_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SNAPCHAT_CLIENT_ID", "ABC123")
    monkeypatch.setenv("SNAPCHAT_CLIENT_SECRET", "secret")
    monkeypatch.setenv("SNAPCHAT_CALLBACK_URL", CALLBACK_URL)
    monkeypatch.setenv("SNAPCHAT_SCOPE", "user.display_name")
    snapchat_auth.config.get_settings(refresh=True)

    strategy = SnapchatStrategy.from_settings(_verify, profile_fields=["bitmoji"])

    assert strategy.config.client_id == "ABC123"
    assert strategy.config.profile_fields == ("bitmoji{avatar id}",)
    assert strategy.scope == (OAUTH_SCOPE_URL_PREFIX + "user.display_name",)


def test_explicit_options_ignore_environment_settings(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("SNAPCHAT_HTTP_TIMEOUT_SECONDS", "abc")
    snapchat_auth.config._load_settings.cache_clear()

    strategy = _strategy()

    assert strategy.config.client_id == "ABC123"
    with pytest.raises(ValueError):
        snapchat_auth.config.get_settings()
