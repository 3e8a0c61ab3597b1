"""Minimal OAuth 2.0 authorization code client built on httpx."""

from __future__ import annotations
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote, urlencode
import httpx
from snapchat_auth.errors import OAuth2RequestError


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(slots=True, frozen=True)
class OAuth2Token:
    """Token response returned by the token endpoint."""

    access_token: str
    refresh_token: str | None = None
    token_type: str | None = None
    expires_in: int | None = None
    scope: str | None = None
    params: Mapping[str, Any] = field(
        default_factory=dict, repr=False, compare=False
    )

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> OAuth2Token:
        """Build the token from the decoded token endpoint response."""
        expires_raw = payload.get("expires_in")
        try:
            expires_in = int(expires_raw) if expires_raw is not None else None
        except (TypeError, ValueError):
            expires_in = None
        return cls(
            access_token=str(payload["access_token"]),
            refresh_token=payload.get("refresh_token"),
            token_type=payload.get("token_type"),
            expires_in=expires_in,
            scope=payload.get("scope"),
            params=dict(payload),
        )


class OAuth2Client:
    """Compose authorization URLs, exchange codes and issue authorized GETs.

    A shared :class:`httpx.AsyncClient` may be injected; otherwise a short
    lived client is opened per request.
    """

    def __init__(
        self,
        *,
        client_id: str,
        client_secret: str,
        authorization_url: str,
        token_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Store the client credentials and endpoints."""
        self._client_id = client_id
        self._client_secret = client_secret
        self._authorization_url = authorization_url
        self._token_url = token_url
        self._timeout = timeout
        self._http_client = http_client

    def get_authorize_url(
        self, params: Mapping[str, str | None] | None = None
    ) -> str:
        """Return the authorization endpoint URL for the given parameters.

        ``response_type`` and ``client_id`` are always included; parameters
        whose value is ``None`` or empty are skipped.
        """
        query: dict[str, str] = {"response_type": "code"}
        for key, value in (params or {}).items():
            if value:
                query[key] = value
        query["client_id"] = self._client_id
        separator = "&" if "?" in self._authorization_url else "?"
        encoded = urlencode(query, quote_via=quote, safe="-_.!~*'()")
        return f"{self._authorization_url}{separator}{encoded}"

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.request(method, url, **kwargs)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.request(method, url, **kwargs)

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            msg = f"Request to {url} failed: {exc}"
            raise OAuth2RequestError(msg) from exc
        if not response.is_success:
            msg = f"Request to {url} failed with status {response.status_code}"
            raise OAuth2RequestError(
                msg, status_code=response.status_code, data=response.text
            )
        return response

    async def exchange_code_for_token(
        self, code: str, *, redirect_uri: str | None = None
    ) -> OAuth2Token:
        """Exchange an authorization code for an access token."""
        form = {
            "grant_type": "authorization_code",
            "code": code,
            "client_id": self._client_id,
            "client_secret": self._client_secret,
        }
        if redirect_uri:
            form["redirect_uri"] = redirect_uri
        response = await self._send(
            "POST",
            self._token_url,
            data=form,
            headers={"Accept": "application/json"},
        )
        try:
            payload = response.json()
        except ValueError as exc:
            msg = "Token endpoint returned a non JSON response"
            raise OAuth2RequestError(
                msg, status_code=response.status_code, data=response.text
            ) from exc
        if not isinstance(payload, dict) or not payload.get("access_token"):
            msg = "Token endpoint response did not include an access token"
            raise OAuth2RequestError(
                msg, status_code=response.status_code, data=response.text
            )
        logger.info(
            "Exchanged authorization code for access token",
            extra={"event": "oauth2_token_exchange", "status": "success"},
        )
        return OAuth2Token.from_response(payload)

    async def get(self, url: str, access_token: str) -> str:
        """GET ``url`` with ``access_token`` in the Authorization header."""
        response = await self._send(
            "GET", url, headers={"Authorization": f"Bearer {access_token}"}
        )
        return response.text


__all__ = ["DEFAULT_TIMEOUT_SECONDS", "OAuth2Client", "OAuth2Token"]
