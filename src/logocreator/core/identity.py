"""Clerk identity integration.

Two operations are needed from the identity provider:

- **Current user resolution.**  The Clerk session token arrives either as an
  ``Authorization: Bearer`` header or in the ``__session`` cookie.  It is a
  signed JWT; verification uses either a configured PEM public key
  (networkless) or the instance's JWKS endpoint.
- **Metadata writes.**  The remaining-quota display value is written to the
  user's ``unsafe_metadata`` through the Clerk Backend API.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx
import jwt
from fastapi import Request
from fastapi.concurrency import run_in_threadpool

from logocreator.core.config import LogoCreatorConfig

logger = logging.getLogger(__name__)

SESSION_COOKIE = "__session"
_ALGORITHMS = ["RS256"]


@dataclass(frozen=True)
class CurrentUser:
    """An authenticated Clerk user.

    Attributes:
        id: Clerk user id (the token's ``sub`` claim).
        claims: All verified token claims.
    """

    id: str
    claims: dict[str, Any] = field(default_factory=dict)


def extract_session_token(request: Request) -> str | None:
    """Return the session token from the request, or ``None``.

    The ``Authorization`` header takes precedence over the cookie.
    """
    authorization = request.headers.get("Authorization")
    if authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1]
        return None
    return request.cookies.get(SESSION_COOKIE) or None


class ClerkIdentity:
    """Resolve the current user and write per-user metadata.

    Args:
        cfg: Application configuration.
        http_client: Client bound to the Clerk Backend API base URL.
        jwks_client: Optional pre-built JWKS client.  Built from
            ``cfg.clerk_jwks_url`` when omitted.
    """

    def __init__(
        self,
        cfg: LogoCreatorConfig,
        http_client: httpx.AsyncClient,
        jwks_client: jwt.PyJWKClient | None = None,
    ) -> None:
        self._jwt_key = cfg.clerk_jwt_key
        self._authorized_parties = list(cfg.clerk_authorized_parties)
        self._secret_key = cfg.clerk_secret_key
        self._leeway = cfg.clerk_clock_skew_seconds
        self._http = http_client

        if jwks_client is None and not self._jwt_key and cfg.clerk_jwks_url:
            jwks_client = jwt.PyJWKClient(cfg.clerk_jwks_url)
        self._jwks_client = jwks_client

        if not self._jwt_key and self._jwks_client is None:
            logger.warning(
                "No Clerk verification key configured; every request will be unauthenticated."
            )

    async def _signing_key(self, token: str) -> Any:
        if self._jwt_key:
            return self._jwt_key
        # PyJWKClient fetches over urllib, so keep it off the event loop.
        signing_key = await run_in_threadpool(self._jwks_client.get_signing_key_from_jwt, token)
        return signing_key.key

    async def current_user(self, request: Request) -> CurrentUser | None:
        """Verify the request's session token.

        Returns:
            The authenticated user, or ``None`` when the token is missing,
            malformed, expired, or issued for an unauthorized party.
        """
        token = extract_session_token(request)
        if token is None or (not self._jwt_key and self._jwks_client is None):
            return None

        try:
            key = await self._signing_key(token)
            claims = jwt.decode(
                token,
                key,
                algorithms=_ALGORITHMS,
                leeway=self._leeway,
                options={"require": ["exp", "sub"]},
            )
        except jwt.PyJWTError as e:
            logger.debug(f"Session token rejected: {e!s}")
            return None

        if self._authorized_parties and claims.get("azp") not in self._authorized_parties:
            logger.debug(f"Session token azp {claims.get('azp')!r} not authorized")
            return None

        return CurrentUser(id=claims["sub"], claims=claims)

    async def update_user_metadata(self, user_id: str, unsafe_metadata: dict[str, Any]) -> None:
        """Merge *unsafe_metadata* into the user's Clerk metadata.

        Raises:
            httpx.HTTPStatusError: If Clerk rejects the update.
        """
        if self._secret_key is None:
            logger.warning(f"Clerk secret key not configured; metadata for {user_id} not written")
            return

        response = await self._http.patch(
            f"/users/{user_id}/metadata",
            headers={"Authorization": f"Bearer {self._secret_key.get_secret_value()}"},
            json={"unsafe_metadata": unsafe_metadata},
        )
        response.raise_for_status()
        logger.debug(f"Wrote metadata {unsafe_metadata!r} for user {user_id}")
