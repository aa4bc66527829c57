"""
services/identity_service.py
----------------------------
Bearer-token verification against the external identity provider.

Two verifiers share one contract, `await verifier.verify(token) -> Identity`:

  RemoteIdentityVerifier  asks the provider (GET /auth/v1/user) about every
                          token. Revocations take effect immediately.
  JWTIdentityVerifier     checks the provider-signed HS256 access token
                          locally with the project's JWT secret. No network
                          hop, but a token stays valid until it expires.

Failures are reported as:
  InvalidTokenError            provider rejected the token / bad signature /
                               expired / no user id in the payload
  AuthServiceUnavailableError  provider unreachable, timed out, or 5xx

Nothing is cached: each request is verified on its own.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Mapping, Optional, Protocol

import httpx
from jose import JWTError, jwt

from reviewdesk.core.config import Settings, get_settings
from reviewdesk.core.exceptions import (
    AuthServiceUnavailableError,
    InvalidTokenError,
    MissingTokenError,
)
from reviewdesk.core.logging import get_logger

logger = get_logger(__name__)

USER_ENDPOINT = "/auth/v1/user"


@dataclass(frozen=True)
class Identity:
    id: str
    email: str
    name: str


def identity_from_claims(claims: Mapping[str, Any], id_key: str) -> Identity:
    """Map a provider user object / JWT claim set onto an Identity."""
    user_id = claims.get(id_key)
    if not user_id:
        raise InvalidTokenError()
    metadata = claims.get("user_metadata") or {}
    return Identity(
        id=str(user_id),
        email=claims.get("email") or "",
        name=metadata.get("name") or "",
    )


class IdentityVerifier(Protocol):
    async def verify(self, token: str) -> Identity: ...


class RemoteIdentityVerifier:

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    async def verify(self, token: str) -> Identity:
        if not token:
            raise MissingTokenError()
        if not self._base_url:
            logger.error("Identity provider URL is not configured")
            raise AuthServiceUnavailableError()

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(
                    USER_ENDPOINT,
                    headers={
                        "apikey": self._api_key,
                        "Authorization": f"Bearer {token}",
                    },
                )
        except httpx.HTTPError as exc:
            logger.error("Identity provider unreachable", error=str(exc))
            raise AuthServiceUnavailableError() from exc

        if response.status_code >= 500:
            logger.error("Identity provider error", status_code=response.status_code)
            raise AuthServiceUnavailableError()
        if response.status_code != 200:
            raise InvalidTokenError()

        try:
            payload = response.json()
        except ValueError as exc:
            logger.error("Identity provider returned non-JSON body")
            raise AuthServiceUnavailableError() from exc
        if not isinstance(payload, dict):
            raise InvalidTokenError()

        return identity_from_claims(payload, id_key="id")


class JWTIdentityVerifier:

    def __init__(self, secret: str, algorithm: str = "HS256", audience: str = "") -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._audience = audience

    async def verify(self, token: str) -> Identity:
        if not token:
            raise MissingTokenError()
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                audience=self._audience or None,
                options={"verify_aud": bool(self._audience)},
            )
        except JWTError as exc:
            raise InvalidTokenError() from exc
        return identity_from_claims(claims, id_key="sub")


def build_identity_verifier(config: Settings) -> IdentityVerifier:
    if config.AUTH_VERIFY_MODE == "jwt":
        if not config.AUTH_JWT_SECRET:
            logger.warning("AUTH_JWT_SECRET is empty, every token will be rejected")
        return JWTIdentityVerifier(
            secret=config.AUTH_JWT_SECRET,
            algorithm=config.AUTH_JWT_ALGORITHM,
            audience=config.AUTH_JWT_AUDIENCE,
        )

    if not config.AUTH_PROVIDER_URL:
        logger.warning("AUTH_PROVIDER_URL is empty, token verification will fail")
    return RemoteIdentityVerifier(
        base_url=config.AUTH_PROVIDER_URL,
        api_key=config.AUTH_PROVIDER_ANON_KEY,
        timeout=config.AUTH_REQUEST_TIMEOUT_SECONDS,
    )


@lru_cache()
def get_identity_verifier() -> IdentityVerifier:
    """
    FastAPI dependency returning the configured verifier.
    Stateless, so a single instance serves every request.
    """
    return build_identity_verifier(get_settings())
