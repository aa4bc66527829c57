"""Identity verifiers against a mocked provider and locally signed tokens."""
import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest
from jose import jwt

from reviewdesk.core.config import Settings
from reviewdesk.core.exceptions import (
    AuthServiceUnavailableError,
    InvalidTokenError,
    MissingTokenError,
)
from reviewdesk.services.identity_service import (
    Identity,
    JWTIdentityVerifier,
    RemoteIdentityVerifier,
    build_identity_verifier,
)

PROVIDER_URL = "https://auth.example.com"
SECRET = "unit-test-secret"
USER_ID = "5f0c6a0e-6d2b-4b61-9a51-3f8a2b7c9d10"


def remote(handler) -> RemoteIdentityVerifier:
    return RemoteIdentityVerifier(
        base_url=PROVIDER_URL,
        api_key="anon-key",
        transport=httpx.MockTransport(handler),
    )


def mint(claims_override=None, secret=SECRET, expires_in=timedelta(hours=1)) -> str:
    now = datetime.now(timezone.utc)
    claims = {
        "sub": USER_ID,
        "email": "agent@example.com",
        "aud": "authenticated",
        "user_metadata": {"name": "Agent Smith"},
        "iat": now,
        "exp": now + expires_in,
    }
    claims.update(claims_override or {})
    return jwt.encode(claims, secret, algorithm="HS256")


# ── Remote verifier ───────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_remote_verifier_accepts_provider_user():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "id": USER_ID,
                "email": "agent@example.com",
                "user_metadata": {"name": "Agent Smith"},
            },
        )

    verifier = remote(handler)
    identity = await verifier.verify("good-token")

    assert identity == Identity(id=USER_ID, email="agent@example.com", name="Agent Smith")
    assert str(seen[0].url) == f"{PROVIDER_URL}/auth/v1/user"
    assert seen[0].headers["Authorization"] == "Bearer good-token"
    assert seen[0].headers["apikey"] == "anon-key"

    assert await verifier.verify("good-token") == identity


@pytest.mark.asyncio
async def test_remote_verifier_defaults_missing_name():
    verifier = remote(lambda request: httpx.Response(200, json={"id": USER_ID}))
    identity = await verifier.verify("good-token")
    assert identity.email == ""
    assert identity.name == ""


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [401, 403, 404])
async def test_remote_verifier_rejected_token(status_code):
    verifier = remote(lambda request: httpx.Response(status_code, json={"msg": "invalid JWT"}))
    with pytest.raises(InvalidTokenError):
        await verifier.verify("expired-token")


@pytest.mark.asyncio
async def test_remote_verifier_payload_without_id():
    verifier = remote(lambda request: httpx.Response(200, json={"email": "x@example.com"}))
    with pytest.raises(InvalidTokenError):
        await verifier.verify("token")


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [500, 502, 503])
async def test_remote_verifier_provider_error(status_code):
    verifier = remote(lambda request: httpx.Response(status_code))
    with pytest.raises(AuthServiceUnavailableError):
        await verifier.verify("token")


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [httpx.ConnectError, httpx.ReadTimeout])
async def test_remote_verifier_unreachable(error):
    def handler(request: httpx.Request) -> httpx.Response:
        raise error("boom", request=request)

    with pytest.raises(AuthServiceUnavailableError):
        await remote(handler).verify("token")


@pytest.mark.asyncio
async def test_remote_verifier_non_json_body():
    verifier = remote(lambda request: httpx.Response(200, content=b"<html>oops</html>"))
    with pytest.raises(AuthServiceUnavailableError):
        await verifier.verify("token")


@pytest.mark.asyncio
async def test_remote_verifier_without_configured_url():
    verifier = RemoteIdentityVerifier(base_url="", api_key="")
    with pytest.raises(AuthServiceUnavailableError):
        await verifier.verify("token")


@pytest.mark.asyncio
async def test_empty_token_is_missing():
    with pytest.raises(MissingTokenError):
        await remote(lambda request: httpx.Response(200, content=json.dumps({}))).verify("")
    with pytest.raises(MissingTokenError):
        await JWTIdentityVerifier(secret=SECRET).verify("")


# ── JWT verifier ──────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_jwt_verifier_accepts_signed_token():
    verifier = JWTIdentityVerifier(secret=SECRET, audience="authenticated")
    identity = await verifier.verify(mint())
    assert identity == Identity(id=USER_ID, email="agent@example.com", name="Agent Smith")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "token_kwargs",
    [
        {"secret": "some-other-secret"},
        {"expires_in": timedelta(minutes=-5)},
        {"claims_override": {"aud": "service_role"}},
        {"claims_override": {"sub": None}},
    ],
    ids=["wrong-secret", "expired", "wrong-audience", "no-subject"],
)
async def test_jwt_verifier_rejects(token_kwargs):
    verifier = JWTIdentityVerifier(secret=SECRET, audience="authenticated")
    with pytest.raises(InvalidTokenError):
        await verifier.verify(mint(**token_kwargs))


@pytest.mark.asyncio
async def test_jwt_verifier_rejects_garbage():
    with pytest.raises(InvalidTokenError):
        await JWTIdentityVerifier(secret=SECRET).verify("not.a.jwt")


# ── Factory ───────────────────────────────────────────────────────────────────

def test_build_identity_verifier_follows_mode():
    base = {"DATABASE_URL": "sqlite+aiosqlite://", "AUTH_JWT_SECRET": SECRET}
    assert isinstance(
        build_identity_verifier(Settings(**base, AUTH_VERIFY_MODE="jwt")), JWTIdentityVerifier
    )
    assert isinstance(
        build_identity_verifier(
            Settings(**base, AUTH_VERIFY_MODE="remote", AUTH_PROVIDER_URL=PROVIDER_URL + "/")
        ),
        RemoteIdentityVerifier,
    )
