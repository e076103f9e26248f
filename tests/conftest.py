"""Shared pytest fixtures for Logo Creator tests."""

from __future__ import annotations

import base64
import time
from collections.abc import Generator
from typing import Any

import httpx
import jwt
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from fastapi.testclient import TestClient

from logocreator.api.main import app
from logocreator.core.config import LogoCreatorConfig
from logocreator.core.identity import ClerkIdentity
from logocreator.core.quota import FixedWindowRateLimiter

IMAGE_BYTES = b"RIFF\x1a\x00\x00\x00WEBPVP8 fake-image-payload"
IMAGE_URL = "https://replicate.delivery/pbxt/abc123/output.webp"


# ---------------------------------------------------------------------------
# Signing keys and session tokens.
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def rsa_keypair() -> tuple[bytes, str]:
    """Generate an RSA keypair for signing session tokens.

    Returns:
        Tuple of (private key PEM bytes, public key PEM string).
    """
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_pem = (
        key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode()
    )
    return private_pem, public_pem


@pytest.fixture
def make_token(rsa_keypair):
    """Return a helper that signs a Clerk-style session token."""
    private_pem, _ = rsa_keypair

    def _make(sub: str = "user_123", expires_in: int = 300, **claims: Any) -> str:
        payload = {"sub": sub, "exp": int(time.time()) + expires_in, **claims}
        return jwt.encode(payload, private_pem, algorithm="RS256")

    return _make


# ---------------------------------------------------------------------------
# Configuration.
# ---------------------------------------------------------------------------


@pytest.fixture
def test_config(rsa_keypair) -> LogoCreatorConfig:
    """Create a test configuration with quota enabled and a PEM verification key."""
    _, public_pem = rsa_keypair
    return LogoCreatorConfig(
        _env_file=None,
        redis_url="redis://localhost:6379/0",
        replicate_api_token="r8_server_default",
        clerk_secret_key="sk_test_secret",
        clerk_jwt_key=public_pem,
    )


# ---------------------------------------------------------------------------
# Test doubles.
# ---------------------------------------------------------------------------


class FakeRedis:
    """In-memory stand-in for the fixed-window script the limiter registers."""

    def __init__(self) -> None:
        self.counters: dict[str, int] = {}
        self.expiries: dict[str, int] = {}
        self.incr_calls = 0

    def register_script(self, script: str):
        async def run(keys: list[str], args: list[Any]) -> int:
            (key,) = keys
            self.incr_calls += 1
            self.counters[key] = self.counters.get(key, 0) + 1
            if self.counters[key] == 1:
                self.expiries[key] = int(args[0])
            return self.counters[key]

        return run


class RecordingIdentity(ClerkIdentity):
    """ClerkIdentity that records metadata writes instead of calling Clerk."""

    def __init__(self, cfg: LogoCreatorConfig) -> None:
        super().__init__(cfg, httpx.AsyncClient(base_url=cfg.clerk_api_url))
        self.metadata_writes: list[tuple[str, dict[str, Any]]] = []

    async def update_user_metadata(self, user_id: str, unsafe_metadata: dict[str, Any]) -> None:
        self.metadata_writes.append((user_id, unsafe_metadata))


class FakeImageClient:
    """Stand-in for ReplicateImageClient.

    Attributes:
        prompts: Prompts passed to ``generate``.
        error: Exception raised by ``generate`` when set.
        payload: Bytes returned (base64-encoded) by ``download_b64``.
    """

    def __init__(self) -> None:
        self.prompts: list[str] = []
        self.downloaded: list[str] = []
        self.error: Exception | None = None
        self.payload = IMAGE_BYTES

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return IMAGE_URL

    async def download_b64(self, url: str) -> str:
        self.downloaded.append(url)
        return base64.b64encode(self.payload).decode("ascii")


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def identity(test_config: LogoCreatorConfig) -> RecordingIdentity:
    return RecordingIdentity(test_config)


@pytest.fixture
def image_client() -> FakeImageClient:
    return FakeImageClient()


@pytest.fixture
def api_keys_used() -> list[str | None]:
    """API keys the image client factory was called with."""
    return []


@pytest.fixture
def app_state(
    fake_redis: FakeRedis,
    identity: RecordingIdentity,
    image_client: FakeImageClient,
    api_keys_used: list[str | None],
) -> Generator[Any, None, None]:
    """Install test collaborators on ``app.state``.

    The limiter allows 3 permits per 60-day window, matching the defaults.
    Set ``app.state.limiter = None`` in a test to simulate an unconfigured
    quota backend.
    """

    def factory(user_api_key: str | None) -> FakeImageClient:
        api_keys_used.append(user_api_key or "r8_server_default")
        return image_client

    app.state.identity = identity
    app.state.image_client_factory = factory
    app.state.limiter = FixedWindowRateLimiter(
        fake_redis,
        limit=3,
        window_seconds=60 * 24 * 60 * 60,
        prefix="logocreator",
    )
    try:
        yield app.state
    finally:
        for name in ("identity", "image_client_factory", "limiter"):
            if hasattr(app.state, name):
                delattr(app.state, name)


@pytest.fixture
def test_client(app_state) -> TestClient:
    """TestClient against the app with test collaborators installed.

    The lifespan is not run, so no real clients are created.
    """
    return TestClient(app)


@pytest.fixture
def auth_headers(make_token) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token()}"}
