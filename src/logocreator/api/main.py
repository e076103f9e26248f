"""Logo Creator — FastAPI Application.

This module is the single entry point for the web application.  It defines
the FastAPI ``app`` instance, the REST routes, and the ``main()`` CLI
function that launches the uvicorn server.

Architecture
------------
Each generation request is one sequential pipeline:

1. Resolve the Clerk user.  Unauthenticated callers get an empty 404.
2. Validate the JSON body.  Nothing external is touched on failure.
3. Decide whether quota applies (backend configured and no caller key).
4. Build a Replicate client with the caller's key or the server default.
5. Bring-your-own-key callers get ``remaining = "BYOK"`` written to their
   metadata.
6. Otherwise consume one permit, record the remaining count, and stop with
   429 if the quota is exhausted.
7. Compile the prompt, run the model once, download and base64 the image.
8. Map provider auth and credit failures to 401/403.  Anything else
   propagates as a 500.

Long-lived collaborators (HTTP clients, Redis, the limiter) are created in
the application lifespan and stored on ``app.state``.  The limiter exists
only when a quota backend is configured.

Endpoints
---------
========  ============================  ====================================
Method    Path                          Purpose
========  ============================  ====================================
POST      ``/api/generate-logo``        Generate one logo
GET       ``/api/config``               Styles, layouts, model, quota flag
GET       ``/api/health``               Liveness check
========  ============================  ====================================

Usage
-----
CLI (installed entry point)::

    logocreator

Direct invocation::

    python -m logocreator.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
import redis.asyncio as aioredis
from fastapi import FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError

from logocreator import __version__
from logocreator.api.models import GenerateLogoRequest, GenerateLogoResponse
from logocreator.core.config import config
from logocreator.core.errors import ProviderAuthError, ProviderCreditsError
from logocreator.core.identity import ClerkIdentity
from logocreator.core.image_client import ReplicateImageClient
from logocreator.core.prompt_builder import LAYOUT_LOOKUP, STYLE_LOOKUP, build_prompt
from logocreator.core.quota import FixedWindowRateLimiter

logger = logging.getLogger(__name__)

QUOTA_EXHAUSTED_MESSAGE = (
    "You've used up all your credits. Enter your own Replicate API Key to generate more logos."
)
INVALID_API_KEY_MESSAGE = "Your API key is invalid."
INSUFFICIENT_CREDITS_MESSAGE = (
    "Your Replicate account has insufficient credits. "
    "Please add credits at: https://replicate.com/account/billing"
)
BYOK_SENTINEL = "BYOK"


# ---------------------------------------------------------------------------
# Application lifecycle — collaborator setup and teardown.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown lifecycle.

    On startup:
        Creates the Clerk and download HTTP clients, the identity service,
        the Replicate client factory, and (only when ``redis_url`` is set)
        the Redis connection and fixed-window limiter.

    On shutdown:
        Closes every client opened on startup.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    # --- Startup -----------------------------------------------------------
    clerk_http = httpx.AsyncClient(base_url=config.clerk_api_url, timeout=config.http_timeout)
    # Replicate delivery URLs may redirect to a CDN.
    download_http = httpx.AsyncClient(timeout=config.http_timeout, follow_redirects=True)
    redis_conn: aioredis.Redis | None = None

    app.state.identity = ClerkIdentity(config, clerk_http)

    default_token = (
        config.replicate_api_token.get_secret_value() if config.replicate_api_token else None
    )

    def image_client_factory(user_api_key: str | None) -> ReplicateImageClient:
        return ReplicateImageClient(
            user_api_key or default_token,
            model_id=config.model_id,
            http_client=download_http,
        )

    app.state.image_client_factory = image_client_factory

    app.state.limiter = None
    if config.quota_enabled:
        redis_conn = aioredis.from_url(config.redis_url, decode_responses=True)
        app.state.limiter = FixedWindowRateLimiter(
            redis_conn,
            limit=config.quota_limit,
            window_seconds=config.quota_window_seconds,
            prefix=config.quota_prefix,
        )
        logger.info(
            f"Quota enabled: {config.quota_limit} per {config.quota_window_days} days."
        )
    else:
        logger.info("Quota backend not configured; quota disabled.")

    yield  # Application runs here.

    # --- Shutdown ----------------------------------------------------------
    await clerk_http.aclose()
    await download_http.aclose()
    if redis_conn is not None:
        await redis_conn.aclose()
    logger.info("Clients closed on shutdown.")


# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Logo Creator",
    description="Generate logos from a company name, style and layout.",
    version=__version__,
    lifespan=lifespan,
)

# No CORS middleware: the session cookie must never be honoured cross-origin.


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.post(
    "/api/generate-logo",
    response_model=GenerateLogoResponse,
    # The body is read by hand, so describe it for the OpenAPI schema.
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {
                    "schema": GenerateLogoRequest.model_json_schema(by_alias=True),
                },
            },
        },
    },
)
async def generate_logo(request: Request) -> Response:
    """Generate one logo for the authenticated user.

    The body is parsed by hand, after authentication, so that an
    unauthenticated caller always sees 404 regardless of what it sent.

    Args:
        request: The incoming request.  Body must match
            :class:`GenerateLogoRequest`.

    Returns:
        200 JSON :class:`GenerateLogoResponse`, or an error response:
        404 (no user), 400 (invalid body), 429 (quota exhausted),
        401 (invalid Replicate key), 403 (insufficient Replicate credits).

    Raises:
        UnknownProviderError: Unmapped provider failures.
        ImageDownloadError: The generated image could not be fetched.
    """
    identity: ClerkIdentity = request.app.state.identity

    # --- Authentication ----------------------------------------------------
    user = await identity.current_user(request)
    if user is None:
        return Response(status_code=404)

    # --- Validation --------------------------------------------------------
    try:
        data = GenerateLogoRequest.model_validate_json(await request.body())
    except ValidationError as exc:
        return JSONResponse(
            status_code=400,
            content={"detail": jsonable_encoder(exc.errors(include_url=False))},
        )

    # --- Quota gate and provider client ------------------------------------
    limiter: FixedWindowRateLimiter | None = (
        None if data.user_api_key else request.app.state.limiter
    )
    image_client: ReplicateImageClient = request.app.state.image_client_factory(
        data.user_api_key
    )

    if data.user_api_key:
        logger.info(f"User {user.id} supplied their own key; quota skipped.")
        await identity.update_user_metadata(user.id, {"remaining": BYOK_SENTINEL})

    if limiter is not None:
        result = await limiter.limit(user.id)
        await identity.update_user_metadata(user.id, {"remaining": result.remaining})
        if not result.success:
            logger.info(f"User {user.id} is out of credits.")
            return PlainTextResponse(QUOTA_EXHAUSTED_MESSAGE, status_code=429)

    # --- Prompt ------------------------------------------------------------
    prompt = build_prompt(
        company_name=data.company_name,
        style=data.selected_style,
        layout=data.selected_layout,
        primary_color=data.selected_primary_color,
        background_color=data.selected_background_color,
        additional_info=data.additional_info,
    )

    # --- Generate and transcode --------------------------------------------
    try:
        image_url = await image_client.generate(prompt)
        b64_image = await image_client.download_b64(image_url)
    except ProviderAuthError:
        logger.warning(f"Replicate rejected the API key for user {user.id}.")
        return PlainTextResponse(INVALID_API_KEY_MESSAGE, status_code=401)
    except ProviderCreditsError:
        logger.warning(f"Replicate account out of credits for user {user.id}.")
        return PlainTextResponse(INSUFFICIENT_CREDITS_MESSAGE, status_code=403)

    logger.info(f"Generated logo for user {user.id}.")
    return JSONResponse(
        status_code=200,
        content=GenerateLogoResponse(b64_json=b64_image, revised_prompt=prompt).model_dump(),
    )


@app.get("/api/config")
async def get_config() -> dict:
    """Return the option tables for the frontend.

    Returns:
        Dictionary with keys ``version``, ``styles``, ``layouts``,
        ``model_id`` and ``quota_enabled``.
    """
    return {
        "version": __version__,
        "styles": list(STYLE_LOOKUP),
        "layouts": list(LAYOUT_LOOKUP),
        "model_id": config.model_id,
        "quota_enabled": config.quota_enabled,
    }


@app.get("/api/health")
async def health() -> dict:
    """Liveness check."""
    return {"status": "ok", "version": __version__}


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port and log level from
    :data:`~logocreator.core.config.config`.  Defaults to ``0.0.0.0:8000``.

    This function is registered as the ``logocreator`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "logocreator.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
