"""Replicate image generation and download.

:class:`ReplicateImageClient` runs one prediction per call and turns every
provider failure into a :mod:`logocreator.core.errors` type before it leaves
this module.  Nothing is retried.

Generation Parameters
---------------------
Every logo is generated at 768x768 as WebP with output quality 80.
"""

from __future__ import annotations

import base64
import logging
from typing import Any

import httpx
import replicate
from replicate.exceptions import ReplicateException

from logocreator.core.errors import (
    ImageDownloadError,
    ProviderAuthError,
    ProviderCreditsError,
    ProviderError,
    UnknownProviderError,
)

logger = logging.getLogger(__name__)

IMAGE_WIDTH = 768
IMAGE_HEIGHT = 768
OUTPUT_FORMAT = "webp"
OUTPUT_QUALITY = 80

_INVALID_TOKEN_MARKER = "Invalid API token"
_INSUFFICIENT_CREDITS_MARKER = "insufficient credits"


def classify_provider_error(exc: Exception) -> ProviderError:
    """Map a provider exception to the error taxonomy.

    The provider's ``detail`` message is used when present, otherwise the
    exception's string form.

    Args:
        exc: Exception raised by the Replicate client.

    Returns:
        A :class:`ProviderAuthError`, :class:`ProviderCreditsError`, or
        :class:`UnknownProviderError`.
    """
    detail = getattr(exc, "detail", None)
    if not isinstance(detail, str):
        detail = str(exc)

    if _INVALID_TOKEN_MARKER in detail:
        return ProviderAuthError(detail)
    if _INSUFFICIENT_CREDITS_MARKER in detail:
        return ProviderCreditsError(detail)
    return UnknownProviderError(detail)


def first_output_url(output: Any) -> str:
    """Return the download URL of the first prediction output.

    The output may be a single item or a list of items.  Each item is either
    a file output exposing ``.url`` or a plain URL string.

    Raises:
        UnknownProviderError: If the output is empty.
    """
    if isinstance(output, (list, tuple)):
        if not output:
            raise UnknownProviderError("Provider returned no output")
        output = output[0]
    return str(getattr(output, "url", output))


class ReplicateImageClient:
    """Generate one logo image on Replicate and fetch it.

    Args:
        api_token: Replicate API token.  When ``None`` the replicate library
            falls back to the ``REPLICATE_API_TOKEN`` environment variable.
        model_id: Replicate model reference.
        http_client: Client used to download the generated image.
        replicate_client: Optional pre-built Replicate client.
    """

    def __init__(
        self,
        api_token: str | None,
        *,
        model_id: str,
        http_client: httpx.AsyncClient,
        replicate_client: replicate.Client | None = None,
    ) -> None:
        self.model_id = model_id
        self._http = http_client
        self._replicate = replicate_client or replicate.Client(api_token=api_token)

    async def generate(self, prompt: str) -> str:
        """Run the model once and return the output image URL.

        Raises:
            ProviderError: Classified provider failure.
        """
        logger.info(f"Running {self.model_id} ({len(prompt)} char prompt)")
        try:
            output = await self._replicate.async_run(
                self.model_id,
                input={
                    "prompt": prompt,
                    "width": IMAGE_WIDTH,
                    "height": IMAGE_HEIGHT,
                    "output_format": OUTPUT_FORMAT,
                    "output_quality": OUTPUT_QUALITY,
                },
            )
        except (ReplicateException, httpx.HTTPError) as exc:
            raise classify_provider_error(exc) from exc
        return first_output_url(output)

    async def download_b64(self, url: str) -> str:
        """Download *url* and return its bytes as base64 text.

        Raises:
            ImageDownloadError: If the response status is not 2xx.
        """
        response = await self._http.get(url)
        if not response.is_success:
            raise ImageDownloadError(url, response.status_code)
        return base64.b64encode(response.content).decode("ascii")
