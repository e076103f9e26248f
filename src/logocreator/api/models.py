"""Pydantic request and response models for the Logo Creator API.

Wire field names are camelCase to match the browser client; Python attribute
names are snake_case.  Both spellings are accepted on input.

Models
------
GenerateLogoRequest
    Payload for ``POST /api/generate-logo``.
GenerateLogoResponse
    Successful ``POST /api/generate-logo`` result.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

StyleName = Literal["Flashy", "Tech", "Modern", "Playful", "Abstract", "Minimal"]


class GenerateLogoRequest(BaseModel):
    """Request body for the ``POST /api/generate-logo`` endpoint.

    Attributes:
        user_api_key: Caller's own Replicate token.  When present, quota is
            not enforced.
        company_name: Company name to render in the logo.
        selected_layout: ``"Solo"``, ``"Side"`` or ``"Stack"``.  Any other
            value is accepted and treated as ``"Solo"``.
        selected_style: One of the six style names.
        selected_primary_color: Primary colour name.
        selected_background_color: Background colour name.
        additional_info: Optional free-text notes appended to the prompt.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_api_key: str | None = Field(
        default=None,
        alias="userAPIKey",
        description="Caller's own Replicate API token (bypasses quota).",
    )
    company_name: str = Field(
        ...,
        alias="companyName",
        description="Company name to include in the logo.",
    )
    selected_layout: str = Field(
        ...,
        alias="selectedLayout",
        description="Layout name: 'Solo', 'Side' or 'Stack' (others fall back to 'Solo').",
    )
    selected_style: StyleName = Field(
        ...,
        alias="selectedStyle",
        description="Style name.",
    )
    selected_primary_color: str = Field(
        ...,
        alias="selectedPrimaryColor",
        description="Primary colour.",
    )
    selected_background_color: str = Field(
        ...,
        alias="selectedBackgroundColor",
        description="Background colour.",
    )
    additional_info: str | None = Field(
        default=None,
        alias="additionalInfo",
        description="Optional extra instructions for the image model.",
    )


class GenerateLogoResponse(BaseModel):
    """Response body for a successful generation.

    Attributes:
        b64_json: The generated image, base64-encoded.
        revised_prompt: The exact prompt sent to the image model.
    """

    b64_json: str
    revised_prompt: str
