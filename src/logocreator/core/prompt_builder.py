"""Logo prompt compilation from fixed style and layout tables.

The prompt is composed from a fixed preamble, one style phrase chosen by
name, one layout phrase chosen by name, the two colours, the company name,
and optional free-text notes.

Template Structure::

    [Fixed preamble] [Style phrase]

    Layout style: [Layout phrase]. Primary color is [primary] and background
    color is [background]. The company name is [company], make sure to include
    the company name in the logo. [Additional info: notes]

Colours are lower-cased.  The company name and notes are inserted verbatim.
The ``Additional info:`` fragment is omitted entirely when no notes are
given, and the compiled prompt never ends in whitespace.

Usage
-----
::

    compiled = build_prompt(
        company_name="Acme",
        style="Minimal",
        layout="Stack",
        primary_color="Blue",
        background_color="White",
        additional_info="bold font",
    )
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Fixed preamble.
# ---------------------------------------------------------------------------

_PREAMBLE = (
    "A single logo, high-quality, award-winning professional design, made for both "
    "digital and print media, only contains a few vector shapes,"
)

# ---------------------------------------------------------------------------
# Style phrases, in display order.
# ---------------------------------------------------------------------------

STYLE_LOOKUP: dict[str, str] = {
    "Flashy": (
        "Flashy, attention grabbing, bold, futuristic, and eye-catching. Use vibrant "
        "neon colors with metallic, shiny, and glossy accents."
    ),
    "Tech": (
        "highly detailed, sharp focus, cinematic, photorealistic, Minimalist, clean, "
        "sleek, neutral color pallete with subtle accents, clean lines, shadows, and flat."
    ),
    "Modern": (
        "modern, forward-thinking, flat design, geometric shapes, clean lines, natural "
        "colors with subtle accents, use strategic negative space to create visual interest."
    ),
    "Playful": "playful, lighthearted, bright bold colors, rounded shapes, lively.",
    "Abstract": (
        "abstract, artistic, creative, unique shapes, patterns, and textures to create "
        "a visually interesting and wild logo."
    ),
    "Minimal": (
        "minimal, simple, timeless, versatile, single color logo, use negative space, "
        "flat design with minimal details, Light, soft, and subtle."
    ),
}

# ---------------------------------------------------------------------------
# Layout phrases, in display order.  ``Solo`` doubles as the fallback.
# ---------------------------------------------------------------------------

DEFAULT_LAYOUT = "Solo"

LAYOUT_LOOKUP: dict[str, str] = {
    "Solo": (
        "single centered logo with the company name integrated within or positioned "
        "elegantly below the logo symbol"
    ),
    "Side": (
        "horizontal layout with the logo symbol on the left side and company name text "
        "on the right side"
    ),
    "Stack": (
        "vertical stacked layout with the logo symbol positioned above and company name "
        "text positioned below"
    ),
}


def resolve_layout(layout: str) -> str:
    """Return the layout phrase for *layout*.

    Any name outside :data:`LAYOUT_LOOKUP` falls back to the ``Solo``
    phrase.

    Args:
        layout: Layout name as submitted by the client.

    Returns:
        The descriptive layout phrase.
    """
    if layout in LAYOUT_LOOKUP:
        return LAYOUT_LOOKUP[layout]
    return LAYOUT_LOOKUP[DEFAULT_LAYOUT]


def build_prompt(
    *,
    company_name: str,
    style: str,
    layout: str,
    primary_color: str,
    background_color: str,
    additional_info: str | None = None,
) -> str:
    """Compile the logo prompt.

    Args:
        company_name: Company name, inserted verbatim.
        style: One of the :data:`STYLE_LOOKUP` keys.
        layout: Layout name; unknown names fall back to ``Solo``.
        primary_color: Primary colour name (lower-cased in the prompt).
        background_color: Background colour name (lower-cased in the prompt).
        additional_info: Optional free-text notes.  Omitted when empty.

    Returns:
        The compiled prompt string.

    Raises:
        KeyError: If *style* is not a known style name.
    """
    style_phrase = STYLE_LOOKUP[style]
    layout_phrase = resolve_layout(layout)

    body = (
        f"Layout style: {layout_phrase}. "
        f"Primary color is {primary_color.lower()} and "
        f"background color is {background_color.lower()}. "
        f"The company name is {company_name}, "
        "make sure to include the company name in the logo."
    )
    if additional_info:
        body += f" Additional info: {additional_info}"

    return f"{_PREAMBLE} {style_phrase}\n\n{body}".rstrip()
