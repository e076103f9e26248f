"""Core functionality for logo generation.

Architecture Overview
---------------------
1. **Configuration Layer** (config.py):
   - Environment-based configuration using Pydantic Settings
   - All settings prefixed with LOGOCREATOR_ in .env files

2. **Collaborator Layer**:
   - identity.py: Clerk session verification and metadata writes
   - quota.py: Redis fixed-window limiter
   - image_client.py: Replicate generation and image download

3. **Support Utilities**:
   - prompt_builder.py: Style/layout tables and prompt compilation
   - errors.py: Typed error taxonomy
"""

from logocreator.core.config import LogoCreatorConfig, config
from logocreator.core.errors import (
    ImageDownloadError,
    LogoCreatorError,
    ProviderAuthError,
    ProviderCreditsError,
    ProviderError,
    UnknownProviderError,
)
from logocreator.core.prompt_builder import LAYOUT_LOOKUP, STYLE_LOOKUP, build_prompt

__all__ = [
    "LogoCreatorConfig",
    "config",
    "LogoCreatorError",
    "ProviderError",
    "ProviderAuthError",
    "ProviderCreditsError",
    "UnknownProviderError",
    "ImageDownloadError",
    "STYLE_LOOKUP",
    "LAYOUT_LOOKUP",
    "build_prompt",
]
