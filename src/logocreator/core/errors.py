"""Error taxonomy for logo generation.

Provider failures are classified once, at the point where the Replicate call
is made, into one of three kinds.  Route handlers match on the exception type
and never inspect provider payloads themselves.

Hierarchy
---------
::

    LogoCreatorError
    ├── ProviderError
    │   ├── ProviderAuthError       -> 401 "Your API key is invalid."
    │   ├── ProviderCreditsError    -> 403 billing pointer
    │   └── UnknownProviderError    -> propagated (500)
    └── ImageDownloadError          -> propagated (500)
"""

from __future__ import annotations


class LogoCreatorError(Exception):
    """Base class for all Logo Creator errors."""


class ProviderError(LogoCreatorError):
    """A failure reported by the image-generation provider.

    Attributes:
        detail: The provider's detail message, or the string form of the
            underlying exception when the provider gave none.
    """

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ProviderAuthError(ProviderError):
    """The provider rejected the API token."""


class ProviderCreditsError(ProviderError):
    """The provider account has insufficient credits."""


class UnknownProviderError(ProviderError):
    """Any other provider failure."""


class ImageDownloadError(LogoCreatorError):
    """The generated image could not be downloaded."""

    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(f"Failed to download generated image (HTTP {status_code})")
        self.url = url
        self.status_code = status_code
