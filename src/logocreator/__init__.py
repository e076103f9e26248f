"""Logo Creator - authenticated, quota-gated logo generation on Replicate."""

__version__ = "0.1.0"

from logocreator.core.config import LogoCreatorConfig, config

__all__ = [
    "LogoCreatorConfig",
    "config",
]
