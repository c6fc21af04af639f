"""Core configuration, models, platform detection and exceptions."""

from .config import InstallerSettings
from .exceptions import (
    CatalogUnavailableError,
    FontInstallError,
    InvalidSelectionError,
    NerdFontsError,
)
from .models import (
    FontCatalog,
    FontCatalogEntry,
    InstallationRequest,
    InstallResult,
    InstallStatus,
    InstallSummary,
)
from .platform import Platform, PlatformConfig

__all__ = [
    "CatalogUnavailableError",
    "FontCatalog",
    "FontCatalogEntry",
    "FontInstallError",
    "InstallResult",
    "InstallStatus",
    "InstallSummary",
    "InstallationRequest",
    "InstallerSettings",
    "InvalidSelectionError",
    "NerdFontsError",
    "Platform",
    "PlatformConfig",
]
