"""Nerd Fonts Manager
==================

Cross-platform command-line utility that downloads, installs, verifies,
previews and removes patched Nerd Fonts from the upstream release feed.
"""

__version__ = "1.0.1"
__author__ = "Nerd Fonts Manager Team"

from .core.config import InstallerSettings
from .core.exceptions import (
    CatalogUnavailableError,
    FontInstallError,
    InvalidSelectionError,
    NerdFontsError,
)
from .core.models import (
    FontCatalog,
    InstallationRequest,
    InstallResult,
    InstallStatus,
    InstallSummary,
)
from .core.platform import Platform, PlatformConfig
from .fonts import FontInstaller, FontManager

__all__ = [
    "CatalogUnavailableError",
    "FontCatalog",
    "FontInstallError",
    "FontInstaller",
    "FontManager",
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
