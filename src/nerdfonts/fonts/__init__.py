"""Font Management Module
======================

Catalog resolution, font selection, installation, backup and preview.
"""

from .backup import BackupManager
from .catalog import CatalogResolver, parse_release
from .installer import FontInstaller
from .manager import FontManager
from .preview import FontPreviewer
from .profiles import PROFILES, get_profile
from .selection import select_fonts
from .utils import find_font_files, validate_font_file

__all__ = [
    "PROFILES",
    "BackupManager",
    "CatalogResolver",
    "FontInstaller",
    "FontManager",
    "FontPreviewer",
    "find_font_files",
    "get_profile",
    "parse_release",
    "select_fonts",
    "validate_font_file",
]
