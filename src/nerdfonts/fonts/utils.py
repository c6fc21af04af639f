"""
Font Utilities
==============

Helpers for locating, validating and normalising installed font files.
"""

import logging
import os
import shutil
import subprocess
from pathlib import Path

from fontTools.ttLib import TTFont

from nerdfonts.core.exceptions import InvalidSelectionError
from nerdfonts.core.platform import FONT_EXTENSIONS, PlatformConfig

logger = logging.getLogger(__name__)

# Tables every usable TrueType/OpenType font carries
REQUIRED_TABLES = ("head", "name", "cmap")


def is_font_file(path: Path) -> bool:
    return path.suffix.lower() in FONT_EXTENSIONS


def font_directory(fonts_dir: Path, font: str) -> Path:
    """
    Return the directory of ``font`` directly below ``fonts_dir``.

    Raises:
        InvalidSelectionError: If the name is not a single path component
            or resolves outside the fonts root
    """
    if not font or font in (".", "..") or Path(font).name != font or "\\" in font:
        raise InvalidSelectionError(font, "Invalid font name")

    font_dir = fonts_dir / font
    if font_dir.resolve().parent != fonts_dir.resolve():
        raise InvalidSelectionError(font, "Invalid font name")
    return font_dir


def find_font_files(directory: Path) -> list[Path]:
    """Return every .ttf/.otf file below ``directory`` in sorted order."""
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.rglob("*") if p.is_file() and is_font_file(p))


def validate_font_file(font_path: Path, validator_command: str | None = None) -> bool:
    """
    Validate that a file is a usable font file.

    Uses the platform validator tool when one is configured, otherwise
    parses the font with fontTools.

    Args:
        font_path: Path to font file
        validator_command: Optional external validator (e.g. fc-validate)

    Returns:
        True if valid font file, False otherwise
    """
    if not is_font_file(font_path) or not os.access(font_path, os.R_OK):
        return False

    if validator_command:
        try:
            result = subprocess.run(
                [validator_command, str(font_path)],
                capture_output=True,
                check=False,
            )
        except OSError as e:
            logger.debug(f"Validator {validator_command} unavailable: {e}")
        else:
            return result.returncode == 0

    try:
        with TTFont(font_path) as font:
            for tag in REQUIRED_TABLES:
                font[tag]
    except Exception as e:
        logger.debug(f"fontTools could not parse {font_path}: {e}")
        return False

    return True


def normalize_permissions(font_dir: Path, platform_config: PlatformConfig) -> int:
    """
    Apply the platform file mode to installed files.

    Returns:
        Number of files changed
    """
    if platform_config.file_mode is None:
        return 0

    changed = 0
    for path in font_dir.rglob("*"):
        if not path.is_file():
            continue
        if platform_config.chmod_fonts_only and not is_font_file(path):
            continue
        try:
            path.chmod(platform_config.file_mode)
            changed += 1
        except OSError as e:
            logger.warning(f"Could not set permissions on {path}: {e}")
    return changed


def remove_windows_compatible(fonts_dir: Path) -> int:
    """Remove the ``Windows Compatible`` variants some archives ship."""
    if not fonts_dir.is_dir():
        return 0

    removed = 0
    for path in sorted(fonts_dir.rglob("Windows Compatible"), reverse=True):
        if path.is_dir():
            shutil.rmtree(path, ignore_errors=True)
            removed += 1
    return removed


def refresh_font_cache(platform_config: PlatformConfig) -> bool:
    """Run the platform font cache refresh command."""
    command = platform_config.refresh_command
    if not command:
        logger.info("Please restart Windows to refresh font cache")
        return False

    executable = command[1] if command[0] == "sudo" and len(command) > 1 else command[0]
    if shutil.which(executable) is None:
        logger.warning(f"{executable} not found, skipping font cache refresh")
        return False

    logger.info("Refreshing font cache...")
    result = subprocess.run(list(command), capture_output=True, text=True, check=False)
    if result.returncode != 0:
        logger.warning(f"Font cache refresh failed: {result.stderr.strip()}")
        return False
    return True
