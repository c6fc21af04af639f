"""Custom exceptions for the Nerd Fonts manager."""

from typing import Any


class NerdFontsError(Exception):
    """Base exception for all Nerd Fonts manager errors."""

    def __init__(self, message: str, details: Any | None = None):
        super().__init__(message)
        self.details = details


class UnsupportedPlatformError(NerdFontsError):
    """Exception raised when the host operating system is not supported."""

    def __init__(self, system: str):
        super().__init__(f"Unsupported operating system: {system}")
        self.system = system


class MissingDependencyError(NerdFontsError):
    """Exception raised when required external tools are not installed."""

    def __init__(self, missing: list[str], hints: list[str] | None = None):
        message = f"Missing required dependencies: {' '.join(missing)}"
        if hints:
            message += "\n" + "\n".join(hints)
        super().__init__(message, details={"missing": missing, "hints": hints or []})
        self.missing = missing
        self.hints = hints or []


class ConfigurationError(NerdFontsError):
    """Exception raised for configuration errors."""


class ConfigFileNotFoundError(ConfigurationError):
    """Exception raised when an explicitly requested config file is missing."""

    def __init__(self, config_path: str):
        super().__init__(f"Configuration file not found: {config_path}")


class InvalidConfigValueError(ConfigurationError):
    """Exception raised when a config file holds an unusable value."""

    def __init__(self, config_path: str, error: str):
        super().__init__(f"Invalid configuration in {config_path}: {error}")


class CatalogUnavailableError(NerdFontsError):
    """Exception raised when the release catalog cannot be fetched or parsed."""

    def __init__(self, reason: str):
        super().__init__(f"Failed to fetch font information from the release feed: {reason}")


class InvalidSelectionError(NerdFontsError):
    """Exception raised when a requested font, profile or index is not valid."""

    def __init__(self, token: str, reason: str = "Invalid font selection"):
        super().__init__(f"{reason}: {token}")
        self.token = token


class FontInstallError(NerdFontsError):
    """Base for per-font failures that mark a single font as FAILED."""

    def __init__(self, font: str, message: str):
        super().__init__(message)
        self.font = font


class DownloadFailedError(FontInstallError):
    """Exception raised when an archive download fails."""

    def __init__(self, font: str, reason: str | None = None):
        message = f"Failed to download {font}"
        if reason:
            message += f": {reason}"
        super().__init__(font, message)


class CorruptArchiveError(FontInstallError):
    """Exception raised when a downloaded archive fails the integrity test."""

    def __init__(self, font: str, archive: str):
        super().__init__(font, f"The downloaded {archive} is corrupted")


class VerificationFailedError(FontInstallError):
    """Exception raised when extracted font files fail validation."""

    def __init__(self, font: str, files: list[str]):
        super().__init__(font, f"Font verification failed for {font}: {', '.join(files)}")
        self.files = files


class FontNotInstalledError(NerdFontsError):
    """Exception raised when operating on a font that is not installed."""

    def __init__(self, font: str):
        super().__init__(f"Font {font} is not installed")
        self.font = font


class PreviewError(NerdFontsError):
    """Exception raised when a font preview cannot be generated."""


class NoFontFileError(PreviewError):
    """Exception raised when an installed font directory has no font files."""

    def __init__(self, font: str):
        super().__init__(f"No font file found for {font}")


class SelfUpdateError(NerdFontsError):
    """Exception raised when the self-update operation fails."""
