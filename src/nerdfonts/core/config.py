"""Configuration management for the Nerd Fonts manager."""

import logging
from pathlib import Path

from dotenv import dotenv_values
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigFileNotFoundError, InvalidConfigValueError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path.home() / ".config" / "nerd-fonts" / "config"
DEFAULT_CACHE_DIR = Path.home() / ".cache" / "nerd-fonts"
DEFAULT_LOG_FILE = Path.home() / ".nerd-fonts-installer.log"

# Keys written to the config file, mapped to settings fields
CONFIG_FILE_KEYS = {
    "FONTS_DIR": "fonts_dir",
    "PARALLEL_DOWNLOADS": "parallel_downloads",
    "PROXY_URL": "proxy_url",
}


class InstallerSettings(BaseSettings):
    """Persisted and overridable installer settings."""

    model_config = SettingsConfigDict(
        env_prefix="NERD_FONTS_",
        case_sensitive=False,
        extra="ignore",
    )

    fonts_dir: Path | None = Field(None, description="Fonts directory (platform default if unset)")
    parallel_downloads: int = Field(3, ge=1, description="Number of parallel downloads")
    proxy_url: str | None = Field(None, description="Proxy URL for downloads")
    log_file: Path = Field(DEFAULT_LOG_FILE, description="Append-only log file")
    cache_dir: Path = Field(DEFAULT_CACHE_DIR, description="Cache root directory")

    @field_validator("proxy_url")
    @classmethod
    def empty_proxy_is_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v

    @field_validator("fonts_dir", "log_file", "cache_dir", mode="before")
    @classmethod
    def expand_user(cls, v):
        if isinstance(v, str):
            if not v.strip():
                return None
            return Path(v).expanduser()
        if isinstance(v, Path):
            return v.expanduser()
        return v

    @property
    def version_file(self) -> Path:
        return self.cache_dir / "version"

    @property
    def previews_dir(self) -> Path:
        return self.cache_dir / "previews"

    @property
    def temp_dir(self) -> Path:
        return self.cache_dir / "temp"

    @classmethod
    def load(cls, config_path: Path | None = None, **overrides) -> "InstallerSettings":
        """
        Load settings from a key=value config file plus explicit overrides.

        Args:
            config_path: Explicit config file; must exist when given.
                Falls back to the default path, which may be absent.
            **overrides: Values taking priority over the file (``None`` ignored)

        Returns:
            Loaded settings
        """
        if config_path is not None and not config_path.is_file():
            raise ConfigFileNotFoundError(str(config_path))
        path = config_path or DEFAULT_CONFIG_FILE

        values = {}
        if path.is_file():
            for key, raw in dotenv_values(path).items():
                field_name = CONFIG_FILE_KEYS.get(key.upper())
                if field_name and raw:
                    values[field_name] = raw
            logger.debug(f"Loaded configuration from {path}")

        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return cls(**values)
        except ValidationError as e:
            raise InvalidConfigValueError(str(path), str(e)) from e

    def save(self, config_path: Path | None = None) -> Path:
        """Persist the file-backed settings as key=value lines."""
        path = config_path or DEFAULT_CONFIG_FILE
        path.parent.mkdir(parents=True, exist_ok=True)

        lines = [
            "# Nerd Fonts Installer Configuration",
            f'FONTS_DIR="{self.fonts_dir or ""}"',
            f"PARALLEL_DOWNLOADS={self.parallel_downloads}",
            f'PROXY_URL="{self.proxy_url or ""}"',
        ]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        logger.info(f"Configuration saved to {path}")
        return path
