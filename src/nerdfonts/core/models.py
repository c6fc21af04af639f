"""Data models shared across the installer components."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

DOWNLOAD_BASE_URL = "https://github.com/ryanoasis/nerd-fonts/releases/download"
ARCHIVE_SUFFIX = ".zip"


class FontCatalogEntry(BaseModel):
    """A single installable font within a release."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Font name, unique within a release")
    release: str = Field(..., min_length=1, description="Release tag the font belongs to")

    @property
    def archive_name(self) -> str:
        return f"{self.name}{ARCHIVE_SUFFIX}"

    @property
    def download_url(self) -> str:
        return f"{DOWNLOAD_BASE_URL}/{self.release}/{self.archive_name}"


class FontCatalog(BaseModel):
    """The fonts published in one release of the remote feed."""

    model_config = ConfigDict(frozen=True)

    release: str
    entries: tuple[FontCatalogEntry, ...] = ()

    @property
    def names(self) -> list[str]:
        return [entry.name for entry in self.entries]

    def __contains__(self, font_name: object) -> bool:
        return any(entry.name == font_name for entry in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, font_name: str) -> FontCatalogEntry | None:
        for entry in self.entries:
            if entry.name == font_name:
                return entry
        return None

    @classmethod
    def from_names(cls, release: str, names: list[str]) -> "FontCatalog":
        return cls(
            release=release,
            entries=tuple(FontCatalogEntry(name=name, release=release) for name in names),
        )


class InstallationRequest(BaseModel):
    """Resolved fonts and flags for one install invocation."""

    model_config = ConfigDict(frozen=True)

    fonts: tuple[str, ...] = Field(..., description="Ordered font names to install")
    fonts_dir: Path = Field(..., description="Fonts root directory")
    force: bool = Field(False, description="Reinstall fonts that already exist")
    verify: bool = Field(False, description="Validate extracted font files")
    no_backup: bool = Field(False, description="Skip the pre-install backup")
    parallelism: int = Field(3, ge=1, description="Maximum concurrent installations")
    proxy: str | None = Field(None, description="Proxy URL for downloads")

    @field_validator("fonts")
    @classmethod
    def fonts_not_empty(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v:
            raise ValueError("at least one font must be selected")
        return v


class InstallStatus(Enum):
    """Terminal states of a single font operation."""

    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class InstallResult:
    """Outcome of installing or removing a single font."""

    font: str
    status: InstallStatus
    message: str = ""
    duration_ms: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.status != InstallStatus.FAILED


@dataclass
class InstallSummary:
    """Outcome of a whole batch, in completion order."""

    results: list[InstallResult] = field(default_factory=list)
    backup_path: Path | None = None

    @property
    def successful(self) -> list[InstallResult]:
        return [r for r in self.results if r.status == InstallStatus.SUCCESS]

    @property
    def skipped(self) -> list[InstallResult]:
        return [r for r in self.results if r.status == InstallStatus.SKIPPED]

    @property
    def failed(self) -> list[InstallResult]:
        return [r for r in self.results if r.status == InstallStatus.FAILED]

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)

    def get(self, font: str) -> InstallResult | None:
        for result in self.results:
            if result.font == font:
                return result
        return None
