"""
Platform Detection
==================

Detects the host operating system once at startup and maps it to an
immutable ``PlatformConfig`` holding every platform-specific path and
command the installer needs.
"""

import os
import platform as _platform
import shutil
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

from .exceptions import UnsupportedPlatformError

FONT_EXTENSIONS = (".ttf", ".otf")


class Platform(Enum):
    """Supported host platforms."""

    LINUX = "linux"
    WSL = "wsl"
    MACOS = "macos"
    WINDOWS = "windows"


@dataclass(frozen=True)
class PlatformConfig:
    """Platform-specific settings, constructed once and passed around."""

    platform: Platform
    fonts_dir: Path
    refresh_command: tuple[str, ...] | None
    flat_extract: bool
    file_mode: int | None
    chmod_fonts_only: bool = False
    validator_command: str | None = None
    required_tools: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return self.platform.value

    def with_fonts_dir(self, fonts_dir: Path) -> "PlatformConfig":
        """Return a copy pointing at a custom fonts directory."""
        return replace(self, fonts_dir=fonts_dir)

    @classmethod
    def for_platform(cls, target: Platform, home: Path | None = None) -> "PlatformConfig":
        """Build the configuration table entry for ``target``."""
        home = home or Path.home()

        if target in (Platform.LINUX, Platform.WSL):
            return cls(
                platform=target,
                fonts_dir=home / ".local" / "share" / "fonts",
                refresh_command=("fc-cache", "-fv"),
                flat_extract=target == Platform.WSL,
                file_mode=0o644,
                validator_command=shutil.which("fc-validate"),
                required_tools=("fc-cache",),
            )
        if target == Platform.MACOS:
            return cls(
                platform=target,
                fonts_dir=home / "Library" / "Fonts",
                refresh_command=("sudo", "atsutil", "databases", "-remove"),
                flat_extract=False,
                file_mode=0o644,
                chmod_fonts_only=True,
            )
        if target == Platform.WINDOWS:
            local_appdata = os.environ.get("LOCALAPPDATA")
            base = Path(local_appdata) if local_appdata else home / "AppData" / "Local"
            return cls(
                platform=target,
                fonts_dir=base / "Microsoft" / "Windows" / "Fonts",
                refresh_command=None,
                flat_extract=True,
                file_mode=None,
            )
        raise UnsupportedPlatformError(str(target))

    @classmethod
    def detect(cls) -> "PlatformConfig":
        """Detect the running platform and build its configuration."""
        return cls.for_platform(detect_platform())


def detect_platform(system: str | None = None, proc_version: Path | None = None) -> Platform:
    """
    Map the OS name reported by Python onto a ``Platform``.

    Args:
        system: Override for ``platform.system()``
        proc_version: Override for ``/proc/version`` (WSL detection)

    Raises:
        UnsupportedPlatformError: If the system is not recognised
    """
    system = system if system is not None else _platform.system()
    proc_version = proc_version or Path("/proc/version")

    if system == "Linux":
        try:
            if "microsoft" in proc_version.read_text(errors="ignore").lower():
                return Platform.WSL
        except OSError:
            pass
        return Platform.LINUX
    if system == "Darwin":
        return Platform.MACOS
    if system == "Windows" or system.startswith(("CYGWIN", "MINGW", "MSYS")):
        return Platform.WINDOWS

    raise UnsupportedPlatformError(system or "unknown")
