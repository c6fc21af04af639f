"""
Unit tests for platform detection and the platform table.
"""

from pathlib import Path

import pytest

from nerdfonts.core.exceptions import UnsupportedPlatformError
from nerdfonts.core.platform import Platform, PlatformConfig, detect_platform


class TestDetectPlatform:
    """Test mapping of OS names to platforms."""

    def test_linux(self, temp_dir):
        proc_version = temp_dir / "version"
        proc_version.write_text("Linux version 6.1.0 (gcc version 12)")

        assert detect_platform("Linux", proc_version) == Platform.LINUX

    def test_wsl(self, temp_dir):
        proc_version = temp_dir / "version"
        proc_version.write_text("Linux version 5.15.90.1-microsoft-standard-WSL2 (Microsoft)")

        assert detect_platform("Linux", proc_version) == Platform.WSL

    def test_linux_without_proc_version(self, temp_dir):
        assert detect_platform("Linux", temp_dir / "absent") == Platform.LINUX

    def test_macos(self):
        assert detect_platform("Darwin") == Platform.MACOS

    @pytest.mark.parametrize("system", ["Windows", "CYGWIN_NT-10.0", "MINGW64_NT-10.0", "MSYS_NT-10.0"])
    def test_windows_variants(self, system):
        assert detect_platform(system) == Platform.WINDOWS

    def test_unsupported(self):
        with pytest.raises(UnsupportedPlatformError, match="FreeBSD"):
            detect_platform("FreeBSD")


class TestPlatformConfig:
    """Test the per-platform configuration table."""

    def test_linux_config(self, temp_dir):
        config = PlatformConfig.for_platform(Platform.LINUX, home=temp_dir)

        assert config.fonts_dir == temp_dir / ".local" / "share" / "fonts"
        assert config.refresh_command == ("fc-cache", "-fv")
        assert config.flat_extract is False
        assert config.file_mode == 0o644
        assert config.required_tools == ("fc-cache",)

    def test_wsl_extracts_flat(self, temp_dir):
        config = PlatformConfig.for_platform(Platform.WSL, home=temp_dir)

        assert config.flat_extract is True
        assert config.fonts_dir == temp_dir / ".local" / "share" / "fonts"

    def test_macos_config(self, temp_dir):
        config = PlatformConfig.for_platform(Platform.MACOS, home=temp_dir)

        assert config.fonts_dir == temp_dir / "Library" / "Fonts"
        assert config.chmod_fonts_only is True
        assert "atsutil" in config.refresh_command

    def test_windows_config(self, temp_dir, monkeypatch):
        monkeypatch.setenv("LOCALAPPDATA", str(temp_dir / "AppData"))
        config = PlatformConfig.for_platform(Platform.WINDOWS, home=temp_dir)

        assert config.fonts_dir == temp_dir / "AppData" / "Microsoft" / "Windows" / "Fonts"
        assert config.refresh_command is None
        assert config.flat_extract is True
        assert config.file_mode is None

    def test_config_is_immutable(self, linux_platform):
        with pytest.raises(AttributeError):
            linux_platform.fonts_dir = Path("/elsewhere")

    def test_with_fonts_dir(self, linux_platform, temp_dir):
        custom = linux_platform.with_fonts_dir(temp_dir / "custom")

        assert custom.fonts_dir == temp_dir / "custom"
        assert linux_platform.fonts_dir != custom.fonts_dir
        assert custom.platform == Platform.LINUX
