"""
Integration tests for the command line interface.
"""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from nerdfonts import __version__
from nerdfonts.cli import cli
from nerdfonts.core.platform import PlatformConfig


def output_lines(result):
    """Program output without log records."""
    return [line for line in result.output.splitlines() if line and not line.startswith("[")]


@pytest.fixture
def env(temp_dir, monkeypatch, linux_platform, fake_downloader):
    """Isolate the CLI from the real home directory, platform and network."""
    log_file = temp_dir / "nerd-fonts.log"
    config_file = temp_dir / "config"
    for name in ("FONTS_DIR", "PARALLEL_DOWNLOADS", "PROXY_URL"):
        monkeypatch.delenv(f"NERD_FONTS_{name}", raising=False)
    monkeypatch.setenv("NERD_FONTS_LOG_FILE", str(log_file))
    monkeypatch.setenv("NERD_FONTS_CACHE_DIR", str(temp_dir / "cache"))
    monkeypatch.setattr("nerdfonts.core.config.DEFAULT_CONFIG_FILE", config_file)

    with (
        patch.object(PlatformConfig, "detect", return_value=linux_platform),
        patch("nerdfonts.cli.check_dependencies"),
        patch("nerdfonts.fonts.manager.ArchiveDownloader", return_value=fake_downloader),
        patch("nerdfonts.fonts.manager.refresh_font_cache"),
    ):
        yield {
            "log_file": log_file,
            "config_file": config_file,
            "fonts_dir": linux_platform.fonts_dir,
            "downloader": fake_downloader,
            "version_file": temp_dir / "cache" / "version",
        }


@pytest.fixture
def runner():
    return CliRunner()


class TestInstallCommand:
    """Test ``install``."""

    def test_install_fonts_in_parallel(self, runner, env):
        result = runner.invoke(cli, ["install", "--fonts", "FiraCode,Hack", "--parallel", "2"])

        assert result.exit_code == 0, result.output
        assert (env["fonts_dir"] / "FiraCode").is_dir()
        assert (env["fonts_dir"] / "Hack").is_dir()
        log = env["log_file"].read_text()
        assert log.count("Successfully installed") == 2
        assert "Starting Nerd Fonts install on linux" in log
        assert "Operation complete!" in log
        assert "Check the log file for details" in result.output

    def test_invalid_profile_fails_before_network(self, runner, env):
        result = runner.invoke(cli, ["install", "--profile", "nonexistent"])

        assert result.exit_code == 1
        assert "Invalid profile: nonexistent" in env["log_file"].read_text()
        assert env["downloader"].downloads == []
        assert not env["version_file"].exists()

    def test_unknown_font(self, runner, env):
        result = runner.invoke(cli, ["install", "--fonts", "NoSuchFont"])

        assert result.exit_code == 1
        assert "Invalid font selection: NoSuchFont" in env["log_file"].read_text()
        assert env["downloader"].downloads == []

    def test_failed_font_exits_nonzero(self, runner, env):
        del env["downloader"].archives["Hack"]

        result = runner.invoke(cli, ["install", "--fonts", "FiraCode,Hack", "--no-backup"])

        assert result.exit_code == 1
        assert (env["fonts_dir"] / "FiraCode").is_dir()
        assert "Failed: Hack" in env["log_file"].read_text()

    def test_catalog_unavailable(self, runner, env):
        env["downloader"].payload = None

        result = runner.invoke(cli, ["install", "--all"])

        assert result.exit_code == 1
        assert "Failed to fetch font information" in env["log_file"].read_text()

    def test_default_command_is_interactive_install(self, runner, env):
        result = runner.invoke(cli, [], input="x\n2\n")

        assert result.exit_code == 0, result.output
        assert "2. Hack" in result.output
        assert (env["fonts_dir"] / "Hack").is_dir()
        assert "'x' is not a valid font number." in env["log_file"].read_text()


class TestOtherCommands:
    """Test ``uninstall``, ``list``, ``profile`` and ``update``."""

    def test_uninstall_missing_font(self, runner, env):
        result = runner.invoke(cli, ["uninstall", "--fonts", "Hack"])

        assert result.exit_code == 1
        assert "Font Hack is not installed" in env["log_file"].read_text()

    def test_uninstall(self, runner, env):
        (env["fonts_dir"] / "Hack").mkdir(parents=True)

        result = runner.invoke(cli, ["uninstall", "--fonts", "Hack", "--no-backup"])

        assert result.exit_code == 0, result.output
        assert not (env["fonts_dir"] / "Hack").exists()

    def test_uninstall_rejects_parent_directory(self, runner, env):
        env["fonts_dir"].mkdir(parents=True)

        result = runner.invoke(cli, ["uninstall", "--fonts", "..", "--no-backup"])

        assert result.exit_code == 1
        assert env["fonts_dir"].is_dir()
        assert "Invalid font name: .." in env["log_file"].read_text()

    def test_list_profile(self, runner, env):
        result = runner.invoke(cli, ["list", "--profile", "terminal"])

        assert result.exit_code == 0, result.output
        assert output_lines(result) == ["Meslo", "UbuntuMono", "DejaVuSansMono"]

    def test_list_catalog(self, runner, env):
        (env["fonts_dir"] / "Hack").mkdir(parents=True)

        result = runner.invoke(cli, ["list"])

        assert result.exit_code == 0, result.output
        assert "Available fonts in v3.2.1 (7 total):" in result.output
        assert "  - Hack [installed]" in result.output
        assert "  - FiraCode" in output_lines(result)

    def test_profile(self, runner, env):
        result = runner.invoke(cli, ["profile"])

        assert result.exit_code == 0, result.output
        assert "coding: " in result.output
        assert "  - JetBrainsMono" in result.output
        assert "all-mono: " in result.output

    def test_update_reinstalls_installed_fonts(self, runner, env):
        (env["fonts_dir"] / "Hack").mkdir(parents=True)

        result = runner.invoke(cli, ["update", "--no-backup"])

        assert result.exit_code == 0, result.output
        assert env["downloader"].downloads == ["Hack"]
        assert (env["fonts_dir"] / "Hack" / "FontNerdFont-Regular.ttf").exists()

    def test_update_does_not_take_force(self, runner, env):
        result = runner.invoke(cli, ["update", "--force"])

        assert result.exit_code == 2
        assert env["downloader"].downloads == []

    def test_install_force_reinstalls(self, runner, env):
        (env["fonts_dir"] / "Hack").mkdir(parents=True)

        result = runner.invoke(cli, ["install", "--fonts", "Hack", "--force", "--no-backup"])

        assert result.exit_code == 0, result.output
        assert env["downloader"].downloads == ["Hack"]
        assert (env["fonts_dir"] / "Hack" / "FontNerdFont-Regular.ttf").exists()

    def test_update_when_current(self, runner, env):
        env["version_file"].parent.mkdir(parents=True)
        env["version_file"].write_text("v3.2.1\n")

        result = runner.invoke(cli, ["update"])

        assert result.exit_code == 0, result.output
        assert env["downloader"].downloads == []
        assert "Fonts are up to date (v3.2.1)" in env["log_file"].read_text()


class TestConfiguration:
    """Test configuration handling."""

    def test_save_config(self, runner, env, temp_dir):
        custom = temp_dir / "custom-fonts"

        result = runner.invoke(
            cli, ["profile", "--dir", str(custom), "--parallel", "5", "--save-config"]
        )

        assert result.exit_code == 0, result.output
        saved = env["config_file"].read_text()
        assert f'FONTS_DIR="{custom}"' in saved
        assert "PARALLEL_DOWNLOADS=5" in saved

    def test_config_file_is_used(self, runner, env, temp_dir):
        custom = temp_dir / "from-config"
        env["config_file"].write_text(f'FONTS_DIR="{custom}"\nPARALLEL_DOWNLOADS=1\n')

        result = runner.invoke(cli, ["install", "--fonts", "Hack"])

        assert result.exit_code == 0, result.output
        assert (custom / "Hack").is_dir()

    def test_missing_config_file(self, runner, env, temp_dir):
        result = runner.invoke(cli, ["profile", "--config", str(temp_dir / "absent")])

        assert result.exit_code == 1

    def test_invalid_parallel(self, runner, env):
        result = runner.invoke(cli, ["install", "--all", "--parallel", "0"])

        assert result.exit_code == 2

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output
