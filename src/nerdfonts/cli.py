"""
Command Line Interface
======================

``nerd-fonts`` installs, updates, previews and removes Nerd Fonts.
Running it without a command starts an interactive install.
"""

import functools
import logging
import sys
from pathlib import Path

import click

from nerdfonts import __version__
from nerdfonts.core.config import InstallerSettings
from nerdfonts.core.dependencies import check_dependencies
from nerdfonts.core.exceptions import NerdFontsError
from nerdfonts.core.log import setup_logging
from nerdfonts.core.models import InstallSummary
from nerdfonts.core.platform import PlatformConfig
from nerdfonts.download import ArchiveDownloader
from nerdfonts.fonts import FontManager
from nerdfonts.fonts.preview import normalize_preview_text
from nerdfonts.fonts.profiles import PROFILE_DESCRIPTIONS, PROFILES, get_profile
from nerdfonts.fonts.selection import parse_font_list, select_fonts
from nerdfonts.update import SelfUpdater

logger = logging.getLogger("nerdfonts.cli")

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def common_options(func):
    """Options accepted by every command."""
    options = [
        click.option(
            "--dir",
            "-d",
            "fonts_dir",
            type=click.Path(file_okay=False, path_type=Path),
            help="Custom fonts directory",
        ),
        click.option(
            "--parallel",
            "-p",
            type=click.IntRange(min=1),
            help="Number of parallel downloads (default: 3)",
        ),
        click.option("--proxy", help="Use proxy for downloads"),
        click.option(
            "--log",
            "log_file",
            type=click.Path(dir_okay=False, path_type=Path),
            help="Custom log file location",
        ),
        click.option(
            "--config",
            "config_file",
            type=click.Path(dir_okay=False, path_type=Path),
            help="Use custom config file",
        ),
        click.option("--save-config", is_flag=True, help="Save current settings as default"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def selection_options(func):
    """Font selection options shared by install and update."""
    options = [
        click.option("--all", "-a", "install_all", is_flag=True, help="Install all fonts"),
        click.option("--fonts", "-f", help="Fonts to install (comma-separated)"),
        click.option("--profile", help="Use predefined installation profile"),
        click.option("--verify", is_flag=True, help="Verify font files after installation"),
        click.option("--no-backup", "-n", is_flag=True, help="Skip backup of existing fonts"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def handle_errors(func):
    """Log fatal errors identically to terminal and log file, then exit 1."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except NerdFontsError as e:
            logger.error(str(e))
            logger.debug("Traceback:", exc_info=True)
            sys.exit(1)

    return wrapper


def bootstrap(
    command: str,
    fonts_dir: Path | None = None,
    parallel: int | None = None,
    proxy: str | None = None,
    log_file: Path | None = None,
    config_file: Path | None = None,
    save_config: bool = False,
) -> FontManager:
    """Detect the platform, load settings, set up logging and check dependencies."""
    verbose = bool(click.get_current_context().find_root().params.get("verbose"))

    platform_config = PlatformConfig.detect()
    settings = InstallerSettings.load(
        config_file,
        fonts_dir=fonts_dir,
        parallel_downloads=parallel,
        proxy_url=proxy,
        log_file=log_file,
    )
    setup_logging(settings.log_file, verbose)
    settings.cache_dir.mkdir(parents=True, exist_ok=True)

    if save_config:
        settings.save(config_file)

    logger.info(f"Starting Nerd Fonts {command} on {platform_config.name}")
    check_dependencies(platform_config)
    return FontManager(settings, platform_config)


def finish(
    manager: FontManager, summary: InstallSummary | None = None, echo: bool = True
) -> None:
    """Report completion and exit 1 when any font failed."""
    if summary is not None and summary.has_failures:
        failed = ", ".join(result.font for result in summary.failed)
        logger.warning(f"Failed: {failed}")

    logger.info("Operation complete!")
    if echo:
        click.echo(
            f"\nOperation complete! Check the log file for details: {manager.settings.log_file}"
        )

    if summary is not None and summary.has_failures:
        sys.exit(1)


@click.group(invoke_without_command=True, context_settings=CONTEXT_SETTINGS)
@click.option("--update", "self_update", is_flag=True, help="Check for script updates")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.version_option(__version__, prog_name="nerd-fonts")
@click.pass_context
def cli(ctx, self_update, verbose):
    """Cross-Platform Nerd Fonts Installer.

    \b
    Examples:
        nerd-fonts install --fonts FiraCode,Hack --parallel 4
        nerd-fonts uninstall --fonts FiraCode
        nerd-fonts preview --fonts FiraCode
        nerd-fonts install --profile coding
        nerd-fonts update
        nerd-fonts --update
    """
    setup_logging(None, verbose)

    if self_update:
        run_self_update()
        ctx.exit(0)

    if ctx.invoked_subcommand is None:
        ctx.invoke(install)


@handle_errors
def run_self_update() -> None:
    settings = InstallerSettings.load()
    setup_logging(settings.log_file, logging.getLogger("nerdfonts").level == logging.DEBUG)
    downloader = ArchiveDownloader(proxy=settings.proxy_url)
    try:
        args = [arg for arg in sys.argv[1:] if arg != "--update"]
        SelfUpdater(downloader).check_and_update(args)
    finally:
        downloader.cleanup()


@cli.command()
@selection_options
@click.option("--force", is_flag=True, help="Force reinstall even if font exists")
@common_options
@handle_errors
def install(
    install_all,
    fonts,
    profile,
    force,
    verify,
    no_backup,
    fonts_dir,
    parallel,
    proxy,
    log_file,
    config_file,
    save_config,
):
    """Install fonts (default command)."""
    manager = bootstrap("install", fonts_dir, parallel, proxy, log_file, config_file, save_config)

    if profile:
        get_profile(profile)
    catalog = manager.fetch_catalog()
    selected = select_fonts(catalog, fonts=fonts, install_all=install_all, profile=profile)

    request = manager.build_request(selected, force=force, verify=verify, no_backup=no_backup)
    summary = manager.install(request, catalog)
    finish(manager, summary)


@cli.command()
@selection_options
@common_options
@handle_errors
def update(
    install_all,
    fonts,
    profile,
    verify,
    no_backup,
    fonts_dir,
    parallel,
    proxy,
    log_file,
    config_file,
    save_config,
):
    """Check for and install font updates.

    Updated fonts are always reinstalled, as with install --force.
    """
    manager = bootstrap("update", fonts_dir, parallel, proxy, log_file, config_file, save_config)

    if profile:
        get_profile(profile)
    _, catalog, available = manager.check_for_update()
    if not available:
        finish(manager)
        return

    logger.info("Proceeding with update...")
    if install_all or fonts or profile:
        selected = select_fonts(catalog, fonts=fonts, install_all=install_all, profile=profile)
    else:
        selected = manager.installed_fonts(catalog)
        if not selected:
            logger.info("No installed fonts to update")
            finish(manager)
            return

    request = manager.build_request(selected, force=True, verify=verify, no_backup=no_backup)
    summary = manager.install(request, catalog)
    finish(manager, summary)


@cli.command()
@click.option("--fonts", "-f", required=True, help="Fonts to remove (comma-separated)")
@click.option("--no-backup", "-n", is_flag=True, help="Skip backup of existing fonts")
@common_options
@handle_errors
def uninstall(fonts, no_backup, fonts_dir, parallel, proxy, log_file, config_file, save_config):
    """Remove installed fonts."""
    manager = bootstrap("uninstall", fonts_dir, parallel, proxy, log_file, config_file, save_config)
    summary = manager.uninstall(parse_font_list(fonts), no_backup=no_backup)
    finish(manager, summary)


@cli.command()
@click.option("--fonts", "-f", required=True, help="Fonts to preview (comma-separated)")
@click.option("--preview-text", help="Custom text for font preview")
@common_options
@handle_errors
def preview(fonts, preview_text, fonts_dir, parallel, proxy, log_file, config_file, save_config):
    """Preview installed fonts."""
    manager = bootstrap("preview", fonts_dir, parallel, proxy, log_file, config_file, save_config)
    summary = manager.preview(parse_font_list(fonts), normalize_preview_text(preview_text))
    finish(manager, summary)


@cli.command(name="list")
@click.option("--profile", help="List the fonts of one profile")
@common_options
@handle_errors
def list_fonts(profile, fonts_dir, parallel, proxy, log_file, config_file, save_config):
    """List available fonts."""
    manager = bootstrap("list", fonts_dir, parallel, proxy, log_file, config_file, save_config)

    if profile:
        for font in get_profile(profile):
            click.echo(font)
        finish(manager, echo=False)
        return

    catalog = manager.fetch_catalog()
    click.echo(f"Available fonts in {catalog.release} ({len(catalog)} total):")
    for font in catalog.names:
        marker = " [installed]" if manager.is_installed(font) else ""
        click.echo(f"  - {font}{marker}")
    finish(manager)


@cli.command(name="profile")
@common_options
@handle_errors
def list_profiles(fonts_dir, parallel, proxy, log_file, config_file, save_config):
    """List available installation profiles."""
    manager = bootstrap("profile", fonts_dir, parallel, proxy, log_file, config_file, save_config)

    click.echo("Available installation profiles:")
    click.echo("-----------------------------")
    for name, fonts in PROFILES.items():
        click.echo(f"{name}: {PROFILE_DESCRIPTIONS.get(name, '')}")
        for font in fonts:
            click.echo(f"  - {font}")
        click.echo()
    finish(manager)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
