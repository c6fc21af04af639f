"""
Font Management System
======================

Central orchestration of the install, uninstall, update and preview
operations on top of the catalog, installer, dispatcher and backup
components.
"""

import logging
import shutil
import time
from pathlib import Path

from nerdfonts.batch import DispatchCallback, LoggingDispatchCallback, ParallelDispatcher
from nerdfonts.core.config import InstallerSettings
from nerdfonts.core.exceptions import (
    FontNotInstalledError,
    InvalidSelectionError,
    PreviewError,
)
from nerdfonts.core.models import (
    FontCatalog,
    InstallationRequest,
    InstallResult,
    InstallStatus,
    InstallSummary,
)
from nerdfonts.core.platform import PlatformConfig
from nerdfonts.download import ArchiveDownloader

from .backup import BackupManager
from .catalog import CatalogResolver
from .installer import FontInstaller
from .preview import DEFAULT_PREVIEW_TEXT, FontPreviewer
from .utils import font_directory, refresh_font_cache, remove_windows_compatible

logger = logging.getLogger(__name__)


class FontManager:
    """
    Central font management system.

    Owns the collaborators of one invocation and exposes one method per
    command. Batch errors are reported per font in an InstallSummary.
    """

    def __init__(
        self,
        settings: InstallerSettings,
        platform_config: PlatformConfig,
        downloader: ArchiveDownloader | None = None,
        resolver: CatalogResolver | None = None,
        backup_manager: BackupManager | None = None,
        refresh_cache: bool = True,
    ):
        """
        Initialize font manager.

        Args:
            settings: Effective settings after CLI overrides
            platform_config: Detected platform configuration
            downloader: Optional pre-built downloader
            resolver: Optional catalog resolver
            backup_manager: Optional backup manager
            refresh_cache: Run the platform font cache refresh after changes
        """
        if settings.fonts_dir is not None:
            platform_config = platform_config.with_fonts_dir(settings.fonts_dir)

        self.settings = settings
        self.platform_config = platform_config
        self.downloader = downloader or ArchiveDownloader(proxy=settings.proxy_url)
        self.resolver = resolver or CatalogResolver(self.downloader, settings.version_file)
        self.backup_manager = backup_manager or BackupManager()
        self.refresh_cache = refresh_cache

    @property
    def fonts_dir(self) -> Path:
        return self.platform_config.fonts_dir

    def fetch_catalog(self) -> FontCatalog:
        return self.resolver.fetch()

    def is_installed(self, font: str) -> bool:
        try:
            return font_directory(self.fonts_dir, font).is_dir()
        except InvalidSelectionError:
            return False

    def installed_fonts(self, catalog: FontCatalog) -> list[str]:
        """Catalog fonts whose directory exists, in catalog order."""
        return [name for name in catalog.names if self.is_installed(name)]

    def build_request(
        self,
        fonts: list[str],
        force: bool = False,
        verify: bool = False,
        no_backup: bool = False,
    ) -> InstallationRequest:
        return InstallationRequest(
            fonts=tuple(fonts),
            fonts_dir=self.fonts_dir,
            force=force,
            verify=verify,
            no_backup=no_backup,
            parallelism=self.settings.parallel_downloads,
            proxy=self.settings.proxy_url,
        )

    def install(
        self,
        request: InstallationRequest,
        catalog: FontCatalog,
        callback: DispatchCallback | None = None,
    ) -> InstallSummary:
        """
        Back up, install every requested font in parallel, then clean up.

        Args:
            request: Resolved installation request
            catalog: Catalog the fonts were selected from
            callback: Optional dispatch progress callback

        Returns:
            Per-font results in completion order
        """
        request.fonts_dir.mkdir(parents=True, exist_ok=True)
        backup_path = self.backup_manager.create_backup(
            request.fonts_dir, enabled=not request.no_backup
        )

        logger.info("Installing fonts...")
        downloader = self.downloader
        if downloader.proxy != request.proxy:
            downloader = ArchiveDownloader(proxy=request.proxy)

        installer = FontInstaller(
            platform_config=self.platform_config,
            catalog=catalog,
            downloader=downloader,
            request=request,
            temp_root=self.settings.temp_dir,
        )
        dispatcher = ParallelDispatcher(request.parallelism, self.platform_config.platform)
        try:
            summary = dispatcher.run(
                list(request.fonts), installer.install, callback or LoggingDispatchCallback()
            )
        finally:
            if downloader is not self.downloader:
                downloader.cleanup()
        summary.backup_path = backup_path

        logger.info("Cleaning up...")
        remove_windows_compatible(request.fonts_dir)
        self._refresh()
        return summary

    def uninstall(self, fonts: list[str], no_backup: bool = False) -> InstallSummary:
        """Remove installed font directories; absent fonts are reported as FAILED."""
        summary = InstallSummary()
        if any(self.is_installed(font) for font in fonts):
            summary.backup_path = self.backup_manager.create_backup(
                self.fonts_dir, enabled=not no_backup
            )

        for font in fonts:
            summary.results.append(self._uninstall_one(font))

        if summary.successful:
            self._refresh()
        return summary

    def _uninstall_one(self, font: str) -> InstallResult:
        start_time = time.time()
        try:
            font_dir = font_directory(self.fonts_dir, font)
            if not font_dir.is_dir():
                raise FontNotInstalledError(font)
            logger.info(f"Uninstalling {font}...")
            shutil.rmtree(font_dir)
        except (FontNotInstalledError, InvalidSelectionError) as e:
            logger.error(str(e))
            return InstallResult(font, InstallStatus.FAILED, str(e))
        except OSError as e:
            logger.error(f"Failed to uninstall {font}: {e}")
            return InstallResult(font, InstallStatus.FAILED, str(e))

        return InstallResult(
            font,
            InstallStatus.SUCCESS,
            f"Uninstalled {font}",
            (time.time() - start_time) * 1000,
        )

    def check_for_update(self) -> tuple[str, FontCatalog, bool]:
        """
        Compare the cached release with the latest one.

        Returns:
            (previously cached release, latest catalog, update available)
        """
        logger.info("Checking for updates...")
        installed_version = self.resolver.cached_release()
        catalog = self.resolver.fetch()

        if installed_version != catalog.release:
            logger.info(f"Update available: {installed_version} -> {catalog.release}")
            return installed_version, catalog, True

        logger.info(f"Fonts are up to date ({catalog.release})")
        return installed_version, catalog, False

    def preview(
        self, fonts: list[str], text: str = DEFAULT_PREVIEW_TEXT, show: bool = True
    ) -> InstallSummary:
        """Generate (and optionally open) a preview image per font."""
        previewer = FontPreviewer(self.fonts_dir, self.settings.previews_dir)
        summary = InstallSummary()

        for font in fonts:
            try:
                preview_file = previewer.generate(font, text)
            except (FontNotInstalledError, InvalidSelectionError, PreviewError) as e:
                logger.error(str(e))
                summary.results.append(InstallResult(font, InstallStatus.FAILED, str(e)))
                continue

            if show:
                previewer.show(preview_file)
            summary.results.append(InstallResult(font, InstallStatus.SUCCESS, str(preview_file)))

        return summary

    def _refresh(self) -> None:
        if self.refresh_cache:
            refresh_font_cache(self.platform_config)
