"""
Font Installer
==============

Installs a single font: idempotency check, resumable download, archive
integrity test, platform-filtered extraction, optional verification,
permission normalisation and guaranteed cleanup of the scratch area.
"""

import logging
import shutil
import time
import zipfile
from pathlib import Path

from nerdfonts.core.exceptions import (
    CorruptArchiveError,
    FontInstallError,
    VerificationFailedError,
)
from nerdfonts.core.models import (
    FontCatalog,
    FontCatalogEntry,
    InstallationRequest,
    InstallResult,
    InstallStatus,
)
from nerdfonts.core.platform import PlatformConfig
from nerdfonts.download import ArchiveDownloader

from .utils import find_font_files, is_font_file, normalize_permissions, validate_font_file

logger = logging.getLogger(__name__)


class FontInstaller:
    """
    Installs one font at a time into ``<fonts_dir>/<font>``.

    Instances hold only read-only state, so ``install`` can run in several
    worker threads at once; each call works in its own font and scratch
    directories.
    """

    def __init__(
        self,
        platform_config: PlatformConfig,
        catalog: FontCatalog,
        downloader: ArchiveDownloader,
        request: InstallationRequest,
        temp_root: Path,
    ):
        self.platform_config = platform_config
        self.catalog = catalog
        self.downloader = downloader
        self.request = request
        self.temp_root = temp_root

    def font_dir(self, font: str) -> Path:
        return self.request.fonts_dir / font

    def install(self, font: str) -> InstallResult:
        """
        Install ``font`` and report its terminal state.

        Per-font errors are logged and returned as FAILED results; they never
        propagate to the caller.
        """
        start_time = time.time()
        font_dir = self.font_dir(font)

        if font_dir.is_dir() and not self.request.force:
            message = f"Skipping {font}, it already exists (use --force to override)"
            logger.info(message)
            return InstallResult(font, InstallStatus.SKIPPED, message)

        logger.info(f"Processing {font}...")
        temp_dir = self.temp_root / font
        try:
            temp_dir.mkdir(parents=True, exist_ok=True)
            archive = self._download(font, temp_dir)
            self._check_archive(font, archive)
            self._extract(archive, font_dir)

            if self.request.verify:
                self._verify(font, font_dir)

            normalize_permissions(font_dir, self.platform_config)

        except FontInstallError as e:
            logger.error(str(e))
            return InstallResult(font, InstallStatus.FAILED, str(e), _elapsed_ms(start_time))
        except OSError as e:
            logger.error(f"Failed to install {font}: {e}")
            return InstallResult(
                font, InstallStatus.FAILED, f"Failed to install {font}: {e}", _elapsed_ms(start_time)
            )
        finally:
            shutil.rmtree(temp_dir, ignore_errors=True)

        message = f"Successfully installed {font}"
        logger.info(message)
        return InstallResult(font, InstallStatus.SUCCESS, message, _elapsed_ms(start_time))

    def _download(self, font: str, temp_dir: Path) -> Path:
        entry = self.catalog.get(font) or FontCatalogEntry(name=font, release=self.catalog.release)
        archive = temp_dir / entry.archive_name
        return self.downloader.download(entry.download_url, archive, font)

    def _check_archive(self, font: str, archive: Path) -> None:
        """Structural integrity test of the archive."""
        try:
            with zipfile.ZipFile(archive) as zf:
                bad_member = zf.testzip()
        except (zipfile.BadZipFile, OSError, EOFError) as e:
            raise CorruptArchiveError(font, archive.name) from e

        if bad_member is not None:
            raise CorruptArchiveError(font, archive.name)

    def _extract(self, archive: Path, font_dir: Path) -> None:
        """Extract into a fresh font directory, flattened on Windows targets."""
        if font_dir.exists():
            shutil.rmtree(font_dir)
        font_dir.mkdir(parents=True, exist_ok=True)

        with zipfile.ZipFile(archive) as zf:
            if not self.platform_config.flat_extract:
                zf.extractall(font_dir)
                return

            for member in zf.infolist():
                if member.is_dir():
                    continue
                filename = Path(member.filename).name
                if not filename or not is_font_file(Path(filename)):
                    continue
                with zf.open(member) as source, (font_dir / filename).open("wb") as target:
                    shutil.copyfileobj(source, target)

    def _verify(self, font: str, font_dir: Path) -> None:
        """Validate every extracted font; any failure removes the whole font."""
        logger.info("Verifying installed files...")
        failed = []
        for font_file in find_font_files(font_dir):
            if not validate_font_file(font_file, self.platform_config.validator_command):
                logger.error(f"Verification failed for {font_file}")
                failed.append(font_file.name)

        if failed:
            logger.error("Font verification failed, removing installation")
            shutil.rmtree(font_dir, ignore_errors=True)
            raise VerificationFailedError(font, failed)


def _elapsed_ms(start_time: float) -> float:
    return (time.time() - start_time) * 1000
