"""
Self Update
===========

Replaces the standalone ``.pyz`` build of this tool with the latest
published release and re-executes it.

The swap is guarded by an exclusive lock file and uses an atomic rename,
but two concurrent invocations updating the same file are still not
supported.
"""

import logging
import os
import stat
import sys
import tempfile
from collections.abc import Callable
from pathlib import Path

import requests

from nerdfonts import __version__
from nerdfonts.core.exceptions import SelfUpdateError
from nerdfonts.download import ArchiveDownloader

logger = logging.getLogger(__name__)

SELF_REPO = "dahromy/nerd-fonts-manager"
SELF_RELEASES_URL = f"https://api.github.com/repos/{SELF_REPO}/releases/latest"
SELF_ASSET_NAME = "nerd-fonts-manager.pyz"


def _default_exec(executable: Path, args: list[str]) -> None:
    os.execv(sys.executable, [sys.executable, str(executable), *args])


class SelfUpdater:
    """Checks for and applies new releases of the tool itself."""

    def __init__(
        self,
        downloader: ArchiveDownloader,
        executable: Path | None = None,
        current_version: str = __version__,
        releases_url: str = SELF_RELEASES_URL,
        exec_func: Callable[[Path, list[str]], None] = _default_exec,
    ):
        self.downloader = downloader
        self.executable = (executable or Path(sys.argv[0])).resolve()
        self.current_version = current_version
        self.releases_url = releases_url
        self.exec_func = exec_func

    def latest_release(self) -> tuple[str, str | None]:
        """
        Return the latest version and the download URL of the ``.pyz`` asset.

        Raises:
            SelfUpdateError: If the release feed cannot be read
        """
        try:
            release = self.downloader.fetch_json(self.releases_url)
        except (requests.RequestException, ValueError) as e:
            raise SelfUpdateError(f"Failed to check for updates: {e}") from e

        tag = release.get("tag_name") if isinstance(release, dict) else None
        if not tag:
            raise SelfUpdateError("Failed to get latest version")

        download_url = None
        for asset in release.get("assets") or []:
            if isinstance(asset, dict) and asset.get("name") == SELF_ASSET_NAME:
                download_url = asset.get("browser_download_url")
                break

        return tag.removeprefix("v"), download_url

    def check_and_update(self, args: list[str] | None = None) -> bool:
        """
        Update and re-exec when a different version is published.

        Returns:
            False when already up to date; otherwise does not return
            unless ``exec_func`` does.
        """
        logger.info("Checking for script updates...")
        latest_version, download_url = self.latest_release()

        if latest_version == self.current_version:
            logger.info(f"Script is up to date ({self.current_version})")
            return False

        logger.info(f"New version available: {self.current_version} -> {latest_version}")
        if not download_url:
            raise SelfUpdateError("Failed to get download URL")
        if self.executable.suffix != ".pyz":
            raise SelfUpdateError(
                "Self-update only works for the standalone .pyz build; "
                "upgrade installed packages with pip instead"
            )

        self.apply(download_url)
        logger.info("Restarting script...")
        self.exec_func(self.executable, args or [])
        return True

    def apply(self, download_url: str) -> Path:
        """Download the new build and atomically swap it in, keeping a backup."""
        lock_path = self.executable.with_name(f"{self.executable.name}.lock")
        try:
            lock_fd = os.open(lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
        except FileExistsError as e:
            raise SelfUpdateError(f"Another update is in progress ({lock_path})") from e

        fd, temp_name = tempfile.mkstemp(
            dir=self.executable.parent, prefix=f".{self.executable.name}.", suffix=".tmp"
        )
        os.close(fd)
        temp_path = Path(temp_name)
        try:
            self.downloader.download(download_url, temp_path, SELF_ASSET_NAME)
            if temp_path.stat().st_size == 0:
                raise SelfUpdateError("Downloaded file is empty")

            backup_path = self.executable.with_name(f"{self.executable.name}.backup")
            backup_path.write_bytes(self.executable.read_bytes())

            mode = self.executable.stat().st_mode
            temp_path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
            os.replace(temp_path, self.executable)
            logger.info(
                f"Script updated successfully. Previous version backed up to {backup_path}"
            )
        except OSError as e:
            raise SelfUpdateError(f"Failed to download update: {e}") from e
        finally:
            temp_path.unlink(missing_ok=True)
            os.close(lock_fd)
            lock_path.unlink(missing_ok=True)

        return self.executable
