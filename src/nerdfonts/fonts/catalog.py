"""
Catalog Resolver
================

Queries the upstream release feed for the latest release and the fonts
published in it, caching the release identifier for update checks.
"""

import logging
from pathlib import Path

import requests

from nerdfonts.core.exceptions import CatalogUnavailableError
from nerdfonts.core.models import ARCHIVE_SUFFIX, FontCatalog
from nerdfonts.download import ArchiveDownloader

logger = logging.getLogger(__name__)

RELEASES_API_URL = "https://api.github.com/repos/ryanoasis/nerd-fonts/releases/latest"
DEFAULT_RELEASE = "v3.2.1"
UNKNOWN_RELEASE = "v0.0.0"


class CatalogResolver:
    """Fetches the font catalog from the release feed."""

    def __init__(
        self,
        downloader: ArchiveDownloader,
        version_file: Path,
        api_url: str = RELEASES_API_URL,
    ):
        self.downloader = downloader
        self.version_file = version_file
        self.api_url = api_url

    def fetch(self) -> FontCatalog:
        """
        Fetch and parse the latest release.

        Returns:
            FontCatalog for the latest release

        Raises:
            CatalogUnavailableError: If the feed is unreachable or malformed
        """
        logger.info("Fetching available fonts...")
        try:
            payload = self.downloader.fetch_json(self.api_url)
        except requests.RequestException as e:
            raise CatalogUnavailableError(str(e)) from e
        except ValueError as e:
            raise CatalogUnavailableError(f"invalid JSON: {e}") from e

        catalog = parse_release(payload)
        logger.info(f"Latest version: {catalog.release}")
        self.save_release(catalog.release)
        return catalog

    def cached_release(self) -> str:
        """Return the last seen release identifier, or ``v0.0.0``."""
        try:
            release = self.version_file.read_text(encoding="utf-8").strip()
        except OSError:
            return UNKNOWN_RELEASE
        return release or UNKNOWN_RELEASE

    def save_release(self, release: str) -> None:
        try:
            self.version_file.parent.mkdir(parents=True, exist_ok=True)
            self.version_file.write_text(f"{release}\n", encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not save version information: {e}")


def parse_release(payload: object) -> FontCatalog:
    """
    Build a ``FontCatalog`` from a release JSON document.

    The release name falls back to ``DEFAULT_RELEASE`` when absent, but a
    missing or empty asset list is fatal.
    """
    if not isinstance(payload, dict):
        raise CatalogUnavailableError("unexpected response format")

    release = payload.get("name")
    if not isinstance(release, str) or not release.strip():
        release = DEFAULT_RELEASE

    assets = payload.get("assets")
    if not isinstance(assets, list):
        raise CatalogUnavailableError("release has no asset list")

    names = []
    for asset in assets:
        asset_name = asset.get("name") if isinstance(asset, dict) else None
        if isinstance(asset_name, str) and asset_name.endswith(ARCHIVE_SUFFIX):
            font_name = asset_name[: -len(ARCHIVE_SUFFIX)]
            if font_name and font_name not in names:
                names.append(font_name)

    if not names:
        raise CatalogUnavailableError("release contains no font archives")

    return FontCatalog.from_names(release.strip(), names)
