"""
Unit tests for the catalog resolver and release parsing.
"""

import pytest

from nerdfonts.core.exceptions import CatalogUnavailableError
from nerdfonts.core.models import FontCatalog
from nerdfonts.fonts.catalog import DEFAULT_RELEASE, CatalogResolver, parse_release


class TestParseRelease:
    """Test parsing of release feed payloads."""

    def test_parse_fonts_and_release(self, payload_factory):
        catalog = parse_release(payload_factory(["FiraCode", "Hack"], "v3.3.0"))

        assert catalog.release == "v3.3.0"
        assert catalog.names == ["FiraCode", "Hack"]
        assert "FiraCode" in catalog
        assert "NerdFontsSymbolsOnly" not in catalog

    def test_missing_name_uses_default_release(self):
        catalog = parse_release({"assets": [{"name": "Hack.zip"}]})

        assert catalog.release == DEFAULT_RELEASE

    def test_null_name_uses_default_release(self):
        catalog = parse_release({"name": None, "assets": [{"name": "Hack.zip"}]})

        assert catalog.release == DEFAULT_RELEASE

    def test_missing_assets_is_fatal(self):
        with pytest.raises(CatalogUnavailableError):
            parse_release({"name": "v3.2.1"})

    def test_no_archives_is_fatal(self):
        with pytest.raises(CatalogUnavailableError):
            parse_release({"name": "v3.2.1", "assets": [{"name": "notes.txt"}]})

    def test_malformed_payload(self):
        with pytest.raises(CatalogUnavailableError):
            parse_release(["not", "a", "dict"])

    def test_download_url(self):
        catalog = FontCatalog.from_names("v3.2.1", ["Hack"])

        assert catalog.get("Hack").download_url == (
            "https://github.com/ryanoasis/nerd-fonts/releases/download/v3.2.1/Hack.zip"
        )
        assert catalog.get("Missing") is None


class TestCatalogResolver:
    """Test fetching and caching the release identifier."""

    def test_fetch_caches_release(self, temp_dir, downloader_factory, payload_factory):
        version_file = temp_dir / "cache" / "version"
        downloader = downloader_factory(payload=payload_factory(["Hack"], "v3.4.0"))
        resolver = CatalogResolver(downloader, version_file)

        catalog = resolver.fetch()

        assert catalog.names == ["Hack"]
        assert version_file.read_text().strip() == "v3.4.0"
        assert resolver.cached_release() == "v3.4.0"

    def test_cached_release_default(self, temp_dir, downloader_factory):
        resolver = CatalogResolver(downloader_factory(), temp_dir / "version")

        assert resolver.cached_release() == "v0.0.0"

    def test_network_failure(self, temp_dir, downloader_factory):
        resolver = CatalogResolver(downloader_factory(payload=None), temp_dir / "version")

        with pytest.raises(CatalogUnavailableError, match="network unreachable"):
            resolver.fetch()

        assert not (temp_dir / "version").exists()

    def test_invalid_json(self, temp_dir, downloader_factory):
        downloader = downloader_factory()

        def broken_json(url):
            raise ValueError("Expecting value")

        downloader.fetch_json = broken_json
        resolver = CatalogResolver(downloader, temp_dir / "version")

        with pytest.raises(CatalogUnavailableError, match="invalid JSON"):
            resolver.fetch()
