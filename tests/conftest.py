"""
Pytest configuration and fixtures for Nerd Fonts manager tests.
"""

import io
import tempfile
import zipfile
from pathlib import Path

import pytest
import requests
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from nerdfonts.core.config import InstallerSettings
from nerdfonts.core.exceptions import DownloadFailedError
from nerdfonts.core.models import FontCatalog
from nerdfonts.core.platform import Platform, PlatformConfig


def _box_glyph():
    pen = TTGlyphPen(None)
    pen.moveTo((100, 0))
    pen.lineTo((100, 700))
    pen.lineTo((500, 700))
    pen.lineTo((500, 0))
    pen.closePath()
    return pen.glyph()


def build_font_bytes(family: str = "Test Mono") -> bytes:
    """Build a minimal but valid TrueType font."""
    fb = FontBuilder(unitsPerEm=1000, isTTF=True)
    fb.setupGlyphOrder([".notdef", "A"])
    fb.setupCharacterMap({ord("A"): "A"})
    fb.setupGlyf({".notdef": _box_glyph(), "A": _box_glyph()})
    fb.setupHorizontalMetrics({".notdef": (600, 100), "A": (600, 100)})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": family, "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, usWinAscent=800, usWinDescent=200)
    fb.setupPost()

    buffer = io.BytesIO()
    fb.save(buffer)
    return buffer.getvalue()


def make_zip(files: dict[str, bytes]) -> bytes:
    """Build an in-memory zip archive."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, data in files.items():
            zf.writestr(name, data)
    return buffer.getvalue()


def release_payload(names: list[str], release: str = "v3.2.1") -> dict:
    """Release JSON as returned by the release feed."""
    assets = [
        {
            "name": f"{name}.zip",
            "browser_download_url": f"https://example.invalid/{release}/{name}.zip",
        }
        for name in names
    ]
    assets.append({"name": "NerdFontsSymbolsOnly.tar.xz"})
    return {"name": release, "tag_name": release, "assets": assets}


class FakeDownloader:
    """Stands in for ArchiveDownloader without touching the network."""

    def __init__(self, archives: dict[str, bytes] | None = None, payload: dict | None = None):
        self.archives = archives or {}
        self.payload = payload
        self.downloads: list[str] = []
        self.proxy = None

    def download(self, url, target_path, name, progress_callback=None):
        self.downloads.append(name)
        archive_name = url.rsplit("/", 1)[-1]
        font = archive_name.removesuffix(".zip")
        if font not in self.archives:
            raise DownloadFailedError(name, "404 Client Error: Not Found")
        target_path.parent.mkdir(parents=True, exist_ok=True)
        target_path.write_bytes(self.archives[font])
        return target_path

    def fetch_json(self, url):
        if self.payload is None:
            raise requests.ConnectionError("network unreachable")
        return self.payload

    def cleanup(self):
        pass


@pytest.fixture(scope="session")
def font_bytes():
    """Bytes of a valid TrueType font."""
    return build_font_bytes()


@pytest.fixture
def temp_dir():
    """Create temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def fonts_dir(temp_dir):
    return temp_dir / "fonts"


@pytest.fixture
def linux_platform(fonts_dir):
    """Linux platform configuration without external tools."""
    return PlatformConfig(
        platform=Platform.LINUX,
        fonts_dir=fonts_dir,
        refresh_command=None,
        flat_extract=False,
        file_mode=0o644,
    )


@pytest.fixture
def windows_platform(fonts_dir):
    return PlatformConfig(
        platform=Platform.WINDOWS,
        fonts_dir=fonts_dir,
        refresh_command=None,
        flat_extract=True,
        file_mode=None,
    )


@pytest.fixture
def settings(temp_dir, fonts_dir):
    return InstallerSettings(
        fonts_dir=fonts_dir,
        parallel_downloads=2,
        cache_dir=temp_dir / "cache",
        log_file=temp_dir / "install.log",
    )


@pytest.fixture
def font_archive(font_bytes):
    """Archive shaped like an upstream Nerd Fonts release asset."""
    return make_zip(
        {
            "FontNerdFont-Regular.ttf": font_bytes,
            "FontNerdFontMono-Regular.otf": font_bytes,
            "README.md": b"# readme",
            "LICENSE": b"license",
        }
    )


@pytest.fixture
def catalog():
    return FontCatalog.from_names(
        "v3.2.1",
        ["FiraCode", "Hack", "JetBrainsMono", "Meslo", "UbuntuMono", "DejaVuSansMono", "CascadiaCode"],
    )


@pytest.fixture
def fake_downloader(catalog, font_archive):
    return FakeDownloader(
        archives={name: font_archive for name in catalog.names},
        payload=release_payload(catalog.names, catalog.release),
    )


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers."""
    for item in items:
        if "integration" in item.nodeid:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def zip_factory():
    """Factory building zip archives from a name -> bytes mapping."""
    return make_zip


@pytest.fixture
def payload_factory():
    """Factory building release feed payloads."""
    return release_payload


@pytest.fixture
def downloader_factory():
    """Factory building fake downloaders."""
    return FakeDownloader
