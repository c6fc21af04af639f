"""HTTP download support."""

from .downloader import ArchiveDownloader, DownloadProgress, create_session

__all__ = ["ArchiveDownloader", "DownloadProgress", "create_session"]
