"""
Archive Downloader
==================

Handles downloading font archives with progress tracking, resume of
partially downloaded files, proxy support and retry with backoff.
"""

import logging
import threading
import time
from collections.abc import Callable
from pathlib import Path

import requests
from tqdm import tqdm

from nerdfonts import __version__
from nerdfonts.core.exceptions import DownloadFailedError

logger = logging.getLogger(__name__)

# Server replied 416: the partial file already holds the whole resource
HTTP_RANGE_NOT_SATISFIABLE = 416
HTTP_PARTIAL_CONTENT = 206


class DownloadProgress:
    """Progress tracker for downloads."""

    def __init__(self, total_size: int, description: str = "Downloading", initial: int = 0):
        self.total_size = total_size
        self.downloaded = initial
        self.start_time = time.time()
        self.pbar = tqdm(
            total=total_size or None,
            initial=initial,
            unit="B",
            unit_scale=True,
            unit_divisor=1024,
            desc=description,
            leave=False,
        )

    def update(self, chunk_size: int):
        """Update progress."""
        self.downloaded += chunk_size
        self.pbar.update(chunk_size)

    def close(self):
        """Close progress bar."""
        self.pbar.close()

    @property
    def elapsed_time(self) -> float:
        """Get elapsed time in seconds."""
        return time.time() - self.start_time


def create_session(proxy: str | None = None) -> requests.Session:
    """Create an HTTP session with the user agent and optional proxy."""
    session = requests.Session()
    session.headers.update({"User-Agent": f"nerd-fonts-manager/{__version__}"})
    if proxy:
        session.proxies.update({"http": proxy, "https": proxy})
    return session


class ArchiveDownloader:
    """
    Downloads font archives.

    Features:
    - Resume from an existing partial file using HTTP range requests
    - Optional proxy for every request
    - Automatic retry with exponential backoff
    - Progress tracking
    - One session per worker thread unless a session is injected
    """

    def __init__(
        self,
        proxy: str | None = None,
        session: requests.Session | None = None,
        chunk_size: int = 8192,
        timeout_seconds: int = 60,
        max_retries: int = 3,
        show_progress: bool = True,
    ):
        self.proxy = proxy
        self._shared_session = session
        self._local = threading.local()
        self._sessions: list[requests.Session] = []
        self._sessions_lock = threading.Lock()
        self.chunk_size = chunk_size
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries
        self.show_progress = show_progress

    @property
    def session(self) -> requests.Session:
        """Session for the calling thread."""
        if self._shared_session is not None:
            return self._shared_session

        session = getattr(self._local, "session", None)
        if session is None:
            session = create_session(self.proxy)
            self._local.session = session
            with self._sessions_lock:
                self._sessions.append(session)
        return session

    def download(
        self,
        url: str,
        target_path: Path,
        name: str,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> Path:
        """
        Download ``url`` to ``target_path``, resuming a partial file if present.

        Args:
            url: Archive URL
            target_path: Destination file
            name: Font name used in messages
            progress_callback: Optional ``(downloaded, total)`` callback

        Returns:
            Path of the completed download

        Raises:
            DownloadFailedError: When every attempt failed
        """
        target_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"Downloading {name}...")

        last_error: Exception | None = None
        for attempt in range(self.max_retries):
            try:
                self._download_with_resume(url, target_path, name, progress_callback)
            except (requests.RequestException, OSError) as e:
                last_error = e
                logger.warning(f"Download attempt {attempt + 1} for {name} failed: {e}")
                if attempt < self.max_retries - 1:
                    time.sleep(2**attempt)
            else:
                return target_path

        raise DownloadFailedError(name, str(last_error) if last_error else None) from last_error

    def _download_with_resume(
        self,
        url: str,
        target_path: Path,
        name: str,
        progress_callback: Callable[[int, int], None] | None,
    ) -> None:
        """Single download attempt, appending to any partial file on disk."""
        offset = target_path.stat().st_size if target_path.exists() else 0
        headers = {"Range": f"bytes={offset}-"} if offset else {}

        if offset:
            logger.debug(f"Resuming {name} from byte {offset}")

        response = self.session.get(
            url, stream=True, timeout=self.timeout_seconds, headers=headers
        )
        try:
            if offset and response.status_code == HTTP_RANGE_NOT_SATISFIABLE:
                logger.debug(f"{target_path.name} is already complete")
                return
            response.raise_for_status()

            if offset and response.status_code != HTTP_PARTIAL_CONTENT:
                # Server ignored the range request; start over
                offset = 0

            total_size = int(response.headers.get("content-length", 0))
            if total_size:
                total_size += offset

            mode = "ab" if offset else "wb"
            downloaded_size = offset
            progress = (
                DownloadProgress(total_size, f"Downloading {name}", initial=offset)
                if self.show_progress
                else None
            )

            try:
                with target_path.open(mode) as f:
                    for chunk in response.iter_content(chunk_size=self.chunk_size):
                        if chunk:
                            f.write(chunk)
                            downloaded_size += len(chunk)
                            if progress:
                                progress.update(len(chunk))
                            if progress_callback:
                                progress_callback(downloaded_size, total_size)
            finally:
                if progress:
                    progress.close()

            if total_size and downloaded_size != total_size:
                raise requests.exceptions.ContentDecodingError(
                    f"Expected {total_size} bytes, received {downloaded_size}"
                )

            elapsed = progress.elapsed_time if progress else 0.0
            logger.debug(f"Download completed: {downloaded_size} bytes in {elapsed:.2f}s")
        finally:
            response.close()

    def fetch_json(self, url: str) -> dict:
        """GET a JSON document."""
        response = self.session.get(url, timeout=self.timeout_seconds)
        response.raise_for_status()
        return response.json()

    def cleanup(self):
        """Cleanup downloader resources."""
        if self._shared_session is not None:
            self._shared_session.close()
        with self._sessions_lock:
            for session in self._sessions:
                session.close()
            self._sessions.clear()
