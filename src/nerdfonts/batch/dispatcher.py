"""
Parallel Dispatcher
===================

Fans a per-font operation out over a bounded thread pool. Completion is
unordered and every font succeeds or fails independently.
"""

import logging
import threading
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass

from nerdfonts.core.models import InstallResult, InstallStatus, InstallSummary
from nerdfonts.core.platform import Platform

logger = logging.getLogger(__name__)


@dataclass
class DispatchProgressInfo:
    """Progress information for a dispatch run."""

    total_items: int
    completed_items: int
    failed_items: int

    @property
    def progress_percentage(self) -> float:
        """Calculate progress percentage."""
        if self.total_items == 0:
            return 100.0
        return (self.completed_items / self.total_items) * 100.0


class DispatchCallback:
    """Base class for dispatch progress callbacks."""

    def on_start(self, total_items: int) -> None:
        """Called when dispatch starts."""

    def on_item_complete(self, result: InstallResult) -> None:
        """Called when one font finishes."""

    def on_progress(self, progress: DispatchProgressInfo) -> None:
        """Called after each completion."""

    def on_complete(self, summary: InstallSummary) -> None:
        """Called when every font has finished."""


class LoggingDispatchCallback(DispatchCallback):
    """Reports dispatch progress through the log."""

    def on_start(self, total_items: int) -> None:
        logger.debug(f"Dispatching {total_items} fonts")

    def on_progress(self, progress: DispatchProgressInfo) -> None:
        logger.debug(
            f"Progress: {progress.completed_items}/{progress.total_items} "
            f"({progress.progress_percentage:.0f}%), {progress.failed_items} failed"
        )

    def on_complete(self, summary: InstallSummary) -> None:
        logger.info(
            f"Installed: {len(summary.successful)}, skipped: {len(summary.skipped)}, "
            f"failed: {len(summary.failed)}"
        )


class ParallelDispatcher:
    """
    Runs an operation for each font with at most ``max_workers`` in flight.

    Windows runs strictly sequentially.
    """

    def __init__(self, max_workers: int = 3, platform: Platform | None = None):
        if max_workers < 1:
            raise ValueError("max_workers must be positive")
        self.max_workers = 1 if platform == Platform.WINDOWS else max_workers
        self._lock = threading.Lock()

    def run(
        self,
        fonts: list[str],
        operation: Callable[[str], InstallResult],
        callback: DispatchCallback | None = None,
    ) -> InstallSummary:
        """
        Apply ``operation`` to every font.

        Args:
            fonts: Ordered font names
            operation: Per-font worker returning an InstallResult
            callback: Optional progress callback

        Returns:
            Summary with results in completion order
        """
        callback = callback or DispatchCallback()
        summary = InstallSummary()
        callback.on_start(len(fonts))

        if self.max_workers == 1 or len(fonts) <= 1:
            for font in fonts:
                self._record(summary, self._run_one(operation, font), len(fonts), callback)
        else:
            with ThreadPoolExecutor(
                max_workers=self.max_workers, thread_name_prefix="font-install"
            ) as executor:
                future_to_font = {
                    executor.submit(self._run_one, operation, font): font for font in fonts
                }
                for future in as_completed(future_to_font):
                    self._record(summary, future.result(), len(fonts), callback)

        callback.on_complete(summary)
        return summary

    def _run_one(self, operation: Callable[[str], InstallResult], font: str) -> InstallResult:
        """Run one worker; unexpected errors become a FAILED result."""
        start_time = time.time()
        try:
            return operation(font)
        except Exception as e:
            logger.exception(f"Unexpected error while processing {font}")
            return InstallResult(
                font, InstallStatus.FAILED, str(e), (time.time() - start_time) * 1000
            )

    def _record(
        self,
        summary: InstallSummary,
        result: InstallResult,
        total: int,
        callback: DispatchCallback,
    ) -> None:
        with self._lock:
            summary.results.append(result)
            progress = DispatchProgressInfo(
                total_items=total,
                completed_items=len(summary.results),
                failed_items=len(summary.failed),
            )
        callback.on_item_complete(result)
        callback.on_progress(progress)
