"""Best-effort snapshots of the fonts directory before it is modified."""

import logging
import shutil
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


class BackupManager:
    """Copies the fonts directory into a timestamped sibling directory."""

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self.clock = clock

    def backup_path_for(self, fonts_dir: Path) -> Path:
        timestamp = self.clock().strftime(TIMESTAMP_FORMAT)
        return fonts_dir.with_name(f"{fonts_dir.name}.backup_{timestamp}")

    def create_backup(self, fonts_dir: Path, enabled: bool = True) -> Path | None:
        """
        Snapshot ``fonts_dir``.

        Copy errors are logged and never fail the caller.

        Args:
            fonts_dir: Fonts root directory
            enabled: False when backups were suppressed

        Returns:
            Path of the backup, or None when nothing was copied
        """
        if not enabled:
            logger.info("Skipping backup as requested")
            return None

        try:
            has_content = fonts_dir.is_dir() and any(fonts_dir.iterdir())
        except OSError as e:
            logger.warning(f"Could not inspect {fonts_dir} for backup: {e}")
            return None

        if not has_content:
            logger.info("No existing fonts to backup")
            return None

        backup_path = self.backup_path_for(fonts_dir)
        logger.info(f"Backing up existing fonts to {backup_path}")

        try:
            shutil.copytree(fonts_dir, backup_path, symlinks=True, dirs_exist_ok=True)
        except shutil.Error as e:
            logger.warning(f"Backup completed with {len(e.args[0])} errors")
        except OSError as e:
            logger.warning(f"Backup failed: {e}")
        else:
            logger.info("Backup completed")

        return backup_path if backup_path.exists() else None
