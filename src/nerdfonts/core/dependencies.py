"""External tool checks."""

import logging
import shutil

from .exceptions import MissingDependencyError
from .platform import Platform, PlatformConfig

logger = logging.getLogger(__name__)


def install_hints(platform: Platform, missing: list[str]) -> list[str]:
    """Return human readable install instructions for missing tools."""
    tools = " ".join(missing)
    if platform in (Platform.LINUX, Platform.WSL):
        return [
            f"Install using: sudo apt-get install fontconfig  # provides {tools} on Debian/Ubuntu",
            f"Or: sudo yum install fontconfig  # provides {tools} on RHEL/CentOS",
        ]
    if platform == Platform.MACOS:
        return [f"Install using: brew install {tools}"]
    return [f"Make sure {tools} is available on PATH"]


def check_dependencies(platform_config: PlatformConfig) -> None:
    """
    Verify the external tools required on this platform are installed.

    Raises:
        MissingDependencyError: Listing every missing tool with install hints
    """
    logger.info("Checking dependencies...")
    missing = [tool for tool in platform_config.required_tools if shutil.which(tool) is None]

    if missing:
        raise MissingDependencyError(missing, install_hints(platform_config.platform, missing))

    if platform_config.validator_command:
        logger.debug(f"Using font validator: {platform_config.validator_command}")
