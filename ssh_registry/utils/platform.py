"""Workstation platform detection."""

import logging
import sys
from collections.abc import Callable
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)

PROC_VERSION = Path("/proc/version")
DEVICE_TREE_MODEL = Path("/proc/device-tree/model")


class Platform(str, Enum):
    """Kind of machine being provisioned."""

    WSL = "wsl"
    RASPBERRY_PI = "raspberry-pi"
    LINUX = "linux"
    MACOS = "macos"
    UNKNOWN = "unknown"


def _read_text(path: Path) -> str | None:
    try:
        # device-tree strings are NUL terminated
        return path.read_text(errors="replace").replace("\x00", "")
    except OSError:
        return None


def detect_platform(
    read_text: Callable[[Path], str | None] = _read_text,
    system: str | None = None,
) -> Platform:
    """Detect the platform from kernel and device-tree strings.

    Args:
        read_text: Reader returning file content or None if unreadable
        system: Value standing in for sys.platform

    Returns:
        Detected platform tag
    """
    version = (read_text(PROC_VERSION) or "").lower()
    if "microsoft" in version or "wsl" in version:
        return Platform.WSL

    model = read_text(DEVICE_TREE_MODEL) or ""
    if "raspberry pi" in model.lower():
        return Platform.RASPBERRY_PI

    system = system if system is not None else sys.platform
    if system == "darwin":
        return Platform.MACOS
    if system.startswith("linux"):
        return Platform.LINUX

    logger.debug("Unrecognized platform %s", system)
    return Platform.UNKNOWN
