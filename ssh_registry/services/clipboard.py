"""Copy public keys to the desktop clipboard."""

import asyncio
import logging
import shutil
from collections.abc import Callable

from ssh_registry.utils.platform import Platform

logger = logging.getLogger(__name__)

# Tried in order; the first one found on PATH wins.
CLIPBOARD_COMMANDS: list[list[str]] = [
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["pbcopy"],
]
WSL_COMMAND = ["clip.exe"]


class Clipboard:
    """Platform-aware clipboard writer."""

    def __init__(
        self,
        platform: Platform,
        which: Callable[[str], str | None] = shutil.which,
    ):
        """Initialize clipboard.

        Args:
            platform: Detected platform tag
            which: Executable lookup, shutil.which by default
        """
        self.platform = platform
        self.which = which

    def candidates(self) -> list[list[str]]:
        """Copy commands worth trying on this platform."""
        if self.platform is Platform.WSL:
            return [WSL_COMMAND, *CLIPBOARD_COMMANDS]
        if self.platform is Platform.MACOS:
            return [["pbcopy"]]
        return CLIPBOARD_COMMANDS

    def find_command(self) -> list[str] | None:
        """First available copy command, or None."""
        for argv in self.candidates():
            if self.which(argv[0]):
                return argv
        return None

    async def copy(self, text: str) -> bool:
        """Pipe text into the clipboard tool.

        Args:
            text: Text to copy

        Returns:
            True if the text was copied
        """
        argv = self.find_command()
        if argv is None:
            logger.warning("No clipboard tool found, copy the public key manually")
            return False

        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
            _, stderr = await proc.communicate(text.encode())
        except OSError as e:
            logger.warning("%s failed: %s, copy the public key manually", argv[0], e)
            return False

        if proc.returncode != 0:
            logger.warning(
                "%s exited with %d: %s",
                argv[0],
                proc.returncode,
                stderr.decode(errors="replace").strip(),
            )
            return False

        logger.info("Public key copied to clipboard (%s)", argv[0])
        return True
