"""Colorful console logging for ssh_registry."""

import logging
import re
import sys
from datetime import datetime
from pathlib import Path

# ANSI color codes
COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "white": "\033[37m",
    "cyan": "\033[36m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "bright_black": "\033[90m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
    "bright_yellow": "\033[93m",
    "bright_blue": "\033[94m",
    "bright_magenta": "\033[95m",
    "bright_cyan": "\033[96m",
    "bg_red": "\033[41m",
}

# Log level colors
LEVEL_COLORS = {
    "DEBUG": COLORS["bright_black"],
    "INFO": COLORS["bright_blue"],
    "WARNING": COLORS["bright_yellow"],
    "ERROR": COLORS["bright_red"],
    "CRITICAL": COLORS["bg_red"] + COLORS["white"] + COLORS["bold"],
}

# Component colors for logger names
COMPONENT_COLORS = {
    "ssh_registry.services.registry": COLORS["bright_cyan"],
    "ssh_registry.services.keys": COLORS["bright_magenta"],
    "ssh_registry.services.agent": COLORS["bright_magenta"],
    "ssh_registry.config": COLORS["green"],
    "ssh_registry.server": COLORS["cyan"],
    "ssh_registry.middleware": COLORS["yellow"],
    "default": COLORS["white"],
}

PREFIX = "ssh_registry."
PATH_PATTERN = re.compile(r"(?<!\S)((?:~|/)[\w./-]+)")
PUBKEY_PATTERN = re.compile(r"(ssh-ed25519 \S+)")

NOISY_LOGGERS = [
    "asyncssh",
    "fastmcp",
    "mcp",
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "httpx",
    "httpcore",
    "starlette",
    "anyio",
]


class ColorfulFormatter(logging.Formatter):
    """Log formatter with component highlighting.

    Lines read ``time | LEVEL | component | message``.
    """

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize the formatter.

        Args:
            use_colors: Whether to use ANSI colors.
        """
        super().__init__()
        self.use_colors = use_colors

    def _colorize(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if not self.use_colors:
            return text
        return f"{color}{text}{COLORS['reset']}"

    def _get_component_color(self, name: str) -> str:
        for prefix, color in COMPONENT_COLORS.items():
            if prefix != "default" and name.startswith(prefix):
                return color
        return COMPONENT_COLORS["default"]

    def _format_timestamp(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created).astimezone()
        return f"{dt:%H:%M:%S}.{int(record.msecs):03d}"

    def _format_level(self, record: logging.LogRecord) -> str:
        """Format log level with color and fixed width."""
        color = LEVEL_COLORS.get(record.levelname, COLORS["white"])
        return self._colorize(f"{record.levelname:<8}", color)

    def _format_component(self, record: logging.LogRecord) -> str:
        """Format logger name without the package prefix."""
        name = record.name
        if name.startswith(PREFIX):
            name = name[len(PREFIX):]
        color = self._get_component_color(record.name)
        return self._colorize(f"{name:<18}", color)

    def _highlight_message(self, message: str) -> str:
        """Highlight paths and public keys in log messages."""
        if not self.use_colors:
            return message

        message = PUBKEY_PATTERN.sub(
            f"{COLORS['bright_green']}\\1{COLORS['reset']}", message
        )
        return PATH_PATTERN.sub(f"{COLORS['bright_cyan']}\\1{COLORS['reset']}", message)

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with colors."""
        timestamp = self._colorize(self._format_timestamp(record), COLORS["dim"])
        level = self._format_level(record)
        component = self._format_component(record)
        sep = self._colorize("|", COLORS["dim"])
        message = self._highlight_message(record.getMessage())

        line = f"{timestamp} {sep} {level} {sep} {component} {sep} {message}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def configure_logging(
    level: str = "INFO",
    use_colors: bool = True,
    log_file: Path | None = None,
) -> logging.Logger:
    """Configure logging for the ssh_registry package.

    Console output goes to stderr so stdout stays clean for public keys.
    ``log_file`` mirrors every record in plain text.

    Args:
        level: Log level name.
        use_colors: Use ANSI colors (ignored when stderr is not a TTY).
        log_file: Optional file that receives a copy of every record.

    Returns:
        The configured package logger.
    """
    if not sys.stderr.isatty():
        use_colors = False

    pkg_logger = logging.getLogger("ssh_registry")
    pkg_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Only add handlers if not already configured
    if not pkg_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColorfulFormatter(use_colors=use_colors))
        pkg_logger.addHandler(handler)

        if log_file is not None:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
            )
            pkg_logger.addHandler(file_handler)

        pkg_logger.propagate = False

    for noisy_logger in NOISY_LOGGERS:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    if log_file is not None:
        pkg_logger.debug("Logging to %s", log_file)
    return pkg_logger
