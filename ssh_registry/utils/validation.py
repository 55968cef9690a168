"""Input validation for values written into the SSH config."""

import re

from ssh_registry.errors import InvalidHostEntryError

WHITESPACE_RE = re.compile(r"\s")
PATTERN_CHARS = ("*", "?", "!", ",")


def validate_value(name: str, value: str) -> str:
    """Validate a single config value.

    Args:
        name: Field name used in error messages
        value: Value to check

    Returns:
        The value unchanged

    Raises:
        InvalidHostEntryError: If empty or containing whitespace or NUL
    """
    if not value:
        raise InvalidHostEntryError(f"{name} cannot be empty")

    # A newline would let the value inject extra config lines
    if WHITESPACE_RE.search(value) or "\x00" in value:
        raise InvalidHostEntryError(f"{name} contains whitespace: {value!r}")

    return value


def validate_alias(alias: str) -> str:
    """Validate a host alias.

    Raises:
        InvalidHostEntryError: If alias is not a single concrete name
    """
    validate_value("Alias", alias)
    for char in PATTERN_CHARS:
        if char in alias:
            raise InvalidHostEntryError(f"Alias must not be a pattern: {alias!r}")
    return alias


def validate_hostname(hostname: str) -> str:
    """Validate a hostname.

    Raises:
        InvalidHostEntryError: If hostname is empty, too long or has whitespace
    """
    validate_value("Hostname", hostname)
    if len(hostname) > 253:
        raise InvalidHostEntryError(f"Hostname too long: {len(hostname)} chars")
    return hostname
