"""Tests for config value validation."""

import pytest

from ssh_registry.errors import InvalidHostEntryError
from ssh_registry.utils.validation import validate_alias, validate_hostname, validate_value


def test_valid_values_pass_through() -> None:
    assert validate_alias("github-work") == "github-work"
    assert validate_hostname("100.64.0.7") == "100.64.0.7"
    assert validate_value("User", "git") == "git"


@pytest.mark.parametrize("alias", ["", "gh*", "g?h", "!gh", "a,b", "a b", "a\nHost b"])
def test_invalid_alias(alias: str) -> None:
    with pytest.raises(InvalidHostEntryError):
        validate_alias(alias)


def test_hostname_too_long() -> None:
    with pytest.raises(InvalidHostEntryError, match="too long"):
        validate_hostname("a" * 254)


def test_invalid_entry_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        validate_value("User", "")
