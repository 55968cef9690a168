"""Structured, lossless view of an SSH client config file.

The file is split into blocks: a preamble holding everything before the
first ``Host``/``Match`` header, then one block per header owning every
line up to the next header. Rendering an unmodified document returns the
original text unchanged, so edits only touch the blocks they target.
"""

import logging
import re
from dataclasses import dataclass, field

from ssh_registry.models import HostEntry

logger = logging.getLogger(__name__)

HEADER_RE = re.compile(r"^(\s*)(Host|Match)(\s*=\s*|\s+)(.*?)\s*$", re.IGNORECASE)
DIRECTIVE_RE = re.compile(r"^\s*(\w+)(?:\s*=\s*|\s+)(.+?)\s*$")


def _is_filler(line: str) -> bool:
    """Blank lines and comments."""
    stripped = line.strip()
    return not stripped or stripped.startswith("#")


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


@dataclass
class ConfigBlock:
    """A header line and the lines it owns.

    ``keyword`` is ``None`` for the preamble, otherwise ``"host"`` or ``"match"``.
    """

    lines: list[str] = field(default_factory=list)
    keyword: str | None = None
    patterns: list[str] = field(default_factory=list)

    @property
    def is_host(self) -> bool:
        return self.keyword == "host"

    def directives(self) -> list[tuple[str, str]]:
        """Keyword/value pairs below the header, keywords lowercased."""
        pairs: list[tuple[str, str]] = []
        body = self.lines if self.keyword is None else self.lines[1:]
        for line in body:
            if _is_filler(line):
                continue
            match = DIRECTIVE_RE.match(line)
            if match:
                pairs.append((match.group(1).lower(), _unquote(match.group(2))))
        return pairs

    def split_tail(self) -> tuple[list[str], list[str]]:
        """Split off trailing blank and comment lines.

        Returns:
            (body, tail) where tail is the filler after the last directive
        """
        end = len(self.lines)
        while end > 1 and _is_filler(self.lines[end - 1]):
            end -= 1
        return self.lines[:end], self.lines[end:]

    def drop_pattern(self, pattern: str) -> None:
        """Rewrite the header without one of its patterns."""
        header = self.lines[0]
        match = HEADER_RE.match(header)
        if match is None:
            return
        newline = header[len(header.rstrip("\r\n")):]
        self.patterns = [p for p in self.patterns if p != pattern]
        indent, keyword, sep = match.group(1), match.group(2), match.group(3)
        self.lines[0] = f"{indent}{keyword}{sep}{' '.join(self.patterns)}{newline}"


class SSHConfigDocument:
    """Ordered blocks of an SSH client config."""

    def __init__(self, blocks: list[ConfigBlock] | None = None):
        """Initialize document.

        Args:
            blocks: Parsed blocks, preamble first
        """
        self.blocks = blocks if blocks is not None else [ConfigBlock()]

    @classmethod
    def parse(cls, text: str) -> "SSHConfigDocument":
        """Parse config text into blocks.

        Args:
            text: Full config file content

        Returns:
            Document whose render() equals text
        """
        blocks = [ConfigBlock()]
        for line in text.splitlines(keepends=True):
            match = None if _is_filler(line) else HEADER_RE.match(line)
            if match:
                patterns = [_unquote(p) for p in match.group(4).split()]
                blocks.append(
                    ConfigBlock(
                        lines=[line],
                        keyword=match.group(2).lower(),
                        patterns=patterns,
                    )
                )
            else:
                blocks[-1].lines.append(line)
        return cls(blocks)

    def render(self) -> str:
        """Serialize the document back to config text."""
        return "".join(line for block in self.blocks for line in block.lines)

    def host_blocks(self) -> list[ConfigBlock]:
        """All ``Host`` blocks in file order."""
        return [b for b in self.blocks if b.is_host]

    def find(self, alias: str) -> list[ConfigBlock]:
        """Host blocks whose header names alias."""
        return [b for b in self.host_blocks() if alias in b.patterns]

    def remove_alias(self, alias: str) -> int:
        """Remove every stanza for alias.

        Blocks naming only this alias are dropped whole; their trailing
        blank and comment lines stay with the preceding block. Headers that
        also name other patterns just lose this alias.

        Args:
            alias: Host alias to remove

        Returns:
            Number of blocks removed or rewritten
        """
        changed = 0
        kept: list[ConfigBlock] = []
        for block in self.blocks:
            if not block.is_host or alias not in block.patterns:
                kept.append(block)
                continue
            changed += 1
            if len(block.patterns) > 1:
                block.drop_pattern(alias)
                kept.append(block)
                continue
            _, tail = block.split_tail()
            if tail:
                kept[-1].lines.extend(tail)
        self.blocks = kept
        if changed:
            logger.debug("Removed %d stanza(s) for alias %s", changed, alias)
        return changed

    def append(self, entry: HostEntry) -> None:
        """Append the four-line stanza for entry at the end of the file."""
        last = self.blocks[-1]
        if last.lines and not last.lines[-1].endswith("\n"):
            last.lines[-1] += "\n"
        stanza = [line + "\n" for line in entry.to_stanza()]
        self.blocks.append(
            ConfigBlock(lines=stanza, keyword="host", patterns=[entry.alias])
        )

    def identity_files(self) -> list[str]:
        """Raw IdentityFile values in file order, duplicates included."""
        return [
            value
            for block in self.blocks
            for key, value in block.directives()
            if key == "identityfile"
        ]
