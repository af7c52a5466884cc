"""Line scanner for disallowed shell commands in skill content."""

from __future__ import annotations

import re
from typing import Final

from skills_kit.lint.models import BashBlock, Violation

# Command key -> token pattern. The pattern is inserted into the matching
# regex as-is; everything not listed here is implicitly allowed.
BLOCKED_COMMANDS: Final[dict[str, str]] = {
    "rm": "rm",  # deletes files
    "sudo": "sudo",  # privilege escalation
    "chmod": "chmod",
    "chown": "chown",
    "dd": "dd",  # raw disk writes
    "mkfs": r"mkfs(?:\.[\w+-]+)?",  # mkfs, mkfs.ext4, mkfs.xfs
    "fdisk": "fdisk",
    "gdisk": "gdisk",
    "parted": "parted",
    "kill": "kill",
    "killall": "killall",
    "pkill": "pkill",
    "eval": "eval",
    "passwd": "passwd",
    "useradd": "useradd",
    "userdel": "userdel",
    "usermod": "usermod",
    "groupadd": "groupadd",
    "crontab": "crontab",
    "reboot": "reboot",
    "shutdown": "shutdown",
    "halt": "halt",
    "poweroff": "poweroff",
    "mount": "mount",
    "umount": "umount",
    "iptables": "iptables",
    "nft": "nft",
    "ufw": "ufw",
}

# Bare name or path-prefixed form (/bin/rm, ./rm, ../bin/rm). The lookahead
# keeps substrings such as "framework" from matching.
_PATTERN_TEMPLATE = r"(?:^|[\s|;&`$(])(?:[./][\w./-]*/)?{token}(?=[\s|;&`$()><!]|$)"

BLOCKED_PATTERNS: Final[tuple[tuple[str, re.Pattern[str]], ...]] = tuple(
    (command, re.compile(_PATTERN_TEMPLATE.format(token=token)))
    for command, token in BLOCKED_COMMANDS.items()
)

_BASH_FENCE_OPEN_RE = re.compile(r"^```(bash|sh|shell)\s*$", re.IGNORECASE)
_FENCE_CLOSE_RE = re.compile(r"^```\s*$")


def scan_lines(text: str, file_path: str, line_offset: int) -> list[Violation]:
    """Return at most one violation per line of ``text``.

    Comment lines are scanned too: an agent may act on any text it reads.
    ``line_offset`` is the 0-based index of the first line in the parent file.
    """
    violations: list[Violation] = []
    for index, line in enumerate(text.split("\n")):
        trimmed = line.strip()
        if not trimmed:
            continue

        for command, pattern in BLOCKED_PATTERNS:
            if pattern.search(line):
                violations.append(
                    Violation(
                        file=file_path,
                        line=line_offset + index + 1,
                        command=command,
                        content=trimmed,
                    )
                )
                break
    return violations


def extract_bash_blocks(markdown: str) -> list[BashBlock]:
    """Collect bash/sh/shell fences; ``start_line`` is the 0-based first content line."""
    blocks: list[BashBlock] = []
    in_block = False
    block_lines: list[str] = []
    block_start = 0

    for index, line in enumerate(markdown.split("\n")):
        if not in_block:
            if _BASH_FENCE_OPEN_RE.match(line.strip()):
                in_block = True
                block_lines = []
                block_start = index + 1
        elif _FENCE_CLOSE_RE.match(line.strip()):
            blocks.append(BashBlock(code="\n".join(block_lines), start_line=block_start))
            in_block = False
            block_lines = []
        else:
            block_lines.append(line)

    return blocks
