from skills_kit.lint.models import BashBlock, LintReport, Violation
from skills_kit.lint.scanner import (
    BLOCKED_COMMANDS,
    BLOCKED_PATTERNS,
    extract_bash_blocks,
    scan_lines,
)
from skills_kit.lint.service import find_files, lint_skills

__all__ = [
    "BLOCKED_COMMANDS",
    "BLOCKED_PATTERNS",
    "BashBlock",
    "LintReport",
    "Violation",
    "extract_bash_blocks",
    "find_files",
    "lint_skills",
    "scan_lines",
]
