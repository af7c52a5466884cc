"""Walk a skills tree and lint shell scripts and markdown bash blocks."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from skills_kit.lint.models import LintReport
from skills_kit.lint.scanner import extract_bash_blocks, scan_lines

logger = logging.getLogger(__name__)


def find_files(root: Path, suffix: str) -> list[Path]:
    """Recursively collect files ending with ``suffix``.

    A missing root yields nothing; unreadable or dangling entries below it
    are skipped.
    """
    results: list[Path] = []
    try:
        entries = sorted(root.iterdir())
    except OSError:
        return results

    for entry in entries:
        try:
            if entry.is_dir():
                results.extend(find_files(entry, suffix))
            elif entry.is_file() and entry.name.endswith(suffix):
                results.append(entry)
        except OSError:
            logger.debug("Skipping inaccessible entry %s", entry)
    return results


def _read_text(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.debug("Skipping unreadable file %s (%s)", path, exc)
        return None


def lint_skills(skills_dir: Path) -> LintReport:
    report = LintReport(skills_dir=skills_dir)

    for path in find_files(skills_dir, ".sh"):
        logger.debug("Scanning script %s", path)
        code = _read_text(path)
        if code is None:
            continue
        report.files_checked += 1
        report.violations.extend(scan_lines(code, str(path), 0))

    for path in find_files(skills_dir, ".md"):
        logger.debug("Scanning markdown %s", path)
        content = _read_text(path)
        if content is None:
            continue
        report.files_checked += 1
        for block in extract_bash_blocks(content):
            report.violations.extend(scan_lines(block.code, str(path), block.start_line))

    return report
