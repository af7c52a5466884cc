"""Linter data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Violation:
    file: str
    line: int
    command: str
    content: str


@dataclass(frozen=True)
class BashBlock:
    code: str
    start_line: int


@dataclass
class LintReport:
    skills_dir: Path
    files_checked: int = 0
    violations: list[Violation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations
