"""Tests for walking a skills tree."""

import os
from pathlib import Path

from skills_kit.lint.models import Violation
from skills_kit.lint.service import find_files, lint_skills


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_find_files_recursive_and_sorted(skills_dir: Path) -> None:
    b = _write(skills_dir / "b" / "run.sh", "")
    a = _write(skills_dir / "a" / "nested" / "setup.sh", "")
    _write(skills_dir / "a" / "SKILL.md", "")
    assert find_files(skills_dir, ".sh") == [a, b]


def test_find_files_missing_root(tmp_path: Path) -> None:
    assert find_files(tmp_path / "missing", ".sh") == []


def test_lint_skills_reports_scripts_and_bash_blocks(skills_dir: Path) -> None:
    script = _write(skills_dir / "deploy" / "run.sh", "echo ok\nsudo ls\n")
    doc = _write(
        skills_dir / "deploy" / "SKILL.md",
        "# Deploy\n\n"
        "```bash\necho hi\nrm -rf build\n```\n\n"
        "```typescript\nrm()\n```\n\n"
        "Run `rm -rf` never.\n",
    )

    report = lint_skills(skills_dir)
    assert report.files_checked == 2
    assert not report.ok
    assert report.violations == [
        Violation(file=str(script), line=2, command="sudo", content="sudo ls"),
        Violation(file=str(doc), line=5, command="rm", content="rm -rf build"),
    ]


def test_lint_skills_clean_tree(skills_dir: Path) -> None:
    _write(skills_dir / "docs" / "SKILL.md", "```bash\nls -la\n```\n")
    report = lint_skills(skills_dir)
    assert report.ok
    assert report.files_checked == 1


def test_lint_skills_missing_root(tmp_path: Path) -> None:
    report = lint_skills(tmp_path / "missing")
    assert report.ok
    assert report.files_checked == 0


def test_lint_skills_skips_dangling_symlinks(skills_dir: Path) -> None:
    _write(skills_dir / "ok.sh", "echo ok\n")
    os.symlink(skills_dir / "gone.md", skills_dir / "link.md")

    assert find_files(skills_dir, ".md") == []
    report = lint_skills(skills_dir)
    assert report.ok
    assert report.files_checked == 1


def test_lint_skills_scans_files_with_invalid_utf8(skills_dir: Path) -> None:
    doc = skills_dir / "SKILL.md"
    doc.write_bytes(b"caf\xe9\n```bash\nrm -rf /\n```\n")

    report = lint_skills(skills_dir)
    assert report.files_checked == 1
    assert report.violations == [
        Violation(file=str(doc), line=3, command="rm", content="rm -rf /")
    ]
