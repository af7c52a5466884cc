"""Validate rule files against the rule template contract."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from skills_kit.constants import (
    BAD_EXAMPLE_KEYWORDS,
    GOOD_EXAMPLE_KEYWORDS,
    REQUIRED_FRONTMATTER_FIELDS,
)
from skills_kit.errors import MissingRulesDirError, SkillsKitError
from skills_kit.rules.models import ImpactLevel, Rule, RuleSourceMetadata
from skills_kit.rules.parser import parse_rule_file

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(r"^##\s+(.+)$", re.MULTILINE)
# Allows variants like "Incorrect (why):" or "❌ Incorrect (...):".
_INCORRECT_LABEL_RE = re.compile(r"\*\*[^*\n]*\bincorrect\b[^*\n]*:\*?\*?", re.IGNORECASE)
_CORRECT_LABEL_RE = re.compile(r"\*\*[^*\n]*\bcorrect\b[^*\n]*:\*?\*?", re.IGNORECASE)


@dataclass(frozen=True)
class ValidationError:
    file: str
    message: str
    rule_id: Optional[str] = None

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.file, self.rule_id or "", self.message)


@dataclass
class RulesValidationReport:
    rules_dir: Path
    files: list[str] = field(default_factory=list)
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _invalid_impact_choices() -> str:
    return ", ".join(ImpactLevel.values())


def validate_rule_source(source: RuleSourceMetadata, file: str) -> list[ValidationError]:
    """Check the markdown source: frontmatter fields, heading, example labels."""
    errors = [ValidationError(file=file, message=message) for message in source.errors]
    frontmatter = source.frontmatter

    if not source.has_frontmatter:
        errors.append(
            ValidationError(
                file=file, message="Missing YAML frontmatter block (must start with ---)"
            )
        )

    for name in REQUIRED_FRONTMATTER_FIELDS:
        value = frontmatter.get(name)
        if not value or not value.strip():
            errors.append(
                ValidationError(
                    file=file, message=f'Missing required frontmatter field "{name}"'
                )
            )

    impact = frontmatter.get("impact")
    if impact and not ImpactLevel.is_valid(impact):
        errors.append(
            ValidationError(
                file=file,
                message=(
                    f'Invalid frontmatter impact "{impact}". '
                    f"Must be one of: {_invalid_impact_choices()}"
                ),
            )
        )

    if frontmatter.get("tags"):
        tags = [tag.strip() for tag in frontmatter["tags"].split(",") if tag.strip()]
        if not tags:
            errors.append(
                ValidationError(
                    file=file,
                    message='Frontmatter "tags" must include at least one comma-separated tag',
                )
            )

    body_lines = re.split(r"\r?\n", source.body)
    first_content_line = next((line for line in body_lines if line.strip()), None)
    if first_content_line is None or not first_content_line.startswith("## "):
        errors.append(
            ValidationError(
                file=file, message="Body must start with a level-2 heading (## Rule Title)"
            )
        )

    heading_match = _HEADING_RE.search(source.body)
    if heading_match is None:
        errors.append(
            ValidationError(file=file, message="Missing required rule heading (## Rule Title)")
        )
    elif frontmatter.get("title"):
        heading_title = heading_match.group(1).strip()
        if heading_title != frontmatter["title"].strip():
            errors.append(
                ValidationError(
                    file=file,
                    message=(
                        f'Frontmatter title "{frontmatter["title"]}" '
                        f'must match heading "{heading_title}"'
                    ),
                )
            )

    if not _INCORRECT_LABEL_RE.search(source.body):
        errors.append(
            ValidationError(file=file, message='Missing required "**Incorrect ...:**" section')
        )
    if not _CORRECT_LABEL_RE.search(source.body):
        errors.append(
            ValidationError(file=file, message='Missing required "**Correct ...:**" section')
        )

    return errors


def _label_has(label: str, keywords: Iterable[str]) -> bool:
    lowered = label.lower()
    return any(keyword in lowered for keyword in keywords)


def validate_rule(rule: Rule, file: str) -> list[ValidationError]:
    """Check the parsed rule object; ``rule.id`` is assigned later by the build."""
    errors: list[ValidationError] = []

    def add(message: str) -> None:
        errors.append(ValidationError(file=file, rule_id=rule.id, message=message))

    if not rule.title.strip():
        add("Missing or empty title")

    if not rule.explanation.strip():
        add("Missing or empty explanation")

    if not rule.examples:
        add("Missing examples (need at least one bad and one good example)")
    else:
        # Notes and trade-offs without code are informational only.
        code_examples = [example for example in rule.examples if example.has_code]
        has_bad = any(_label_has(e.label, BAD_EXAMPLE_KEYWORDS) for e in code_examples)
        has_good = any(_label_has(e.label, GOOD_EXAMPLE_KEYWORDS) for e in code_examples)

        if not code_examples:
            add("Missing code examples")
        elif not has_bad and not has_good:
            add("Missing bad/incorrect or good/correct examples")

    if not ImpactLevel.is_valid(rule.impact):
        add(f"Invalid impact level: {rule.impact}. Must be one of: {_invalid_impact_choices()}")

    return errors


def dedupe_errors(errors: Iterable[ValidationError]) -> list[ValidationError]:
    seen: set[tuple[str, str, str]] = set()
    unique: list[ValidationError] = []
    for error in errors:
        if error.key in seen:
            continue
        seen.add(error.key)
        unique.append(error)
    return unique


def validate_rule_file(path: Path) -> list[ValidationError]:
    file = path.name
    try:
        parsed = parse_rule_file(path)
    except SkillsKitError as exc:
        return [ValidationError(file=file, message=f"Failed to parse: {exc}")]

    errors = validate_rule_source(parsed.source, file)
    errors.extend(validate_rule(parsed.rule, file))
    return dedupe_errors(errors)


def list_rule_paths(rules_dir: Path) -> list[Path]:
    """Rule files are the ``*.md`` entries; ``_``-prefixed files are metadata."""
    if not rules_dir.is_dir():
        raise MissingRulesDirError(rules_dir)
    return sorted(
        child
        for child in rules_dir.iterdir()
        if child.is_file() and child.suffix == ".md" and not child.name.startswith("_")
    )


def validate_rules_dir(rules_dir: Path) -> RulesValidationReport:
    report = RulesValidationReport(rules_dir=rules_dir)
    for path in list_rule_paths(rules_dir):
        logger.debug("Validating %s", path)
        report.files.append(path.name)
        report.errors.extend(validate_rule_file(path))
    logger.debug(
        "Validated %d rule file(s) with %d error(s)", len(report.files), len(report.errors)
    )
    return report
