"""Assemble a directory of rule files into an ordered, id-stamped build."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from skills_kit.constants import (
    DEFAULT_DOCUMENT_TITLE,
    DEFAULT_DOCUMENT_VERSION,
    RULES_METADATA_FILENAME,
    SECTION_BY_AREA,
)
from skills_kit.errors import InvalidMetadataError
from skills_kit.rules.models import RuleFile
from skills_kit.rules.parser import parse_rule_file
from skills_kit.rules.validator import list_rule_paths

logger = logging.getLogger(__name__)

_GENERAL_SECTION_TITLE = "General"


def _default_section_titles() -> dict[int, str]:
    return {number: area.capitalize() for area, number in SECTION_BY_AREA.items()}


@dataclass(frozen=True)
class RulesDocumentMetadata:
    title: str = DEFAULT_DOCUMENT_TITLE
    version: str = DEFAULT_DOCUMENT_VERSION
    abstract: str = ""
    references: list[str] = field(default_factory=list)
    section_titles: dict[int, str] = field(default_factory=_default_section_titles)

    def section_title(self, section: int) -> str:
        return self.section_titles.get(section, _GENERAL_SECTION_TITLE)


@dataclass(frozen=True)
class RulesBuild:
    metadata: RulesDocumentMetadata
    rule_files: list[RuleFile]

    def sections(self) -> dict[int, list[RuleFile]]:
        grouped: dict[int, list[RuleFile]] = {}
        for rule_file in self.rule_files:
            grouped.setdefault(rule_file.section, []).append(rule_file)
        return grouped


def load_metadata(rules_dir: Path) -> RulesDocumentMetadata:
    path = rules_dir / RULES_METADATA_FILENAME
    if not path.exists():
        return RulesDocumentMetadata()

    try:
        raw: Any = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise InvalidMetadataError(path, str(exc)) from exc
    if not isinstance(raw, dict):
        raise InvalidMetadataError(path, "expected a mapping at the top level")

    references = raw.get("references", [])
    if not isinstance(references, list):
        raise InvalidMetadataError(path, '"references" must be a list')

    section_titles = _default_section_titles()
    sections_raw = raw.get("sections", {})
    if not isinstance(sections_raw, dict):
        raise InvalidMetadataError(path, '"sections" must be a mapping')
    for key, value in sections_raw.items():
        try:
            section_titles[int(key)] = str(value)
        except (TypeError, ValueError) as exc:
            raise InvalidMetadataError(path, f"invalid section number {key!r}") from exc

    return RulesDocumentMetadata(
        title=str(raw.get("title", DEFAULT_DOCUMENT_TITLE)),
        version=str(raw.get("version", DEFAULT_DOCUMENT_VERSION)),
        abstract=str(raw.get("abstract", "")).strip(),
        references=[str(item) for item in references],
        section_titles=section_titles,
    )


def assign_rule_ids(rule_files: list[RuleFile]) -> list[RuleFile]:
    """Order rules by section then title and stamp ``<section>.<n>`` ids."""
    ordered = sorted(
        rule_files, key=lambda item: (item.section, item.rule.title.lower(), item.path.name)
    )
    counters: dict[int, int] = {}
    stamped: list[RuleFile] = []
    for rule_file in ordered:
        counters[rule_file.section] = counters.get(rule_file.section, 0) + 1
        rule_id = f"{rule_file.section}.{counters[rule_file.section]}"
        stamped.append(replace(rule_file, rule=replace(rule_file.rule, id=rule_id)))
    return stamped


def build_rules(rules_dir: Path) -> RulesBuild:
    metadata = load_metadata(rules_dir)
    parsed = [parse_rule_file(path) for path in list_rule_paths(rules_dir)]
    rule_files = assign_rule_ids(parsed)
    logger.debug("Built %d rule(s) from %s", len(rule_files), rules_dir)
    return RulesBuild(metadata=metadata, rule_files=rule_files)
