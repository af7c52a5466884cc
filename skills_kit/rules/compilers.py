"""Compilers that render a rules build into a single output document."""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod

import yaml

from skills_kit.constants import COMPILED_JSON_FILENAME, COMPILED_MARKDOWN_FILENAME
from skills_kit.rules.builder import RulesBuild
from skills_kit.rules.models import Rule, RuleExample


def _anchor(text: str) -> str:
    slug = re.sub(r"[^\w\s-]", "", text.lower())
    return re.sub(r"\s+", "-", slug.strip())


class IRulesCompiler(ABC):
    @abstractmethod
    def compile(self, build: RulesBuild) -> tuple[str, str]:
        """Return (filename, compiled_content)."""


class MarkdownRulesCompiler(IRulesCompiler):
    """Compile to one AGENTS.md document with YAML frontmatter."""

    def compile(self, build: RulesBuild) -> tuple[str, str]:
        metadata = build.metadata
        sections = build.sections()

        fm: dict = {
            "title": metadata.title,
            "version": metadata.version,
            "rules": len(build.rule_files),
        }

        parts: list[str] = []
        parts.append("---")
        parts.append(yaml.dump(fm, default_flow_style=False, sort_keys=False).rstrip())
        parts.append("---")
        parts.append("")
        parts.append(f"# {metadata.title}")
        parts.append("")
        if metadata.abstract:
            parts.append(metadata.abstract)
            parts.append("")

        parts.append("## Table of Contents")
        parts.append("")
        for section, rule_files in sections.items():
            section_title = f"{section}. {metadata.section_title(section)}"
            parts.append(f"- [{section_title}](#{_anchor(section_title)})")
            for rule_file in rule_files:
                heading = f"{rule_file.rule.id} {rule_file.rule.title}"
                parts.append(f"  - [{heading}](#{_anchor(heading)})")
        parts.append("")

        for section, rule_files in sections.items():
            parts.append(f"## {section}. {metadata.section_title(section)}")
            parts.append("")
            for rule_file in rule_files:
                parts.extend(self._render_rule(rule_file.rule))

        if metadata.references:
            parts.append("## References")
            parts.append("")
            parts.extend(f"- {reference}" for reference in metadata.references)
            parts.append("")

        return COMPILED_MARKDOWN_FILENAME, "\n".join(parts)

    def _render_rule(self, rule: Rule) -> list[str]:
        lines = [f"### {rule.id} {rule.title}", ""]
        impact = f"**Impact: {rule.impact}"
        if rule.impact_description:
            impact += f" ({rule.impact_description})"
        lines.extend([impact + "**", ""])
        if rule.explanation:
            lines.extend([rule.explanation, ""])
        for example in rule.examples:
            lines.extend(self._render_example(example))
        if rule.references:
            links = ", ".join(f"[{url}]({url})" for url in rule.references)
            lines.extend([f"Reference: {links}", ""])
        return lines

    @staticmethod
    def _render_example(example: RuleExample) -> list[str]:
        label = example.label
        if example.description:
            label += f" ({example.description})"
        lines = [f"**{label}:**", ""]
        if example.code:
            lines.append(f"```{example.language or ''}")
            lines.append(example.code)
            lines.append("```")
            lines.append("")
        if example.additional_text:
            lines.extend([example.additional_text, ""])
        return lines


class JsonRulesCompiler(IRulesCompiler):
    """Compile to a rules.json document."""

    def compile(self, build: RulesBuild) -> tuple[str, str]:
        metadata = build.metadata
        payload = {
            "title": metadata.title,
            "version": metadata.version,
            "abstract": metadata.abstract,
            "references": list(metadata.references),
            "sections": [
                {
                    "section": section,
                    "title": metadata.section_title(section),
                    "rules": [rule_file.rule.as_dict() for rule_file in rule_files],
                }
                for section, rule_files in build.sections().items()
            ],
        }
        return COMPILED_JSON_FILENAME, json.dumps(payload, indent=2) + "\n"


COMPILERS: dict[str, IRulesCompiler] = {
    "markdown": MarkdownRulesCompiler(),
    "json": JsonRulesCompiler(),
}
