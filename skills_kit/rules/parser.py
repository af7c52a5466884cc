"""Parse rule markdown files (frontmatter + structured body) into rules."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from skills_kit.constants import DEFAULT_CODE_LANGUAGE, SECTION_BY_AREA
from skills_kit.errors import RuleReadError
from skills_kit.rules.models import (
    ImpactLevel,
    Rule,
    RuleExample,
    RuleFile,
    RuleSourceMetadata,
)

logger = logging.getLogger(__name__)

_LINE_SPLIT_RE = re.compile(r"\r?\n")
_FENCE = "---"
_QUOTES = ("'", '"')

_HEADING_PREFIX_RE = re.compile(r"^##+\s*")
_IMPACT_MARKER = "**Impact:"
_IMPACT_RE = re.compile(r"\*\*Impact:\s*(\w+(?:-\w+)?)\s*(?:\(([^)]+)\))?", re.IGNORECASE)
_CODE_FENCE = "```"
# Matches **Label:** or **Label (description):** on a line of its own, which
# keeps inline bold text such as "**Trade-off:** some text" out.
_LABEL_RE = re.compile(r"^\*\*([^:]+?):\*?\*?$")
# Nested parentheses ("Incorrect (O(n) per lookup)") keep the full label.
_LABEL_DESCRIPTION_RE = re.compile(r"^([A-Za-z]+(?:\s+[A-Za-z]+)*)\s*\(([^()]+)\)$")
_REFERENCE_PREFIXES = ("Reference:", "References:")
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def parse_rule_source(content: str) -> RuleSourceMetadata:
    """Split raw markdown into frontmatter and body.

    Missing frontmatter is tolerated so legacy files still parse; structural
    problems are collected in ``errors`` instead of being raised.
    """
    frontmatter: dict[str, str] = {}
    errors: list[str] = []
    lines = _LINE_SPLIT_RE.split(content)

    if lines[0].strip() != _FENCE:
        return RuleSourceMetadata(
            has_frontmatter=False, frontmatter=frontmatter, body=content, errors=errors
        )

    frontmatter_end = -1
    for index in range(1, len(lines)):
        if lines[index].strip() == _FENCE:
            frontmatter_end = index
            break

    if frontmatter_end == -1:
        errors.append("Unclosed YAML frontmatter block (missing closing ---)")
        return RuleSourceMetadata(
            has_frontmatter=True, frontmatter=frontmatter, body="", errors=errors
        )

    for index in range(1, frontmatter_end):
        line = lines[index].strip()
        if not line:
            continue

        key, separator, raw_value = line.partition(":")
        if not separator:
            errors.append(
                f'Invalid frontmatter line {index + 1}: "{lines[index]}" (expected key: value)'
            )
            continue

        key = key.strip()
        value = _strip_quotes(raw_value.strip())

        if not key:
            errors.append(f"Invalid frontmatter line {index + 1}: empty key")
            continue

        if not value:
            errors.append(f'Invalid frontmatter field "{key}": value cannot be empty')
            continue

        frontmatter[key] = value

    return RuleSourceMetadata(
        has_frontmatter=True,
        frontmatter=frontmatter,
        body="\n".join(lines[frontmatter_end + 1 :]),
        errors=errors,
    )


@dataclass
class _ExampleDraft:
    label: str
    description: Optional[str]
    language: str
    code: str = ""

    def finish(self, additional_text: list[str]) -> RuleExample:
        return RuleExample(
            label=self.label,
            description=self.description,
            code=self.code,
            language=self.language,
            additional_text="\n\n".join(additional_text) if additional_text else None,
        )


@dataclass
class _BodyState:
    impact: str = ImpactLevel.MEDIUM.value
    impact_description: str = ""
    explanation: str = ""
    examples: list[RuleExample] = field(default_factory=list)
    references: list[str] = field(default_factory=list)

    current_example: Optional[_ExampleDraft] = None
    in_code_block: bool = False
    code_block_language: str = DEFAULT_CODE_LANGUAGE
    code_lines: list[str] = field(default_factory=list)
    after_code_block: bool = False
    additional_text: list[str] = field(default_factory=list)
    has_code_block_for_current_example: bool = False

    def close_example(self) -> None:
        if self.current_example is None:
            return
        self.examples.append(self.current_example.finish(self.additional_text))
        self.additional_text = []
        self.current_example = None

    def feed(self, line: str) -> None:
        if _IMPACT_MARKER in line:
            match = _IMPACT_RE.search(line)
            if match:
                self.impact = match.group(1).upper()
                self.impact_description = match.group(2) or ""
            return

        if line.startswith(_CODE_FENCE):
            self._toggle_fence(line)
            return

        if self.in_code_block:
            self.code_lines.append(line)
            return

        label_match = _LABEL_RE.match(line)
        if label_match:
            self.close_example()
            self.after_code_block = False
            self.has_code_block_for_current_example = False
            self.current_example = self._new_example(label_match.group(1).strip())
            return

        if line.startswith(_REFERENCE_PREFIXES):
            self.close_example()
            self.references.extend(match.group(2) for match in _LINK_RE.finditer(line))
            return

        if not line.strip() or line.startswith("#"):
            return

        if self.current_example is None:
            self.explanation = f"{self.explanation}\n\n{line}" if self.explanation else line
        elif self.after_code_block or not self.has_code_block_for_current_example:
            self.additional_text.append(line)

    def _toggle_fence(self, line: str) -> None:
        if self.in_code_block:
            if self.current_example is not None:
                self.current_example.code = "\n".join(self.code_lines)
                self.current_example.language = self.code_block_language
            self.code_lines = []
            self.in_code_block = False
            self.after_code_block = True
            return

        self.in_code_block = True
        self.has_code_block_for_current_example = True
        self.code_block_language = line[len(_CODE_FENCE) :].strip() or DEFAULT_CODE_LANGUAGE
        self.code_lines = []
        self.after_code_block = False

    def _new_example(self, full_label: str) -> _ExampleDraft:
        match = _LABEL_DESCRIPTION_RE.match(full_label)
        if match:
            return _ExampleDraft(
                label=match.group(1).strip(),
                description=match.group(2).strip(),
                language=self.code_block_language,
            )
        return _ExampleDraft(
            label=full_label, description=None, language=self.code_block_language
        )


def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        number = float(value.strip())
    except ValueError:
        return None
    if not math.isfinite(number) or not number.is_integer():
        return None
    return int(number)


def resolve_section(frontmatter: dict[str, str], filename: str) -> int:
    """Frontmatter ``section`` wins, then the filename area, then 0."""
    explicit = _parse_int(frontmatter.get("section"))
    if explicit is not None:
        return explicit
    area = filename.split("-")[0]
    return SECTION_BY_AREA.get(area, 0)


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",")]


def parse_rule_content(source: RuleSourceMetadata, path: Path) -> RuleFile:
    frontmatter = source.frontmatter
    lines = source.body.strip().split("\n")

    title = ""
    title_line = 0
    for index, line in enumerate(lines):
        if line.startswith("##"):
            title = _HEADING_PREFIX_RE.sub("", line).strip()
            title_line = index
            break

    state = _BodyState()
    for line in lines[title_line + 1 :]:
        state.feed(line)
    state.close_example()

    section = resolve_section(frontmatter, path.name)

    impact = state.impact
    if frontmatter.get("impact"):
        impact = frontmatter["impact"].upper()

    references = state.references
    if frontmatter.get("references"):
        references = _split_list(frontmatter["references"])

    tags = _split_list(frontmatter["tags"]) if frontmatter.get("tags") else None

    rule = Rule(
        id="",
        title=frontmatter.get("title") or title,
        section=section,
        subsection=None,
        impact=impact,
        impact_description=frontmatter.get("impactDescription") or state.impact_description,
        explanation=frontmatter.get("explanation") or state.explanation.strip(),
        examples=state.examples,
        references=references,
        tags=tags,
    )
    return RuleFile(path=path, section=section, subsection=0, rule=rule, source=source)


def parse_rule_text(text: str, path: Path) -> RuleFile:
    return parse_rule_content(parse_rule_source(text), path)


def parse_rule_file(path: Path) -> RuleFile:
    logger.debug("Parsing rule file %s", path)
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise RuleReadError(path, str(exc)) from exc
    return parse_rule_text(text, path)
