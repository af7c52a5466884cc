"""Rule data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class ImpactLevel(str, Enum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM_HIGH = "MEDIUM-HIGH"
    MEDIUM = "MEDIUM"
    LOW_MEDIUM = "LOW-MEDIUM"
    LOW = "LOW"

    @classmethod
    def values(cls) -> list[str]:
        return [item.value for item in cls]

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return value in cls.values()


@dataclass(frozen=True)
class RuleSourceMetadata:
    has_frontmatter: bool
    frontmatter: dict[str, str] = field(default_factory=dict)
    body: str = ""
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RuleExample:
    label: str
    code: str = ""
    description: Optional[str] = None
    language: Optional[str] = None
    additional_text: Optional[str] = None

    @property
    def has_code(self) -> bool:
        return bool(self.code.strip())

    def as_dict(self) -> dict:
        payload: dict = {"label": self.label, "code": self.code}
        if self.description is not None:
            payload["description"] = self.description
        if self.language is not None:
            payload["language"] = self.language
        if self.additional_text is not None:
            payload["additionalText"] = self.additional_text
        return payload


@dataclass(frozen=True)
class Rule:
    """A single best-practice rule compiled from one markdown file.

    ``impact`` is kept as the raw uppercased string so that unknown levels
    survive parsing and can be reported by the validator.
    """

    title: str
    section: int
    impact: str
    explanation: str
    id: str = ""
    subsection: Optional[int] = None
    impact_description: str = ""
    examples: list[RuleExample] = field(default_factory=list)
    references: list[str] = field(default_factory=list)
    tags: Optional[list[str]] = None

    def as_dict(self) -> dict:
        payload: dict = {
            "id": self.id,
            "title": self.title,
            "section": self.section,
            "impact": self.impact,
            "impactDescription": self.impact_description,
            "explanation": self.explanation,
            "examples": [example.as_dict() for example in self.examples],
            "references": list(self.references),
        }
        if self.subsection is not None:
            payload["subsection"] = self.subsection
        if self.tags is not None:
            payload["tags"] = list(self.tags)
        return payload


@dataclass(frozen=True)
class RuleFile:
    path: Path
    section: int
    rule: Rule
    source: RuleSourceMetadata
    subsection: int = 0
