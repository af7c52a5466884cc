"""Tests for compiling rule builds into documents."""

import json
from pathlib import Path

from skills_kit.rules.builder import RulesBuild, RulesDocumentMetadata, assign_rule_ids
from skills_kit.rules.compilers import (
    COMPILERS,
    JsonRulesCompiler,
    MarkdownRulesCompiler,
)
from skills_kit.rules.parser import parse_rule_text


def _make_build(valid_rule_text: str) -> RulesBuild:
    parsed = parse_rule_text(valid_rule_text, Path("async-parallel.md"))
    return RulesBuild(
        metadata=RulesDocumentMetadata(
            title="React Best Practices",
            abstract="Guidance for agents.",
            references=["https://react.dev"],
        ),
        rule_files=assign_rule_ids([parsed]),
    )


def test_markdown_compiler(valid_rule_text: str) -> None:
    filename, content = MarkdownRulesCompiler().compile(_make_build(valid_rule_text))
    assert filename == "AGENTS.md"
    assert content.startswith("---\ntitle: React Best Practices\n")
    assert "rules: 1" in content
    assert "# React Best Practices" in content
    assert "Guidance for agents." in content
    assert "## 1. Async" in content
    assert "### 1.1 Use Promise.all for Independent Operations" in content
    assert "**Impact: CRITICAL (2-10x improvement)**" in content
    assert "**Incorrect (sequential execution):**" in content
    assert "```typescript\nconst user = await fetchUser()" in content
    assert "- https://react.dev" in content


def test_markdown_compiler_table_of_contents(valid_rule_text: str) -> None:
    _, content = MarkdownRulesCompiler().compile(_make_build(valid_rule_text))
    assert "- [1. Async](#1-async)" in content
    assert (
        "  - [1.1 Use Promise.all for Independent Operations]"
        "(#11-use-promiseall-for-independent-operations)"
    ) in content


def test_json_compiler(valid_rule_text: str) -> None:
    filename, content = JsonRulesCompiler().compile(_make_build(valid_rule_text))
    assert filename == "rules.json"
    payload = json.loads(content)
    assert payload["title"] == "React Best Practices"
    section = payload["sections"][0]
    assert section["section"] == 1
    assert section["title"] == "Async"
    rule = section["rules"][0]
    assert rule["id"] == "1.1"
    assert rule["impact"] == "CRITICAL"
    assert rule["impactDescription"] == "2-10x improvement"
    assert rule["tags"] == ["async", "parallelization", "promises"]
    assert [example["label"] for example in rule["examples"]] == ["Incorrect", "Correct"]
    assert rule["examples"][0]["language"] == "typescript"
    assert "subsection" not in rule


def test_registered_compilers() -> None:
    assert sorted(COMPILERS) == ["json", "markdown"]
