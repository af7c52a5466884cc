"""Tests for splitting rule markdown into frontmatter and body."""

from skills_kit.rules.parser import parse_rule_source


def test_no_frontmatter_returns_input_as_body() -> None:
    text = "## Title\n\nSome body.\n"
    source = parse_rule_source(text)
    assert source.has_frontmatter is False
    assert source.frontmatter == {}
    assert source.body == text
    assert source.errors == []


def test_frontmatter_and_body_split() -> None:
    source = parse_rule_source("---\ntitle: Rule\nimpact: HIGH\n---\n\n## Rule\n")
    assert source.has_frontmatter is True
    assert source.frontmatter == {"title": "Rule", "impact": "HIGH"}
    assert source.body == "\n## Rule\n"
    assert source.errors == []


def test_unclosed_frontmatter() -> None:
    source = parse_rule_source("---\ntitle: Rule\n\n## Rule\n")
    assert source.has_frontmatter is True
    assert source.body == ""
    assert source.frontmatter == {}
    assert len(source.errors) == 1
    assert "Unclosed" in source.errors[0]


def test_quotes_are_stripped_once() -> None:
    source = parse_rule_source(
        "---\n"
        'title: "a:b"\n'
        "name: 'single'\n"
        "nested: \"'inner'\"\n"
        "---\n"
    )
    assert source.frontmatter["title"] == "a:b"
    assert source.frontmatter["name"] == "single"
    assert source.frontmatter["nested"] == "'inner'"


def test_value_keeps_everything_after_first_colon() -> None:
    source = parse_rule_source("---\nurl: https://example.com/a\n---\n")
    assert source.frontmatter["url"] == "https://example.com/a"


def test_malformed_lines_are_reported_and_skipped() -> None:
    source = parse_rule_source(
        "---\n"
        "just text\n"
        "empty:\n"
        ": orphan\n"
        'quoted: ""\n'
        "title: Kept\n"
        "---\n"
        "body"
    )
    assert source.frontmatter == {"title": "Kept"}
    assert source.errors == [
        'Invalid frontmatter line 2: "just text" (expected key: value)',
        'Invalid frontmatter field "empty": value cannot be empty',
        "Invalid frontmatter line 4: empty key",
        'Invalid frontmatter field "quoted": value cannot be empty',
    ]
    assert source.body == "body"


def test_blank_frontmatter_lines_are_ignored() -> None:
    source = parse_rule_source("---\n\n   \ntitle: Rule\n---\n")
    assert source.errors == []
    assert source.frontmatter == {"title": "Rule"}


def test_later_duplicate_keys_overwrite() -> None:
    source = parse_rule_source("---\ntitle: First\ntitle: Second\n---\n")
    assert source.frontmatter == {"title": "Second"}


def test_crlf_line_endings() -> None:
    source = parse_rule_source("---\r\ntitle: Rule\r\n---\r\n## Rule\r\nText")
    assert source.frontmatter == {"title": "Rule"}
    assert source.body == "## Rule\nText"


def test_opening_fence_may_have_surrounding_whitespace() -> None:
    source = parse_rule_source("  ---  \ntitle: Rule\n---\nbody")
    assert source.has_frontmatter is True
    assert source.frontmatter == {"title": "Rule"}


def test_parsing_is_idempotent(valid_rule_text: str) -> None:
    assert parse_rule_source(valid_rule_text) == parse_rule_source(valid_rule_text)
