from typing import Final


SKILLS_DIRNAME: Final[str] = "skills"
RULES_DIRNAME: Final[str] = "rules"
RULES_METADATA_FILENAME: Final[str] = "_metadata.yaml"

COMPILED_MARKDOWN_FILENAME: Final[str] = "AGENTS.md"
COMPILED_JSON_FILENAME: Final[str] = "rules.json"

RULES_DIR_ENVVAR: Final[str] = "SKILLS_KIT_RULES_DIR"
SKILLS_DIR_ENVVAR: Final[str] = "SKILLS_KIT_SKILLS_DIR"

DEFAULT_CODE_LANGUAGE: Final[str] = "typescript"
DEFAULT_DOCUMENT_TITLE: Final[str] = "Best Practices"
DEFAULT_DOCUMENT_VERSION: Final[str] = "0.1.0"

REQUIRED_FRONTMATTER_FIELDS: Final[tuple[str, ...]] = (
    "title",
    "impact",
    "impactDescription",
    "tags",
)

# Filename area (text before the first dash) -> section number.
SECTION_BY_AREA: Final[dict[str, int]] = {
    "async": 1,
    "bundle": 2,
    "server": 3,
    "client": 4,
    "rerender": 5,
    "rendering": 6,
    "js": 7,
    "advanced": 8,
}

BAD_EXAMPLE_KEYWORDS: Final[tuple[str, ...]] = ("incorrect", "wrong", "bad")
GOOD_EXAMPLE_KEYWORDS: Final[tuple[str, ...]] = (
    "correct",
    "good",
    "usage",
    "implementation",
    "example",
)
