from skills_kit.rules.builder import RulesBuild, build_rules
from skills_kit.rules.models import ImpactLevel, Rule, RuleExample, RuleFile, RuleSourceMetadata
from skills_kit.rules.parser import parse_rule_content, parse_rule_file, parse_rule_source
from skills_kit.rules.validator import (
    ValidationError,
    validate_rule,
    validate_rule_source,
    validate_rules_dir,
)

__all__ = [
    "ImpactLevel",
    "Rule",
    "RuleExample",
    "RuleFile",
    "RuleSourceMetadata",
    "RulesBuild",
    "ValidationError",
    "build_rules",
    "parse_rule_content",
    "parse_rule_file",
    "parse_rule_source",
    "validate_rule",
    "validate_rule_source",
    "validate_rules_dir",
]
