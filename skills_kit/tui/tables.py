from collections import Counter
from pathlib import Path

from rich.markup import escape
from rich.table import Column, Table

from skills_kit.lint.models import Violation
from skills_kit.rules.builder import RulesBuild
from skills_kit.rules.validator import ValidationError
from skills_kit.tui.enums import IMPACT_STYLE, UIStyle
from skills_kit.utils import relative_to_parent


class ValidationTable:
    @staticmethod
    def errors_table(errors: list[ValidationError]) -> Table:
        table = Table(
            Column(header="File", overflow="fold", max_width=40),
            Column(header="Rule", width=6),
            Column(header="Message", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for error in errors:
            table.add_row(escape(error.file), error.rule_id or "", escape(error.message))
        return table


class LintTable:
    @staticmethod
    def summary_block(files_checked: int, violations: list[Violation]):
        counts = Counter(item.command for item in violations)
        chips = [f"{key}={value}" for key, value in sorted(counts.items())]
        if not chips:
            chips = ["none"]

        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Files", str(files_checked))
        table.add_row("Violations", str(len(violations)))
        table.add_row("Commands", "  ".join(chips))
        return table

    @staticmethod
    def violations_table(violations: list[Violation], skills_dir: Path) -> Table:
        table = Table(
            Column(header="Location", overflow="fold", max_width=48),
            Column(header="Command", width=10),
            Column(header="Content", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for item in violations:
            location = f"{relative_to_parent(item.file, skills_dir)}:{item.line}"
            table.add_row(
                escape(location),
                f"[{UIStyle.RED.value}]{item.command}[/{UIStyle.RED.value}]",
                escape(item.content),
            )
        return table


class BuildTable:
    @staticmethod
    def rules_table(build: RulesBuild) -> Table:
        table = Table(
            Column(header="Id", width=6),
            Column(header="Title", overflow="ellipsis"),
            Column(header="Impact", width=12),
            Column(header="Examples", width=8, justify="right"),
            expand=True,
            header_style="bold",
        )
        for rule_file in build.rule_files:
            rule = rule_file.rule
            style = IMPACT_STYLE.get(rule.impact, UIStyle.WHITE.value)
            table.add_row(
                rule.id,
                escape(rule.title),
                f"[{style}]{rule.impact}[/{style}]",
                str(len(rule.examples)),
            )
        return table
