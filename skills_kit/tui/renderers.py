from pathlib import Path

from rich.console import Console
from rich.markup import escape

from skills_kit.lint.models import LintReport
from skills_kit.rules.builder import RulesBuild
from skills_kit.rules.validator import RulesValidationReport, ValidationError
from skills_kit.tui.enums import UIStyle
from skills_kit.tui.sections import UISection
from skills_kit.tui.tables import BuildTable, LintTable, ValidationTable
from skills_kit.utils import compact_home_path


class SkillsConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_validation(
        self, report: RulesValidationReport, errors: list[ValidationError]
    ) -> None:
        if not errors:
            self.console.print(
                UISection.outcome(
                    "validate",
                    f"All {len(report.files)} rule files are valid",
                    ok=True,
                )
            )
            return

        self.console.print(
            UISection.wrap(
                "validation failed",
                ValidationTable.errors_table(errors),
                style=UIStyle.RED.value,
                subtitle=escape(compact_home_path(report.rules_dir)),
            )
        )

    def render_build(self, build: RulesBuild, output_path: Path) -> None:
        self.console.print(
            UISection.wrap(
                escape(build.metadata.title),
                BuildTable.rules_table(build),
                style=UIStyle.BLUE.value,
            )
        )
        self.console.print(
            UISection.outcome(
                "build",
                f"Wrote {len(build.rule_files)} rule(s) to "
                f"[bold]{escape(compact_home_path(output_path))}[/bold]",
                ok=True,
            )
        )

    def render_lint(self, report: LintReport) -> None:
        if report.ok:
            self.console.print(
                UISection.outcome(
                    "lint",
                    f"Checked {report.files_checked} file(s), no disallowed commands found.",
                    ok=True,
                )
            )
            return

        self.console.print(
            UISection.wrap(
                "lint overview",
                LintTable.summary_block(report.files_checked, report.violations),
                style=UIStyle.RED.value,
            )
        )
        self.console.print(
            UISection.wrap(
                "disallowed commands",
                LintTable.violations_table(report.violations, report.skills_dir),
                style=UIStyle.RED.value,
            )
        )
        self.console.print(
            UISection.note(
                "why",
                "The commands above are not permitted in skill files because they can\n"
                "cause irreversible harm to a user's system.",
                style=UIStyle.DIM.value,
            )
        )

    def render_error(self, message: str) -> None:
        self.console.print(
            UISection.outcome("error", escape(message), ok=False)
        )
