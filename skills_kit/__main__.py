import logging
from pathlib import Path
from typing import Callable

import click
from rich.console import Console
from rich.logging import RichHandler

from skills_kit.constants import (
    RULES_DIR_ENVVAR,
    RULES_DIRNAME,
    SKILLS_DIR_ENVVAR,
    SKILLS_DIRNAME,
)
from skills_kit.errors import SkillsKitError
from skills_kit.lint import lint_skills
from skills_kit.rules.builder import build_rules
from skills_kit.rules.compilers import COMPILERS
from skills_kit.rules.validator import dedupe_errors, validate_rules_dir
from skills_kit.tui import SkillsConsoleUI


def _rules_dir_argument() -> Callable:
    return click.argument(
        "rules_dir",
        required=False,
        default=RULES_DIRNAME,
        envvar=RULES_DIR_ENVVAR,
        type=click.Path(path_type=Path, file_okay=False),
    )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "--verbose", is_flag=True, help="Log diagnostics to stderr.")
def cli(verbose: bool) -> None:
    """Build and lint agent skill content."""
    _configure_logging(verbose)


@cli.group(help="Validate and compile best-practice rule files.")
def rules() -> None:
    pass


@rules.command("validate", help="Validate every rule file in a directory.")
@_rules_dir_argument()
def rules_validate(rules_dir: Path) -> None:
    ui = SkillsConsoleUI(Console())
    try:
        report = validate_rules_dir(rules_dir)
    except SkillsKitError as exc:
        raise click.ClickException(str(exc))

    errors = dedupe_errors(report.errors)
    ui.render_validation(report, errors)
    if errors:
        raise click.exceptions.Exit(1)


@rules.command("build", help="Validate rules and compile them into one document.")
@_rules_dir_argument()
@click.option(
    "--output",
    "-o",
    "output_dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=Path("."),
    show_default=True,
    help="Directory for the compiled document.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(sorted(COMPILERS), case_sensitive=False),
    default="markdown",
    show_default=True,
)
def rules_build(rules_dir: Path, output_dir: Path, output_format: str) -> None:
    ui = SkillsConsoleUI(Console())
    try:
        report = validate_rules_dir(rules_dir)
        errors = dedupe_errors(report.errors)
        if errors:
            ui.render_validation(report, errors)
            ui.render_error("Build aborted due to validation errors above.")
            raise click.exceptions.Exit(1)

        build = build_rules(rules_dir)
    except SkillsKitError as exc:
        raise click.ClickException(str(exc))

    filename, content = COMPILERS[output_format.lower()].compile(build)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / filename
    output_path.write_text(content, encoding="utf-8")
    ui.render_build(build, output_path)


@cli.command(help="Check skill scripts and bash blocks for disallowed commands.")
@click.argument(
    "skills_dir",
    required=False,
    default=SKILLS_DIRNAME,
    envvar=SKILLS_DIR_ENVVAR,
    type=click.Path(path_type=Path, file_okay=False),
)
def lint(skills_dir: Path) -> None:
    ui = SkillsConsoleUI(Console())
    try:
        report = lint_skills(skills_dir)
    except SkillsKitError as exc:
        raise click.ClickException(str(exc))

    ui.render_lint(report)
    if not report.ok:
        raise click.exceptions.Exit(1)


def main() -> int:
    try:
        # Outside standalone mode click returns Exit codes instead of raising.
        code = cli(standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return 2
    return code if isinstance(code, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
