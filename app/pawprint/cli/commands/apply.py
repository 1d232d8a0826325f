"""Apply command implementation.

Applies rule files to the filesystem, creating, cleaning and removing
the entries they describe.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from pawprint.cli.display import create_results_table, print_report_summary
from pawprint.cli.types import OutputFormat, require_settings, resolve_rule_paths
from pawprint.core.runner import RunReport, Runner
from pawprint.models.run import RunConfig
from pawprint.utils.formatting import console, print_error, print_info


def _print_json(report: RunReport) -> None:
    """Display run results as JSON."""
    data = {
        "rules": report.rules,
        "paths": report.paths,
        "unreadable": report.unreadable,
        "results": [
            {
                "path": r.path,
                "action": r.action_name,
                "success": r.success,
                "message": r.message,
                "error": r.error,
                "dry_run": r.dry_run,
            }
            for r in report.results
        ],
    }
    console.print_json(json.dumps(data))


def apply_rules(
    ctx: typer.Context,
    paths: Annotated[
        list[Path] | None,
        typer.Argument(help="Rule files or directories of *.conf files."),
    ] = None,
    create: Annotated[
        bool,
        typer.Option("--create", help="Create files and directories, write content."),
    ] = False,
    clean: Annotated[
        bool,
        typer.Option("--clean", help="Delete entries older than their rule's age."),
    ] = False,
    remove: Annotated[
        bool,
        typer.Option("--remove", help="Remove files and directory contents."),
    ] = False,
    boot: Annotated[
        bool,
        typer.Option("--boot", help="Also apply rules marked with '!'."),
    ] = False,
    force: Annotated[
        bool,
        typer.Option("--force", help="With --clean, delete entries regardless of age."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Show what would be done without making changes."),
    ] = False,
    prefix: Annotated[
        list[str] | None,
        typer.Option("--prefix", help="Only apply rules for paths below this prefix."),
    ] = None,
    exclude_prefix: Annotated[
        list[str] | None,
        typer.Option("--exclude-prefix", help="Ignore rules for paths below this prefix."),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Apply rule files to the filesystem.

    At least one of --create, --clean or --remove must be given. Without
    paths, the rule directories from the settings file are read.

    Examples:
        pawprint apply --create --clean /etc/pawprint.d
        pawprint apply --remove --boot --dry-run tmp.conf
    """
    config = RunConfig(
        create=create,
        clean=clean,
        remove=remove,
        boot=boot,
        force_clean=force,
        dry_run=dry_run,
    )
    if not config.has_action:
        print_error("Specify at least one of --create, --clean or --remove.")
        raise typer.Exit(code=2)

    settings = require_settings()
    config = config.model_copy(
        update={
            "prefixes": (*settings.prefixes, *(prefix or [])),
            "exclude_prefixes": (*settings.exclude_prefixes, *(exclude_prefix or [])),
        }
    )

    rule_paths = resolve_rule_paths(paths, settings)
    if not rule_paths:
        print_info("No rule files found.")
        return

    report = Runner(config).run(rule_paths)

    quiet = bool(ctx.obj and ctx.obj.get("quiet"))
    if output_format == OutputFormat.JSON:
        _print_json(report)
    elif not quiet:
        if report.results:
            console.print(create_results_table(report.results, dry_run=dry_run))
        print_report_summary(report)

    if report.failures or report.unreadable:
        raise typer.Exit(code=1)
