"""Show command implementation.

Parses rule files without touching the filesystem and lists the
resolved rules.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from pawprint.cli.display import create_rules_table
from pawprint.cli.types import require_settings, resolve_rule_paths
from pawprint.core.runner import collect_config_files
from pawprint.models.run import RunConfig
from pawprint.rules.parser import Rule, parse_rules
from pawprint.utils.formatting import console, print_info, print_warning


def show_rules(
    paths: Annotated[
        list[Path] | None,
        typer.Argument(help="Rule files or directories of *.conf files."),
    ] = None,
    boot: Annotated[
        bool,
        typer.Option("--boot", help="Include rules marked with '!'."),
    ] = False,
) -> None:
    """List the rules that would be applied, without applying them."""
    settings = require_settings()
    config = RunConfig(boot=boot)

    rules: list[Rule] = []
    unreadable = False
    for path in resolve_rule_paths(paths, settings):
        for config_file in collect_config_files(path):
            try:
                with open(config_file, encoding="utf-8", errors="surrogateescape") as f:
                    rules.extend(parse_rules(f, config, str(config_file)))
            except OSError as e:
                print_warning(escape(f"Cannot read {config_file}: {e}"))
                unreadable = True

    if not rules:
        print_info("No rules found.")
    else:
        console.print(create_rules_table(rules))
        console.print(f"\n[dim]{len(rules)} rule(s)[/dim]")

    if unreadable:
        raise typer.Exit(code=1)
