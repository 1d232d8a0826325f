"""Shared Rich display functions for rules and results."""

import os

from rich.markup import escape
from rich.table import Table

from pawprint.core.runner import RunReport
from pawprint.models.result import ActionResult
from pawprint.rules.attributes import Flag
from pawprint.rules.parser import Rule
from pawprint.utils.formatting import console


def _printable(text: str) -> str:
    """Escape markup and replace undecodable path bytes for display."""
    return escape(os.fsencode(text).decode("utf-8", "replace"))


_ACTION_STYLES: dict[Flag, str] = {
    Flag.CREATE: "created",
    Flag.CREATE_DIRECTORY: "created",
    Flag.WRITE: "changed",
    Flag.OWNERSHIP: "changed",
    Flag.PERMISSION: "changed",
    Flag.ATTRIBUTES: "changed",
    Flag.CLEAN: "removed",
    Flag.REMOVE: "removed",
    Flag.EXCLUDE: "muted",
}


def describe_flags(flags: Flag) -> str:
    """Render a flag set as a comma-separated list of lowercase names."""
    names = [
        (flag.name or "").lower().replace("_", "-")
        for flag in sorted(Flag, key=lambda f: f.value)
        if flag in flags
    ]
    return ", ".join(names) or "-"


def create_results_table(results: list[ActionResult], dry_run: bool = False) -> Table:
    """Create a Rich table displaying handler results.

    Args:
        results: Handler results to display.
        dry_run: Whether this is a dry-run (changes table title).

    Returns:
        Rich Table configured for results display.
    """
    table = Table(
        title="Results (Dry Run)" if dry_run else "Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=6, justify="center")
    table.add_column("Action", no_wrap=True)
    table.add_column("Path", overflow="fold")
    table.add_column("Message", overflow="fold")

    for result in results:
        if result.success:
            status = "[success]OK[/success]"
            message = result.message or ""
        else:
            status = "[error]FAIL[/error]"
            message = result.error or "Unknown error"
        style = _ACTION_STYLES.get(result.action, "text")
        table.add_row(
            status,
            f"[{style}]{result.action_name}[/{style}]",
            _printable(result.path),
            f"[muted]{_printable(message)}[/muted]",
        )

    return table


def create_rules_table(rules: list[Rule]) -> Table:
    """Create a Rich table listing parsed rules.

    Args:
        rules: Parsed rules to display.

    Returns:
        Rich Table configured for rule display.
    """
    table = Table(
        title="Rules",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Line", style="muted", no_wrap=True)
    table.add_column("Type", no_wrap=True)
    table.add_column("Path", overflow="fold")
    table.add_column("Mode", style="muted")
    table.add_column("User", style="muted")
    table.add_column("Group", style="muted")
    table.add_column("Age", style="muted")
    table.add_column("Flags", style="info")
    table.add_column("Argument", overflow="fold")

    for rule in rules:
        record = rule.record
        path = _printable(rule.path)
        if rule.needs_glob:
            path += " [muted](glob)[/muted]"
        table.add_row(
            rule.location,
            _printable(rule.type_text),
            path,
            _printable(record.mode),
            _printable(record.user),
            _printable(record.group),
            _printable(record.age),
            describe_flags(record.flags),
            _printable(record.argument),
        )

    return table


def print_report_summary(report: RunReport) -> None:
    """Print counts of rules, paths and results for a run.

    Args:
        report: Report returned by the runner.
    """
    failed = len(report.failures)
    ok = len(report.results) - failed
    parts = [f"{report.rules} rule(s)", f"{report.paths} path(s)", f"[success]{ok} ok[/success]"]
    if failed:
        parts.append(f"[error]{failed} failed[/error]")
    console.print(f"\n[dim]Applied[/dim] {', '.join(parts)}")
