"""CLI command for lintbridge tools."""

from __future__ import annotations

import click
from rich.table import Table

from lintbridge.cli.console import console
from lintbridge.cli.context import CLIContext
from lintbridge.cli.output import OutputFormat, format_json


@click.command()
@click.option(
    "-f",
    "--format",
    "fmt",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.TEXT.value,
    help="Output format.",
)
@click.pass_context
def tools(ctx: click.Context, fmt: str) -> None:
    """List configured linters and formatters.

    Examples:
        lintbridge tools

        lintbridge tools --format json
    """
    cli_ctx: CLIContext = ctx.obj["cli_ctx"]
    config = cli_ctx.config

    rows: list[dict[str, str | bool]] = []
    for tool_id, tool in config.tools.items():
        rows.append(
            {
                "id": tool_id,
                "kind": "linter",
                "enabled": config.linting.enabled and tool.enabled,
                "command": tool.module_name or tool.command or "",
                "mode": "stdin" if tool.stdin_support else "file",
            }
        )
    for formatter_id, formatter in config.formatters.items():
        rows.append(
            {
                "id": formatter_id,
                "kind": "formatter",
                "enabled": formatter.enabled,
                "command": formatter.module_name or formatter.command or "",
                "mode": "stdin" if formatter.stdin_support else "file",
            }
        )

    if fmt == OutputFormat.JSON.value:
        click.echo(format_json(rows))
        return

    if not rows:
        console.print("No tools configured.")
        return

    table = Table(title="Configured tools", show_lines=False)
    for header in ("ID", "Kind", "Enabled", "Command", "Mode"):
        table.add_column(header)
    for row in rows:
        enabled = "[green]yes[/green]" if row["enabled"] else "[dim]no[/dim]"
        table.add_row(
            str(row["id"]), str(row["kind"]), enabled, str(row["command"]), str(row["mode"])
        )
    console.print(table)
