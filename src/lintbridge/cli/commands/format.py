"""CLI command for lintbridge format."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from lintbridge.cli.context import CLIContext, ExitCode, async_command
from lintbridge.cli.output import format_error
from lintbridge.formatting import ToolFormatter
from lintbridge.linting import RunStatus


@click.command("format")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "-t",
    "--tool",
    "tool_id",
    required=True,
    help="Formatter to run, as named under 'formatters' in lintbridge.yaml.",
)
@click.option(
    "--stdin",
    "from_stdin",
    is_flag=True,
    default=False,
    help="Read the document text from stdin; PATH only names the document.",
)
@click.pass_context
@async_command
async def format_command(
    ctx: click.Context,
    path: Path,
    tool_id: str,
    from_stdin: bool,
) -> None:
    """Run a configured formatter on one file and print its output.

    Examples:
        lintbridge format src/app.py --tool black
    """
    cli_ctx: CLIContext = ctx.obj["cli_ctx"]
    config = cli_ctx.config

    formatter_config = config.formatters.get(tool_id)
    if formatter_config is None:
        error_msg = format_error(
            f"Unknown formatter: {tool_id}",
            details=[
                f"Configured formatters: {', '.join(config.formatters) or '(none)'}"
            ],
        )
        click.echo(error_msg, err=True)
        raise SystemExit(ExitCode.FAILURE)

    if from_stdin:
        document_text = sys.stdin.read()
    else:
        try:
            document_text = path.read_text(encoding="utf-8")
        except OSError as e:
            click.echo(format_error(f"Cannot read {path}: {e.strerror}"), err=True)
            raise SystemExit(ExitCode.FAILURE) from e

    formatter = ToolFormatter(tool_id, formatter_config, config)
    outcome = await formatter.run_formatter(document_text, str(path.resolve()))

    if outcome.status == RunStatus.SKIPPED:
        click.echo(f"Formatter {tool_id} is disabled.", err=True)
        return
    if not outcome.success:
        click.echo(format_error(f"{tool_id} failed: {outcome.error}"), err=True)
        raise SystemExit(ExitCode.FAILURE)

    click.echo(outcome.output or "", nl=False)
