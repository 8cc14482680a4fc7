"""CLI command for lintbridge lint.

Runs the configured linters concurrently on one file and prints the
diagnostics, the same way an editor host would receive them.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from lintbridge.cli.console import console, err_console
from lintbridge.cli.context import CLIContext, ExitCode, async_command
from lintbridge.cli.output import (
    OutputFormat,
    build_diagnostics_table,
    format_error,
    format_json,
)
from lintbridge.diagnostics import NormalizedSeverity
from lintbridge.exceptions import LintBridgeError
from lintbridge.linting import RunStatus, create_linters, lint_document
from lintbridge.logging import bind_context, clear_context, get_logger

logger = get_logger(__name__)


@click.command()
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "-t",
    "--tool",
    "tool_ids",
    multiple=True,
    help="Run only this tool (repeatable). Defaults to every configured tool.",
)
@click.option(
    "--stdin",
    "from_stdin",
    is_flag=True,
    default=False,
    help="Read the document text from stdin; PATH only names the document.",
)
@click.option(
    "-f",
    "--format",
    "fmt",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.TEXT.value,
    help="Output format.",
)
@click.pass_context
@async_command
async def lint(
    ctx: click.Context,
    path: Path,
    tool_ids: tuple[str, ...],
    from_stdin: bool,
    fmt: str,
) -> None:
    """Lint one file with the configured tools.

    Exits with status 1 when any Error diagnostic is reported.

    Examples:
        lintbridge lint src/app.py

        lintbridge lint src/app.py --tool pylint --format json

        cat src/app.py | lintbridge lint src/app.py --stdin
    """
    cli_ctx: CLIContext = ctx.obj["cli_ctx"]
    config = cli_ctx.config

    unknown = [tool_id for tool_id in tool_ids if tool_id not in config.tools]
    if unknown:
        error_msg = format_error(
            f"Unknown tool: {', '.join(unknown)}",
            details=[f"Configured tools: {', '.join(config.tools) or '(none)'}"],
            suggestion="Add the tool under 'tools' in lintbridge.yaml",
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

    document_path = str(path.resolve())
    clear_context()
    bind_context(document=document_path)

    try:
        linters = create_linters(config, tool_ids or None)
    except LintBridgeError as e:
        click.echo(format_error(e.message), err=True)
        raise SystemExit(ExitCode.FAILURE) from e

    if not linters and not cli_ctx.quiet:
        err_console.print("No tools configured.")

    outcomes = await lint_document(linters, document_text, document_path)

    for tool_id, outcome in outcomes.items():
        if outcome.status == RunStatus.FAILED and not cli_ctx.quiet:
            err_console.print(f"[yellow]{tool_id} failed:[/yellow] {outcome.error}")
        logger.debug("tool_outcome", tool_id=tool_id, status=outcome.status.value)

    diagnostics = {
        tool_id: list(outcome.diagnostics) for tool_id, outcome in outcomes.items()
    }

    if fmt == OutputFormat.JSON.value:
        click.echo(
            format_json(
                {
                    "document": document_path,
                    "diagnostics": [
                        {**record.to_dict(), "severityCode": record.severity.lsp_code}
                        for records in diagnostics.values()
                        for record in records
                    ],
                    "status": {
                        tool_id: outcome.status.value
                        for tool_id, outcome in outcomes.items()
                    },
                }
            )
        )
    elif any(diagnostics.values()):
        console.print(build_diagnostics_table(diagnostics, title=str(path)))
    elif not cli_ctx.quiet:
        console.print("No problems found.")

    has_errors = any(
        record.severity == NormalizedSeverity.ERROR
        for records in diagnostics.values()
        for record in records
    )
    if has_errors:
        raise SystemExit(ExitCode.FAILURE)
