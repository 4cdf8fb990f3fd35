"""embed-sync CLI - live-link TypeScript/C# declarations into Markdown.

Markers::

    <!-- ts-embed: ../src/api.ts#ILoanPosition -->
    <!-- /ts-embed -->
    <!-- cs-embed: ../src/Loan.cs#LoanService -->
    <!-- /cs-embed -->
"""

import json
from pathlib import Path

import click

from embedsync import __version__
from embedsync.cli.utils import document_label
from embedsync.config import load_config
from embedsync.core.errors import EmbedSyncError
from embedsync.core.logging import configure_logging, get_log_file_path, get_logger
from embedsync.core.progress import (
    pluralize,
    print_error_report,
    print_summary,
    progress,
    status,
)
from embedsync.embed.models import DocumentResult, RunSummary
from embedsync.embed.ops import EmbedSync

EXIT_OK = 0
EXIT_ERRORS = 1
EXIT_FATAL = 2

USAGE = (
    "Usage: embed-sync <comma-separated-globs>\n"
    '  e.g. embed-sync "docs/**/*.md,specs/*.md"'
)


def _report_document(result: DocumentResult, root: Path, check: bool) -> None:
    if result.directive_count == 0:
        return
    status(f"{document_label(result.path, root)} - {pluralize(result.directive_count, 'embed')}")
    if result.rewritten:
        if check:
            status("Out of date", style="warning", indent=3)
        else:
            status("Updated", style="success", indent=3)
    elif not result.errors:
        status("No changes", indent=3)


def _sync(
    patterns: tuple[str, ...],
    *,
    root: Path,
    config_file: Path | None,
    verbose: bool,
    check: bool,
    quiet: bool,
) -> RunSummary | None:
    config = load_config(root, config_file=config_file)
    if verbose:
        config.logging.level = "DEBUG"
    configure_logging(config=config.logging)

    ops = EmbedSync(config, root=root)
    documents = ops.expand(patterns)
    if not documents:
        return None

    return ops.run(
        progress(documents, desc="Syncing"),
        check=check,
        on_document=None if quiet else lambda r: _report_document(r, ops.root, check),
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="embed-sync")
@click.argument("patterns", nargs=-1)
@click.option(
    "--check",
    is_flag=True,
    help="Report documents that are out of date without writing them.",
)
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Base directory for relative patterns and .embed-sync.yaml (default: cwd).",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file to use instead of <root>/.embed-sync.yaml.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the run summary as JSON")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    patterns: tuple[str, ...],
    check: bool,
    root: Path | None,
    config_file: Path | None,
    as_json: bool,
    verbose: bool,
) -> None:
    """Sync declarations from source files into documentation markers.

    PATTERNS are comma-separated globs selecting the documents to rewrite.
    """
    if not patterns:
        click.echo(USAGE, err=True)
        ctx.exit(EXIT_ERRORS)

    root = (root or Path.cwd()).resolve()

    try:
        summary = _sync(
            patterns,
            root=root,
            config_file=config_file,
            verbose=verbose,
            check=check,
            quiet=as_json,
        )
    except EmbedSyncError as e:
        status(str(e), style="error")
        ctx.exit(EXIT_FATAL)
    except Exception as e:
        get_logger("cli").exception("fatal", error=str(e))
        status(f"Fatal: {e}", style="error")
        if log_path := get_log_file_path():
            status(f"Details in {log_path}", indent=2)
        ctx.exit(EXIT_FATAL)

    if summary is None:
        status("No files matched the given patterns.", style="warning")
        ctx.exit(EXIT_OK)

    if as_json:
        click.echo(json.dumps(summary.to_dict(), indent=2))
    else:
        print_error_report(summary.errors)
        print_summary(summary)

    ctx.exit(summary.exit_code)


if __name__ == "__main__":
    cli()
