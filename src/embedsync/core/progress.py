"""User-facing console feedback for the CLI.

Design principles:
- One line per document, no spam
- Progress bar only when iterating >100 documents on a TTY
- Graceful degradation in non-TTY (CI, pipes)
- Suppress structlog console output while a live display is active

Usage::

    from embedsync.core.progress import progress, status

    for doc in progress(documents, desc="Syncing"):
        ...

    status("Updated", style="success", indent=3)  # ✓ Updated
    status("Symbol not found", style="error")       # ✗ Symbol not found
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from typing import TYPE_CHECKING

from rich.console import Console, Group
from rich.panel import Panel
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn
from rich.rule import Rule
from rich.text import Text

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

    from embedsync.embed.models import ErrorReport, RunSummary

_PROGRESS_THRESHOLD = 100

_console = Console(stderr=True)

_STYLES = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]![/yellow] ",
    "info": "  ",
    "none": "",
}

_suppress_console_logs = threading.local()


def is_console_suppressed() -> bool:
    """Check if console logging is currently suppressed."""
    return getattr(_suppress_console_logs, "active", False)


@contextmanager
def suppress_console_logs() -> Iterator[None]:
    """Suppress structlog console output; file handlers still receive logs."""
    _suppress_console_logs.active = True
    try:
        yield
    finally:
        _suppress_console_logs.active = False


def _get_logger() -> BoundLogger:
    """Get logger lazily to respect runtime config."""
    from embedsync.core.logging import get_logger

    return get_logger("progress")


def _is_tty() -> bool:
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


def get_console() -> Console:
    """Get the shared Rich console instance."""
    return _console


def set_console(console: Console) -> None:
    """Swap the shared console (tests capture output this way)."""
    global _console
    _console = console


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print a styled status message to stderr."""
    prefix = _STYLES.get(style, "")
    padding = " " * indent
    _console.print(f"{padding}{prefix}{message}", highlight=False)
    _get_logger().debug("status", message=message, style=style)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return "1 file" / "3 files" style counts."""
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"


def progress[T](
    iterable: Iterable[T],
    *,
    desc: str | None = None,
    total: int | None = None,
    unit: str = "docs",
) -> Iterator[T]:
    """Wrap an iterable with a transient progress bar when it is long and stderr is a TTY."""
    if total is None:
        try:
            total = len(iterable)  # type: ignore[arg-type]
        except TypeError:
            total = None

    if _is_tty() and total is not None and total > _PROGRESS_THRESHOLD:
        with (
            suppress_console_logs(),
            Progress(
                TextColumn("    {task.description}:"),
                BarColumn(bar_width=25, style="cyan", complete_style="cyan"),
                TaskProgressColumn(),
                TextColumn("{task.completed}/{task.total} {task.fields[unit]}"),
                console=_console,
                transient=True,
            ) as pbar,
        ):
            task_id = pbar.add_task(desc or "Processing", total=total, unit=unit)
            for item in iterable:
                yield item
                pbar.advance(task_id)
    else:
        yield from iterable


def print_error_report(errors: Sequence[ErrorReport]) -> None:
    """Render accumulated directive errors as a single panel."""
    if not errors:
        return

    blocks: list[Text] = []
    for err in errors:
        block = Text()
        block.append("✗ ", style="red")
        block.append(err.reason)
        block.append(f"\n  Source: {err.reference}", style="dim")
        block.append(f"\n  Location: {err.document}:{err.line_number}", style="dim")
        blocks.append(block)

    _console.print()
    _console.print(
        Panel(
            Group(*blocks),
            title="[bold red]EMBED ERRORS[/bold red]",
            title_align="left",
            border_style="red",
        )
    )


def print_summary(summary: RunSummary) -> None:
    """Print the closing rule and one-line run summary."""
    _console.print(Rule(style="dim"))
    _console.print(
        f"{pluralize(summary.total_directives, 'directive')} across "
        f"{pluralize(summary.documents_matched, 'file')} | "
        f"{summary.documents_updated} updated | "
        f"{pluralize(len(summary.errors), 'error')}",
        highlight=False,
    )
