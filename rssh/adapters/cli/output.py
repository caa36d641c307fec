"""
User-facing status lines
"""
from typing import NoReturn, Optional

import typer
from rich.markup import escape

from ...core.exceptions import RsshError
from ...core.logging import get_stdout_console, get_stderr_console
from ...domain.transfer import TransferDescriptor, TransferDirection


def fail(error: RsshError, banner: Optional[str] = None) -> NoReturn:
    """Print one diagnostic line for error on stderr and exit with its code"""
    prefix = f"{banner}: " if banner else "Error: "
    get_stderr_console().print(f"[red]{escape(prefix)}[/red]{escape(str(error))}", highlight=False, soft_wrap=True)
    raise typer.Exit(error.exit_code)


def exit_status_line(exit_status: int) -> None:
    style = "green" if exit_status == 0 else "red"
    get_stdout_console().print(f"\n[exit code: {exit_status}]", style=style, markup=False, highlight=False, soft_wrap=True)


def transfer_summary(descriptor: TransferDescriptor) -> None:
    verb = "Uploaded" if descriptor.direction is TransferDirection.UPLOAD else "Downloaded"
    get_stdout_console().print(
        f"[green]✓[/green] {verb} {escape(descriptor.source)} → "
        f"{escape(descriptor.destination)} ({descriptor.transferred} bytes)",
        highlight=False,
        soft_wrap=True,
    )


def directory_created(path: str) -> None:
    get_stdout_console().print(f"[cyan]ℹ[/cyan] Created remote directory: {escape(path)}", highlight=False, soft_wrap=True)
