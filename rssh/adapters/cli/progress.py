"""
Rich progress bar fed by the transfer engine's progress callback
"""
from contextlib import contextmanager
from typing import Iterator, Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)

from ...core.logging import get_stdout_console
from ...domain.transfer import ProgressCallback


@contextmanager
def transfer_progress(
    description: str,
    console: Optional[Console] = None,
    bar_style: str = "cyan",
) -> Iterator[ProgressCallback]:
    """
    Yield a (transferred, total) callback that drives a progress bar.

    The bar is disabled when the console is not a terminal.
    """
    console = console or get_stdout_console()
    show_progress = console.is_terminal

    with Progress(
        SpinnerColumn(style="green"),
        TimeElapsedColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(complete_style=bar_style),
        DownloadColumn(),
        TransferSpeedColumn(),
        TimeRemainingColumn(),
        console=console,
        disable=not show_progress,
    ) as progress:
        task = progress.add_task(description, total=None)

        def progress_callback(transferred: int, total: int) -> None:
            progress.update(task, completed=transferred, total=total or None)

        yield progress_callback
