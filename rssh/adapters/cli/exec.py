"""
Exec CLI command
"""
import typer

from ...core.exceptions import RsshError
from ...core.logging import get_logger
from ...domain.exec import CommandExecutor
from .output import exit_status_line, fail

logger = get_logger(__name__)


def register_exec_command(app: typer.Typer) -> None:
    """Register exec command on the main app"""
    app.command(name="exec")(exec_run)


def exec_run(
    ctx: typer.Context,
    cmd: str = typer.Argument(..., help="Command line to run remotely (passed verbatim)"),
):
    """
    Run a command on the remote host and stream its output.

    Exits with the remote command's exit status.
    """
    invocation = ctx.obj

    try:
        transport = invocation.session()
        result = CommandExecutor(transport).run(cmd)
    except RsshError as e:
        fail(e)
    except Exception:
        logger.exception("Unexpected error while running %r", cmd)
        raise typer.Exit(1)

    exit_status_line(result.exit_status)
    if not result.ok:
        raise typer.Exit(result.exit_status)
