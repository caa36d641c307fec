"""
Main CLI application
"""
import typer
from pathlib import Path
from typing import Optional

from ... import __version__
from ...core.constants import DEFAULT_SSH_PORT
from ...core.logging import setup_logging
from .connection import Invocation
from .exec import register_exec_command
from .transfer import register_transfer_commands

# Create main app
app = typer.Typer(
    name="rssh",
    add_completion=False,
    help="SSH tool: run a remote command, upload or download a file",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

register_exec_command(app)
register_transfer_commands(app)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"rssh {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    host: Optional[str] = typer.Option(
        None, "--host", "-H", help="Remote host name or IP"
    ),
    user: Optional[str] = typer.Option(
        None, "--user", "-u", help="User name"
    ),
    password: Optional[str] = typer.Option(
        None, "--password", "-p", help="Password"
    ),
    port: Optional[int] = typer.Option(
        None, "--port", "-P", help=f"SSH port (default: {DEFAULT_SSH_PORT})"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="TOML file with connection defaults"
    ),
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Log file path",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """
    rssh - password-authenticated SSH client

    Connection settings come from options, RSSH_HOST / RSSH_USER /
    RSSH_PASSWORD / RSSH_PORT, or a --config file, in that priority.
    """
    setup_logging(level=log_level, log_file=log_file)

    invocation = Invocation(
        overrides={"host": host, "user": user, "password": password, "port": port},
        config_path=config,
    )
    ctx.obj = invocation
    ctx.call_on_close(invocation.close)


def run():
    """CLI entry point"""
    app()


if __name__ == "__main__":
    run()
