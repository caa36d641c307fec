"""
Upload / download CLI commands
"""
import typer

from ...core.exceptions import RsshError, TransferError
from ...core.logging import get_logger
from ...domain.transfer import TransferEngine
from .output import directory_created, fail, transfer_summary
from .progress import transfer_progress

logger = get_logger(__name__)


def register_transfer_commands(app: typer.Typer) -> None:
    """Register upload and download commands on the main app"""
    app.command(name="upload")(upload_run)
    app.command(name="download")(download_run)


def upload_run(
    ctx: typer.Context,
    local: str = typer.Option(..., "--local", "-l", help="Local file to send"),
    remote: str = typer.Option(..., "--remote", "-r", help="Remote file or directory (trailing / = directory)"),
):
    """
    Upload a file, creating missing remote directories.
    """
    engine = _open_engine(ctx, banner="Upload failed", on_dir_created=directory_created)
    try:
        with transfer_progress("Uploading", bar_style="cyan") as progress_callback:
            descriptor = engine.upload(local, remote, progress_callback=progress_callback)
    except TransferError as e:
        fail(e, banner="Upload failed")
    except Exception:
        logger.exception("Unexpected error during upload of %s", local)
        raise typer.Exit(1)
    finally:
        engine.close()

    transfer_summary(descriptor)


def download_run(
    ctx: typer.Context,
    remote: str = typer.Option(..., "--remote", "-r", help="Remote file to fetch"),
    local: str = typer.Option(..., "--local", "-l", help="Local file or directory (trailing / = directory)"),
):
    """
    Download a file, creating missing local directories.
    """
    engine = _open_engine(ctx, banner="Download failed")
    try:
        with transfer_progress("Downloading", bar_style="yellow") as progress_callback:
            descriptor = engine.download(remote, local, progress_callback=progress_callback)
    except TransferError as e:
        fail(e, banner="Download failed")
    except Exception:
        logger.exception("Unexpected error during download of %s", remote)
        raise typer.Exit(1)
    finally:
        engine.close()

    transfer_summary(descriptor)


def _open_engine(ctx: typer.Context, banner: str, **engine_options) -> TransferEngine:
    try:
        transport = ctx.obj.session()
        return TransferEngine.from_transport(transport, **engine_options)
    except TransferError as e:
        fail(e, banner=banner)
    except RsshError as e:
        fail(e)
    except Exception:
        logger.exception("Unexpected error while opening the SFTP session")
        raise typer.Exit(1)
