"""
Remote directory creation
"""
import posixpath
import stat
from typing import Callable, Optional

import paramiko

from ...core.constants import REMOTE_DIR_MODE
from ...core.exceptions import TransferError
from ...core.logging import get_logger
from .paths import SFTP_ERRORS

logger = get_logger(__name__)


def ensure_remote_dir(
    sftp: paramiko.SFTPClient,
    directory: str,
    mode: int = REMOTE_DIR_MODE,
    on_created: Optional[Callable[[str], None]] = None,
) -> None:
    """
    Make sure every component of a remote directory path exists.

    Walks the path from its root one component at a time, so parents are
    always checked before children. Existing directories are left alone;
    missing ones are created with ``mode``. Relative paths are resolved
    against the SFTP session's start directory.

    Args:
        sftp: Open SFTP client
        directory: Remote directory path
        mode: Permission bits for created directories
        on_created: Called with each directory path right after it is created

    Raises:
        TransferError: If a component exists but is not a directory, or a
            stat/mkdir call fails
    """
    if not directory:
        return

    normalized = posixpath.normpath(directory)
    current = "/" if normalized.startswith("/") else ""

    for name in normalized.split("/"):
        if name in ("", "."):
            continue
        current = posixpath.join(current, name) if current else name
        if name == "..":
            continue

        try:
            attrs = sftp.stat(current)
        except FileNotFoundError:
            attrs = None
        except SFTP_ERRORS as e:
            raise TransferError(f"failed to stat remote path {current}: {e}") from e

        if attrs is None:
            try:
                sftp.mkdir(current, mode)
            except SFTP_ERRORS as e:
                raise TransferError(f"failed to mkdir {current}: {e}") from e
            logger.info("Created remote directory: %s", current)
            if on_created is not None:
                on_created(current)
            continue

        if attrs.st_mode is None or not stat.S_ISDIR(attrs.st_mode):
            raise TransferError(f"Remote path exists but is not a directory: {current}")
