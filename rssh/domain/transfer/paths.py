"""
Destination path resolution

A destination that is a directory, or that ends in a separator, receives the
source's base name; anything else is taken as the exact target file.
"""
import os
import posixpath
import stat
from pathlib import Path

import paramiko

from ...core.exceptions import TransferError

# What a paramiko SFTP call raises when the request or the session fails
SFTP_ERRORS = (IOError, EOFError, paramiko.SSHException)


def resolve_remote_destination(sftp: paramiko.SFTPClient, remote: str, local_source: str) -> str:
    """
    Resolve upload destination on the remote side.

    Args:
        sftp: Open SFTP client
        remote: Remote destination argument
        local_source: Local source file path

    Returns:
        Remote file path to write
    """
    if remote.endswith("/") or _remote_is_dir(sftp, remote):
        name = os.path.basename(local_source.rstrip(os.sep))
        if not name:
            raise TransferError(f"local path has no filename: {local_source}")
        return posixpath.join(remote, name)
    return remote


def resolve_local_destination(local: str, remote_source: str) -> str:
    """
    Resolve download destination on the local side.

    Args:
        local: Local destination argument
        remote_source: Remote source file path

    Returns:
        Local file path to write
    """
    if local.endswith(os.sep) or local.endswith("/") or Path(local).is_dir():
        name = posixpath.basename(remote_source.rstrip("/"))
        if not name:
            raise TransferError(f"remote path has no filename: {remote_source}")
        return os.path.join(local, name)
    return local


def _remote_is_dir(sftp: paramiko.SFTPClient, path: str) -> bool:
    try:
        attrs = sftp.stat(path)
    except IOError:
        # missing or unreadable: treat as a file path, open() reports the rest
        return False
    except (EOFError, paramiko.SSHException) as e:
        raise TransferError(f"failed to stat remote path {path}: {e}") from e
    return attrs.st_mode is not None and stat.S_ISDIR(attrs.st_mode)
