"""
Chunked SFTP upload / download engine
"""
import os
import posixpath
from pathlib import Path
from typing import BinaryIO, Callable, Optional

import paramiko

from ...core.constants import TRANSFER_CHUNK_SIZE
from ...core.exceptions import TransferError
from ...core.logging import get_logger
from .materializer import ensure_remote_dir
from .models import ProgressCallback, TransferDescriptor, TransferDirection
from .paths import SFTP_ERRORS, resolve_local_destination, resolve_remote_destination

logger = get_logger(__name__)


class TransferEngine:
    """Single-file transfers over one SFTP sub-channel"""

    def __init__(
        self,
        sftp: paramiko.SFTPClient,
        chunk_size: int = TRANSFER_CHUNK_SIZE,
        on_dir_created: Optional[Callable[[str], None]] = None,
    ):
        """
        Initialize transfer engine.

        Args:
            sftp: SFTP client opened on the authenticated session
            chunk_size: Bytes moved per loop iteration
            on_dir_created: Notified of each remote directory an upload creates
        """
        self.sftp = sftp
        self.chunk_size = chunk_size
        self.on_dir_created = on_dir_created

    @classmethod
    def from_transport(cls, transport: paramiko.Transport, **kwargs) -> "TransferEngine":
        try:
            sftp = paramiko.SFTPClient.from_transport(transport)
        except (paramiko.SSHException, OSError, EOFError) as e:
            raise TransferError(f"failed to open sftp: {e}") from e
        if sftp is None:
            raise TransferError("failed to open sftp: subsystem request refused")
        return cls(sftp, **kwargs)

    def close(self) -> None:
        self.sftp.close()

    # --------------------
    # Upload
    # --------------------
    def upload(
        self,
        local: str,
        remote: str,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> TransferDescriptor:
        """
        Upload a local file, creating missing remote directories.

        Args:
            local: Local source file
            remote: Remote destination file or directory
            progress_callback: Receives (transferred, total) per chunk

        Returns:
            Completed TransferDescriptor

        Raises:
            TransferError: On any local or remote failure
        """
        local = os.fspath(local)
        remote_path = resolve_remote_destination(self.sftp, remote, local)

        parent = posixpath.dirname(remote_path)
        if parent:
            ensure_remote_dir(self.sftp, parent, on_created=self.on_dir_created)

        try:
            src = open(local, "rb")
        except OSError as e:
            raise TransferError(f"failed to open local file {local}: {e}") from e

        with src:
            try:
                size = os.fstat(src.fileno()).st_size
            except OSError as e:
                raise TransferError(f"failed to stat local file {local}: {e}") from e

            descriptor = TransferDescriptor(
                local_path=local,
                remote_path=remote_path,
                direction=TransferDirection.UPLOAD,
                progress_callback=progress_callback,
            )
            descriptor.declare(size)

            try:
                dst = self.sftp.open(remote_path, "wb")
            except SFTP_ERRORS as e:
                raise TransferError(f"failed to create remote file {remote_path}: {e}") from e

            try:
                with dst:
                    self._copy(src, dst, descriptor, source=local, destination=remote_path)
            except SFTP_ERRORS as e:
                # close() flushes buffered writes
                raise TransferError(f"failed to finish remote file {remote_path}: {e}") from e

        logger.debug("Uploaded %s -> %s (%d bytes)", local, remote_path, descriptor.transferred)
        return descriptor

    # --------------------
    # Download
    # --------------------
    def download(
        self,
        remote: str,
        local: str,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> TransferDescriptor:
        """
        Download a remote file, creating missing local directories.

        Args:
            remote: Remote source file
            local: Local destination file or directory
            progress_callback: Receives (transferred, total) per chunk

        Returns:
            Completed TransferDescriptor; ``transferred`` is the number of
            bytes actually written, whatever the remote size claimed

        Raises:
            TransferError: On any local or remote failure
        """
        local = os.fspath(local)

        try:
            src = self.sftp.open(remote, "rb")
        except SFTP_ERRORS as e:
            raise TransferError(f"failed to open remote file {remote}: {e}") from e

        with src:
            try:
                size = src.stat().st_size or 0
            except SFTP_ERRORS as e:
                raise TransferError(f"failed to stat remote file {remote}: {e}") from e
            if size:
                src.prefetch(size)

            local_path = resolve_local_destination(local, remote)
            parent = Path(local_path).parent
            try:
                parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise TransferError(f"failed to create local dir {parent}: {e}") from e

            descriptor = TransferDescriptor(
                local_path=local_path,
                remote_path=remote,
                direction=TransferDirection.DOWNLOAD,
                progress_callback=progress_callback,
            )
            descriptor.declare(size)

            try:
                dst = open(local_path, "wb")
            except OSError as e:
                raise TransferError(f"failed to create local file {local_path}: {e}") from e

            try:
                with dst:
                    self._copy(src, dst, descriptor, source=remote, destination=local_path)
            except OSError as e:
                raise TransferError(f"failed to finish local file {local_path}: {e}") from e

        logger.debug("Downloaded %s -> %s (%d bytes)", remote, local_path, descriptor.transferred)
        return descriptor

    # --------------------
    # Shared loop
    # --------------------
    def _copy(
        self,
        src: BinaryIO,
        dst: BinaryIO,
        descriptor: TransferDescriptor,
        source: str,
        destination: str,
    ) -> None:
        while True:
            try:
                data = src.read(self.chunk_size)
            except SFTP_ERRORS as e:
                raise TransferError(
                    f"read from {source} failed after {descriptor.transferred} bytes: {e}"
                ) from e
            if not data:
                break
            try:
                dst.write(data)
            except SFTP_ERRORS as e:
                raise TransferError(
                    f"write to {destination} failed after {descriptor.transferred} bytes: {e}"
                ) from e
            descriptor.advance(len(data))
