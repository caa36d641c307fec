"""
Remote command execution with streamed output
"""
import codecs
import socket
import sys
import time
from dataclasses import dataclass
from typing import Optional, TextIO

import paramiko

from ...core.constants import EXEC_CHUNK_SIZE
from ...core.exceptions import ChannelError
from ...core.logging import get_logger

logger = get_logger(__name__)

# Raised by Channel.recv when the stream breaks; treated as end of stream
_READ_ERRORS = (socket.timeout, OSError, EOFError, paramiko.SSHException)

# Seconds to wait when neither stream has data
POLL_INTERVAL = 0.01


@dataclass
class ExecResult:
    """Outcome of one remote command"""
    command: str
    exit_status: int

    @property
    def ok(self) -> bool:
        return self.exit_status == 0


class _StreamWriter:
    """Decodes UTF-8 chunks lossily and writes them through immediately"""

    def __init__(self, stream: TextIO):
        self.stream = stream
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def write(self, data: bytes) -> None:
        text = self._decoder.decode(data)
        if text:
            self.stream.write(text)
            self.stream.flush()

    def finish(self) -> None:
        text = self._decoder.decode(b"", final=True)
        if text:
            self.stream.write(text)
            self.stream.flush()


class CommandExecutor:
    """Runs one command per channel on an authenticated session"""

    def __init__(
        self,
        transport: paramiko.Transport,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        chunk_size: int = EXEC_CHUNK_SIZE,
    ):
        """
        Args:
            transport: Authenticated session
            stdout: Destination for remote stdout (default: sys.stdout)
            stderr: Destination for remote stderr (default: sys.stderr)
            chunk_size: Bytes requested per read
        """
        self.transport = transport
        self.stdout = stdout
        self.stderr = stderr
        self.chunk_size = chunk_size

    def run(self, command: str) -> ExecResult:
        """
        Execute command verbatim and stream its output.

        The command is passed as-is; quoting is the caller's job.

        Returns:
            ExecResult carrying the remote exit status (-1 if unavailable)

        Raises:
            ChannelError: If the channel cannot be opened, the command cannot
                be dispatched, or the exit status wait fails
        """
        try:
            channel = self.transport.open_session()
        except (paramiko.SSHException, OSError, EOFError) as e:
            raise ChannelError(f"Failed to open channel: {e}") from e

        try:
            try:
                channel.exec_command(command)
            except (paramiko.SSHException, OSError, EOFError) as e:
                raise ChannelError(f"Failed to execute command: {e}") from e

            self._pump(channel)

            try:
                exit_status = channel.recv_exit_status()
            except (paramiko.SSHException, OSError, EOFError) as e:
                raise ChannelError(f"Channel wait close failed: {e}") from e
        finally:
            channel.close()

        if exit_status is None:
            exit_status = -1
        logger.debug("Command %r exited with %d", command, exit_status)
        return ExecResult(command=command, exit_status=exit_status)

    def _pump(self, channel: paramiko.Channel) -> None:
        """Copy channel output to the local streams until end of stream"""
        out = _StreamWriter(self.stdout or sys.stdout)
        err = _StreamWriter(self.stderr or sys.stderr)

        # Poll both streams; blocking on stdout alone stalls once the
        # unread stderr fills the channel window
        while True:
            drained = self._drain_stderr(channel, err)

            if not self._stdout_readable(channel):
                if not drained:
                    time.sleep(POLL_INTERVAL)
                continue

            try:
                data = channel.recv(self.chunk_size)
            except _READ_ERRORS as e:
                logger.debug("Channel read failed, treating as end of stream: %s", e)
                break
            if not data:
                break
            out.write(data)

        self._drain_stderr(channel, err)
        out.finish()
        err.finish()

    @staticmethod
    def _stdout_readable(channel: paramiko.Channel) -> bool:
        """True when recv() would return without blocking (data or EOF)"""
        return channel.recv_ready() or channel.eof_received or channel.closed

    def _drain_stderr(self, channel: paramiko.Channel, err: _StreamWriter) -> bool:
        """Forward buffered stderr; return whether anything was read"""
        drained = False
        try:
            while channel.recv_stderr_ready():
                data = channel.recv_stderr(self.chunk_size)
                if not data:
                    break
                err.write(data)
                drained = True
        except _READ_ERRORS as e:
            logger.debug("Channel stderr read failed: %s", e)
        return drained
