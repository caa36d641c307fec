"""
rssh - password-authenticated SSH client

Runs one remote command with streamed output and exit-status propagation,
or moves one file over SFTP with progress reporting and automatic creation
of missing directories.
"""

__version__ = "0.1.0"

from .core import (
    ConnectionTarget,
    SessionNegotiator,
)
from .domain.exec import CommandExecutor, ExecResult
from .domain.transfer import (
    TransferEngine,
    TransferDescriptor,
    TransferDirection,
    ensure_remote_dir,
)

__all__ = [
    # Version
    "__version__",
    # Session
    "ConnectionTarget",
    "SessionNegotiator",
    # Exec
    "CommandExecutor",
    "ExecResult",
    # Transfer
    "TransferEngine",
    "TransferDescriptor",
    "TransferDirection",
    "ensure_remote_dir",
]
