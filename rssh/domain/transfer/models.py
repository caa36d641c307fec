"""
Transfer data models
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional


# (transferred, total) -> None
ProgressCallback = Callable[[int, int], None]


class TransferDirection(str, Enum):
    """传输方向"""
    UPLOAD = "upload"      # local → remote
    DOWNLOAD = "download"  # remote → local


@dataclass
class TransferDescriptor:
    """Bookkeeping for one upload or download"""
    local_path: str
    remote_path: str
    direction: TransferDirection
    total: int = 0
    transferred: int = 0
    progress_callback: Optional[ProgressCallback] = field(default=None, repr=False, compare=False)

    @property
    def source(self) -> str:
        if self.direction is TransferDirection.UPLOAD:
            return self.local_path
        return self.remote_path

    @property
    def destination(self) -> str:
        if self.direction is TransferDirection.UPLOAD:
            return self.remote_path
        return self.local_path

    def declare(self, total: int) -> None:
        """Set the expected size and publish the starting point"""
        self.total = max(total, 0)
        self._report()

    def advance(self, nbytes: int) -> None:
        """Account for nbytes more bytes moved and publish progress"""
        if nbytes < 0:
            raise ValueError(f"negative chunk size: {nbytes}")
        self.transferred += nbytes
        # Size metadata may be stale; never report past the total
        if self.transferred > self.total:
            self.total = self.transferred
        self._report()

    def _report(self) -> None:
        if self.progress_callback:
            self.progress_callback(self.transferred, self.total)
