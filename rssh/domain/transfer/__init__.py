"""
Transfer domain module
"""
from .engine import TransferEngine
from .materializer import ensure_remote_dir
from .models import ProgressCallback, TransferDescriptor, TransferDirection
from .paths import resolve_local_destination, resolve_remote_destination

__all__ = [
    "TransferEngine",
    "ensure_remote_dir",
    "ProgressCallback",
    "TransferDescriptor",
    "TransferDirection",
    "resolve_local_destination",
    "resolve_remote_destination",
]
