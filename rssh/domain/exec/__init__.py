"""
Command execution domain module
"""
from .runner import CommandExecutor, ExecResult

__all__ = [
    "CommandExecutor",
    "ExecResult",
]
