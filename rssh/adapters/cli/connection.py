"""
Invocation context: owns the one session of a CLI run
"""
from pathlib import Path
from typing import Dict, Any, Optional

import paramiko

from ...core.client import ConnectionTarget, SessionNegotiator
from ...core.constants import CONNECT_TIMEOUT
from ..config.loader import ConfigLoader


class Invocation:
    """
    Connection settings collected by the CLI callback plus the lazily
    established session they lead to.
    """

    def __init__(
        self,
        overrides: Dict[str, Any],
        config_path: Optional[Path] = None,
        loader: Optional[ConfigLoader] = None,
        timeout: float = CONNECT_TIMEOUT,
    ):
        self.overrides = overrides
        self.config_path = config_path
        self.loader = loader or ConfigLoader()
        self.timeout = timeout
        self._negotiator: Optional[SessionNegotiator] = None

    def target(self) -> ConnectionTarget:
        """
        Raises:
            ConfigError: If settings are missing or invalid
        """
        return self.loader.load(toml_path=self.config_path, cli_overrides=self.overrides)

    def session(self) -> paramiko.Transport:
        """
        Authenticated session, established on first call.

        Raises:
            ConfigError: If settings are missing or invalid
            SessionError: If connecting or authenticating fails
        """
        if self._negotiator is None:
            self._negotiator = SessionNegotiator(self.target(), timeout=self.timeout)
        return self._negotiator.login()

    def close(self) -> None:
        if self._negotiator is not None:
            self._negotiator.close()
