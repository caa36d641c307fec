from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple
import socket

import paramiko

from .constants import CONNECT_TIMEOUT, DEFAULT_SSH_PORT
from .exceptions import (
    AuthenticationError,
    ConfigError,
    ConnectError,
    HandshakeError,
    ResolveError,
)
from .logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ConnectionTarget:
    host: str
    user: str
    password: str
    port: int = DEFAULT_SSH_PORT

    def __post_init__(self) -> None:
        if not self.host:
            raise ConfigError("host must not be empty")
        if not self.user:
            raise ConfigError("user must not be empty")
        if isinstance(self.port, bool) or not isinstance(self.port, int) or not 1 <= self.port <= 65535:
            raise ConfigError(f"port must be in 1-65535, got {self.port!r}")

    def __str__(self) -> str:
        return f"{self.user}@{self.host}:{self.port}"


class SessionNegotiator:
    """
    Owns the single SSH session of an invocation:
    - resolves host:port and connects with a fixed timeout
    - runs the SSH handshake over paramiko.Transport
    - authenticates with a password and verifies the result
    - caches the authenticated transport; callers borrow it
    """
    def __init__(self, target: ConnectionTarget, timeout: float = CONNECT_TIMEOUT) -> None:
        self.target = target
        self.timeout = timeout
        self._transport: Optional[paramiko.Transport] = None

    @property
    def session(self) -> Optional[paramiko.Transport]:
        """The authenticated transport, or None before a successful login"""
        return self._transport

    # --------------------
    # Session lifecycle
    # --------------------
    def login(self) -> paramiko.Transport:
        """
        Return the authenticated session, establishing it on first use.

        Raises:
            ResolveError, ConnectError, HandshakeError, AuthenticationError
        """
        if self._transport is not None:
            return self._transport

        sock = self._open_socket()
        transport = paramiko.Transport(sock)
        try:
            self._handshake(transport)
            self._authenticate(transport)
        except BaseException:
            transport.close()
            raise

        logger.debug("Authenticated as %s", self.target)
        self._transport = transport
        return transport

    def close(self) -> None:
        if self._transport is not None:
            self._transport.close()
            self._transport = None

    # --------------------
    # Steps
    # --------------------
    def _resolve(self) -> Tuple:
        cfg = self.target
        try:
            infos = socket.getaddrinfo(cfg.host, cfg.port, type=socket.SOCK_STREAM)
        except (socket.gaierror, UnicodeError) as e:
            raise ResolveError(f"Failed to resolve address {cfg.host}:{cfg.port}: {e}") from e
        if not infos:
            raise ResolveError(f"Invalid address: {cfg.host}:{cfg.port}")
        return infos[0]

    def _open_socket(self) -> socket.socket:
        family, socktype, proto, _, sockaddr = self._resolve()
        sock = socket.socket(family, socktype, proto)
        sock.settimeout(self.timeout)
        try:
            sock.connect(sockaddr)
        except OSError as e:
            sock.close()
            raise ConnectError(f"Failed to connect TCP to {sockaddr[0]}:{sockaddr[1]}: {e}") from e
        # Only the connect is bounded; everything after blocks
        sock.settimeout(None)
        logger.debug("Connected to %s:%s", sockaddr[0], sockaddr[1])
        return sock

    def _handshake(self, transport: paramiko.Transport) -> None:
        try:
            transport.start_client()
        except (paramiko.SSHException, EOFError, OSError) as e:
            raise HandshakeError(f"SSH handshake failed: {e}") from e

        key = transport.get_remote_server_key()
        logger.debug(
            "Server host key %s %s",
            key.get_name(),
            key.get_fingerprint().hex(),
        )

    def _authenticate(self, transport: paramiko.Transport) -> None:
        cfg = self.target
        try:
            transport.auth_password(cfg.user, cfg.password)
        except (paramiko.SSHException, EOFError, OSError) as e:
            raise AuthenticationError(f"SSH authentication failed: {e}") from e

        # A partial (multi-step) auth can return without error
        if not transport.is_authenticated():
            raise AuthenticationError("Authentication failed")
