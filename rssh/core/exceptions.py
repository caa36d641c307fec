"""
Unified exception definitions
"""


class RsshError(Exception):
    """Base exception class"""
    exit_code = 1


class ConfigError(RsshError):
    """Configuration error"""
    pass


class SessionError(RsshError):
    """Session establishment error"""
    pass


class ResolveError(SessionError):
    """Host address could not be resolved"""
    pass


class ConnectError(SessionError):
    """TCP connect refused or timed out"""
    pass


class HandshakeError(SessionError):
    """SSH protocol handshake failed"""
    pass


class AuthenticationError(SessionError):
    """Credentials rejected or authentication incomplete"""
    pass


class ChannelError(RsshError):
    """Channel open / exec / close error"""
    pass


class TransferError(RsshError):
    """Transfer error"""
    pass
