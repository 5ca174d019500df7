"""
Unified exception definitions
"""


class TfsConnectError(Exception):
    """Base exception class"""
    pass


class ConfigError(TfsConnectError):
    """Configuration error"""
    pass


class NoConnectionError(TfsConnectError):
    """No collection given and no default connection cached"""
    pass


class NotFoundError(TfsConnectError):
    """Name or pattern matched nothing"""
    pass


class AuthenticationError(TfsConnectError):
    """Authentication handshake failed"""
    pass


class NotConnectedError(TfsConnectError):
    """Disconnect attempted without a cached connection"""
    pass


class TransportError(TfsConnectError):
    """Network or HTTP error talking to the server"""
    pass
