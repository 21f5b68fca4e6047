"""Exceptions raised by the remote signer."""

from typing import Any


class RemoteSignerError(Exception):
    """Base exception for signer errors."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigurationError(RemoteSignerError):
    """Invalid configuration (unsupported chains, malformed key). Fatal at startup."""

    pass


class NetworkInitializationError(RemoteSignerError):
    """A network's clients could not be set up. Fatal at startup."""

    def __init__(self, chain_id: int, message: str, details: Any = None):
        super().__init__(message, details)
        self.chain_id = chain_id


class UnknownNetworkError(RemoteSignerError, LookupError):
    """Requested a client for a chain that was never initialized."""

    pass


class SignerNotRunningError(RemoteSignerError):
    """Operation requires a running signer."""

    pass
