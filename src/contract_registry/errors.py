"""Exception hierarchy for contract-registry.

All exceptions inherit from ContractRegistryError (single catch point).
Client operations return tagged outcomes; these exceptions are raised by
``Failure.unwrap()`` and by configuration loading.
"""

from __future__ import annotations


class ContractRegistryError(Exception):
    """Base exception for all contract-registry errors."""


class ConfigError(ContractRegistryError):
    """Invalid configuration value (environment or CLI flag)."""


class RegistryError(ContractRegistryError):
    """A request to the registry API did not succeed."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NetworkError(RegistryError):
    """The request never produced a response (DNS, connection, timeout)."""


class ClientError(RegistryError):
    """The registry rejected the request with a 4xx status."""


class ServerError(RegistryError):
    """The registry answered with a 5xx (or otherwise unsuccessful) status."""


class DecodeError(RegistryError):
    """The response body is not JSON or does not match the expected shape."""
