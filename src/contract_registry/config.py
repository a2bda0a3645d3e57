"""Environment-sourced settings for the registry client's front ends."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from contract_registry.errors import ConfigError
from contract_registry.models import Network

DEFAULT_API_URL = "http://localhost:3001"
DEFAULT_TIMEOUT_SECONDS = 30.0

API_URL_ENV = "SOROBAN_REGISTRY_API_URL"
NETWORK_ENV = "SOROBAN_NETWORK"
TIMEOUT_ENV = "SOROBAN_REGISTRY_TIMEOUT"


@dataclass(frozen=True, slots=True)
class RegistrySettings:
    """Settings resolved once at startup and passed down explicitly."""

    api_url: str = DEFAULT_API_URL
    network: Network | None = None
    timeout: float = DEFAULT_TIMEOUT_SECONDS


def resolve_network(value: str | None) -> Network | None:
    """Map a user-supplied network name to ``Network``.

    Matching is case-insensitive. Empty values mean "no preference".

    Raises:
        ConfigError: If the name is not one of mainnet/testnet/futurenet.
    """
    if value is None or not value.strip():
        return None
    try:
        return Network(value.strip().lower())
    except ValueError as exc:
        choices = ", ".join(n.value for n in Network)
        raise ConfigError(f"Unknown network '{value}'. Expected one of: {choices}.") from exc


def _parse_timeout(raw: str) -> float:
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{TIMEOUT_ENV} must be a number of seconds, got '{raw}'.") from exc
    if timeout <= 0:
        raise ConfigError(f"{TIMEOUT_ENV} must be positive, got '{raw}'.")
    return timeout


def load_settings(environ: Mapping[str, str] | None = None) -> RegistrySettings:
    """Read settings from the process environment (or the given mapping)."""
    env = os.environ if environ is None else environ

    api_url = env.get(API_URL_ENV, "").strip() or DEFAULT_API_URL
    network = resolve_network(env.get(NETWORK_ENV))
    raw_timeout = env.get(TIMEOUT_ENV, "").strip()
    timeout = _parse_timeout(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_SECONDS

    return RegistrySettings(api_url=api_url, network=network, timeout=timeout)
