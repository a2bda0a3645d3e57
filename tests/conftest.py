"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable

import pytest


def _contract_payload(**overrides: object) -> dict[str, object]:
    """A contract record as the registry API serialises it."""
    payload: dict[str, object] = {
        "id": "8f14e45f-ceea-467f-a0e6-1b2c3d4e5f60",
        "contract_id": "CAS3J7GYLGXMF6TDJBBYYSE3HQ6BBSMLNUQ34T6TZMYMW2EVH34XOWMA",
        "wasm_hash": "a1b2c3d4e5f6",
        "name": "Soroswap Router",
        "description": "AMM router for Soroswap pairs",
        "publisher_id": "c9f0f895-fb98-4b9b-9b0a-1f2e3d4c5b6a",
        "network": "mainnet",
        "is_verified": True,
        "category": "dex",
        "tags": ["amm", "router"],
        "created_at": "2026-01-15T10:00:00Z",
        "updated_at": "2026-02-01T12:00:00Z",
    }
    payload.update(overrides)
    return payload


def _version_payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "id": "45c48cce-2e2d-4fbd-a7a0-000000000001",
        "contract_id": "8f14e45f-ceea-467f-a0e6-1b2c3d4e5f60",
        "version": "1.2.0",
        "wasm_hash": "ffeeddccbbaa",
        "source_url": "https://github.com/soroswap/core",
        "commit_hash": "3f2a1b0",
        "release_notes": "Fee tier support",
        "created_at": "2026-01-20T08:30:00Z",
    }
    payload.update(overrides)
    return payload


def _publisher_payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "id": "c9f0f895-fb98-4b9b-9b0a-1f2e3d4c5b6a",
        "stellar_address": "GBZXN7PIRZGNMHGA7MUUUF4GWPY5AYPV6LY4UV2GL6VJGIQRXFDNMADI",
        "username": "soroswap",
        "email": None,
        "github_url": "https://github.com/soroswap",
        "website": None,
        "created_at": "2025-11-02T09:00:00Z",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def contract_json() -> dict[str, object]:
    return _contract_payload()


@pytest.fixture
def version_json() -> dict[str, object]:
    return _version_payload()


@pytest.fixture
def publisher_json() -> dict[str, object]:
    return _publisher_payload()


@pytest.fixture
def make_contract_json() -> Callable[..., dict[str, object]]:
    """Build contract payloads with selected fields overridden."""
    return _contract_payload


@pytest.fixture
def make_version_json() -> Callable[..., dict[str, object]]:
    return _version_payload


@pytest.fixture
def make_publisher_json() -> Callable[..., dict[str, object]]:
    return _publisher_payload
