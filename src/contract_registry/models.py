"""Domain models for contract-registry. All frozen dataclasses -- no mutation after creation."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Generic, TypeVar

from contract_registry.errors import DecodeError

T = TypeVar("T")

# ─── Enumerations ─────────────────────────────────────────────


class Network(StrEnum):
    MAINNET = "mainnet"
    TESTNET = "testnet"
    FUTURENET = "futurenet"


# ─── Parsing helpers ──────────────────────────────────────────


def _expect_mapping(raw: object, what: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise DecodeError(f"Expected a JSON object for {what}, got {type(raw).__name__}")
    return raw


def _expect_list(raw: object, what: str) -> list[Any]:
    if not isinstance(raw, list):
        raise DecodeError(f"Expected a JSON array for {what}, got {type(raw).__name__}")
    return raw


def _matches(value: object, kind: type) -> bool:
    # bool is an int subclass; JSON true/false must not pass as a count.
    if kind is int and isinstance(value, bool):
        return False
    return isinstance(value, kind)


def _required(raw: dict[str, Any], key: str, kind: type) -> Any:
    if key not in raw:
        raise DecodeError(f"Missing required field '{key}'")
    value = raw[key]
    if not _matches(value, kind):
        raise DecodeError(
            f"Field '{key}' should be {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _optional(raw: dict[str, Any], key: str, kind: type) -> Any:
    value = raw.get(key)
    if value is None:
        return None
    if not _matches(value, kind):
        raise DecodeError(
            f"Field '{key}' should be {kind.__name__} or null, got {type(value).__name__}"
        )
    return value


def _string_list(raw: dict[str, Any], key: str) -> list[str]:
    values = _expect_list(raw.get(key), key)
    if not all(isinstance(v, str) for v in values):
        raise DecodeError(f"Field '{key}' should contain only strings")
    return list(values)


def _network(raw: dict[str, Any]) -> Network:
    value = _required(raw, "network", str)
    try:
        return Network(value)
    except ValueError as exc:
        raise DecodeError(f"Unknown network '{value}'") from exc


# ─── Registry Models ──────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Contract:
    """A smart contract registered in the registry.

    ``id`` is the registry's own identifier; ``contract_id`` is the
    on-chain address. The two never share a value space.
    """

    id: str
    contract_id: str
    wasm_hash: str
    name: str
    publisher_id: str
    network: Network
    is_verified: bool
    created_at: str
    updated_at: str
    description: str | None = None
    category: str | None = None
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: object) -> Contract:
        data = _expect_mapping(raw, "contract")
        return cls(
            id=_required(data, "id", str),
            contract_id=_required(data, "contract_id", str),
            wasm_hash=_required(data, "wasm_hash", str),
            name=_required(data, "name", str),
            description=_optional(data, "description", str),
            publisher_id=_required(data, "publisher_id", str),
            network=_network(data),
            is_verified=_required(data, "is_verified", bool),
            category=_optional(data, "category", str),
            tags=_string_list(data, "tags"),
            created_at=_required(data, "created_at", str),
            updated_at=_required(data, "updated_at", str),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "contract_id": self.contract_id,
            "wasm_hash": self.wasm_hash,
            "name": self.name,
            "description": self.description,
            "publisher_id": self.publisher_id,
            "network": str(self.network),
            "is_verified": self.is_verified,
            "category": self.category,
            "tags": list(self.tags),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass(frozen=True, slots=True)
class ContractVersion:
    """One published version of a contract."""

    id: str
    contract_id: str
    version: str
    wasm_hash: str
    created_at: str
    source_url: str | None = None
    commit_hash: str | None = None
    release_notes: str | None = None

    @classmethod
    def from_dict(cls, raw: object) -> ContractVersion:
        data = _expect_mapping(raw, "contract version")
        return cls(
            id=_required(data, "id", str),
            contract_id=_required(data, "contract_id", str),
            version=_required(data, "version", str),
            wasm_hash=_required(data, "wasm_hash", str),
            source_url=_optional(data, "source_url", str),
            commit_hash=_optional(data, "commit_hash", str),
            release_notes=_optional(data, "release_notes", str),
            created_at=_required(data, "created_at", str),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "contract_id": self.contract_id,
            "version": self.version,
            "wasm_hash": self.wasm_hash,
            "source_url": self.source_url,
            "commit_hash": self.commit_hash,
            "release_notes": self.release_notes,
            "created_at": self.created_at,
        }


@dataclass(frozen=True, slots=True)
class Publisher:
    """An account that publishes contracts, keyed by its Stellar address."""

    id: str
    stellar_address: str
    created_at: str
    username: str | None = None
    email: str | None = None
    github_url: str | None = None
    website: str | None = None

    @classmethod
    def from_dict(cls, raw: object) -> Publisher:
        data = _expect_mapping(raw, "publisher")
        return cls(
            id=_required(data, "id", str),
            stellar_address=_required(data, "stellar_address", str),
            username=_optional(data, "username", str),
            email=_optional(data, "email", str),
            github_url=_optional(data, "github_url", str),
            website=_optional(data, "website", str),
            created_at=_required(data, "created_at", str),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "stellar_address": self.stellar_address,
            "username": self.username,
            "email": self.email,
            "github_url": self.github_url,
            "website": self.website,
            "created_at": self.created_at,
        }


@dataclass(frozen=True, slots=True)
class PaginatedResponse(Generic[T]):
    """One page of results.

    ``total_pages`` is computed by the server and trusted as-is.
    """

    items: list[T]
    total: int
    page: int
    page_size: int
    total_pages: int

    @classmethod
    def from_dict(
        cls,
        raw: object,
        parse_item: Callable[[object], T],
    ) -> PaginatedResponse[T]:
        data = _expect_mapping(raw, "paginated response")
        items = _expect_list(data.get("items"), "items")
        return cls(
            items=[parse_item(item) for item in items],
            total=_required(data, "total", int),
            page=_required(data, "page", int),
            page_size=_required(data, "page_size", int),
            total_pages=_required(data, "total_pages", int),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "items": [item.to_dict() if hasattr(item, "to_dict") else item for item in self.items],
            "total": self.total,
            "page": self.page,
            "page_size": self.page_size,
            "total_pages": self.total_pages,
        }


@dataclass(frozen=True, slots=True)
class RegistryStats:
    """Registry-wide counters."""

    total_contracts: int
    verified_contracts: int
    total_publishers: int

    @classmethod
    def from_dict(cls, raw: object) -> RegistryStats:
        data = _expect_mapping(raw, "stats")
        return cls(
            total_contracts=_required(data, "total_contracts", int),
            verified_contracts=_required(data, "verified_contracts", int),
            total_publishers=_required(data, "total_publishers", int),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "total_contracts": self.total_contracts,
            "verified_contracts": self.verified_contracts,
            "total_publishers": self.total_publishers,
        }


# ─── Request Models ───────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ContractSearchParams:
    """Filters for listing contracts. Every field is optional.

    ``tags`` is accepted but not sent to the server: the search endpoint
    has no tag filter yet.
    """

    query: str | None = None
    network: Network | None = None
    verified_only: bool | None = None
    category: str | None = None
    tags: list[str] | None = None
    page: int | None = None
    page_size: int | None = None


@dataclass(frozen=True, slots=True)
class PublishRequest:
    """Body of a publish call."""

    contract_id: str
    name: str
    network: Network
    publisher_address: str
    tags: list[str] = field(default_factory=list)
    description: str | None = None
    category: str | None = None
    source_url: str | None = None

    def to_dict(self) -> dict[str, object]:
        """JSON body for the publish endpoint. Unset optional fields are omitted."""
        body: dict[str, object] = {
            "contract_id": self.contract_id,
            "name": self.name,
        }
        if self.description is not None:
            body["description"] = self.description
        body["network"] = str(self.network)
        if self.category is not None:
            body["category"] = self.category
        body["tags"] = list(self.tags)
        if self.source_url is not None:
            body["source_url"] = self.source_url
        body["publisher_address"] = self.publisher_address
        return body
