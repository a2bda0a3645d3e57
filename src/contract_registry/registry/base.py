"""Port: contract registry API client."""

from __future__ import annotations

from typing import Protocol

from contract_registry.models import (
    Contract,
    ContractSearchParams,
    ContractVersion,
    PaginatedResponse,
    Publisher,
    PublishRequest,
    RegistryStats,
)
from contract_registry.result import Result


class ContractRegistryPort(Protocol):
    """Port for querying and publishing to the contract registry."""

    async def get_contracts(
        self,
        params: ContractSearchParams | None = None,
    ) -> Result[PaginatedResponse[Contract]]:
        """List contracts matching the given filters, one page at a time."""
        ...

    async def get_contract(self, registry_id: str) -> Result[Contract]:
        """Fetch a single contract by its registry id (``Contract.id``)."""
        ...

    async def get_contract_versions(self, registry_id: str) -> Result[list[ContractVersion]]:
        """Fetch every published version of a contract."""
        ...

    async def publish_contract(self, data: PublishRequest) -> Result[Contract]:
        """Register a new contract."""
        ...

    async def get_publisher(self, publisher_id: str) -> Result[Publisher]:
        """Fetch a publisher by id."""
        ...

    async def get_publisher_contracts(self, publisher_id: str) -> Result[list[Contract]]:
        """Fetch the contracts owned by a publisher."""
        ...

    async def get_stats(self) -> Result[RegistryStats]:
        """Fetch registry-wide counters."""
        ...
