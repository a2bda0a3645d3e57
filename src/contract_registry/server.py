"""MCP server exposing the contract registry as tools."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from contract_registry.config import RegistrySettings, load_settings
from contract_registry.registry.base import ContractRegistryPort
from contract_registry.registry.client import RegistryClient
from contract_registry.tools.contracts import (
    get_contract,
    list_contract_versions,
    publish_contract,
    search_contracts,
)
from contract_registry.tools.publishers import get_publisher, list_publisher_contracts
from contract_registry.tools.stats import get_registry_stats


@dataclass(frozen=True, slots=True)
class AppContext:
    """Shared state across all tool invocations."""

    http_client: httpx.AsyncClient
    registry: ContractRegistryPort
    settings: RegistrySettings


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[AppContext]:
    """Manage shared adapter lifecycle -- the composition root."""
    settings = load_settings()
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(settings.timeout, connect=10.0),
        follow_redirects=True,
        limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
    ) as http_client:
        registry = RegistryClient(http_client, base_url=settings.api_url)
        yield AppContext(http_client=http_client, registry=registry, settings=settings)


mcp = FastMCP(
    "contract-registry",
    instructions=(
        "contract-registry looks up and publishes Soroban smart contracts in a "
        "contract registry.\n\n"
        "### Tools\n"
        "- **search_contracts**: find contracts by text, network, category or "
        "verification status. Results are paged; follow total_pages.\n"
        "- **get_contract** / **list_contract_versions**: details and version "
        "history for one contract. Pass the registry 'id', not the on-chain "
        "'contract_id'.\n"
        "- **get_publisher** / **list_publisher_contracts**: who published a "
        "contract and what else they have published.\n"
        "- **get_registry_stats**: registry-wide counts.\n"
        "- **publish_contract**: creates a public record. Confirm the contract "
        "address, name, network and publisher address with the user first.\n\n"
        "Failed calls return success=False with an 'error' message and a 'kind' "
        "(network, client_error, server_error, decode). Report client_error as a "
        "problem with the request and the others as registry availability problems."
    ),
    lifespan=app_lifespan,
)

# ─── Read-only tools ──────────────────────────────────────────
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(search_contracts)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(get_contract)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(list_contract_versions)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(get_publisher)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(list_publisher_contracts)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(get_registry_stats)

# ─── Destructive tools ────────────────────────────────────────
mcp.tool(annotations=ToolAnnotations(destructiveHint=True))(publish_contract)
