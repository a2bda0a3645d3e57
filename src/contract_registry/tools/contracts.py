"""Contract tools -- search, inspect and publish registry contracts."""

from __future__ import annotations

from mcp.server.fastmcp import Context

from contract_registry.config import resolve_network
from contract_registry.errors import ContractRegistryError
from contract_registry.models import ContractSearchParams, Network, PublishRequest
from contract_registry.tools._helpers import (
    get_context,
    internal_error,
    list_payload,
    record_payload,
)


async def search_contracts(
    ctx: Context,
    query: str = "",
    network: str = "",
    verified_only: bool = False,
    category: str = "",
    page: int = 1,
    page_size: int = 20,
) -> dict[str, object]:
    """Search the contract registry.

    Use this to find Soroban smart contracts by name or description, or to
    browse a network's contracts page by page.

    Args:
        query: Free-text search term. Empty lists every contract.
        network: "mainnet", "testnet" or "futurenet". Empty searches all.
        verified_only: Only return contracts whose source is verified.
        category: Category filter (e.g. "dex", "token", "nft").
        page: 1-based page number.
        page_size: Results per page.

    Returns:
        A page with items (contracts), total, page, page_size and
        total_pages, or {"success": False, "error": ..., "kind": ...}.
    """
    try:
        app = get_context(ctx)
        params = ContractSearchParams(
            query=query or None,
            network=resolve_network(network),
            verified_only=True if verified_only else None,
            category=category or None,
            page=page,
            page_size=page_size,
        )
        return record_payload(await app.registry.get_contracts(params))
    except ContractRegistryError as exc:
        return {"success": False, "error": str(exc)}
    except Exception as exc:
        await ctx.error(f"Unexpected error in search_contracts: {exc}")
        return internal_error(exc)


async def get_contract(registry_id: str, ctx: Context) -> dict[str, object]:
    """Fetch one contract by its registry id.

    Args:
        registry_id: The registry's id for the contract (the "id" field of
            a search result, not the on-chain contract_id).

    Returns:
        The contract record, or {"success": False, ...} on failure.
    """
    try:
        app = get_context(ctx)
        return record_payload(await app.registry.get_contract(registry_id))
    except Exception as exc:
        await ctx.error(f"Unexpected error in get_contract: {exc}")
        return internal_error(exc)


async def list_contract_versions(registry_id: str, ctx: Context) -> list[dict[str, object]]:
    """List every published version of a contract.

    Args:
        registry_id: The registry's id for the contract.

    Returns:
        Versions with version, wasm_hash, source_url, commit_hash and
        release_notes, or {"success": False, ...} on failure.
    """
    try:
        app = get_context(ctx)
        return list_payload(await app.registry.get_contract_versions(registry_id))
    except Exception as exc:
        await ctx.error(f"Unexpected error in list_contract_versions: {exc}")
        return [internal_error(exc)]


async def publish_contract(
    contract_id: str,
    name: str,
    publisher_address: str,
    ctx: Context,
    network: str = "",
    description: str = "",
    category: str = "",
    tags: list[str] | None = None,
    source_url: str = "",
) -> dict[str, object]:
    """Publish a contract to the registry.

    Only call this after the user has confirmed the details: it creates a
    public registry record.

    Args:
        contract_id: On-chain contract address.
        name: Display name.
        publisher_address: Stellar address of the publisher.
        network: Target network. Defaults to the server's configured
            network, then "mainnet".
        description: Optional description.
        category: Optional category.
        tags: Optional list of tags.
        source_url: Optional link to the contract's source.

    Returns:
        The created contract record, or {"success": False, ...} on failure.
    """
    try:
        app = get_context(ctx)
        target = resolve_network(network) or app.settings.network or Network.MAINNET
        request = PublishRequest(
            contract_id=contract_id,
            name=name,
            network=target,
            publisher_address=publisher_address,
            tags=list(tags or []),
            description=description or None,
            category=category or None,
            source_url=source_url or None,
        )
        await ctx.info(f"Publishing '{name}' ({contract_id}) to {target}")
        return record_payload(await app.registry.publish_contract(request))
    except ContractRegistryError as exc:
        return {"success": False, "error": str(exc)}
    except Exception as exc:
        await ctx.error(f"Unexpected error in publish_contract: {exc}")
        return internal_error(exc)
