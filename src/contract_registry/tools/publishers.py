"""Publisher tools -- look up publishers and the contracts they own."""

from __future__ import annotations

from mcp.server.fastmcp import Context

from contract_registry.tools._helpers import (
    get_context,
    internal_error,
    list_payload,
    record_payload,
)


async def get_publisher(publisher_id: str, ctx: Context) -> dict[str, object]:
    """Fetch a publisher's profile (Stellar address, username, links).

    Args:
        publisher_id: The publisher's registry id (a contract's publisher_id).
    """
    try:
        app = get_context(ctx)
        return record_payload(await app.registry.get_publisher(publisher_id))
    except Exception as exc:
        await ctx.error(f"Unexpected error in get_publisher: {exc}")
        return internal_error(exc)


async def list_publisher_contracts(publisher_id: str, ctx: Context) -> list[dict[str, object]]:
    """List the contracts a publisher has registered."""
    try:
        app = get_context(ctx)
        return list_payload(await app.registry.get_publisher_contracts(publisher_id))
    except Exception as exc:
        await ctx.error(f"Unexpected error in list_publisher_contracts: {exc}")
        return [internal_error(exc)]
