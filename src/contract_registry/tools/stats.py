"""get_registry_stats tool -- registry-wide counters."""

from __future__ import annotations

from mcp.server.fastmcp import Context

from contract_registry.tools._helpers import get_context, internal_error, record_payload


async def get_registry_stats(ctx: Context) -> dict[str, object]:
    """Report how many contracts, verified contracts and publishers the registry holds."""
    try:
        app = get_context(ctx)
        return record_payload(await app.registry.get_stats())
    except Exception as exc:
        await ctx.error(f"Unexpected error in get_registry_stats: {exc}")
        return internal_error(exc)
