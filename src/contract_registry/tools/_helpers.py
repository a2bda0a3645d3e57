"""Helpers shared by the MCP tools."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp import Context

from contract_registry.result import Failure, Result

if TYPE_CHECKING:
    from contract_registry.server import AppContext


def get_context(ctx: Context) -> AppContext:
    """Extract AppContext from FastMCP's lifespan context.

    Raises TypeError if the lifespan context is not an AppContext instance.
    """
    from contract_registry.server import AppContext

    app = ctx.request_context.lifespan_context
    if not isinstance(app, AppContext):
        msg = (
            f"Expected AppContext in lifespan_context, got {type(app).__name__}. "
            "Is the server configured with app_lifespan?"
        )
        raise TypeError(msg)
    return app


def record_payload(result: Result[Any]) -> dict[str, object]:
    """Render a single-record Result as a tool response."""
    if isinstance(result, Failure):
        return result.to_dict()
    return result.value.to_dict()


def list_payload(result: Result[list[Any]]) -> list[dict[str, object]]:
    """Render a list Result as a tool response. Failures become a one-item list."""
    if isinstance(result, Failure):
        return [result.to_dict()]
    return [item.to_dict() for item in result.value]


def internal_error(exc: Exception) -> dict[str, object]:
    return {"success": False, "error": f"Internal error: {type(exc).__name__}"}
