"""HTTP client for the contract registry REST API.

Endpoints live under ``{base_url}/api``. Every operation returns a tagged
``Result`` instead of raising: ``Ok(value)`` on a 2xx response whose body
parses, ``Failure`` otherwise.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar
from urllib.parse import quote as urlquote
from urllib.parse import urlencode

import httpx

from contract_registry.config import DEFAULT_API_URL
from contract_registry.errors import DecodeError
from contract_registry.models import (
    Contract,
    ContractSearchParams,
    ContractVersion,
    PaginatedResponse,
    Publisher,
    PublishRequest,
    RegistryStats,
)
from contract_registry.result import Failure, FailureKind, Ok, Result, kind_for_status

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Longest slice of an error response body kept in Failure.detail.
_DETAIL_LIMIT = 200


def build_search_query(params: ContractSearchParams | None) -> list[tuple[str, str]]:
    """Build the ordered query pairs for the contract listing endpoint.

    Text filters and page numbers are sent only when truthy;
    ``verified_only`` is sent whenever it is set, including ``False``.
    ``tags`` is never sent.
    """
    if params is None:
        return []

    pairs: list[tuple[str, str]] = []
    if params.query:
        pairs.append(("query", params.query))
    if params.network:
        pairs.append(("network", str(params.network)))
    if params.verified_only is not None:
        pairs.append(("verified_only", "true" if params.verified_only else "false"))
    if params.category:
        pairs.append(("category", params.category))
    if params.page:
        pairs.append(("page", str(params.page)))
    if params.page_size:
        pairs.append(("page_size", str(params.page_size)))
    return pairs


def _parse_list(parse_item: Callable[[object], T]) -> Callable[[object], list[T]]:
    def parse(raw: object) -> list[T]:
        if not isinstance(raw, list):
            raise DecodeError(f"Expected a JSON array, got {type(raw).__name__}")
        return [parse_item(item) for item in raw]

    return parse


def _parse_contract_page(raw: object) -> PaginatedResponse[Contract]:
    return PaginatedResponse.from_dict(raw, Contract.from_dict)


@dataclass
class RegistryClient:
    """Async client for the contract registry API.

    The caller owns ``http`` and its lifecycle (timeouts, pooling, closing).
    """

    http: httpx.AsyncClient
    base_url: str = DEFAULT_API_URL

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")

    # ── Contracts ────────────────────────────────────────────────

    async def get_contracts(
        self,
        params: ContractSearchParams | None = None,
    ) -> Result[PaginatedResponse[Contract]]:
        """List contracts, filtered and paged by ``params``.

        Returns:
            Ok with a page of Contract objects, or a Failure with message
            "Failed to fetch contracts".
        """
        return await self._call(
            "GET",
            "/api/contracts",
            query=build_search_query(params),
            parse=_parse_contract_page,
            failure_message="Failed to fetch contracts",
        )

    async def get_contract(self, registry_id: str) -> Result[Contract]:
        """Fetch a single contract by its registry id (``Contract.id``)."""
        return await self._call(
            "GET",
            f"/api/contracts/{_segment(registry_id)}",
            parse=Contract.from_dict,
            failure_message="Failed to fetch contract",
        )

    async def get_contract_versions(self, registry_id: str) -> Result[list[ContractVersion]]:
        """Fetch the versions of a contract, in the order the server returns them."""
        return await self._call(
            "GET",
            f"/api/contracts/{_segment(registry_id)}/versions",
            parse=_parse_list(ContractVersion.from_dict),
            failure_message="Failed to fetch contract versions",
        )

    async def publish_contract(self, data: PublishRequest) -> Result[Contract]:
        """Register a new contract and return the record the server created."""
        return await self._call(
            "POST",
            "/api/contracts",
            body=data.to_dict(),
            parse=Contract.from_dict,
            failure_message="Failed to publish contract",
        )

    # ── Publishers ───────────────────────────────────────────────

    async def get_publisher(self, publisher_id: str) -> Result[Publisher]:
        return await self._call(
            "GET",
            f"/api/publishers/{_segment(publisher_id)}",
            parse=Publisher.from_dict,
            failure_message="Failed to fetch publisher",
        )

    async def get_publisher_contracts(self, publisher_id: str) -> Result[list[Contract]]:
        return await self._call(
            "GET",
            f"/api/publishers/{_segment(publisher_id)}/contracts",
            parse=_parse_list(Contract.from_dict),
            failure_message="Failed to fetch publisher contracts",
        )

    # ── Stats ────────────────────────────────────────────────────

    async def get_stats(self) -> Result[RegistryStats]:
        return await self._call(
            "GET",
            "/api/stats",
            parse=RegistryStats.from_dict,
            failure_message="Failed to fetch stats",
        )

    # ── Transport ────────────────────────────────────────────────

    async def _call(
        self,
        method: str,
        path: str,
        *,
        parse: Callable[[Any], T],
        failure_message: str,
        query: list[tuple[str, str]] | None = None,
        body: dict[str, object] | None = None,
    ) -> Result[T]:
        """Issue one request and turn the response into a Result.

        ``query`` is appended even when empty, so the listing endpoint is
        always requested as ``/api/contracts?...``.
        """
        url = f"{self.base_url}{path}"
        if query is not None:
            url = f"{url}?{urlencode(query)}"

        logger.debug("%s %s", method, url)
        try:
            response = await self.http.request(method, url, json=body)
        except httpx.DecodingError as exc:
            # Content-Encoding failures surface while the body is read.
            logger.warning("%s: undecodable response from %s: %s", failure_message, url, exc)
            return Failure(
                kind=FailureKind.DECODE,
                message=failure_message,
                detail=str(exc) or type(exc).__name__,
                cause=exc,
            )
        except (httpx.TransportError, httpx.TooManyRedirects) as exc:
            logger.warning("%s: %s %s failed: %s", failure_message, method, url, exc)
            return Failure(
                kind=FailureKind.NETWORK,
                message=failure_message,
                detail=str(exc) or type(exc).__name__,
                cause=exc,
            )

        if not response.is_success:
            logger.warning(
                "%s: %s %s returned HTTP %d", failure_message, method, url, response.status_code
            )
            return Failure(
                kind=kind_for_status(response.status_code),
                message=failure_message,
                status_code=response.status_code,
                detail=response.text[:_DETAIL_LIMIT],
            )

        try:
            value = parse(response.json())
        except (ValueError, DecodeError) as exc:
            logger.warning("%s: undecodable response from %s: %s", failure_message, url, exc)
            return Failure(
                kind=FailureKind.DECODE,
                message=failure_message,
                status_code=response.status_code,
                detail=str(exc),
                cause=exc,
            )

        return Ok(value)


def _segment(value: str) -> str:
    """Percent-encode an identifier as a single path segment."""
    return urlquote(value, safe="")
